"""
RecipeBox Recipe Schemas
Pydantic models for recipe and bookmark requests and responses
"""

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from models.recipe_models import RecipeCategory
from schemas.base import CamelModel


class Recipe(CamelModel):
    """Schema for recipe response"""
    id: str
    title: str
    image_url: str = Field(alias="image")
    ingredients: List[str]
    steps: List[str]
    category: RecipeCategory
    created_at: datetime
    updated_at: datetime


class RecipeCreatedResponse(CamelModel):
    message: str
    recipe: Recipe


class RecipeListResponse(CamelModel):
    results: List[Recipe]


class RecipeDetailResponse(CamelModel):
    results: Recipe


class SaveRecipeRequest(CamelModel):
    recipe_id: Optional[str] = None


class SavedRecipesResponse(CamelModel):
    success: bool = True
    results: List[Recipe]


class RankingCandidate(CamelModel):
    """Recipe summary handed to the ranking model"""
    id: str
    title: str
    ingredients: List[str]
    category: RecipeCategory
