"""
RecipeBox Database Models
Central import module for all database models
"""

from .users import User, saved_recipes
from .recipe_models import Recipe, RecipeCategory, build_ingredients_search

__all__ = [
    "User",
    "saved_recipes",
    "Recipe",
    "RecipeCategory",
    "build_ingredients_search",
]
