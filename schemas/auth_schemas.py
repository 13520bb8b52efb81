"""
RecipeBox Authentication Schemas
Pydantic models for authentication requests and responses
"""

from datetime import datetime
from typing import Optional, List
from pydantic import EmailStr, Field

from schemas.base import CamelModel


class UserCreate(CamelModel):
    """Schema for user registration; presence and length are checked by the service"""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserLogin(CamelModel):
    """Schema for user login"""
    email: Optional[str] = None
    password: Optional[str] = None


class User(CamelModel):
    """Schema for user response (never carries the password hash)"""
    id: str
    username: str
    email: str
    profile_pic: Optional[str] = None
    saved_recipe_ids: List[str] = Field(default_factory=list, alias="savedRecipes")
    created_at: datetime
    updated_at: datetime


class SignupResponse(CamelModel):
    success: bool = True
    message: str
    user_id: str
