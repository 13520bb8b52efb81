"""
RecipeBox User Schemas
Profile update requests and responses
"""

from typing import Optional

from schemas.auth_schemas import User
from schemas.base import CamelModel


class UserUpdate(CamelModel):
    """Only supplied, non-empty fields are applied"""
    username: Optional[str] = None
    password: Optional[str] = None
    profile_pic: Optional[str] = None


class ProfileUpdateResponse(CamelModel):
    success: bool = True
    message: str
    user: User


class ProfilePictureResponse(CamelModel):
    message: str
    user: User
    url: str
