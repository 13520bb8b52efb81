"""
RecipeBox API Endpoints
All API endpoint modules
"""

# Import all endpoint modules
from . import auth, users, recipes, saved

__all__ = [
    "auth",
    "users",
    "recipes",
    "saved",
]
