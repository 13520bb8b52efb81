"""
RecipeBox API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter

from api.endpoints import auth, users, recipes, saved

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    users.router,
    prefix="/user",
    tags=["users"]
)

api_router.include_router(
    recipes.router,
    prefix="/recipe",
    tags=["recipes"]
)

api_router.include_router(
    saved.router,
    tags=["saved-recipes"]
)
