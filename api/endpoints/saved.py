"""
RecipeBox Saved Recipe Endpoints
Bookmark, un-bookmark and list saved recipes
"""

from fastapi import APIRouter, status

from core.dependencies import CurrentUserId, DBSession
from schemas.base import SuccessResponse
from schemas.recipe_schemas import Recipe, SavedRecipesResponse, SaveRecipeRequest
from services import saved_service

router = APIRouter()


@router.post("/save", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def save_recipe(request: SaveRecipeRequest, user_id: CurrentUserId, db: DBSession):
    await saved_service.save_recipe(db, user_id, request.recipe_id)
    return SuccessResponse(message="Recipe saved")


@router.post("/unsave", response_model=SuccessResponse)
async def unsave_recipe(request: SaveRecipeRequest, user_id: CurrentUserId, db: DBSession):
    await saved_service.unsave_recipe(db, user_id, request.recipe_id)
    return SuccessResponse(message="Recipe unsaved")


@router.get("/saved", response_model=SavedRecipesResponse)
async def get_saved_recipes(user_id: CurrentUserId, db: DBSession):
    """Saved recipes with full recipe documents"""
    recipes = await saved_service.list_saved_recipes(db, user_id)
    return SavedRecipesResponse(results=[Recipe.model_validate(r) for r in recipes])
