"""
RecipeBox Recipe Endpoints
Recipe creation, browsing and ingredient search
"""

from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status

from core.dependencies import AppSettings, CurrentUserId, DBSession, Ranker, Storage
from schemas.recipe_schemas import Recipe, RecipeCreatedResponse, RecipeDetailResponse, RecipeListResponse
from services import recipe_service
from utils.uploads import read_image_upload

router = APIRouter()


def _as_list(recipes) -> RecipeListResponse:
    return RecipeListResponse(results=[Recipe.model_validate(r) for r in recipes])


@router.post("/add", response_model=RecipeCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_recipe(
    user_id: CurrentUserId,
    db: DBSession,
    storage: Storage,
    settings: AppSettings,
    title: Optional[str] = Form(None),
    ingredients: Optional[str] = Form(None),
    steps: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    """
    Create a recipe from a multipart form

    ``ingredients`` and ``steps`` are JSON-encoded arrays of strings.
    """
    upload = await read_image_upload(image, settings, missing_message="Image file is required")
    recipe = await recipe_service.create_recipe(
        db, storage, settings,
        title=title,
        ingredients=ingredients,
        steps=steps,
        category=category,
        image=upload,
    )
    return RecipeCreatedResponse(message="Recipe created", recipe=Recipe.model_validate(recipe))


@router.get("/search", response_model=RecipeListResponse)
async def search_recipes(user_id: CurrentUserId, db: DBSession, ranker: Ranker, ingredient: Optional[str] = None):
    """Find recipes containing every listed ingredient, ranked by the AI model when available"""
    recipes = await recipe_service.search_recipes(db, ranker, ingredient)
    return _as_list(recipes)


@router.get("/category", response_model=RecipeListResponse)
async def get_recipes_by_category(db: DBSession, category: Optional[str] = None):
    """Recipes in one category ("All" or no value means every recipe)"""
    return _as_list(await recipe_service.list_recipes(db, category))


@router.get("/all", response_model=RecipeListResponse)
async def get_all_recipes(db: DBSession):
    """All recipes, newest first"""
    return _as_list(await recipe_service.list_recipes(db))


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
async def get_recipe(recipe_id: str, db: DBSession):
    recipe = await recipe_service.get_recipe(db, recipe_id)
    return RecipeDetailResponse(results=Recipe.model_validate(recipe))
