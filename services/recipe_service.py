"""
RecipeBox Recipe Service
Recipe creation, browsing and AI-ranked ingredient search
"""

import json
import time
from typing import List, Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import Settings
from core.exceptions import InternalError, NotFoundError, ValidationError
from models.recipe_models import Recipe, RecipeCategory, build_ingredients_search
from schemas.recipe_schemas import RankingCandidate
from services.ai_service import AIRankingClient
from services.storage_service import StorageClient, StorageError
from utils.uploads import ImageUpload

logger = structlog.get_logger()

ALL_CATEGORIES = "All"


def parse_string_list(raw: Optional[str], field: str) -> List[str]:
    """Decode a JSON-encoded list of strings sent as a form field"""
    if raw is None or raw == "":
        raise ValidationError(f"{field} is required")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"{field} must be a JSON array of strings")

    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{field} must be a JSON array of strings")
    return value


def parse_category(raw: Optional[str]) -> RecipeCategory:
    try:
        return RecipeCategory(raw)
    except ValueError:
        allowed = ", ".join(c.value for c in RecipeCategory)
        raise ValidationError(f"category must be one of: {allowed}")


def split_ingredient_query(query: Optional[str]) -> List[str]:
    """
    Split a comma-separated ingredient query into trimmed, non-empty terms

    Runs of whitespace collapse to one space, so a term can never span the
    newline that separates ingredients in the search column.
    """
    if not query:
        return []
    terms = (" ".join(term.split()) for term in query.split(","))
    return [term for term in terms if term]


async def create_recipe(
    db: AsyncSession,
    storage: StorageClient,
    settings: Settings,
    title: Optional[str],
    ingredients: Optional[str],
    steps: Optional[str],
    category: Optional[str],
    image: ImageUpload,
) -> Recipe:
    """Validate the form, upload the image and persist the recipe"""
    if not title or not title.strip():
        raise ValidationError("title is required")
    ingredient_list = parse_string_list(ingredients, "ingredients")
    step_list = parse_string_list(steps, "steps")
    recipe_category = parse_category(category)

    filename = f"{int(time.time() * 1000)}_{image.filename}"
    try:
        image_url = await storage.upload(settings.RECIPE_BUCKET, filename, image.content, image.content_type)
    except StorageError:
        raise InternalError("Upload failed")

    recipe = Recipe(
        title=title.strip(),
        image_url=image_url,
        ingredients=ingredient_list,
        steps=step_list,
        ingredients_search=build_ingredients_search(ingredient_list),
        category=recipe_category,
    )
    db.add(recipe)
    await db.commit()

    logger.info("Recipe created", recipe_id=recipe.id, category=recipe_category.value)
    return recipe


async def list_recipes(db: AsyncSession, category: Optional[str] = None) -> List[Recipe]:
    """All recipes, newest first, optionally restricted to one category"""
    query = select(Recipe).order_by(Recipe.created_at.desc())

    if category and category != ALL_CATEGORIES:
        try:
            query = query.where(Recipe.category == RecipeCategory(category))
        except ValueError:
            return []

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_recipe(db: AsyncSession, recipe_id: str) -> Recipe:
    recipe = await db.get(Recipe, recipe_id)
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


async def find_recipes_with_ingredients(db: AsyncSession, terms: Sequence[str]) -> List[Recipe]:
    """Recipes whose ingredients contain every term (case-insensitive substring)"""
    conditions = [
        Recipe.ingredients_search.contains(term.lower(), autoescape=True)
        for term in terms
    ]
    result = await db.execute(
        select(Recipe).where(and_(*conditions)).order_by(Recipe.created_at.desc())
    )
    return list(result.scalars().all())


def apply_ranking(matches: Sequence[Recipe], ranked_ids: Sequence[str]) -> List[Recipe]:
    """Reorder matches by the ranked ids, dropping unknown and repeated ids"""
    by_id = {recipe.id: recipe for recipe in matches}
    ranked = []
    seen = set()
    for recipe_id in ranked_ids:
        if recipe_id in by_id and recipe_id not in seen:
            seen.add(recipe_id)
            ranked.append(by_id[recipe_id])
    return ranked


async def search_recipes(
    db: AsyncSession,
    ranker: AIRankingClient,
    ingredient_query: Optional[str],
) -> List[Recipe]:
    """Ingredient search with best-effort AI ranking"""
    terms = split_ingredient_query(ingredient_query)
    if not terms:
        raise ValidationError("Ingredient query missing")

    matches = await find_recipes_with_ingredients(db, terms)
    if not matches:
        raise NotFoundError("No recipes found with those ingredients")

    candidates = [RankingCandidate.model_validate(recipe) for recipe in matches]
    ranked_ids = await ranker.rank_recipes(terms, candidates)
    if ranked_ids is None:
        logger.warning("Returning unranked search results", terms=terms, matches=len(matches))
        return matches

    return apply_ranking(matches, ranked_ids)
