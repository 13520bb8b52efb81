"""
RecipeBox Saved Recipe Service
Per-user bookmarks backed by the saved_recipes association table
"""

from typing import List, Optional

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.exceptions import NotFoundError, ValidationError
from models.recipe_models import Recipe
from models.users import User, saved_recipes

logger = structlog.get_logger()


async def save_recipe(db: AsyncSession, user_id: str, recipe_id: Optional[str]) -> None:
    """Bookmark a recipe; the primary key rejects duplicates atomically"""
    if not recipe_id:
        raise ValidationError("Recipe ID required")

    if not await db.get(Recipe, recipe_id):
        raise NotFoundError("Recipe not found")
    if not await db.get(User, user_id):
        raise NotFoundError("User not found")

    try:
        await db.execute(insert(saved_recipes).values(user_id=user_id, recipe_id=recipe_id))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ValidationError("Recipe already saved")

    logger.info("Recipe saved", user_id=user_id, recipe_id=recipe_id)


async def unsave_recipe(db: AsyncSession, user_id: str, recipe_id: Optional[str]) -> None:
    """Remove a bookmark with a single conditional delete"""
    result = await db.execute(
        delete(saved_recipes).where(
            and_(saved_recipes.c.user_id == user_id, saved_recipes.c.recipe_id == recipe_id)
        )
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Recipe not saved")

    await db.commit()
    logger.info("Recipe unsaved", user_id=user_id, recipe_id=recipe_id)


async def list_saved_recipes(db: AsyncSession, user_id: str) -> List[Recipe]:
    """Full recipe documents the user has saved, in the order they were saved"""
    result = await db.execute(
        select(Recipe)
        .join(saved_recipes, saved_recipes.c.recipe_id == Recipe.id)
        .where(saved_recipes.c.user_id == user_id)
        .order_by(saved_recipes.c.saved_at)
    )
    return list(result.scalars().all())
