"""
RecipeBox Recipe Models
Database models for recipes
"""

from sqlalchemy import DateTime, Enum, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from enum import Enum as PyEnum
from typing import Iterable, List
import uuid

from core.database import Base
from models.users import utcnow


class RecipeCategory(str, PyEnum):
    """Fixed set of recipe categories"""
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    DESSERT = "Dessert"


def build_ingredients_search(ingredients: Iterable[str]) -> str:
    """Lower-cased, newline-joined copy of the ingredients for substring search"""
    return "\n".join(" ".join(i.split()).lower() for i in ingredients)


class Recipe(Base):
    """Recipe model for storing recipe information"""
    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)

    # Ordered lists of strings
    ingredients: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    steps: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    ingredients_search: Mapped[str] = mapped_column(Text, nullable=False, default="")

    category: Mapped[RecipeCategory] = mapped_column(
        Enum(RecipeCategory, name="recipe_category", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Recipe(id={self.id}, title={self.title}, category={self.category.value})>"
