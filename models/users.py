"""
RecipeBox User Models
Database models for user accounts and their saved recipes
"""

from sqlalchemy import Column, DateTime, ForeignKey, String, Table
from sqlalchemy.orm import relationship, Mapped, mapped_column
from datetime import datetime, timezone
from typing import List, Optional
import uuid

from core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Bookmarks: one row per (user, recipe); the composite primary key keeps a
# recipe at most once in a user's saved list.
saved_recipes = Table(
    "saved_recipes",
    Base.metadata,
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("recipe_id", String(36), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("saved_at", DateTime(timezone=True), nullable=False, default=utcnow),
)


class User(Base):
    """User account model"""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    profile_pic: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    saved_recipes: Mapped[List["Recipe"]] = relationship(
        "Recipe",
        secondary=saved_recipes,
        order_by=saved_recipes.c.saved_at,
        lazy="selectin",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"

    @property
    def saved_recipe_ids(self) -> List[str]:
        return [recipe.id for recipe in self.saved_recipes]
