"""
RecipeBox Backend: Recipe SQLAlchemy Model
==========================================

What:  ORM model representing the `recipe` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by RecipeService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer primary key: recipes are addressed as /api/recipes/5
    - category: closed set stored as a short string (no native DB enum type,
      so adding a category never needs an ALTER TYPE)
    - ingredients: JSON array of strings; portable across PostgreSQL and SQLite
    - add_date: UTC with timezone, restamped on every edit
"""

import enum
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class RecipeCategory(str, enum.Enum):
    """Closed set of recipe categories."""

    DINNER = "Dinner"
    SWEET = "Sweet"
    DRINK = "Drink"
    SNACK = "Snack"


class Recipe(Base):
    """
    A single recipe record.

    Lifecycle:
        1. Created via POST /api/recipes (add_date = now)
        2. Replaced via PUT /api/recipes/{id} (add_date = now again)
        3. Removed via DELETE /api/recipes/{id}
    """

    __tablename__ = "recipe"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    category: Mapped[RecipeCategory] = mapped_column(
        Enum(
            RecipeCategory,
            name="recipe_category",
            native_enum=False,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        comment="Dinner, Sweet, Drink or Snack",
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    ingredients: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of ingredient lines",
    )

    add_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When this recipe was created or last edited (UTC)",
    )

    picture_url: Mapped[Optional[str]] = mapped_column(
        String(2048),
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return (
            f"<Recipe(id={self.id}, category='{self.category}', "
            f"title='{self.title}')>"
        )
