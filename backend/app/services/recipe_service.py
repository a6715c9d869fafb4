"""
RecipeBox Backend: Recipe Service (Business Logic)
==================================================

What:  Create, read, update and delete operations over Recipe records.
How:   Receives an AsyncSession per call; flushes changes and leaves the
       commit to the get_db_session dependency.
Who:   Called by the /api/recipes route handlers.

Error Handling Strategy:
    Missing rows become NotFoundError (404). Unknown category filters become
    ValidationError (400). Any other failure is logged with its traceback and
    wrapped in DatabaseError (500) so no SQL detail reaches the client.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.recipe import Recipe, RecipeCategory
from app.schemas.recipe import (
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)

logger = logging.getLogger(__name__)


def parse_category(raw: Optional[str]) -> Optional[RecipeCategory]:
    """Case-insensitive lookup of a category name; None passes through."""
    if raw is None or not raw.strip():
        return None
    wanted = raw.strip().lower()
    for category in RecipeCategory:
        if category.value.lower() == wanted:
            return category
    allowed = ", ".join(c.value for c in RecipeCategory)
    raise ValidationError(
        message=f"Unknown category '{raw}'. Allowed: {allowed}",
        field="category",
        context={"allowed": [c.value for c in RecipeCategory]},
    )


class RecipeService:
    """
    Business logic layer for recipe operations.

    Responsibilities:
        - list_recipes():  optional category filter, ordered by id
        - get_recipe():    single recipe or NotFoundError
        - create_recipe(): stamps add_date and persists
        - update_recipe(): full replacement, restamps add_date
        - delete_recipe(): removes the row
    """

    async def list_recipes(
        self,
        db: AsyncSession,
        category: Optional[str] = None,
        limit: int = 100,
    ) -> RecipeListResponse:
        wanted = parse_category(category)

        try:
            query = select(Recipe)
            count_query = select(func.count(Recipe.id))
            if wanted is not None:
                query = query.where(Recipe.category == wanted)
                count_query = count_query.where(Recipe.category == wanted)
            query = query.order_by(Recipe.id).limit(limit)

            result = await db.execute(query)
            recipes = list(result.scalars().all())

            count_result = await db.execute(count_query)
            total_count = count_result.scalar() or 0

            return RecipeListResponse(
                recipes=[RecipeResponse.model_validate(r) for r in recipes],
                total_count=total_count,
            )

        except Exception as e:
            logger.error("Database error listing recipes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve recipes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_recipe(self, db: AsyncSession, recipe_id: int) -> RecipeResponse:
        recipe = await self._load(db, recipe_id)
        return RecipeResponse.model_validate(recipe)

    async def create_recipe(self, db: AsyncSession, payload: RecipeCreate) -> RecipeResponse:
        """
        Persist a new recipe.

        The client never supplies add_date; it is stamped here with the
        current UTC time.
        """
        try:
            recipe = Recipe(
                category=payload.category,
                title=payload.title,
                description=payload.description,
                ingredients=list(payload.ingredients),
                picture_url=payload.picture_url,
                add_date=datetime.now(timezone.utc),
            )
            db.add(recipe)
            await db.flush()  # assigns the id without committing
            logger.info("Recipe created: %s (%s)", recipe.id, recipe.title)
            return RecipeResponse.model_validate(recipe)

        except Exception as e:
            logger.error("Database error creating recipe: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the recipe. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_recipe(
        self,
        db: AsyncSession,
        recipe_id: int,
        payload: RecipeUpdate,
    ) -> RecipeResponse:
        recipe = await self._load(db, recipe_id)

        try:
            recipe.category = payload.category
            recipe.title = payload.title
            recipe.description = payload.description
            recipe.ingredients = list(payload.ingredients)
            recipe.picture_url = payload.picture_url
            recipe.add_date = datetime.now(timezone.utc)
            await db.flush()
            logger.info("Recipe %s updated", recipe_id)
            return RecipeResponse.model_validate(recipe)

        except Exception as e:
            logger.error("Database error updating recipe %s: %s", recipe_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the recipe. Please try again.",
                context={"recipe_id": recipe_id},
            )

    async def delete_recipe(self, db: AsyncSession, recipe_id: int) -> None:
        recipe = await self._load(db, recipe_id)

        try:
            await db.delete(recipe)
            await db.flush()
            logger.info("Recipe %s deleted", recipe_id)

        except Exception as e:
            logger.error("Database error deleting recipe %s: %s", recipe_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the recipe. Please try again.",
                context={"recipe_id": recipe_id},
            )

    async def _load(self, db: AsyncSession, recipe_id: int) -> Recipe:
        """Fetch by primary key or raise NotFoundError."""
        try:
            result = await db.execute(select(Recipe).where(Recipe.id == recipe_id))
            recipe = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching recipe %s: %s", recipe_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the recipe. Please try again.",
                context={"recipe_id": recipe_id},
            )

        if recipe is None:
            raise NotFoundError(resource="recipe", resource_id=str(recipe_id))
        return recipe


recipe_service = RecipeService()
