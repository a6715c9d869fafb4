"""
RecipeBox Backend: Recipe Route Handlers
========================================

What:  CRUD endpoints for recipes under /api/recipes.
How:   Extracts path/query/body data, delegates to RecipeService, returns JSON.

Route Inventory:
    GET    /api/recipes          list (optional ?category=, ?limit=)
    GET    /api/recipes/{id}     detail
    POST   /api/recipes          create        → 201
    PUT    /api/recipes/{id}     full update
    DELETE /api/recipes/{id}     delete        → 204

Non-integer ids are rejected by FastAPI's path validation with 422.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.routes.consent import build_consent_status
from app.schemas.common import ErrorResponse
from app.schemas.recipe import (
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from app.services.recipe_service import recipe_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Recipes"])


@router.get(
    "/recipes",
    response_model=RecipeListResponse,
    responses={
        200: {"description": "Recipes and consent flags", "model": RecipeListResponse},
        400: {"description": "Unknown category", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List recipes",
    description=(
        "Returns recipes ordered by id, optionally filtered by category. "
        "The response embeds the cookie-consent flags resolved for this request."
    ),
)
async def list_recipes(
    request: Request,
    response: Response,
    category: str | None = Query(
        default=None,
        description="Filter by category: Dinner, Sweet, Drink or Snack (case-insensitive)",
    ),
    limit: int = Query(default=100, ge=1, le=500, description="Maximum recipes returned"),
    db: AsyncSession = Depends(get_db_session),
) -> RecipeListResponse:
    result = await recipe_service.list_recipes(db=db, category=category, limit=limit)
    result.consent = build_consent_status(request)

    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.get(
    "/recipes/{recipe_id}",
    response_model=RecipeResponse,
    responses={
        404: {"description": "Recipe not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single recipe",
)
async def get_recipe(
    recipe_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> RecipeResponse:
    return await recipe_service.get_recipe(db=db, recipe_id=recipe_id)


@router.post(
    "/recipes",
    status_code=201,
    response_model=RecipeResponse,
    responses={
        201: {"description": "Recipe created", "model": RecipeResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a recipe",
)
async def create_recipe(
    payload: RecipeCreate,
    db: AsyncSession = Depends(get_db_session),
) -> RecipeResponse:
    return await recipe_service.create_recipe(db=db, payload=payload)


@router.put(
    "/recipes/{recipe_id}",
    response_model=RecipeResponse,
    responses={
        404: {"description": "Recipe not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a recipe",
    description="Replaces every editable field and restamps add_date with the current time.",
)
async def update_recipe(
    recipe_id: int,
    payload: RecipeUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> RecipeResponse:
    return await recipe_service.update_recipe(db=db, recipe_id=recipe_id, payload=payload)


@router.delete(
    "/recipes/{recipe_id}",
    status_code=204,
    responses={
        404: {"description": "Recipe not found", "model": ErrorResponse},
    },
    summary="Delete a recipe",
)
async def delete_recipe(
    recipe_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await recipe_service.delete_recipe(db=db, recipe_id=recipe_id)
    return Response(status_code=204)
