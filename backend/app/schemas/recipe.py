"""
RecipeBox Backend: Recipe Request/Response Schemas
==================================================

What:  Pydantic models defining the recipe API contract.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Schemas are separate from the SQLAlchemy model: `id` and `add_date` are
server-controlled and never accepted from the client.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.recipe import RecipeCategory
from app.schemas.consent import ConsentStatusResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RecipeBase(BaseModel):
    """Editable recipe fields shared by create and update payloads."""

    category: RecipeCategory = Field(description="Dinner, Sweet, Drink or Snack")
    title: str = Field(min_length=1, max_length=200, description="Recipe title")
    description: Optional[str] = Field(default=None, description="Free-form preparation notes")
    ingredients: List[str] = Field(default_factory=list, description="Ingredient lines, in order")
    picture_url: Optional[str] = Field(
        default=None,
        max_length=2048,
        description="Absolute http(s) URL or site-relative path of the recipe picture",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Title must not be blank")
        return stripped

    @field_validator("ingredients")
    @classmethod
    def drop_blank_ingredients(cls, v: List[str]) -> List[str]:
        return [line.strip() for line in v if line and line.strip()]

    @field_validator("picture_url")
    @classmethod
    def validate_picture_url(cls, v: Optional[str]) -> Optional[str]:
        """Accepts http(s) URLs and site-relative paths; blank means no picture."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if v.startswith(("http://", "https://")) or (v.startswith("/") and not v.startswith("//")):
            return v
        raise ValueError("picture_url must be an http(s) URL or a path starting with '/'")


class RecipeCreate(RecipeBase):
    """Body of POST /api/recipes."""


class RecipeUpdate(RecipeBase):
    """Body of PUT /api/recipes/{id}. Replaces every editable field."""


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RecipeResponse(BaseModel):
    """
    What:  Full representation of a recipe.
    Who:   Returned by the detail, create and update endpoints, and as list items.
    """
    id: int = Field(description="Recipe identifier")
    category: RecipeCategory
    title: str
    description: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    add_date: datetime = Field(description="Creation or last edit time (UTC ISO 8601)")
    picture_url: Optional[str] = None

    model_config = {"from_attributes": True}


class RecipeListResponse(BaseModel):
    """
    What:  Response of GET /api/recipes.

    The `consent` block carries the request's cookie-consent flags so a
    client rendering the list can decide whether to show the banner without
    a second round trip.
    """
    recipes: List[RecipeResponse] = Field(description="Recipes, ordered by id")
    total_count: int = Field(description="Number of recipes matching the filter")
    consent: Optional[ConsentStatusResponse] = Field(
        default=None,
        description="Cookie-consent flags resolved for this request",
    )
