"""
RecipeBox Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.

Fixtures (function-scoped):
    ├── mock_db_session: Mock async database session (no real DB needed)
    ├── make_recipe: Factory for detached Recipe ORM instances
    ├── sample_recipe_payload: Valid create/update body
    ├── fixed_now: Deterministic UTC clock value for consent expiries
    └── test_client: HTTPX AsyncClient bound to the ASGI app
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings BEFORE any app import creates the settings singleton
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CONSENT_COOKIE_SECURE"] = "false"

from app.models.recipe import Recipe, RecipeCategory  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_recipe(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = recipe
            result = await recipe_service.get_recipe(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_recipe():
    """Builds a Recipe ORM instance without touching a database."""

    def _make(recipe_id: int = 1, **overrides) -> Recipe:
        fields = {
            "id": recipe_id,
            "category": RecipeCategory.DINNER,
            "title": f"Recipe {recipe_id}",
            "description": "Simmer for twenty minutes.",
            "ingredients": ["2 onions", "1 tin tomatoes"],
            "add_date": datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc),
            "picture_url": None,
        }
        fields.update(overrides)
        return Recipe(**fields)

    return _make


@pytest.fixture
def sample_recipe_payload():
    return {
        "category": "Sweet",
        "title": "  Lemon tart  ",
        "description": "Blind-bake the shell first.",
        "ingredients": ["3 lemons", "", "200 g sugar", "   "],
        "picture_url": "https://example.com/tart.jpg",
    }


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    Each test gets a fresh client, so the cookie jar starts empty.
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
