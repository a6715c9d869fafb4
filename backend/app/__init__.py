"""
RecipeBox Backend: Application Package Initializer
===================================================

What:  Marks the `app` directory as a Python package.
Who:   Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │     Routes + Middleware (HTTP)      │  ← status codes, cookies, headers
    ├─────────────────────────────────────┤
    │        Services (Business Logic)    │  ← recipe CRUD, consent resolution
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The consent resolver in services/ never touches a Request object; the
    middleware adapts HTTP to plain strings and back.
"""

__version__ = "1.0.0"
