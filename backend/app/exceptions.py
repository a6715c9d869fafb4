"""
RecipeBox Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    RecipeBoxError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

The consent resolver never raises: every cookie/header combination maps to
a defined decision, so nothing in this hierarchy belongs to it.
"""

from typing import Any, Dict, Optional


class RecipeBoxError(Exception):
    """
    Base exception for all RecipeBox application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only by handlers that opt in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecipeBoxError):
    """
    Raised when client input fails a business rule.

    HTTP:    400 Bad Request
    When:    Unknown recipe category in a list filter, and similar rules that
             Pydantic's schema validation (422) does not cover.

    Example response:
        {
            "error": "validation_error",
            "message": "Unknown category 'Soup'. Allowed: Dinner, Sweet, Drink, Snack",
            "details": {"field": "category"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(RecipeBoxError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found
    When:    GET/PUT/DELETE /api/recipes/{id} with an id that has no row.

    SQLAlchemy returns None for missing records; the service layer converts
    that into this exception so routes stay free of status-code logic.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(RecipeBoxError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Detailed error
    info (SQL, constraint names) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
