"""
Blog Backend — Custom Exception Hierarchy
==========================================

What:  Defines application-specific exceptions for the error scenarios of the API.
Why:   Services raise typed errors; global handlers registered in main.py turn
       them into HTTP responses. No store failure is allowed to take down the
       listening process.
How:   Each exception class carries a message and optional context dict.
       The context is logged server-side and never returned to the client.

Exception Hierarchy:
    BlogError (base)
    ├── ValidationError   → 422 Unprocessable Entity
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict
    ├── DatabaseError     → 500 Internal Server Error
    └── MigrationError    → fatal at startup (never reaches a client)

Response bodies are fixed strings (`{"message": "Not found"}` and friends);
clients match on them, so they do not vary with the failure details.
"""

from typing import Any, Dict, Optional


class BlogError(Exception):
    """
    Base exception for all blog application errors.

    Attributes:
        message:  Error description used in server logs
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogError):
    """
    Raised when client input fails the presence checks, or references a
    category that does not exist.

    HTTP: 422 Unprocessable Entity
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


class NotFoundError(BlogError):
    """
    Raised when a post or category lookup by id misses.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(BlogError):
    """
    Raised when the store refuses a write because of dependent rows,
    e.g. deleting a category that still has posts.

    HTTP: 409 Conflict
    """

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(BlogError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP: 500 Internal Server Error. Details (SQL, constraint names) stay in the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MigrationError(BlogError):
    """Raised when the database file or schema cannot be created at startup."""

    def __init__(
        self,
        message: str = "Database schema migration failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
