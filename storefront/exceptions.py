"""
Storefront Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failure modes of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status.
Who:   Raised by repositories and the auth layer; caught by global handlers.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError          → 400 Bad Request (field rule failed)
    ├── ConflictError            → 400 Bad Request (uniqueness violated)
    ├── InvalidIdentifierError   → 400 Bad Request (malformed id)
    ├── AuthenticationError      → 401 Unauthorized
    ├── AuthorizationError       → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

NotFoundError and ConflictError are the only domain-level failures a
repository produces on its own; the rest describe bad input, missing
credentials or an unavailable store.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where handlers say so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when a field value fails its validation rule.

    What:    The client sent data that can be corrected.
    When:    A validation rule rejects a value on create or update,
             or FastAPI rejects the request body/query shape.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid rating: must be an integer between 1 and 5",
            "details": {"field": "rating"}
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


class ConflictError(StorefrontError):
    """
    Raised when a write would duplicate a unique field of another entity.

    When:    create() or update() finds an existing row with the same value
             in a unique field (product name, user email).
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        resource: str = "resource",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} already exists"
        if field:
            message = f"{resource.capitalize()} {field} already taken"
        ctx = context or {}
        ctx["resource"] = resource
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(StorefrontError):
    """
    Raised when an identifier is not syntactically valid.

    What:    The id in the path (or in an order item) is not a UUID.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        resource: str = "resource",
        identifier: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if identifier is not None:
            ctx["identifier"] = identifier
        super().__init__(message=f"'{identifier}' is not a valid {resource} id", context=ctx)


class NotFoundError(StorefrontError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PATCH/DELETE /v1/<resource>/{id} with an unknown id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; repositories convert that
    into this exception so the handler can answer 404.
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


class AuthenticationError(StorefrontError):
    """
    Raised when a request carries no usable credentials.

    When:    Missing bearer token, bad signature, expired token, token for a
             user that no longer exists, or wrong login credentials.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Please authenticate",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(StorefrontError):
    """
    Raised when an authenticated user lacks the right a route requires.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StorefrontError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert, update or delete failed in the driver.
    When:    Connection lost mid-query, store unreachable, constraint race.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Detailed error
        info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
