"""
Pressroom Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the different failure scenarios.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the matching HTTP status code.
Who:   Raised by services, repositories, the blob store and dependencies.

Exception Hierarchy:
    PressroomError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── AuthorizationError       → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── StorageError             → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error

No error is retried: every operation is attempted exactly once and failures
travel straight to the HTTP boundary.
"""

from typing import Any, Dict, Optional


class PressroomError(Exception):
    """
    Base exception for all Pressroom application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info; returned as `details` for 4xx responses,
                  logged only for 5xx responses
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PressroomError):
    """
    Raised when client input fails validation.

    When:  Malformed payload, a referenced category/author that does not exist,
           an upload with a disallowed extension or size.
    HTTP:  400 Bad Request, always raised before any row or file is written.

    Example response:
        {
            "error": "validation_error",
            "message": "Category with ID '9' does not exist",
            "details": {"field": "category_id"}
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


class AuthenticationError(PressroomError):
    """No credentials were presented. HTTP 401."""

    def __init__(self, message: str = "Authentication credentials were not provided"):
        super().__init__(message=message)


class AuthorizationError(PressroomError):
    """Credentials were presented but are not accepted. HTTP 403."""

    def __init__(self, message: str = "You are not allowed to access this resource"):
        super().__init__(message=message)


class NotFoundError(PressroomError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; repositories convert that
    None into this exception so the route layer never checks for it.
    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(PressroomError):
    """
    Raised when a write would break a relationship or uniqueness rule.

    When:  Deleting a category/author that articles still reference,
           creating an author with an email that is already taken.
    HTTP:  409 Conflict
    """

    def __init__(
        self,
        message: str = "The request conflicts with the current state of the resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(PressroomError):
    """
    Raised when a blob store operation fails.

    When:  Disk full, permission denied, unwritable namespace directory.
    HTTP:  500 Internal Server Error (paths are logged, never returned)
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PressroomError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the original
    SQLAlchemy error type is kept in `context` for the server log.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(PressroomError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes a Retry-After header with the seconds until the
    oldest request in the window expires.
    HTTP: 429 Too Many Requests
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
