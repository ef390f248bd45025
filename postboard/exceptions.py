"""
Postboard Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure the API reports.
Why:   Services raise these; global handlers registered in main.py turn them
       into JSON error responses with the right status code. Handlers never
       need their own try/except blocks.
How:   Each exception carries a client-safe message and a context dict that
       is logged but never returned for server-side failures.

Exception Hierarchy:
    PostboardError (base)
    ├── ValidationError    → 400 Bad Request
    ├── UnauthorizedError  → 401 Unauthorized
    ├── ForbiddenError     → 403 Forbidden
    ├── NotFoundError      → 404 Not Found
    ├── ConflictError      → 500 Internal Server Error (see note)
    ├── DatabaseError      → 500 Internal Server Error
    └── PasswordTooLongError (raised by the hasher, never reaches a handler)

Note on ConflictError:
    A username clash would fit 409, but registration deliberately reports a
    uniqueness violation and a hashing failure identically, and the latter is
    a server-side failure. Both therefore surface as 500 "Registration failed".
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    """
    Raised when client input fails a business rule.

    Schema-level failures (missing fields, wrong types) are raised by FastAPI
    as RequestValidationError and share the same 400 response shape.
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


class UnauthorizedError(PostboardError):
    """
    Raised for bad credentials or a missing/invalid bearer token.

    The message must not reveal which part of a login was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid username or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(PostboardError):
    """Raised when a valid token acts on behalf of a different user id."""

    def __init__(
        self,
        message: str = "Token does not grant access to this user's posts",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PostboardError):
    """
    Raised when a requested resource does not exist.

    For ownership-checked post mutations this also covers "exists but is
    owned by someone else"; the two cases are indistinguishable by design of
    the filter predicate.
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


class ConflictError(PostboardError):
    """Raised when registration cannot complete (duplicate name or hash failure)."""

    def __init__(
        self,
        message: str = "Registration failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PostboardError):
    """
    Raised when a store operation fails unexpectedly.

    The client always receives a generic message; the SQL error is logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PasswordTooLongError(PostboardError):
    """Raised when a password exceeds bcrypt's 72-byte input limit."""

    def __init__(
        self,
        message: str = "Password exceeds the 72-byte limit of the hash function",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
