"""
Postboard Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failure modes of a request.
Why:   Services raise typed errors; routes and global handlers decide which
       HTTP status each one becomes.
How:   Each exception carries a human-readable message and an optional
       context dict (logged, never returned to the client).

Exception Hierarchy:
    PostboardError (base)
    ├── RequestDecodeError    → 400 Bad Request (malformed or invalid body)
    ├── NotFoundError         → missing row (404 if it escapes a route)
    ├── DatabaseError         → store failure (500 if it escapes a route)
    └── PayloadTooLargeError  → 413 Payload Too Large

Status mapping for store failures is per operation, not per exception:
listing routes answer 500, mutating routes answer 400. See app.routes.posts.
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  Error description (safe to return in the error envelope)
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


class RequestDecodeError(PostboardError):
    """
    Raised when a request body cannot be decoded into the expected payload.

    When:    Empty body, invalid JSON, wrong JSON shape, missing `id`,
             field-level validation failures.
    HTTP:    400 Bad Request, `{"error": "Failed to decode post: ..."}`
    """

    def __init__(
        self,
        message: str = "Failed to decode request body",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PostboardError):
    """
    Raised when a mutation targets a row that does not exist.

    Lookups by slug do not raise this; they return a NOT_FOUND outcome
    instead (see app.services.post_service.SlugLookup).
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


class DatabaseError(PostboardError):
    """
    Raised when a database operation fails.

    What:    A query, insert, update or delete failed.
    When:    Connection lost, constraint violation (duplicate slug), deadlock.

    The message embeds the driver's description of the failure; clients of
    the error envelope rely on it to tell constraint violations apart.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PayloadTooLargeError(PostboardError):
    """
    Raised when a request body exceeds `settings.max_body_size`.

    HTTP:    413 Payload Too Large
    """

    def __init__(
        self,
        limit: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Request body exceeds the maximum allowed size of {limit} bytes"
        ctx = context or {}
        ctx["limit"] = limit
        super().__init__(message=message, context=ctx)
        self.limit = limit
