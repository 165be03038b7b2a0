"""
HeroDex Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the errors the API reports itself.
How:   Each exception class carries a message and optional context dict.
       Handlers registered in main.py turn them into structured JSON
       responses with the right HTTP status code.
Who:   Raised by services, routes and middleware.

Exception Hierarchy:
    HeroDexError (base)          → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    └── PayloadTooLargeError     → 413 Payload Too Large

Anything else (SQLAlchemy errors included) is not wrapped: it reaches the
fallback handler passed to create_app(), which logs it and answers
{"err": "Something broke!"}.
"""

from typing import Any, Dict, Optional


class HeroDexError(Exception):
    """
    Base exception for all HeroDex application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HeroDexError):
    """
    Raised when client input fails a business rule.

    When:    Unknown powerstat names, non-integer stat thresholds in the
             search query string.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types, unknown body fields) are left to
    FastAPI, which answers 422 on its own.
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


class NotFoundError(HeroDexError):
    """
    Raised when a requested resource does not exist.

    When:    POST /heroes/{id}/comments for a hero that is not in the catalog.
    HTTP:    404 Not Found

    GET /heroes/{id} deliberately does NOT raise this: an unknown id answers
    with an empty result list.
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


class PayloadTooLargeError(HeroDexError):
    """
    Raised when a request body is larger than settings.max_body_size.

    HTTP:    413 Payload Too Large
    """

    def __init__(
        self,
        max_size: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Request body exceeds the maximum allowed size of {max_size} bytes"
        ctx = context or {}
        ctx["max_size"] = max_size
        super().__init__(message=message, context=ctx)
        self.max_size = max_size
