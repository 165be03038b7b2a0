"""
HeroDex Backend — Shared Pydantic Schemas
===========================================

What:  Base model, pagination block, error and health responses shared by
       every route module.

JSON naming:
    Python attributes are snake_case; the wire format is camelCase
    (pageCount, previousPage, createdAt, ...). CamelModel sets this up once
    through an alias generator. FastAPI serializes response models by alias,
    and populate_by_name lets services build models with snake_case kwargs.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every API schema: camelCase on the wire, snake_case in Python."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class PaginationMeta(CamelModel):
    """
    What:  The `pagination` block of every paginated listing.

    Example (page 2 of 25 heroes, 10 per page):
        {"page": 2, "pageCount": 3, "previousPage": 1, "nextPage": 3}

    nextPage is not clamped: asking for a page past the end yields an empty
    `data` list and a nextPage beyond pageCount.
    """
    page: int = Field(description="Current 1-based page number")
    page_count: int = Field(description="Total number of pages (0 when nothing matches)")
    previous_page: int = Field(description="Previous page number, never below 1")
    next_page: int = Field(description="page + 1")


class ErrorResponse(BaseModel):
    """
    What:  Error body for errors the application raises itself
           (ValidationError, NotFoundError, PayloadTooLargeError).

    Example:
        {
            "error": "validation_error",
            "message": "Unknown powerstat 'luck'",
            "details": {"field": "luck"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class FallbackErrorResponse(BaseModel):
    """Body of the catch-all 404 and 500 responses: {"err": "..."}."""
    err: str


class HealthResponse(CamelModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class WelcomeResponse(BaseModel):
    msg: str
