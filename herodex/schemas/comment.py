"""HeroDex Backend — Comment Schemas."""

import uuid
from datetime import datetime
from typing import List

from pydantic import Field

from herodex.schemas.common import CamelModel, PaginationMeta
from herodex.schemas.hero import HeroResponse


class CommentCreateRequest(CamelModel):
    """Body of POST /heroes/{id}/comments. No length or content rules apply."""
    text: str = Field(description="Comment body")


class CommentResponse(CamelModel):
    """A comment with its hero reference resolved to the full hero."""
    id: uuid.UUID
    hero: HeroResponse
    text: str
    created_at: datetime = Field(description="Insert time (UTC ISO 8601)")


class CommentCreatedResponse(CamelModel):
    msg: str = Field(default="success!")
    comment: CommentResponse


class CommentListResponse(CamelModel):
    """Comments of one hero, newest first, 3 per page."""
    data: List[CommentResponse]
    count: int = Field(description="Total number of comments on the hero")
    pagination: PaginationMeta
