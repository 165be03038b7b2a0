"""
HeroDex Backend — Comment Route Handlers
==========================================

What:  POST /heroes/{id}/comments (create) and GET /heroes/{id}/comments (list).
How:   Thin wrappers around CommentService.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from herodex.database import get_db_session
from herodex.schemas.comment import (
    CommentCreateRequest,
    CommentCreatedResponse,
    CommentListResponse,
)
from herodex.schemas.common import ErrorResponse
from herodex.services.comment_service import comment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Comments"])


@router.post(
    "/heroes/{hero_id}/comments",
    status_code=201,
    response_model=CommentCreatedResponse,
    responses={
        201: {"description": "Comment created", "model": CommentCreatedResponse},
        404: {"description": "Hero not found", "model": ErrorResponse},
    },
    summary="Post a comment on a hero",
    description=(
        "Stores the comment with the current time and returns it with the full "
        "hero embedded. Unknown heroes are rejected before anything is stored."
    ),
)
async def create_comment(
    hero_id: str,
    body: CommentCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> CommentCreatedResponse:
    return await comment_service.create_comment(db=db, hero_id=hero_id, text=body.text)


@router.get(
    "/heroes/{hero_id}/comments",
    response_model=CommentListResponse,
    summary="List a hero's comments, newest first",
    description="Returns 3 comments per page, each with the full hero embedded.",
)
async def list_comments(
    hero_id: str,
    page: Optional[str] = Query(default=None, description="1-based page number"),
    db: AsyncSession = Depends(get_db_session),
) -> CommentListResponse:
    return await comment_service.list_comments(db=db, hero_id=hero_id, page=page)
