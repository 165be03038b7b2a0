"""
HeroDex Backend — Comment Service
===================================

What:  Posting comments on a hero and listing a hero's comments.
Who:   Called by the comment route handlers.

Create Flow (POST /heroes/{id}/comments):
    ┌─────────────┐    ┌──────────────┐    ┌──────────────────────┐
    │ Hero exists?│───▶│ INSERT + flush│───▶│ Re-read, hero joined │
    └─────────────┘    └──────────────┘    └──────────────────────┘
          │ no
          ▼
     NotFoundError (404), nothing inserted

Listing:
    Newest first (created_at DESC, then id DESC on ties), 3 per page,
    hero joined into every row.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from herodex.exceptions import NotFoundError
from herodex.models.comment import Comment
from herodex.models.hero import Hero
from herodex.schemas.comment import (
    CommentCreatedResponse,
    CommentListResponse,
    CommentResponse,
)
from herodex.services import filters
from herodex.services.hero_service import hero_to_response
from herodex.services.pagination import COMMENTS_PER_PAGE, Paginator

logger = logging.getLogger(__name__)


def comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        hero=hero_to_response(comment.hero),
        text=comment.text,
        created_at=comment.created_at,
    )


class CommentService:
    """
    Stateless comment operations.

    Concurrent posts for the same hero are independent inserts; there is no
    deduplication or ordering guarantee beyond created_at.
    """

    async def create_comment(
        self,
        db: AsyncSession,
        hero_id: str,
        text: str,
    ) -> CommentCreatedResponse:
        """
        Attach a new comment to a hero.

        Raises:
            NotFoundError: hero_id is malformed or no such hero exists.
        """
        parsed = filters.parse_uuid(hero_id)
        hero = await db.get(Hero, parsed) if parsed is not None else None
        if hero is None:
            raise NotFoundError(resource="hero", resource_id=hero_id)

        comment = Comment(hero_id=hero.id, text=text)
        db.add(comment)
        await db.flush()  # assigns id and created_at without committing
        logger.info("Comment %s created for hero %s", comment.id, hero.id)

        saved = await self._get_with_hero(db, comment.id)
        return CommentCreatedResponse(msg="success!", comment=comment_to_response(saved))

    async def list_comments(
        self,
        db: AsyncSession,
        hero_id: str,
        page: Optional[str] = None,
    ) -> CommentListResponse:
        """
        One page of a hero's comments, newest first.

        A malformed hero id yields an empty page rather than an error.
        """
        paginator = Paginator.from_raw(page, COMMENTS_PER_PAGE)
        parsed = filters.parse_uuid(hero_id)
        if parsed is None:
            return CommentListResponse(data=[], count=0, pagination=paginator.meta(0))

        clauses = filters.comments_for_hero(parsed)
        result = await db.execute(
            select(Comment)
            .options(joinedload(Comment.hero))
            .where(*clauses)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .offset(paginator.offset)
            .limit(paginator.limit)
        )
        comments = list(result.scalars().all())

        count_result = await db.execute(
            select(func.count()).select_from(Comment).where(*clauses)
        )
        total = count_result.scalar() or 0

        return CommentListResponse(
            data=[comment_to_response(comment) for comment in comments],
            count=total,
            pagination=paginator.meta(total),
        )

    async def _get_with_hero(self, db: AsyncSession, comment_id: uuid.UUID) -> Comment:
        result = await db.execute(
            select(Comment)
            .options(joinedload(Comment.hero))
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()


comment_service = CommentService()
