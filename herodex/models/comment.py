"""
HeroDex Backend — Comment SQLAlchemy Model
============================================

What:  ORM model representing the `comments` table.
Who:   Written and read by CommentService.

Lifecycle:
    Inserted by POST /heroes/{id}/comments, never updated or deleted.
    created_at is assigned at insert time (UTC), by the application and, as
    a fallback for rows written outside the ORM, by the database default.

Index on (hero_id, created_at DESC):
    Serves the only read pattern, "newest comments for this hero". Rows with
    the same timestamp are ordered by id so paging through them is stable.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy import text as sql_text  # `text` is also a Comment column
from sqlalchemy.orm import Mapped, mapped_column, relationship

from herodex.database import Base
from herodex.models.hero import Hero


class Comment(Base):
    """A user comment attached to exactly one hero."""

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    hero_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("heroes.id"),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=sql_text("CURRENT_TIMESTAMP"),
    )

    # lazy="raise": async sessions cannot lazy-load, so every read must
    # join the hero in explicitly (joinedload)
    hero: Mapped[Hero] = relationship(Hero, lazy="raise")

    __table_args__ = (
        Index("idx_comments_hero_created_at", hero_id, created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Comment(id={self.id}, hero_id={self.hero_id}, "
            f"created_at='{self.created_at}')>"
        )
