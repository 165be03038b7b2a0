"""
HeroDex Backend — Hero SQLAlchemy Model
=========================================

What:  ORM model representing the `heroes` table.
Who:   Queried by HeroService and the search filters; referenced by Comment.
When:  Rows are pre-seeded; the API never creates, updates or deletes heroes.

Table Design:
    - UUID primary key, assigned at insert and never changed
    - name: canonical sort key of every hero listing (indexed)
    - appearance: gender (exact-match filter), race, eye/hair color
    - powerstats: six integer columns, each CHECK-constrained to 0..100.
      Kept as real columns (not a JSON blob) so lower-bound filters are
      plain indexed comparisons on every backend.
"""

import uuid
from typing import Dict, Optional

from sqlalchemy import CheckConstraint, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from herodex.database import Base

# Order matters: it is the order powerstats are rendered in responses
POWERSTAT_NAMES = (
    "intelligence",
    "strength",
    "speed",
    "durability",
    "power",
    "combat",
)

POWERSTAT_MIN = 0
POWERSTAT_MAX = 100


class Hero(Base):
    """
    A catalog hero.

    Query Patterns:
        - Paginated listing: ORDER BY name, id LIMIT 10 OFFSET n
        - Prefix search: WHERE lower(name) LIKE lower(:q) || '%'
        - Stat search: WHERE speed >= :speed AND ...
        - Detail: WHERE id = :uuid
    """

    __tablename__ = "heroes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Appearance ────────────────────────────────────────────────────────
    gender: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    race: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    eye_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    hair_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    # ── Powerstats ────────────────────────────────────────────────────────
    intelligence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    strength: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    speed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    durability: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    power: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    combat: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_heroes_name", "name"),
        *(
            CheckConstraint(
                f"{stat} BETWEEN {POWERSTAT_MIN} AND {POWERSTAT_MAX}",
                name=f"ck_heroes_{stat}_range",
            )
            for stat in POWERSTAT_NAMES
        ),
    )

    @property
    def powerstats(self) -> Dict[str, int]:
        """Stat name → value, in POWERSTAT_NAMES order."""
        return {stat: getattr(self, stat) for stat in POWERSTAT_NAMES}

    def __repr__(self) -> str:
        return f"<Hero(id={self.id}, name='{self.name}')>"
