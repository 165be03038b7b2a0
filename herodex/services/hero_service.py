"""
HeroDex Backend — Hero Service
================================

What:  Listing, lookup and search over the hero catalog.
How:   Each search builds its WHERE clauses with herodex.services.filters,
       then runs two queries through the shared `_paginate` helper:
           1. the page:  SELECT … WHERE … ORDER BY name, id OFFSET … LIMIT …
           2. the total: SELECT count(*) … WHERE …   (same clauses)
Who:   Called by the hero and search route handlers.

Ordering:
    Every listing sorts by name ascending as the database collates it.
    `id` is a secondary key only so that heroes sharing a name keep a stable
    position across pages.

Error Handling:
    Database errors are NOT caught here. They propagate to get_db_session
    (rollback) and then to the process-wide fallback handler.
"""

import logging
import uuid
from typing import Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from herodex.models.hero import Hero
from herodex.schemas.hero import (
    Appearance,
    HeroDetailResponse,
    HeroListResponse,
    HeroResponse,
    PowerStats,
)
from herodex.services import filters
from herodex.services.filters import Clauses
from herodex.services.pagination import HEROES_PER_PAGE, Paginator

logger = logging.getLogger(__name__)


def hero_to_response(hero: Hero) -> HeroResponse:
    """Reshape a flat `heroes` row into the nested API representation."""
    return HeroResponse(
        id=hero.id,
        name=hero.name,
        powerstats=PowerStats(**hero.powerstats),
        appearance=Appearance(
            gender=hero.gender,
            race=hero.race,
            eye_color=hero.eye_color,
            hair_color=hero.hair_color,
        ),
        image_url=hero.image_url,
    )


class HeroService:
    """
    Stateless query layer for heroes.

    Responsibilities:
        - list_heroes(): every hero, paginated
        - get_hero(): detail lookup, empty result for unknown ids
        - search_by_name(): name prefix search
        - search_by_min_stats(): powerstat lower bounds
        - search(): name + gender + stat bounds from the query string
    """

    async def list_heroes(self, db: AsyncSession, page: Optional[str] = None) -> HeroListResponse:
        return await self._paginate(db, [], Paginator.from_raw(page, HEROES_PER_PAGE))

    async def get_hero(self, db: AsyncSession, hero_id: str) -> HeroDetailResponse:
        """
        Look a hero up by id.

        Unknown ids and strings that are not UUIDs both produce
        `{"results": []}` rather than a 404.
        """
        parsed = filters.parse_uuid(hero_id)
        if parsed is None:
            logger.debug("Hero lookup with malformed id %r", hero_id)
            return HeroDetailResponse(results=[])

        hero = await db.get(Hero, parsed)
        if hero is None:
            return HeroDetailResponse(results=[])
        return HeroDetailResponse(results=[hero_to_response(hero)])

    async def search_by_name(
        self,
        db: AsyncSession,
        query: Optional[str],
        page: Optional[str] = None,
    ) -> HeroListResponse:
        clauses = filters.name_prefix(query)
        return await self._paginate(db, clauses, Paginator.from_raw(page, HEROES_PER_PAGE))

    async def search_by_min_stats(
        self,
        db: AsyncSession,
        thresholds: Mapping[str, int],
        page: Optional[str] = None,
    ) -> HeroListResponse:
        clauses = filters.min_stats(thresholds)
        return await self._paginate(db, clauses, Paginator.from_raw(page, HEROES_PER_PAGE))

    async def search(
        self,
        db: AsyncSession,
        name: Optional[str] = None,
        gender: Optional[str] = None,
        stats: Optional[Mapping[str, Optional[str]]] = None,
        page: Optional[str] = None,
    ) -> HeroListResponse:
        """
        Combined search used by GET /search.

        `stats` holds the raw query-string values; blank ones are ignored and
        non-integers raise ValidationError (400).
        """
        clauses = filters.combined(
            name=name,
            gender=gender,
            stats=filters.parse_stat_params(stats or {}),
        )
        return await self._paginate(db, clauses, Paginator.from_raw(page, HEROES_PER_PAGE))

    async def _paginate(
        self,
        db: AsyncSession,
        clauses: Clauses,
        paginator: Paginator,
    ) -> HeroListResponse:
        query = (
            select(Hero)
            .where(*clauses)
            .order_by(Hero.name.asc(), Hero.id.asc())
            .offset(paginator.offset)
            .limit(paginator.limit)
        )
        result = await db.execute(query)
        heroes = list(result.scalars().all())

        count_result = await db.execute(
            select(func.count()).select_from(Hero).where(*clauses)
        )
        total = count_result.scalar() or 0

        logger.debug(
            "Hero page %d (offset=%d): %d of %d matching",
            paginator.page, paginator.offset, len(heroes), total,
        )

        return HeroListResponse(
            data=[hero_to_response(hero) for hero in heroes],
            count=total,
            pagination=paginator.meta(total),
        )


# Stateless, one shared instance
hero_service = HeroService()
