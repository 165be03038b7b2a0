"""
HeroDex Backend — Search Route Handlers
=========================================

What:  The three hero search endpoints.

    POST /search/heroes/by-name       body: {"query": "fla"}
    POST /search/heroes/by-min-stats  body: {"speed": 100, "intelligence": 95}
    GET  /search                      query: name, gender, the six stats

Note the split: the two POST searches take their filters from the JSON body
and only `page` from the query string, while GET /search takes everything
from the query string.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from herodex.database import get_db_session
from herodex.schemas.common import ErrorResponse
from herodex.schemas.hero import HeroListResponse, MinStatsRequest, NameSearchRequest
from herodex.services.hero_service import hero_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.post(
    "/search/heroes/by-name",
    response_model=HeroListResponse,
    summary="Search heroes whose name starts with a query",
    description=(
        "Case-insensitive prefix match: `{\"query\": \"fla\"}` finds `Flash`. "
        "The query is matched literally; an empty or missing query matches every hero."
    ),
)
async def search_by_name(
    body: Optional[NameSearchRequest] = None,
    page: Optional[str] = Query(default=None, description="1-based page number"),
    db: AsyncSession = Depends(get_db_session),
) -> HeroListResponse:
    query = body.query if body else None
    return await hero_service.search_by_name(db=db, query=query, page=page)


@router.post(
    "/search/heroes/by-min-stats",
    response_model=HeroListResponse,
    summary="Search heroes by minimum powerstats",
    description=(
        "Every supplied stat is a lower bound (>=); stats that are not sent are "
        "unconstrained. An empty body matches every hero."
    ),
)
async def search_by_min_stats(
    body: Optional[MinStatsRequest] = None,
    page: Optional[str] = Query(default=None, description="1-based page number"),
    db: AsyncSession = Depends(get_db_session),
) -> HeroListResponse:
    thresholds = body.thresholds() if body else {}
    return await hero_service.search_by_min_stats(db=db, thresholds=thresholds, page=page)


@router.get(
    "/search",
    response_model=HeroListResponse,
    responses={400: {"description": "Non-integer stat value", "model": ErrorResponse}},
    summary="Combined hero search from the query string",
    description=(
        "Name prefix, exact gender and a lower bound per powerstat. Any parameter "
        "that is omitted or left blank does not constrain the result."
    ),
)
async def search(
    name: Optional[str] = Query(default=None, description="Case-insensitive name prefix"),
    gender: Optional[str] = Query(default=None, description="Exact gender, e.g. 'Female'"),
    intelligence: Optional[str] = Query(default=None),
    strength: Optional[str] = Query(default=None),
    speed: Optional[str] = Query(default=None),
    durability: Optional[str] = Query(default=None),
    power: Optional[str] = Query(default=None),
    combat: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None, description="1-based page number"),
    db: AsyncSession = Depends(get_db_session),
) -> HeroListResponse:
    stats = {
        "intelligence": intelligence,
        "strength": strength,
        "speed": speed,
        "durability": durability,
        "power": power,
        "combat": combat,
    }
    return await hero_service.search(
        db=db,
        name=name,
        gender=gender,
        stats=stats,
        page=page,
    )
