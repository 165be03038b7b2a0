"""
HeroDex Backend — Hero Route Handlers
=======================================

What:  GET /heroes (paginated catalog) and GET /heroes/{id} (detail).
How:   Extracts path/query parameters and delegates to HeroService.

`page` is taken as a raw string on purpose: a non-numeric or non-positive
value falls back to page 1 instead of failing with 422.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from herodex.database import get_db_session
from herodex.schemas.common import FallbackErrorResponse
from herodex.schemas.hero import HeroDetailResponse, HeroListResponse
from herodex.services.hero_service import hero_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Heroes"])


@router.get(
    "/heroes",
    response_model=HeroListResponse,
    responses={500: {"description": "Server error", "model": FallbackErrorResponse}},
    summary="List heroes, sorted by name and paginated",
    description="Returns 10 heroes per page in ascending name order.",
)
async def list_heroes(
    page: Optional[str] = Query(default=None, description="1-based page number"),
    db: AsyncSession = Depends(get_db_session),
) -> HeroListResponse:
    return await hero_service.list_heroes(db=db, page=page)


@router.get(
    "/heroes/{hero_id}",
    response_model=HeroDetailResponse,
    summary="Get a hero by id",
    description=(
        "Returns `{\"results\": [hero]}`. An unknown or malformed id returns "
        "`{\"results\": []}` with status 200."
    ),
)
async def get_hero(
    hero_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> HeroDetailResponse:
    return await hero_service.get_hero(db=db, hero_id=hero_id)
