"""
HeroDex Backend — Hero Schemas
================================

What:  Request bodies for the hero search endpoints and the hero response
       models.

Response shape:
    Heroes are stored flat (one column per stat), but the API nests them the
    way the catalog documents them:

    {
        "id": "…",
        "name": "Flash",
        "powerstats": {"intelligence": 63, "strength": 10, "speed": 100, …},
        "appearance": {"gender": "Male", "race": "Human", "eyeColor": "Green", …},
        "imageUrl": "https://…"
    }
"""

import uuid
from typing import Dict, List, Optional

from pydantic import Field

from herodex.schemas.common import CamelModel, PaginationMeta


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies
# ══════════════════════════════════════════════════════════════════════════


class NameSearchRequest(CamelModel):
    """
    Body of POST /search/heroes/by-name.

    A missing or empty query matches every hero.
    """
    query: Optional[str] = Field(
        default=None,
        description="Case-insensitive name prefix, e.g. 'fla' finds 'Flash'",
    )


class MinStatsRequest(CamelModel):
    """
    Body of POST /search/heroes/by-min-stats.

    Every field is a lower bound on the matching powerstat. A field that is
    not sent leaves that stat unconstrained (it is NOT treated as 0).
    Unknown keys are rejected with 422.

    Example:
        {"speed": 100, "intelligence": 95}
    """
    intelligence: Optional[int] = None
    strength: Optional[int] = None
    speed: Optional[int] = None
    durability: Optional[int] = None
    power: Optional[int] = None
    combat: Optional[int] = None

    # Merged with CamelModel's config by pydantic
    model_config = {"extra": "forbid"}

    def thresholds(self) -> Dict[str, int]:
        """Only the bounds the client actually supplied."""
        return self.model_dump(exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PowerStats(CamelModel):
    intelligence: int
    strength: int
    speed: int
    durability: int
    power: int
    combat: int


class Appearance(CamelModel):
    gender: Optional[str] = None
    race: Optional[str] = None
    eye_color: Optional[str] = None
    hair_color: Optional[str] = None


class HeroResponse(CamelModel):
    """Full representation of a hero, used in listings, details and comments."""
    id: uuid.UUID = Field(description="Unique hero identifier (UUID)")
    name: str
    powerstats: PowerStats
    appearance: Appearance
    image_url: Optional[str] = None


class HeroListResponse(CamelModel):
    """
    Paginated hero listing.

    Returned by GET /heroes, GET /search and both POST /search/heroes/* routes.
    `count` is the total number of matching heroes, not the page length.
    """
    data: List[HeroResponse]
    count: int = Field(description="Total number of heroes matching the filters")
    pagination: PaginationMeta


class HeroDetailResponse(CamelModel):
    """
    GET /heroes/{id}.

    `results` holds the hero, or is empty when the id is unknown.
    """
    results: List[HeroResponse]
