"""
HeroDex Backend — Search Filter Construction
==============================================

What:  Translates request parameters into SQLAlchemy WHERE clauses.
Who:   HeroService and CommentService.

Contract:
    Every builder returns a list of clauses that the caller AND-s together
    with `select(...).where(*clauses)`. An empty list means "no constraint",
    and a parameter that was not supplied never contributes a clause. There
    is no placeholder value standing in for a missing bound.

    Name searches treat the user's text literally: `%` and `_` are escaped
    before the LIKE pattern is built, so "100%" finds names starting with
    "100%" and nothing else.
"""

import logging
import uuid
from typing import List, Mapping, Optional

from sqlalchemy.sql.elements import ColumnElement

from herodex.exceptions import ValidationError
from herodex.models.comment import Comment
from herodex.models.hero import Hero, POWERSTAT_MAX, POWERSTAT_MIN, POWERSTAT_NAMES

logger = logging.getLogger(__name__)

Clauses = List[ColumnElement[bool]]


def name_prefix(query: Optional[str]) -> Clauses:
    """
    Case-insensitive "name starts with" filter.

    Examples:
        "fla", "FLA", "Fla" all match "Flash"; None or "" match everything.
    """
    if not query:
        return []
    return [Hero.name.istartswith(query, autoescape=True)]


def min_stats(thresholds: Mapping[str, int]) -> Clauses:
    """
    One `stat >= value` clause per supplied stat.

    Stats missing from `thresholds` stay unconstrained; an empty mapping
    matches every hero. Bounds are any integer: they are pinned to
    POWERSTAT_MIN..POWERSTAT_MAX + 1 before binding, which keeps the same
    matches (stats live in 0..100) and keeps huge values inside the store's
    integer range.

    Raises:
        ValidationError: A key is not one of the six powerstat names.
    """
    clauses: Clauses = []
    for stat, minimum in thresholds.items():
        if stat not in POWERSTAT_NAMES:
            raise ValidationError(
                message=f"Unknown powerstat '{stat}'. Must be one of: {', '.join(POWERSTAT_NAMES)}",
                field=stat,
            )
        bound = min(max(minimum, POWERSTAT_MIN), POWERSTAT_MAX + 1)
        clauses.append(getattr(Hero, stat) >= bound)
    return clauses


def gender_equals(gender: Optional[str]) -> Clauses:
    if not gender:
        return []
    return [Hero.gender == gender]


def combined(
    name: Optional[str] = None,
    gender: Optional[str] = None,
    stats: Optional[Mapping[str, int]] = None,
) -> Clauses:
    """
    Filter for GET /search: name prefix AND exact gender AND stat bounds.

    Built incrementally; each absent or blank input is simply skipped.
    """
    clauses = name_prefix(name) + gender_equals(gender) + min_stats(stats or {})
    logger.debug(
        "Combined filter: name=%r gender=%r stats=%s → %d clause(s)",
        name, gender, dict(stats or {}), len(clauses),
    )
    return clauses


def comments_for_hero(hero_id: uuid.UUID) -> Clauses:
    return [Comment.hero_id == hero_id]


def parse_stat_params(raw: Mapping[str, Optional[str]]) -> dict:
    """
    Convert raw query-string stat values to integers.

    Blank or missing values are dropped (unconstrained), which is what an
    HTML search form submits for untouched fields.

    Raises:
        ValidationError: A non-blank value is not an integer.
    """
    parsed = {}
    for stat, value in raw.items():
        if value is None or not value.strip():
            continue
        try:
            parsed[stat] = int(value.strip())
        except ValueError:
            raise ValidationError(
                message=f"Powerstat '{stat}' must be an integer, got '{value}'",
                field=stat,
            )
    return parsed


def parse_uuid(raw: str) -> Optional[uuid.UUID]:
    """Parse a path identifier; None when it is not a valid UUID."""
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None
