"""
HeroDex Backend — Offset Pagination
=====================================

What:  Turns a 1-based page number into an OFFSET/LIMIT pair and a total
       row count into the `pagination` block of a listing response.
Who:   HeroService and CommentService, once per listing request.

Arithmetic (page size P, total C, page n):
    offset      = (n - 1) * P
    page_count  = ceil(C / P), 0 when C == 0
    previous    = max(n - 1, 1)
    next        = n + 1            (not clamped to page_count)

Page parsing:
    Only plain ASCII decimal text ("4", " 4 ", "+4") is a page number.
    Anything else ("abc", "2.5", "1_000", non-ASCII digits) falls back to
    page 1, and so does any integer below 1. The offset can therefore never
    be negative.

Huge pages:
    The page number itself is unbounded, but the OFFSET sent to the store is
    capped at MAX_OFFSET (signed 64-bit). A page that far out is past the end
    of any real table, so it still yields an empty page instead of a driver
    overflow.

Example:
    >>> p = Paginator(page=2, page_size=HEROES_PER_PAGE)
    >>> p.offset, p.limit, p.page_count(25)
    (10, 10, 3)
"""

import math
import re
from typing import Any, Optional

from herodex.schemas.common import PaginationMeta

# Fixed page sizes; never taken from the request
HEROES_PER_PAGE = 10
COMMENTS_PER_PAGE = 3

# Largest OFFSET both SQLite and PostgreSQL (bigint) accept
MAX_OFFSET = 2**63 - 1

_PAGE_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_page(raw: Optional[Any]) -> int:
    """
    Normalize a raw `page` query value to a page number >= 1.

    Examples:
        None → 1, "abc" → 1, "" → 1, "0" → 1, "-3" → 1, "1_000" → 1,
        "4" → 4, 4 → 4
    """
    if raw is None:
        return 1
    text = str(raw).strip()
    if not _PAGE_PATTERN.fullmatch(text):
        return 1
    return max(int(text), 1)


class Paginator:
    """
    Offset/limit calculator for one page of a listing.

    Attributes:
        page:       Normalized 1-based page number
        page_size:  Rows per page (HEROES_PER_PAGE or COMMENTS_PER_PAGE)
    """

    def __init__(self, page: int, page_size: int):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page = max(page, 1)
        self.page_size = page_size

    @classmethod
    def from_raw(cls, raw_page: Optional[Any], page_size: int) -> "Paginator":
        """Build a paginator straight from an unparsed `page` query value."""
        return cls(parse_page(raw_page), page_size)

    @property
    def offset(self) -> int:
        return min((self.page - 1) * self.page_size, MAX_OFFSET)

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def previous_page(self) -> int:
        return max(self.page - 1, 1)

    @property
    def next_page(self) -> int:
        return self.page + 1

    def page_count(self, total: int) -> int:
        if total <= 0:
            return 0
        return math.ceil(total / self.page_size)

    def meta(self, total: int) -> PaginationMeta:
        """The `pagination` block for a listing with `total` matching rows."""
        return PaginationMeta(
            page=self.page,
            page_count=self.page_count(total),
            previous_page=self.previous_page,
            next_page=self.next_page,
        )

    def __repr__(self) -> str:
        return f"<Paginator(page={self.page}, page_size={self.page_size})>"
