"""ORM models. Importing this package registers every table with Base.metadata."""

from herodex.models.hero import Hero, POWERSTAT_NAMES
from herodex.models.comment import Comment

__all__ = ["Hero", "Comment", "POWERSTAT_NAMES"]
