"""Entity models for date-level series."""

from datelevel.models._base import DateLevelEntity
from datelevel.models.entry import DateLevelEntry

__all__ = [
    "DateLevelEntity",
    "DateLevelEntry",
]
