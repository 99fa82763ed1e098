"""Point-in-time and range lookups over date-level entries."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from datetime import date
from typing import TypeVar

from datelevel.models._base import DateLevelEntity

TEntity = TypeVar("TEntity", bound=DateLevelEntity)

# None is a valid series key, so "no key filter" needs its own marker.
_ANY_KEY: object = object()


def effective(items: Iterable[TEntity], on: date) -> Iterator[TEntity]:
    """Yield every entry in effect on *on*.

    Keys are ignored, so a collection holding several series may yield
    one entry per series.
    """
    return (item for item in items if item.contains(on))


def effective_entry(items: Iterable[TEntity], key: Hashable, on: date) -> TEntity | None:
    """Return the entry of series *key* in effect on *on*, or ``None``."""
    for item in items:
        if item.key == key and item.contains(on):
            return item
    return None


def overlapping(
    items: Iterable[TEntity],
    start: date,
    end: date,
    key: Hashable = _ANY_KEY,
) -> Iterator[TEntity]:
    """Yield the entries sharing at least one day with ``start..end``.

    When *key* is given only entries of that series are considered;
    otherwise *items* is assumed to hold a single series.
    """
    if key is not _ANY_KEY:
        items = (item for item in items if item.key == key)
    return (item for item in items if item.overlaps(start, end))
