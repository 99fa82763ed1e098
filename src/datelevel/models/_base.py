"""Base model for date-level entities.

Every entry of a date-level series inherits from
:class:`DateLevelEntity`, which provides:

* inclusive ``start_date`` / ``end_date`` bounds, validated on
  assignment because the series operations move them in place;
* the abstract ``key`` / ``has_same_value`` contract used to group
  entries into series and to decide merges;
* ``clone`` for splitting one entry into value-identical pieces.

Entities compare and hash by identity.  The overlay engine keeps the
pre-existing object when it merges, and removal callbacks such as
``list.remove`` must never pick a field-wise equal sibling.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from datetime import date
from typing import Self

from pydantic import BaseModel, ConfigDict

from datelevel._constants import MAX_END_DATE


class DateLevelEntity(BaseModel, ABC):
    """Abstract entry of a date-level series."""

    model_config = ConfigDict(validate_assignment=True)

    start_date: date
    """First day the value applies (inclusive)."""

    end_date: date = MAX_END_DATE
    """Last day the value applies (inclusive)."""

    @property
    @abstractmethod
    def key(self) -> Hashable:
        """Identifies the series this entry belongs to.  Never changes."""

    @abstractmethod
    def has_same_value(self, other: DateLevelEntity) -> bool:
        """Return ``True`` when *other* carries an equal value.

        Equality may be defined on a subset of fields.
        """

    def clone(self) -> Self:
        """Return an independent entry sharing this entry's key and value.

        The caller sets the bounds of the clone.  The default is a
        shallow copy; override when the value needs a deeper copy.
        """
        return self.model_copy()

    def contains(self, on: date) -> bool:
        """Is *on* within ``start_date..end_date``?"""
        return self.start_date <= on <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        """Does ``start..end`` share at least one day with this entry?"""
        return not (start > self.end_date or end < self.start_date)

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__
