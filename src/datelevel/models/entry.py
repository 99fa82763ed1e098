"""Ready-made date-level entity carrying a single value."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from pydantic import ConfigDict, Field

from datelevel.models._base import DateLevelEntity


class DateLevelEntry(DateLevelEntity):
    """A series entry whose value is one arbitrary object.

    Two entries have the same value when their ``value`` fields compare
    equal with ``==``.
    """

    model_config = ConfigDict(populate_by_name=True)

    series_key: Any = Field(alias="key")
    """Series key.  Pass it as ``key=...``."""

    value: Any = None
    """Payload compared by :meth:`has_same_value`."""

    @property
    def key(self) -> Hashable:
        return self.series_key

    def has_same_value(self, other: DateLevelEntity) -> bool:
        if isinstance(other, DateLevelEntry):
            return self.value == other.value
        return False
