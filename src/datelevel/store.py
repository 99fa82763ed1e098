"""Deterministic in-memory store of date-level series.

The store owns one list per series key and is the only component that
replaces those lists.  Given the same sequence of writes it produces the
same series.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from datetime import date
from operator import attrgetter

from datelevel._format import format_entries, format_entry, format_range
from datelevel.config import DateLevelConfig
from datelevel.exceptions import DiscontinuityError
from datelevel.models._base import DateLevelEntity
from datelevel.query import effective_entry
from datelevel.query import overlapping as _overlapping
from datelevel.series import (
    check_range,
    rebuild_single_series,
    set_date_level,
    trim_end,
    trim_start,
    update_date_level,
)
from datelevel.verify import verify_series

_logger = logging.getLogger(__name__)

_by_start = attrgetter("start_date")

# None is a valid series key, so "every series" needs its own marker.
_ALL_KEYS: object = object()


class DateLevelStore:
    """In-memory store of date-level series keyed by ``entry.key``.

    Series returned by the store are copies of its lists; the entries in
    them are the stored objects themselves.
    """

    def __init__(self, *, config: DateLevelConfig | None = None) -> None:
        self._config = config or DateLevelConfig()
        self._series: dict[Hashable, list[DateLevelEntity]] = {}

    @property
    def config(self) -> DateLevelConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._series)

    def __contains__(self, key: object) -> bool:
        return key in self._series

    def keys(self) -> list[Hashable]:
        return list(self._series)

    def series(self, key: Hashable) -> list[DateLevelEntity]:
        """Entries of series *key*, ordered by start date."""
        return list(self._series.get(key, ()))

    # -- writes ---------------------------------------------------------------

    def load(self, entries: Iterable[DateLevelEntity]) -> None:
        """Add already-consistent entries without overlaying them."""
        batch = list(entries)
        staged: dict[Hashable, list[DateLevelEntity]] = {}
        for entry in batch:
            if entry.key not in staged:
                staged[entry.key] = list(self._series.get(entry.key, ()))
            staged[entry.key].append(entry)
        # Nothing is committed until every staged series passes, so a
        # failed load leaves the store as it was.
        for series in staged.values():
            series.sort(key=_by_start)
            self._check(series)
        self._series.update(staged)
        _logger.debug("Store loaded %d entries: %s", len(batch), format_entries(batch))

    def set(self, entry: DateLevelEntity) -> list[DateLevelEntity]:
        """Overlay *entry* onto its series and return the new series.

        All or nothing: when the overlay would leave a gap the stored
        series is kept and :class:`DiscontinuityError` propagates.
        """
        key = entry.key
        current = self._series.get(key, [])
        # A discontinuity means no stored entry was touched, so dropping
        # the buffered output leaves the series as it was.
        try:
            result = list(set_date_level(current, entry))
        except DiscontinuityError:
            _logger.debug("Store rejected %s", format_entry(entry))
            raise
        result.sort(key=_by_start)
        self._series[key] = result
        _logger.debug("Store set %s; series now has %d entries", format_entry(entry), len(result))
        self._after_write(key)
        return list(result)

    def update(
        self,
        key: Hashable,
        modify: Callable[[DateLevelEntity], object],
        start: date,
        end: date,
    ) -> list[DateLevelEntity]:
        """Apply *modify* to the days ``start..end`` of series *key*."""
        check_range(start, end)
        series = self._series.get(key)
        if series is None:
            return []
        update_date_level(
            series,
            modify,
            start,
            end,
            rebuild=self._config.rebuild_on_update,
            max_end_date=self._config.max_end_date,
        )
        series.sort(key=_by_start)
        _logger.debug("Store updated key=%r %s", key, format_range(start, end))
        self._after_write(key)
        return list(series)

    def rebuild(self, key: Hashable = _ALL_KEYS) -> None:
        """Normalize series *key*, or every series when *key* is omitted."""
        for series_key in self._keys(key):
            series = self._series.get(series_key)
            if series is None:
                continue
            rebuild_single_series(series, series.remove, max_end_date=self._config.max_end_date)
            series.sort(key=_by_start)
            self._after_write(series_key)

    def trim(self, key: Hashable, start: date | None = None, end: date | None = None) -> list[DateLevelEntity]:
        """Cut series *key* down to ``start..end``; either bound may be omitted."""
        if start is not None and end is not None:
            check_range(start, end)
        series: Iterable[DateLevelEntity] = self._series.get(key, [])
        if start is not None:
            series = trim_start(series, start)
        if end is not None:
            series = trim_end(series, end)
        result = list(series)
        if result:
            self._series[key] = result
            self._after_write(key)
        else:
            self._series.pop(key, None)
        return list(result)

    # -- reads ----------------------------------------------------------------

    def effective(self, key: Hashable, on: date) -> DateLevelEntity | None:
        return effective_entry(self._series.get(key, ()), key, on)

    def overlapping(self, key: Hashable, start: date, end: date) -> list[DateLevelEntity]:
        return list(_overlapping(self._series.get(key, ()), start, end))

    def verify(self, key: Hashable = _ALL_KEYS) -> bool:
        """Check the invariants of series *key*, or of every series when *key* is omitted."""
        raise_on_error = self._config.raise_on_invariant_error
        return all(verify_series(self._series.get(k, ()), raise_on_error) for k in self._keys(key))

    def _keys(self, key: Hashable) -> list[Hashable]:
        return list(self._series) if key is _ALL_KEYS else [key]

    def _check(self, series: list[DateLevelEntity]) -> None:
        if self._config.verify_on_write:
            verify_series(series, raise_on_error=True)

    def _after_write(self, key: Hashable) -> None:
        self._check(self._series.get(key, []))
