"""Date-level series operations.

A date-level series is the list of entries sharing one key, partitioning
the calendar into contiguous, non-overlapping, inclusive intervals where
no two neighbours carry the same value.  The functions here keep that
shape while new facts are applied:

* :func:`set_date_level` overlays one entry, merging with equal-value
  neighbours and splitting entries with a different value;
* :func:`rebuild_date_level_series` recomputes every end date from the
  start dates alone and collapses equal-value runs;
* :func:`update_date_level` modifies a date sub-range in place;
* :func:`trim_start` / :func:`trim_end` cut a series to a window.

Collections may interleave several series.  Entries of other keys are
passed through untouched and in their original relative order.

Entries are mutated in place.  When two entries merge, the pre-existing
object survives and the incoming one is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, MutableSequence
from datetime import date
from operator import attrgetter
from typing import TypeVar

from datelevel._constants import MAX_END_DATE, ONE_DAY, is_next_day
from datelevel._format import format_entry, format_range
from datelevel.exceptions import DiscontinuityError, InvalidRangeError
from datelevel.models._base import DateLevelEntity

TEntity = TypeVar("TEntity", bound=DateLevelEntity)

_logger = logging.getLogger(__name__)

_by_start = attrgetter("start_date")


def same_key(left: DateLevelEntity, right: DateLevelEntity) -> bool:
    """Default series predicate: entries belong together when keys are equal."""
    return left.key == right.key


def _single_series(_left: DateLevelEntity, _right: DateLevelEntity) -> bool:
    return True


def group_by_key(
    entries: Iterable[TEntity],
    key_of: Callable[[TEntity], Hashable] | None = None,
) -> dict[Hashable, list[TEntity]]:
    """Split *entries* into per-key lists, keys in order of first appearance."""
    if key_of is None:
        key_of = attrgetter("key")
    groups: dict[Hashable, list[TEntity]] = {}
    for entry in entries:
        groups.setdefault(key_of(entry), []).append(entry)
    return groups


def check_range(start: date, end: date) -> None:
    """Raise :class:`InvalidRangeError` when *start* is after *end*."""
    if start > end:
        raise InvalidRangeError(
            f"Start date {start.isoformat()} cannot be greater than end date {end.isoformat()}",
            start=start,
            end=end,
        )


# ---------------------------------------------------------------------------
# Overlay
# ---------------------------------------------------------------------------


def set_date_level(
    series: Iterable[TEntity],
    src: TEntity,
    same_series: Callable[[TEntity, TEntity], bool] = same_key,
) -> Iterator[TEntity]:
    """Overlay *src* onto its series and return the resulting entries lazily.

    Entries for which ``same_series(item, src)`` is false are yielded
    unchanged.  Same-series entries are merged into, truncated around or
    split by *src*.  *src* itself, or the pre-existing entry it was merged
    into, is always yielded last.

    The input range is validated eagerly: :class:`InvalidRangeError` is
    raised by this call, before any input is consumed.

    :class:`DiscontinuityError` is raised once the iterator is drained
    when the series was not empty and *src* neither overlaps nor touches
    any of its entries.  Every element has been yielded by then, so a
    caller that catches the error still holds the best-effort result.
    Buffer the output (``list(...)``) and discard it on error for
    all-or-nothing semantics.
    """
    check_range(src.start_date, src.end_date)
    return _overlay(series, src, same_series)


def set_single_series_date_level(series: Iterable[TEntity], src: TEntity) -> Iterator[TEntity]:
    """Like :func:`set_date_level`, treating every input entry as one series."""
    return set_date_level(series, src, _single_series)


def _overlay(
    series: Iterable[TEntity],
    src: TEntity,
    same_series: Callable[[TEntity, TEntity], bool],
) -> Iterator[TEntity]:
    touched = False
    empty = True
    for item in series:
        if not same_series(item, src):
            yield item
            continue

        empty = False
        if src.start_date <= item.start_date and item.end_date <= src.end_date:
            # src covers item: an equal item absorbs src, otherwise item is dropped
            touched = True
            if src.has_same_value(item):
                item.start_date = src.start_date
                item.end_date = src.end_date
                src = item
        elif item.start_date < src.start_date and src.end_date < item.end_date:
            # item strictly covers src
            touched = True
            if src.has_same_value(item):
                src = item
            else:
                after = item.clone()
                after.start_date = src.end_date + ONE_DAY
                # item.end_date is about to be truncated
                after.end_date = item.end_date
                item.end_date = src.start_date - ONE_DAY
                _logger.debug("Split %s around %s", format_entry(item), format_entry(src))
                yield item
                yield after
        elif src.start_date <= item.start_date <= src.end_date < item.end_date:
            # src overlaps the start of item
            touched = True
            if src.has_same_value(item):
                item.start_date = src.start_date
                src = item
            else:
                item.start_date = src.end_date + ONE_DAY
                yield item
        elif item.start_date < src.start_date <= item.end_date <= src.end_date:
            # src overlaps the end of item
            touched = True
            if src.has_same_value(item):
                item.end_date = src.end_date
                src = item
            else:
                item.end_date = src.start_date - ONE_DAY
                yield item
        elif is_next_day(src.end_date, item.start_date):
            touched = True
            if src.has_same_value(item):
                item.start_date = src.start_date
                src = item
            else:
                yield item
        elif is_next_day(item.end_date, src.start_date):
            touched = True
            if src.has_same_value(item):
                item.end_date = src.end_date
                src = item
            else:
                yield item
        else:
            yield item

    # src goes out before the continuity check so callers that catch the
    # error still receive every entry.
    yield src
    if not empty and not touched:
        _logger.debug("Rejected %s: not adjacent to its series", format_entry(src))
        raise DiscontinuityError(
            f"Cannot add {format_entry(src)}: it would break the continuity of dates in the series. "
            "Adjust its start date and end date to fix",
            entry=src,
        )


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def rebuild_date_level_series(
    entries: Iterable[TEntity],
    remove: Callable[[TEntity], object],
    key_of: Callable[[TEntity], Hashable] | None = None,
    *,
    max_end_date: date = MAX_END_DATE,
) -> None:
    """Recompute end dates per series and collapse equal-value runs.

    Existing end dates are not trusted: each series is ordered by start
    date, every entry is closed the day before its successor starts, and
    the last entry is left open until *max_end_date*.  An entry with the
    same value as its predecessor is handed to *remove* and its end date
    folded into the predecessor.

    *entries* is read completely before anything is removed, so *remove*
    may mutate the collection being rebuilt (``entries.remove``).
    """
    for group in group_by_key(entries, key_of).values():
        _rebuild(group, remove, max_end_date)


def rebuild_single_series(
    entries: Iterable[TEntity],
    remove: Callable[[TEntity], object],
    *,
    max_end_date: date = MAX_END_DATE,
) -> None:
    """Like :func:`rebuild_date_level_series`, treating *entries* as one series."""
    _rebuild(list(entries), remove, max_end_date)


def _rebuild(items: list[TEntity], remove: Callable[[TEntity], object], max_end_date: date) -> None:
    current: TEntity | None = None
    merged = 0
    for item in sorted(items, key=_by_start):
        if current is None:
            current = item
        elif current.has_same_value(item):
            remove(item)
            current.end_date = item.end_date
            merged += 1
        else:
            current.end_date = item.start_date - ONE_DAY
            current = item
    if current is not None:
        current.end_date = max_end_date
        _logger.debug("Rebuilt series of %d entries ending with %s: merged=%d", len(items), format_entry(current), merged)


# ---------------------------------------------------------------------------
# Range update
# ---------------------------------------------------------------------------


def update_date_level(
    series: MutableSequence[TEntity],
    modify: Callable[[TEntity], object],
    start: date,
    end: date,
    rebuild: bool = True,
    *,
    max_end_date: date = MAX_END_DATE,
) -> None:
    """Apply *modify* to every day between *start* and *end* (inclusive).

    Entries fully inside the range are modified in place.  Entries that
    straddle a range boundary are split: the part inside the range is a
    modified clone appended to *series*, the part outside keeps the
    original object.  No entry is created where *series* has no entry
    overlapping the range.

    When *rebuild* is set the series is normalized afterwards (see
    :func:`rebuild_date_level_series`), with ``series.remove`` as the
    removal callback.
    """
    check_range(start, end)

    split = 0
    for current in list(series):
        if end < current.start_date or current.end_date < start:
            continue
        if start <= current.start_date and current.end_date <= end:
            modify(current)
        elif current.start_date < start and end < current.end_date:
            after = current.clone()
            after.start_date = end + ONE_DAY
            after.end_date = current.end_date
            series.append(after)

            inner = current.clone()
            modify(inner)
            inner.start_date = start
            inner.end_date = end
            series.append(inner)

            current.end_date = start - ONE_DAY
            split += 1
        elif start <= current.start_date <= end < current.end_date:
            inner = current.clone()
            modify(inner)
            inner.start_date = current.start_date
            inner.end_date = end
            series.append(inner)

            current.start_date = end + ONE_DAY
            split += 1
        elif current.start_date < start <= current.end_date <= end:
            inner = current.clone()
            modify(inner)
            inner.start_date = start
            inner.end_date = current.end_date
            series.append(inner)

            current.end_date = start - ONE_DAY
            split += 1

    _logger.debug("Updated %s: split=%d rebuild=%s", format_range(start, end), split, rebuild)
    if rebuild:
        rebuild_date_level_series(series, series.remove, max_end_date=max_end_date)


# ---------------------------------------------------------------------------
# Trimming
# ---------------------------------------------------------------------------


def trim_start(series: Iterable[TEntity], new_start: date) -> Iterator[TEntity]:
    """Drop everything before *new_start*, clipping the entry that straddles it.

    Assumes a well-formed series.
    """
    for item in series:
        if item.end_date < new_start:
            continue
        if item.start_date < new_start:
            item.start_date = new_start
        yield item


def trim_end(series: Iterable[TEntity], new_end: date) -> Iterator[TEntity]:
    """Drop everything after *new_end*, clipping the entry that straddles it."""
    for item in series:
        if item.start_date > new_end:
            continue
        if item.end_date > new_end:
            item.end_date = new_end
        yield item
