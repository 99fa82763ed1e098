"""Series invariant checks.

A well-formed series has ordered bounds on every entry and no overlap
or gap between consecutive entries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from operator import attrgetter

from datelevel._constants import is_next_day
from datelevel._format import format_entry
from datelevel.exceptions import SeriesInvariantError
from datelevel.models._base import DateLevelEntity
from datelevel.series import group_by_key

_logger = logging.getLogger(__name__)


def _violation(entry: DateLevelEntity, message: str, raise_on_error: bool) -> bool:
    if raise_on_error:
        raise SeriesInvariantError(f"{message}: {format_entry(entry)}", entry=entry)
    _logger.debug("Series invariant violated at %s: %s", format_entry(entry), message)
    return False


def verify_series(series: Iterable[DateLevelEntity], raise_on_error: bool = True) -> bool:
    """Check that *series* is a contiguous, non-overlapping partition.

    Entries are ordered by start date first, so input order does not
    matter.  Every adjacent pair is checked.

    Returns ``True`` for a valid series.  On the first violation raises
    :class:`SeriesInvariantError`, or returns ``False`` when
    *raise_on_error* is false.
    """
    previous: DateLevelEntity | None = None
    for item in sorted(series, key=attrgetter("start_date")):
        if item.start_date > item.end_date:
            return _violation(item, "Start date is greater than end date", raise_on_error)
        if previous is not None:
            if previous.end_date >= item.start_date:
                return _violation(item, "Start date overlaps with previous end date", raise_on_error)
            if not is_next_day(previous.end_date, item.start_date):
                return _violation(item, "Start date is not continuous from previous end date", raise_on_error)
        previous = item
    return True


def verify_all_series(
    entries: Iterable[DateLevelEntity],
    raise_on_error: bool = True,
    key_of: Callable[[DateLevelEntity], Hashable] | None = None,
) -> bool:
    """Run :func:`verify_series` on every series found in *entries*."""
    return all(verify_series(group, raise_on_error) for group in group_by_key(entries, key_of).values())
