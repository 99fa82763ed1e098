"""Helpers for compact debug logging.

Entries can carry arbitrarily large payloads.  Log lines and exception
messages only need the series key and the bounds, so this module renders
those and nothing else.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from datelevel._constants import MAX_END_DATE

_OPEN_END = "open"


def format_range(start: date, end: date, *, max_end_date: date = MAX_END_DATE) -> str:
    """Render ``start..end``, showing the terminal sentinel as ``open``."""
    end_text = _OPEN_END if end == max_end_date else end.isoformat()
    return f"{start.isoformat()}..{end_text}"


def format_entry(entry: Any, *, max_end_date: date = MAX_END_DATE) -> str:
    """Return a one-line description of *entry* suitable for debug logs."""
    try:
        key = entry.key
    except (AttributeError, NotImplementedError):
        key = "?"
    bounds = format_range(entry.start_date, entry.end_date, max_end_date=max_end_date)
    return f"{type(entry).__name__}(key={key!r} {bounds})"


def format_entries(entries: Iterable[Any], *, limit: int = 5) -> str:
    """Render up to *limit* entries, then a count of the rest."""
    items = list(entries)
    rendered = [format_entry(entry) for entry in items[:limit]]
    if len(items) > limit:
        rendered.append(f"…<{len(items) - limit} more>")
    return "[" + ", ".join(rendered) + "]"
