"""Custom exception hierarchy for datelevel."""

from __future__ import annotations

from datetime import date
from typing import Any


class DateLevelError(Exception):
    """Base exception for all datelevel errors."""


class DateLevelConfigError(DateLevelError):
    """Invalid configuration value (e.g. an unparseable environment date)."""


class InvalidRangeError(DateLevelError):
    """A date range whose start is after its end.

    Raised before any input is consumed or any output produced.
    """

    def __init__(self, message: str, *, start: date, end: date) -> None:
        self.start = start
        self.end = end
        super().__init__(message)


class DiscontinuityError(DateLevelError):
    """Overlaying the entry would leave a gap in its series.

    The overlay generator raises this only after every element,
    including the rejected entry itself, has been yielded.
    """

    def __init__(self, message: str, *, entry: Any) -> None:
        self.entry = entry
        super().__init__(message)


class SeriesInvariantError(DateLevelError):
    """A series has inverted bounds, overlapping entries, or a gap.

    ``entry`` is the entry at which the violation was detected.
    """

    def __init__(self, message: str, *, entry: Any) -> None:
        self.entry = entry
        super().__init__(message)
