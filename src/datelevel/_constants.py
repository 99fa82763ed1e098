"""Internal constants shared across the library."""

from datetime import date, timedelta

# Terminal sentinel: the last entry of a canonical series ends here.
MAX_END_DATE: date = date.max

ONE_DAY = timedelta(days=1)

# ------------------------------------------------------------------
# Environment variables read by DateLevelConfig.from_env
# ------------------------------------------------------------------

ENV_MAX_END_DATE = "DATELEVEL_MAX_END_DATE"
ENV_REBUILD_ON_UPDATE = "DATELEVEL_REBUILD_ON_UPDATE"
ENV_VERIFY_ON_WRITE = "DATELEVEL_VERIFY_ON_WRITE"
ENV_RAISE_ON_INVARIANT_ERROR = "DATELEVEL_RAISE_ON_INVARIANT_ERROR"


def is_next_day(before: date, after: date) -> bool:
    """Return ``True`` when *after* is the calendar day following *before*.

    Computed as a difference so that neither bound can overflow
    ``date.max`` / ``date.min``.
    """
    return (after - before).days == 1
