"""datelevel - contiguous date-level series for valid-time records."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydatelevel")
except PackageNotFoundError:
    __version__ = "0+local"
from datelevel._constants import MAX_END_DATE
from datelevel.config import DateLevelConfig
from datelevel.exceptions import (
    DateLevelConfigError,
    DateLevelError,
    DiscontinuityError,
    InvalidRangeError,
    SeriesInvariantError,
)
from datelevel.models import DateLevelEntity, DateLevelEntry
from datelevel.query import effective, effective_entry, overlapping
from datelevel.series import (
    group_by_key,
    rebuild_date_level_series,
    rebuild_single_series,
    same_key,
    set_date_level,
    set_single_series_date_level,
    trim_end,
    trim_start,
    update_date_level,
)
from datelevel.store import DateLevelStore
from datelevel.verify import verify_all_series, verify_series

__all__ = [
    "__version__",
    "MAX_END_DATE",
    "DateLevelConfig",
    "DateLevelConfigError",
    "DateLevelEntity",
    "DateLevelEntry",
    "DateLevelError",
    "DateLevelStore",
    "DiscontinuityError",
    "InvalidRangeError",
    "SeriesInvariantError",
    "effective",
    "effective_entry",
    "group_by_key",
    "overlapping",
    "rebuild_date_level_series",
    "rebuild_single_series",
    "same_key",
    "set_date_level",
    "set_single_series_date_level",
    "trim_end",
    "trim_start",
    "update_date_level",
    "verify_all_series",
    "verify_series",
]
