"""Library configuration for datelevel."""

from __future__ import annotations

import dataclasses
import os
from datetime import date
from typing import Any

from datelevel._constants import (
    ENV_MAX_END_DATE,
    ENV_RAISE_ON_INVARIANT_ERROR,
    ENV_REBUILD_ON_UPDATE,
    ENV_VERIFY_ON_WRITE,
    MAX_END_DATE,
)
from datelevel.exceptions import DateLevelConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_date(name: str, value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise DateLevelConfigError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DateLevelConfig:
    """Configuration consumed by :class:`datelevel.store.DateLevelStore`.

    Parameters
    ----------
    max_end_date : date
        Sentinel written as the end date of the last entry of every
        normalized series.  Defaults to ``date.max``.  Override it when
        the backing storage cannot represent ``9999-12-31``.
    rebuild_on_update : bool
        Normalize a series after every range update.
    verify_on_write : bool
        Check the series invariants after every store write and raise
        :class:`~datelevel.exceptions.SeriesInvariantError` on violation.
    raise_on_invariant_error : bool
        Whether ``DateLevelStore.verify`` raises or returns ``False``.
    """

    max_end_date: date = MAX_END_DATE
    rebuild_on_update: bool = True
    verify_on_write: bool = False
    raise_on_invariant_error: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> DateLevelConfig:
        """Create configuration from ``DATELEVEL_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        DateLevelConfigError
            If ``DATELEVEL_MAX_END_DATE`` is not an ISO date.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        max_end_env = env.get(ENV_MAX_END_DATE)
        if max_end_env is not None and "max_end_date" not in overrides:
            config_kwargs["max_end_date"] = _env_date(ENV_MAX_END_DATE, max_end_env)

        _ENV_BOOL_MAP = {
            ENV_REBUILD_ON_UPDATE: ("rebuild_on_update", True),
            ENV_VERIFY_ON_WRITE: ("verify_on_write", False),
            ENV_RAISE_ON_INVARIANT_ERROR: ("raise_on_invariant_error", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
