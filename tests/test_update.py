from __future__ import annotations

from collections.abc import Callable
from datetime import date

import pytest

from datelevel import MAX_END_DATE, DateLevelEntry, InvalidRangeError, update_date_level


def _d(text: str) -> date:
    return date.fromisoformat(text)


def _quarter(value: int = 1) -> list[DateLevelEntry]:
    return [
        DateLevelEntry(key=1, start_date=_d("2022-01-01"), end_date=_d("2022-01-31"), value=value),
        DateLevelEntry(key=1, start_date=_d("2022-02-01"), end_date=_d("2022-02-28"), value=value),
        DateLevelEntry(key=1, start_date=_d("2022-03-01"), end_date=_d("2022-03-31"), value=value),
    ]


def _set_value(value: int) -> Callable[[DateLevelEntry], None]:
    def _modify(entry: DateLevelEntry) -> None:
        entry.value = value

    return _modify


def _rows(entries: list[DateLevelEntry]) -> list[tuple[date, date, object]]:
    return [(e.start_date, e.end_date, e.value) for e in sorted(entries, key=lambda e: e.start_date)]


def test_invalid_range_raises_and_leaves_series_untouched() -> None:
    series = _quarter()
    before = _rows(series)

    with pytest.raises(InvalidRangeError) as exc_info:
        update_date_level(series, _set_value(2), _d("2022-02-20"), _d("2022-02-10"))

    assert (exc_info.value.start, exc_info.value.end) == (_d("2022-02-20"), _d("2022-02-10"))
    assert _rows(series) == before


def test_inner_range_splits_and_rebuilds() -> None:
    series = _quarter()
    jan = series[0]

    update_date_level(series, _set_value(2), _d("2022-02-10"), _d("2022-02-20"))

    assert _rows(series) == [
        (_d("2022-01-01"), _d("2022-02-09"), 1),
        (_d("2022-02-10"), _d("2022-02-20"), 2),
        (_d("2022-02-21"), MAX_END_DATE, 1),
    ]
    assert sorted(series, key=lambda e: e.start_date)[0] is jan


def test_inner_range_without_rebuild() -> None:
    series = _quarter()
    feb = series[1]

    update_date_level(series, _set_value(2), _d("2022-02-10"), _d("2022-02-20"), rebuild=False)

    assert len(series) == 5
    assert feb.start_date == _d("2022-02-01")
    assert feb.end_date == _d("2022-02-09")
    assert feb.value == 1
    assert _rows(series) == [
        (_d("2022-01-01"), _d("2022-01-31"), 1),
        (_d("2022-02-01"), _d("2022-02-09"), 1),
        (_d("2022-02-10"), _d("2022-02-20"), 2),
        (_d("2022-02-21"), _d("2022-02-28"), 1),
        (_d("2022-03-01"), _d("2022-03-31"), 1),
    ]


def test_covered_entry_is_modified_in_place() -> None:
    series = _quarter()
    feb = series[1]

    update_date_level(series, _set_value(2), _d("2022-02-01"), _d("2022-02-28"), rebuild=False)

    assert len(series) == 3
    assert series[1] is feb
    assert feb.value == 2
    assert (feb.start_date, feb.end_date) == (_d("2022-02-01"), _d("2022-02-28"))


def test_range_across_boundary_splits_both_entries() -> None:
    series = _quarter()
    jan, feb = series[0], series[1]

    update_date_level(series, _set_value(2), _d("2022-01-15"), _d("2022-02-10"), rebuild=False)

    assert jan.end_date == _d("2022-01-14")
    assert feb.start_date == _d("2022-02-11")
    assert _rows(series) == [
        (_d("2022-01-01"), _d("2022-01-14"), 1),
        (_d("2022-01-15"), _d("2022-01-31"), 2),
        (_d("2022-02-01"), _d("2022-02-10"), 2),
        (_d("2022-02-11"), _d("2022-02-28"), 1),
        (_d("2022-03-01"), _d("2022-03-31"), 1),
    ]


def test_range_across_boundary_with_rebuild_merges_modified_pieces() -> None:
    series = _quarter()

    update_date_level(series, _set_value(2), _d("2022-01-15"), _d("2022-02-10"))

    assert _rows(series) == [
        (_d("2022-01-01"), _d("2022-01-14"), 1),
        (_d("2022-01-15"), _d("2022-02-10"), 2),
        (_d("2022-02-11"), MAX_END_DATE, 1),
    ]


def test_range_outside_series_inserts_nothing() -> None:
    series = _quarter()

    update_date_level(series, _set_value(2), _d("2022-06-01"), _d("2022-06-30"), rebuild=False)

    assert _rows(series) == _rows(_quarter())


def test_range_overhanging_series_end_only_touches_existing_days() -> None:
    series = _quarter()

    update_date_level(series, _set_value(2), _d("2022-03-15"), _d("2022-04-15"), rebuild=False)

    assert _rows(series)[-2:] == [
        (_d("2022-03-01"), _d("2022-03-14"), 1),
        (_d("2022-03-15"), _d("2022-03-31"), 2),
    ]


def test_modify_sees_clone_not_original() -> None:
    series = _quarter()
    feb = series[1]
    seen: list[DateLevelEntry] = []

    def _record(entry: DateLevelEntry) -> None:
        seen.append(entry)
        entry.value = 9

    update_date_level(series, _record, _d("2022-02-10"), _d("2022-02-20"), rebuild=False)

    assert len(seen) == 1
    assert seen[0] is not feb
    assert feb.value == 1


def test_custom_terminal_sentinel() -> None:
    series = _quarter()
    sentinel = date(2199, 12, 31)

    update_date_level(series, _set_value(2), _d("2022-03-01"), _d("2022-03-31"), max_end_date=sentinel)

    assert _rows(series)[-1] == (_d("2022-03-01"), sentinel, 2)
