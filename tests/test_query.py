from __future__ import annotations

from datetime import date

from datelevel import DateLevelEntry, effective, effective_entry, overlapping


def _entry(key: object, start: str, end: str, value: int) -> DateLevelEntry:
    return DateLevelEntry(key=key, start_date=date.fromisoformat(start), end_date=date.fromisoformat(end), value=value)


JAN_1 = _entry(1, "2022-01-01", "2022-01-31", 10)
FEB_1 = _entry(1, "2022-02-01", "2022-02-28", 11)
JAN_2 = _entry(2, "2022-01-01", "2022-02-15", 20)
ITEMS = [JAN_1, FEB_1, JAN_2]


def test_effective_returns_one_entry_per_series() -> None:
    assert list(effective(ITEMS, date(2022, 1, 20))) == [JAN_1, JAN_2]


def test_effective_includes_both_bounds() -> None:
    assert list(effective(ITEMS, date(2022, 2, 1))) == [FEB_1, JAN_2]
    assert list(effective(ITEMS, date(2022, 2, 28))) == [FEB_1]


def test_effective_nothing_in_effect() -> None:
    assert list(effective(ITEMS, date(2021, 12, 31))) == []


def test_effective_entry_by_key() -> None:
    assert effective_entry(ITEMS, 1, date(2022, 2, 10)) is FEB_1
    assert effective_entry(ITEMS, 2, date(2022, 2, 10)) is JAN_2


def test_effective_entry_missing_returns_none() -> None:
    assert effective_entry(ITEMS, 2, date(2022, 2, 16)) is None
    assert effective_entry(ITEMS, 3, date(2022, 1, 1)) is None


def test_overlapping_without_key() -> None:
    assert list(overlapping(ITEMS, date(2022, 1, 31), date(2022, 2, 1))) == [JAN_1, FEB_1, JAN_2]
    assert list(overlapping(ITEMS, date(2022, 2, 16), date(2022, 3, 31))) == [FEB_1]


def test_overlapping_with_key() -> None:
    assert list(overlapping(ITEMS, date(2022, 1, 15), date(2022, 2, 5), key=1)) == [JAN_1, FEB_1]
    assert list(overlapping(ITEMS, date(2022, 1, 15), date(2022, 2, 5), key=2)) == [JAN_2]


def test_overlapping_accepts_none_as_a_key() -> None:
    unkeyed = _entry(None, "2022-01-01", "2022-12-31", 0)

    assert list(overlapping([*ITEMS, unkeyed], date(2022, 6, 1), date(2022, 6, 1), key=None)) == [unkeyed]


def test_overlapping_single_day_edges() -> None:
    assert list(overlapping([JAN_1], date(2022, 1, 31), date(2022, 1, 31))) == [JAN_1]
    assert list(overlapping([JAN_1], date(2022, 2, 1), date(2022, 2, 1))) == []
