from datetime import date

import pytest

from src.timetable.errors import InvalidTimeError
from src.timetable.slots import (
    DISPLAY_DAYS,
    TIME_SLOTS,
    day_number,
    day_number_of,
    minutes_since_midnight,
    normalize_time_to_hour,
    parse_time,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("15:37", "15:00"),
        ("15:59", "15:00"),
        ("15:00", "15:00"),
        ("10:00", "10:00"),
        ("20:45", "20:00"),
        ("09:05", "09:00"),
        ("9:05", "09:00"),
        ("21:30", "21:00"),
        ("00:10", "00:00"),
        ("16:30:00", "16:00"),
    ],
)
def test_normalize_floors_to_hour(raw, expected):
    assert normalize_time_to_hour(raw) == expected


@pytest.mark.parametrize("raw", ["00:00", "07:15", "15:37", "19:59", "23:59"])
def test_normalize_is_idempotent(raw):
    once = normalize_time_to_hour(raw)
    assert normalize_time_to_hour(once) == once


@pytest.mark.parametrize(
    "raw", ["", "abc", "24:00", "12:60", "15:30:99", "1530", "15-30", None, 1530]
)
def test_invalid_times_raise(raw):
    with pytest.raises(InvalidTimeError):
        normalize_time_to_hour(raw)


def test_invalid_time_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_time_to_hour("nope")


def test_minutes_since_midnight():
    assert minutes_since_midnight("15:30") == 930
    assert minutes_since_midnight("00:00") == 0


def test_fixed_grid_runs_ten_to_twenty():
    assert len(TIME_SLOTS) == 11
    assert TIME_SLOTS[0] == "10:00"
    assert TIME_SLOTS[-1] == "20:00"
    assert "15:00" in TIME_SLOTS


def test_display_days_start_monday_end_sunday():
    assert DISPLAY_DAYS[0] == 1
    assert DISPLAY_DAYS[-1] == 0
    assert sorted(DISPLAY_DAYS) == list(range(7))


@pytest.mark.parametrize(
    "token, expected",
    [
        (0, 0),
        (6, 6),
        ("1", 1),
        ("Monday", 1),
        ("mon", 1),
        (" SATURDAY ", 6),
        ("sun", 0),
        ("월", 1),
        ("일", 0),
        ("토", 6),
    ],
)
def test_day_tokens_resolve(token, expected):
    assert day_number(token) == expected


@pytest.mark.parametrize("token", [7, -1, "7", "funday", "", None, True, 1.0])
def test_unknown_day_tokens_resolve_to_none(token):
    assert day_number(token) is None


def test_day_number_of_uses_sunday_zero():
    assert day_number_of(date(2026, 2, 1)) == 0  # Sunday
    assert day_number_of(date(2026, 2, 2)) == 1  # Monday
    assert day_number_of(date(2026, 2, 7)) == 6  # Saturday


def test_parse_time_accepts_valid_seconds():
    assert parse_time("15:30:59") == (15, 30)
