"""Fixed weekly grid: hourly slots, day tokens and the time normalizer.

Day numbers follow the JavaScript convention the roster is stored with:
0=Sunday .. 6=Saturday. The grid itself is displayed Monday first.
"""

import re
from datetime import date

from src.timetable.errors import InvalidTimeError

# 10:00 through 20:00 inclusive. Static, never derived from roster data.
TIME_SLOTS: tuple[str, ...] = tuple(f"{hour:02d}:00" for hour in range(10, 21))

DAY_NAMES: tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

# Monday-first column order used by the grid and the report.
DISPLAY_DAYS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 0)

_KOREAN_DAYS = ("일", "월", "화", "수", "목", "금", "토")


def _build_day_tokens() -> dict[str, int]:
    tokens: dict[str, int] = {}
    for number, name in enumerate(DAY_NAMES):
        tokens[name] = number
        tokens[name[:3]] = number
        tokens[str(number)] = number
        tokens[_KOREAN_DAYS[number]] = number
    return tokens


_DAY_TOKENS = _build_day_tokens()

# Postgres `time` columns come back as HH:MM:SS, so seconds are tolerated.
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_time(value: str) -> tuple[int, int]:
    """Parse a 24-hour time string into ``(hour, minute)``.

    Raises:
        InvalidTimeError: If the value is not a string of the form HH:MM.
    """
    if not isinstance(value, str):
        raise InvalidTimeError(f"Expected HH:MM string, got {type(value).__name__}")
    match = _TIME_RE.match(value.strip())
    if match is None:
        raise InvalidTimeError(f"Invalid time {value!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidTimeError(f"Time {value!r} is out of range")
    return hour, minute


def minutes_since_midnight(value: str) -> int:
    hour, minute = parse_time(value)
    return hour * 60 + minute


def normalize_time_to_hour(value: str) -> str:
    """Floor a time to the enclosing hourly slot ("15:37" -> "15:00").

    Times outside the grid still normalize; they simply match no column.
    """
    hour, _ = parse_time(value)
    return f"{hour:02d}:00"


def day_number(token: object) -> int | None:
    """Resolve a weekday token to 0 (Sunday) .. 6 (Saturday).

    Accepts 0-6, their string forms, English names or three-letter
    abbreviations in any case, and the Korean single-character weekdays.
    Unknown tokens return None.
    """
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token if 0 <= token <= 6 else None
    if isinstance(token, str):
        return _DAY_TOKENS.get(token.strip().lower())
    return None


def day_name(number: int) -> str:
    return DAY_NAMES[number]


def day_number_of(day: date) -> int:
    """Weekday of a calendar date on the Sunday=0 scale."""
    return (day.weekday() + 1) % 7
