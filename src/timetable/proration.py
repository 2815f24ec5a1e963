"""Pro-rated monthly registration units.

A student's unit for a teacher in a month is ``attended / threshold`` capped
at 1, where ``attended`` counts the student's weekly class days that fall in
the month on or after the enrollment date. Arithmetic is done in
``Fraction`` so a full month compares exactly equal to 1.

Example (February 2026 has four Mondays, threshold 4):
    enrolled 2026-02-01  -> 4 classes -> 1
    enrolled 2026-02-16  -> 2 classes -> 1/2
"""

import calendar
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from fractions import Fraction

from src.timetable.errors import ConfigurationError
from src.timetable.logging import get_logger
from src.timetable.models import ClassBlock, CreditPolicy, Student
from src.timetable.slots import day_number, day_number_of

log = get_logger(__name__)

DEFAULT_THRESHOLD = 8

ZERO = Fraction(0)
ONE = Fraction(1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def _days_from(start: date, end: date) -> Iterable[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def scheduled_days(schedule: Mapping[str, ClassBlock]) -> dict[int, ClassBlock]:
    """Resolve raw day keys to day numbers, dropping unknown tokens.

    When two keys name the same weekday ("1" and "monday") the first wins;
    the model allows one class block per day.
    """
    days: dict[int, ClassBlock] = {}
    for token, block in schedule.items():
        number = day_number(token)
        if number is None:
            log.debug("unknown_day_token", token=token)
            continue
        days.setdefault(number, block)
    return days


def monthly_sessions(
    year: int,
    month: int,
    days_of_week: Iterable[int],
    start_date: date | None = None,
) -> int:
    """Count class days in a month, from ``start_date`` when it falls inside it.

    Args:
        year: Calendar year.
        month: Month 1-12.
        days_of_week: Class weekdays, 0=Sunday .. 6=Saturday.
        start_date: First day the student attends. Earlier dates clip to the
            1st; dates after the month yield 0.
    """
    first, last = month_bounds(year, month)
    start = max(first, start_date) if start_date else first
    wanted = set(days_of_week)
    return sum(1 for day in _days_from(start, last) if day_number_of(day) in wanted)


def class_dates(
    year: int,
    month: int,
    schedule: Mapping[str, ClassBlock],
    since: date | None = None,
) -> list[date]:
    """Calendar dates in the month with a scheduled class, on or after ``since``."""
    first, last = month_bounds(year, month)
    start = max(first, since) if since else first
    days = scheduled_days(schedule)
    return [day for day in _days_from(start, last) if day_number_of(day) in days]


def full_month_sessions(
    year: int, month: int, schedule: Mapping[str, ClassBlock]
) -> int:
    """Occurrences a student enrolled for the whole month would have."""
    return len(class_dates(year, month, schedule))


def _coerce_policy(policy: CreditPolicy | str) -> CreditPolicy:
    try:
        return CreditPolicy(policy)
    except ValueError:
        valid = [p.value for p in CreditPolicy]
        raise ConfigurationError(
            f"Unknown credit policy {policy!r}. Valid: {valid}"
        ) from None


def registration_unit(
    year: int,
    month: int,
    schedule: Mapping[str, ClassBlock],
    viewing_teacher_id: str,
    primary_teacher_id: str,
    enrollment_date: date | None = None,
    threshold: int = DEFAULT_THRESHOLD,
    *,
    assigned_teachers: Sequence[str] | None = None,
    policy: CreditPolicy | str = CreditPolicy.BY_SLOT,
) -> Fraction:
    """Fraction of a full month the student represents for one teacher.

    Args:
        year: Viewed year.
        month: Viewed month 1-12.
        schedule: The student's weekly schedule, constant for the month.
        viewing_teacher_id: Teacher whose credit is being computed.
        primary_teacher_id: First assigned teacher.
        enrollment_date: Classes before this date are not counted. None means
            enrolled before the month started.
        threshold: Occurrences that make one full unit. 0 yields 0.
        assigned_teachers: All assigned teachers; defaults to the primary only.
        policy: How non-primary assigned teachers are credited.

    Returns:
        A Fraction in [0, 1].

    Raises:
        ConfigurationError: If threshold is negative or the policy is unknown.
    """
    if threshold < 0:
        raise ConfigurationError(f"Unit threshold must be >= 0, got {threshold}")
    policy = _coerce_policy(policy)

    assigned = list(dict.fromkeys(assigned_teachers or [primary_teacher_id]))
    if viewing_teacher_id not in assigned:
        return ZERO
    if threshold == 0:
        return ZERO
    if policy is CreditPolicy.PRIMARY_ONLY and viewing_teacher_id != primary_teacher_id:
        return ZERO

    dates = class_dates(year, month, schedule, since=enrollment_date)
    if policy is CreditPolicy.BY_SLOT:
        days = scheduled_days(schedule)
        attended = sum(
            1
            for day in dates
            if (days[day_number_of(day)].teacher_id or primary_teacher_id)
            == viewing_teacher_id
        )
    else:
        attended = len(dates)

    if attended == 0:
        return ZERO

    unit = min(ONE, Fraction(attended) / Fraction(threshold))
    if policy is CreditPolicy.SPLIT:
        unit /= len(assigned)
    return unit


def student_registration_unit(
    student: Student,
    year: int,
    month: int,
    teacher_id: str,
    threshold: int = DEFAULT_THRESHOLD,
    policy: CreditPolicy | str = CreditPolicy.BY_SLOT,
) -> Fraction:
    """registration_unit() with the schedule and teachers taken from a Student."""
    return registration_unit(
        year,
        month,
        student.weekly_schedule,
        teacher_id,
        student.primary_teacher_id,
        student.enrollment_date,
        threshold,
        assigned_teachers=student.assigned_teachers,
        policy=policy,
    )


def is_new_enrollment(student: Student, year: int, month: int) -> bool:
    """True when the student enrolled during the viewed month."""
    enrolled = student.enrollment_date
    return enrolled is not None and (enrolled.year, enrolled.month) == (year, month)
