from datetime import date
from fractions import Fraction

import pytest

from src.timetable.errors import ConfigurationError
from src.timetable.models import ClassBlock, CreditPolicy
from src.timetable.proration import (
    class_dates,
    full_month_sessions,
    is_new_enrollment,
    monthly_sessions,
    registration_unit,
    student_registration_unit,
)

MONDAY = {"monday": ClassBlock(start_time="15:30", end_time="17:00")}


def unit(enrolled, threshold=4, schedule=MONDAY, teacher="T1", **kwargs):
    return registration_unit(
        2026, 2, schedule, teacher, "T1", enrolled, threshold, **kwargs
    )


def test_monthly_sessions_counts_weekdays():
    assert monthly_sessions(2026, 2, [1]) == 4
    assert monthly_sessions(2026, 2, [1, 3]) == 8
    assert monthly_sessions(2026, 3, [1]) == 5


def test_monthly_sessions_clips_to_start_date():
    assert monthly_sessions(2026, 2, [1], date(2026, 2, 16)) == 2
    assert monthly_sessions(2026, 2, [1], date(2026, 1, 10)) == 4
    assert monthly_sessions(2026, 2, [1], date(2026, 3, 1)) == 0


def test_class_dates_expand_weekly_schedule():
    assert class_dates(2026, 2, MONDAY) == [
        date(2026, 2, 2),
        date(2026, 2, 9),
        date(2026, 2, 16),
        date(2026, 2, 23),
    ]
    assert class_dates(2026, 2, MONDAY, since=date(2026, 2, 10)) == [
        date(2026, 2, 16),
        date(2026, 2, 23),
    ]


def test_full_month_sessions_is_natural_threshold():
    assert full_month_sessions(2026, 2, MONDAY) == 4
    assert full_month_sessions(2026, 3, MONDAY) == 5


def test_enrolled_first_of_month_is_one_full_unit():
    result = unit(date(2026, 2, 1))
    assert result == 1.0
    assert result == Fraction(1)


def test_enrolled_third_monday_is_half_unit():
    assert unit(date(2026, 2, 16)) == Fraction(1, 2)


def test_enrolled_last_day_is_never_credited_retroactively():
    assert unit(date(2026, 2, 28)) == 0


def test_enrollment_in_future_month_is_zero():
    assert unit(date(2026, 3, 5)) == 0


def test_enrollment_before_month_counts_full_month():
    assert unit(date(2025, 12, 1)) == 1
    assert unit(None) == 1


def test_unit_is_capped_at_one():
    assert unit(date(2026, 2, 1), threshold=2) == 1


def test_zero_threshold_yields_zero():
    assert unit(date(2026, 2, 1), threshold=0) == 0


def test_negative_threshold_is_rejected():
    with pytest.raises(ConfigurationError):
        unit(date(2026, 2, 1), threshold=-1)


def test_unknown_policy_is_rejected():
    with pytest.raises(ConfigurationError):
        unit(date(2026, 2, 1), policy="everyone")


def test_empty_or_unknown_schedule_is_zero():
    assert unit(date(2026, 2, 1), schedule={}) == 0
    unknown = {"funday": ClassBlock(start_time="15:00")}
    assert unit(date(2026, 2, 1), schedule=unknown) == 0


def test_unassigned_teacher_gets_nothing():
    assert unit(date(2026, 2, 1), teacher="T9") == 0


@pytest.mark.parametrize("enrolled", [None, date(2026, 2, 9), date(2026, 2, 20)])
def test_higher_threshold_never_raises_the_unit(enrolled):
    units = [unit(enrolled, threshold=t) for t in range(1, 13)]
    assert all(0 <= u <= 1 for u in units)
    assert units == sorted(units, reverse=True)


@pytest.mark.parametrize(
    "policy, expected_primary, expected_secondary",
    [
        (CreditPolicy.BY_SLOT, 1, 0),
        (CreditPolicy.PRIMARY_ONLY, 1, 0),
        (CreditPolicy.FULL, 1, 1),
        (CreditPolicy.SPLIT, Fraction(1, 2), Fraction(1, 2)),
    ],
)
def test_secondary_credit_policies(policy, expected_primary, expected_secondary):
    kwargs = {"assigned_teachers": ["T1", "T2"], "policy": policy}
    assert unit(date(2026, 2, 1), teacher="T1", **kwargs) == expected_primary
    assert unit(date(2026, 2, 1), teacher="T2", **kwargs) == expected_secondary


def test_policy_accepts_plain_strings():
    kwargs = {"assigned_teachers": ["T1", "T2"], "policy": "full"}
    assert unit(date(2026, 2, 1), teacher="T2", **kwargs) == 1


def test_by_slot_credits_each_day_to_its_teacher():
    schedule = {
        "1": ClassBlock(start_time="15:00"),
        "3": ClassBlock(start_time="15:00", teacher_id="T2"),
    }
    kwargs = {"schedule": schedule, "threshold": 8, "assigned_teachers": ["T1", "T2"]}

    assert unit(date(2026, 2, 1), teacher="T1", **kwargs) == Fraction(1, 2)
    assert unit(date(2026, 2, 1), teacher="T2", **kwargs) == Fraction(1, 2)


def test_by_slot_override_to_unassigned_teacher_credits_nobody():
    schedule = {
        "1": ClassBlock(start_time="15:00"),
        "3": ClassBlock(start_time="15:00", teacher_id="T9"),
    }
    kwargs = {"schedule": schedule, "threshold": 8, "assigned_teachers": ["T1"]}

    assert unit(date(2026, 2, 1), teacher="T1", **kwargs) == Fraction(1, 2)
    assert unit(date(2026, 2, 1), teacher="T9", **kwargs) == 0


def test_student_wrapper_uses_student_fields(monday_student):
    assert student_registration_unit(monday_student, 2026, 2, "T1", 4) == 1
    assert student_registration_unit(monday_student, 2026, 2, "T2", 4) == 0


def test_new_enrollment_flag(student_factory):
    assert is_new_enrollment(student_factory(enrolled=date(2026, 2, 16)), 2026, 2)
    assert not is_new_enrollment(student_factory(enrolled=date(2026, 1, 16)), 2026, 2)
    assert not is_new_enrollment(student_factory(enrolled=None), 2026, 2)
