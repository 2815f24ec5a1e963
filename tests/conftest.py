"""Shared fixtures: roster builders and a clean configuration per test."""

import os
from datetime import date

import pytest

from src.timetable.config import reset_config
from src.timetable.models import Student


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("TIMETABLE_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


def make_student(
    student_id: str = "s1",
    *,
    name: str | None = None,
    teachers: list[str] | None = None,
    schedule: dict | None = None,
    enrolled: date | None = date(2026, 2, 1),
    academy: str = "Gangnam",
    active: bool = True,
) -> Student:
    return Student(
        id=student_id,
        name=name or f"Student {student_id}",
        academy=academy,
        enrollment_date=enrolled,
        assigned_teachers=teachers or ["T1"],
        weekly_schedule=schedule if schedule is not None else {},
        active=active,
    )


@pytest.fixture
def student_factory():
    return make_student


@pytest.fixture
def monday_student():
    """One Monday class, enrolled 2026-02-01.

    February 2026 starts on a Sunday, so its Mondays are the 2nd, 9th, 16th
    and 23rd.
    """
    return make_student(
        "s1",
        name="Minji",
        schedule={"monday": {"startTime": "15:30", "endTime": "17:00"}},
    )
