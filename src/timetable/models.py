"""Pydantic models for roster input and timetable output.

All data structures use Pydantic v2 for validation, serialization, and type
safety. Roster models accept both snake_case and the camelCase keys the
academy web app stores (``startTime``, ``assignedTeachers``...).
"""

from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from src.timetable.errors import InvalidTimeError
from src.timetable.logging import get_logger
from src.timetable.slots import (
    day_name,
    day_number,
    minutes_since_midnight,
    parse_time,
)

log = get_logger(__name__)


class CreditPolicy(str, Enum):
    """How a student's monthly unit is credited to secondary teachers."""

    BY_SLOT = "by_slot"  # each day goes to its override teacher, else the primary
    PRIMARY_ONLY = "primary_only"
    FULL = "full"  # every assigned teacher gets the whole unit
    SPLIT = "split"  # unit divided equally among assigned teachers


class _RosterModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class ClassBlock(_RosterModel):
    """One class on one weekday of a student's weekly schedule."""

    start_time: str  # "15:30"
    end_time: str | None = None  # "17:00"; placement ignores it
    teacher_id: str | None = None  # per-day override of the primary teacher

    @field_validator("start_time")
    @classmethod
    def _check_start(cls, value: str) -> str:
        parse_time(value)
        return value.strip()

    @field_validator("end_time")
    @classmethod
    def _check_end(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        parse_time(value)
        return value.strip()

    @field_validator("teacher_id", mode="before")
    @classmethod
    def _blank_teacher_is_none(cls, value: Any) -> Any:
        return value or None

    @computed_field
    @property
    def duration_minutes(self) -> int:
        if self.end_time is None:
            return 0
        duration = minutes_since_midnight(self.end_time) - minutes_since_midnight(
            self.start_time
        )
        return max(duration, 0)


class Student(_RosterModel):
    """A student as delivered by the roster-loading collaborator.

    ``weekly_schedule`` keys are raw day tokens ("1", "monday", "월"...);
    they are resolved when the grid or the proration engine reads them.
    """

    id: str
    name: str
    academy: str = "Unassigned"
    enrollment_date: date | None = None
    assigned_teachers: list[str] = Field(min_length=1)
    weekly_schedule: dict[str, ClassBlock] = Field(default_factory=dict)
    active: bool = True

    @field_validator("enrollment_date", mode="before")
    @classmethod
    def _date_part_only(cls, value: Any) -> Any:
        # Supabase timestamps ("2026-02-16T09:00:00+00:00") carry a time part.
        if value == "":
            return None
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value

    @field_validator("weekly_schedule", mode="before")
    @classmethod
    def _drop_malformed_entries(cls, value: Any) -> dict[str, Any]:
        if not value:
            return {}
        if not isinstance(value, Mapping):
            log.warning("malformed_schedule", kind=type(value).__name__)
            return {}

        cleaned: dict[str, ClassBlock] = {}
        for day, entry in value.items():
            if entry is None:
                continue
            try:
                cleaned[str(day)] = ClassBlock.model_validate(entry)
            except (ValidationError, InvalidTimeError) as exc:
                log.warning("malformed_schedule_entry", day=str(day), error=str(exc))
        return cleaned

    @property
    def primary_teacher_id(self) -> str:
        return self.assigned_teachers[0]


class Teacher(_RosterModel):
    id: str
    name: str


class GridPlacement(BaseModel):
    """A student drawn into one (day, slot) cell of the weekly grid."""

    student: Student
    teacher_id: str  # effective teacher for that day
    start_time: str
    end_time: str | None = None
    duration_minutes: int = 0


class WeeklyGrid(BaseModel):
    """Materialized day x hour grid.

    ``cells`` is keyed by English day name, then by slot ("15:00").
    """

    days: list[str]
    slots: list[str]
    cells: dict[str, dict[str, list[GridPlacement]]]

    def lookup(self, day: str, slot: str) -> list[GridPlacement]:
        """Placements in a cell; empty for unknown days or off-grid slots."""
        number = day_number(day)
        if number is None:
            return []
        return self.cells.get(day_name(number), {}).get(slot, [])


class LegendEntry(BaseModel):
    teacher_id: str
    teacher_name: str
    color: str
    student_count: int


class SummaryStudent(BaseModel):
    id: str
    name: str
    academy: str
    unit: float
    is_full_unit: bool
    is_new: bool = False  # enrolled during the viewed month


class TeacherSummaryRow(BaseModel):
    """One row of the per-teacher monthly summary table."""

    teacher_id: str
    teacher_name: str
    color: str
    academies: list[str]
    full_unit_students: list[SummaryStudent]
    partial_unit_students: list[SummaryStudent]
    head_count: int
    total_units: float
    total_units_label: str  # exact total to one decimal, half up ("0.25" -> "0.3")


class RosterSnapshot(BaseModel):
    """Students plus the teacher directory used to label them."""

    students: list[Student] = Field(default_factory=list)
    teachers: list[Teacher] = Field(default_factory=list)

    @property
    def teacher_names(self) -> dict[str, str]:
        return {teacher.id: teacher.name for teacher in self.teachers}
