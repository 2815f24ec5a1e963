"""Roster snapshots: loading student/teacher records and filtering them.

The academy database is owned elsewhere; this module only reads the JSON
snapshot it exports, either a bare list of students or a document of the form
``{"students": [...], "teachers": [...]}``.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.timetable.errors import RosterLoadError
from src.timetable.logging import get_logger
from src.timetable.models import RosterSnapshot, Student, Teacher

log = get_logger(__name__)

_TEACHERS = TypeAdapter(list[Teacher])


def parse_students(records: Iterable[Any]) -> list[Student]:
    """Validate student records one by one, skipping unusable ones.

    A record without an id, a name or any assigned teacher cannot be placed
    or credited, so it is dropped with a warning instead of failing the whole
    roster.
    """
    students: list[Student] = []
    for index, record in enumerate(records):
        try:
            students.append(Student.model_validate(record))
        except ValidationError as exc:
            log.warning(
                "invalid_student_record",
                index=index,
                errors=exc.error_count(),
                detail=exc.errors(include_url=False)[0]["msg"],
            )
    return students


def parse_roster(data: Any) -> RosterSnapshot:
    """Build a RosterSnapshot from decoded JSON.

    Raises:
        RosterLoadError: If the document shape is not recognized or the
            teacher list is invalid.
    """
    if isinstance(data, list):
        student_records, teacher_records = data, []
    elif isinstance(data, dict):
        student_records = data.get("students") or []
        teacher_records = data.get("teachers") or []
        if not isinstance(student_records, list):
            raise RosterLoadError("'students' must be a list")
    else:
        raise RosterLoadError(
            f"Roster must be a list or an object, got {type(data).__name__}"
        )

    try:
        teachers = _TEACHERS.validate_python(teacher_records)
    except ValidationError as exc:
        raise RosterLoadError(f"Invalid teacher records: {exc}") from exc

    return RosterSnapshot(students=parse_students(student_records), teachers=teachers)


def load_roster(path: str | Path) -> RosterSnapshot:
    """Read a roster snapshot from a JSON file.

    Raises:
        RosterLoadError: If the file cannot be read or parsed.
    """
    roster_file = Path(path)
    try:
        raw = roster_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise RosterLoadError(f"Cannot read roster {roster_file}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RosterLoadError(f"Roster {roster_file} is not valid JSON: {exc}") from exc

    snapshot = parse_roster(data)
    log.info(
        "roster_loaded",
        path=str(roster_file),
        students=len(snapshot.students),
        teachers=len(snapshot.teachers),
    )
    return snapshot


def filter_roster(
    roster: Iterable[Student],
    *,
    academy: str | None = None,
    teacher_id: str | None = None,
    include_inactive: bool = False,
) -> list[Student]:
    """Students matching an academy and/or an assigned teacher, in roster order."""
    return [
        student
        for student in roster
        if (include_inactive or student.active)
        and (academy is None or student.academy == academy)
        and (teacher_id is None or teacher_id in student.assigned_teachers)
    ]
