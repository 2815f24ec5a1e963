"""Weekly schedule index: which students start a class in which hourly slot.

Placement depends only on the day and the start time floored to the hour;
the end time only feeds the placement's duration. Roster order is preserved
inside every cell.
"""

from collections.abc import Iterable, Mapping
from datetime import date

from src.timetable.colors import active_teacher_ids, assign_colors
from src.timetable.errors import InvalidTimeError
from src.timetable.logging import get_logger
from src.timetable.models import (
    ClassBlock,
    GridPlacement,
    LegendEntry,
    Student,
    WeeklyGrid,
)
from src.timetable.slots import (
    DISPLAY_DAYS,
    TIME_SLOTS,
    day_name,
    day_number,
    day_number_of,
    minutes_since_midnight,
    normalize_time_to_hour,
)

log = get_logger(__name__)


def block_for_day(student: Student, number: int) -> ClassBlock | None:
    """The student's class block on a weekday (0=Sunday), if any."""
    for token, block in student.weekly_schedule.items():
        if day_number(token) == number:
            return block
    return None


def effective_teacher_id(student: Student, block: ClassBlock) -> str:
    return block.teacher_id or student.primary_teacher_id


def _placement(student: Student, block: ClassBlock) -> GridPlacement:
    return GridPlacement(
        student=student,
        teacher_id=effective_teacher_id(student, block),
        start_time=block.start_time,
        end_time=block.end_time,
        duration_minutes=block.duration_minutes,
    )


def _starts_in(block: ClassBlock, slot: str) -> bool:
    try:
        return normalize_time_to_hour(block.start_time) == slot
    except InvalidTimeError:
        return False


def placements_in_slot(
    roster: Iterable[Student], day: object, slot: str
) -> list[GridPlacement]:
    """Grid placements for one (day, slot) cell, in roster order.

    Unknown day tokens yield an empty list.
    """
    number = day_number(day)
    if number is None:
        return []

    placements: list[GridPlacement] = []
    for student in roster:
        block = block_for_day(student, number)
        if block is not None and _starts_in(block, slot):
            placements.append(_placement(student, block))
    return placements


def students_in_slot(
    roster: Iterable[Student], day: object, slot: str
) -> list[Student]:
    """Students whose class on ``day`` starts within ``slot``, in roster order."""
    return [placement.student for placement in placements_in_slot(roster, day, slot)]


def build_grid(roster: Iterable[Student]) -> WeeklyGrid:
    """Materialize every (day, slot) cell of the fixed 10:00-20:00 grid."""
    students = list(roster)
    cells: dict[str, dict[str, list[GridPlacement]]] = {}
    placed = 0
    for number in DISPLAY_DAYS:
        row = {slot: placements_in_slot(students, number, slot) for slot in TIME_SLOTS}
        placed += sum(len(cell) for cell in row.values())
        cells[day_name(number)] = row

    log.debug("grid_built", students=len(students), placements=placed)
    return WeeklyGrid(
        days=[day_name(number) for number in DISPLAY_DAYS],
        slots=list(TIME_SLOTS),
        cells=cells,
    )


def build_legend(
    roster: Iterable[Student],
    teacher_names: Mapping[str, str] | None = None,
) -> list[LegendEntry]:
    """One legend entry per active teacher: color and assigned student count."""
    students = list(roster)
    names = teacher_names or {}
    teacher_ids = active_teacher_ids(students)
    colors = assign_colors(teacher_ids)

    return [
        LegendEntry(
            teacher_id=teacher_id,
            teacher_name=names.get(teacher_id) or teacher_id,
            color=colors[teacher_id],
            student_count=sum(
                1 for student in students if teacher_id in student.assigned_teachers
            ),
        )
        for teacher_id in teacher_ids
    ]


def sessions_on(
    roster: Iterable[Student],
    day: date,
    teacher_id: str | None = None,
) -> list[GridPlacement]:
    """Classes held on a calendar date, sorted by start time.

    Students who enroll after ``day`` are skipped. With ``teacher_id`` only
    classes whose effective teacher matches are kept.
    """
    number = day_number_of(day)
    sessions: list[GridPlacement] = []
    for student in roster:
        if student.enrollment_date is not None and student.enrollment_date > day:
            continue
        block = block_for_day(student, number)
        if block is None:
            continue
        placement = _placement(student, block)
        if teacher_id is not None and placement.teacher_id != teacher_id:
            continue
        sessions.append(placement)

    # "9:00" sorts after "10:00" as text
    sessions.sort(key=lambda p: minutes_since_midnight(p.start_time))
    log.debug("sessions_listed", date=day.isoformat(), sessions=len(sessions))
    return sessions
