"""Per-teacher monthly summary: students, head-count and unit totals.

Each row splits the teacher's students into those worth exactly one unit and
those worth less (mid-month enrollments, short schedules). The split uses the
exact Fraction from the proration engine, never a float comparison.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

from src.timetable.colors import active_teacher_ids, assign_colors
from src.timetable.config import get_config
from src.timetable.logging import get_logger
from src.timetable.models import (
    CreditPolicy,
    Student,
    SummaryStudent,
    TeacherSummaryRow,
)
from src.timetable.proration import (
    ONE,
    is_new_enrollment,
    student_registration_unit,
)

log = get_logger(__name__)


def format_units(total: Fraction) -> str:
    """Exact unit total to one decimal place, rounding halves up."""
    exact = Decimal(total.numerator) / Decimal(total.denominator)
    return str(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _summary_student(
    student: Student, unit: Fraction, year: int, month: int
) -> SummaryStudent:
    return SummaryStudent(
        id=student.id,
        name=student.name,
        academy=student.academy,
        unit=float(unit),
        is_full_unit=unit == ONE,
        is_new=is_new_enrollment(student, year, month),
    )


def summarize(
    roster: Iterable[Student],
    year: int,
    month: int,
    threshold: int | None = None,
    *,
    teacher_names: Mapping[str, str] | None = None,
    policy: CreditPolicy | str | None = None,
    colors: Mapping[str, str] | None = None,
) -> list[TeacherSummaryRow]:
    """Build one summary row per teacher with at least one assigned student.

    Rows follow first-seen teacher order in the roster; students within a row
    keep roster order.

    Args:
        roster: Students already filtered for display.
        year: Viewed year.
        month: Viewed month 1-12.
        threshold: Occurrences per full unit. Defaults to the configured
            ``unit_threshold``.
        teacher_names: Teacher id -> display name. Missing names fall back to
            the id.
        policy: Secondary-teacher credit policy. Defaults to the configured one.
        colors: Precomputed teacher colors, so the summary agrees with a
            legend drawn from the same render pass.

    Returns:
        Ordered list of TeacherSummaryRow.
    """
    config = get_config()
    if threshold is None:
        threshold = config.unit_threshold
    if policy is None:
        policy = config.credit_policy

    students = list(roster)
    names = teacher_names or {}
    teacher_ids = active_teacher_ids(students)
    palette = colors if colors is not None else assign_colors(teacher_ids)

    rows: list[TeacherSummaryRow] = []
    for teacher_id in teacher_ids:
        full: list[SummaryStudent] = []
        partial: list[SummaryStudent] = []
        academies: dict[str, None] = {}
        total = Fraction(0)

        for student in students:
            if teacher_id not in student.assigned_teachers:
                continue
            unit = student_registration_unit(
                student, year, month, teacher_id, threshold, policy
            )
            entry = _summary_student(student, unit, year, month)
            (full if entry.is_full_unit else partial).append(entry)
            academies.setdefault(student.academy, None)
            total += unit

        head_count = len(full) + len(partial)
        if head_count == 0:
            continue

        rows.append(
            TeacherSummaryRow(
                teacher_id=teacher_id,
                teacher_name=names.get(teacher_id) or teacher_id,
                color=palette.get(teacher_id, ""),
                academies=list(academies),
                full_unit_students=full,
                partial_unit_students=partial,
                head_count=head_count,
                total_units=float(total),
                total_units_label=format_units(total),
            )
        )

    log.info(
        "summary_built",
        year=year,
        month=month,
        threshold=threshold,
        teachers=len(rows),
        students=len(students),
    )
    return rows
