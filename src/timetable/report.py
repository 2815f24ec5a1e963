"""Plain-text rendering of the weekly grid and the teacher summary."""

from collections.abc import Sequence

from src.timetable.models import (
    LegendEntry,
    SummaryStudent,
    TeacherSummaryRow,
    WeeklyGrid,
)


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Align rows under headers, columns separated by `` | ``."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)
    row_lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) for row in rows
    ]
    return "\n".join([header_line, separator, *row_lines])


def format_grid(grid: WeeklyGrid) -> str:
    """Slot rows by day columns; each cell lists student names."""
    headers = ["Time", *(day[:3].title() for day in grid.days)]
    rows = []
    for slot in grid.slots:
        row = [slot]
        for day in grid.days:
            placements = grid.cells.get(day, {}).get(slot, [])
            row.append(", ".join(p.student.name for p in placements))
        rows.append(row)
    return format_table(headers, rows)


def format_legend(entries: Sequence[LegendEntry]) -> str:
    if not entries:
        return "(no teachers)"
    return "  ".join(
        f"[{e.color}] {e.teacher_name} ({e.student_count})" for e in entries
    )


def _student_label(student: SummaryStudent, *, show_unit: bool) -> str:
    label = f"{student.name}*" if student.is_new else student.name
    if show_unit:
        label += f"({student.unit:g})"
    return label


def format_summary(rows: Sequence[TeacherSummaryRow]) -> str:
    """Teacher | Academies | Students | Count | Units.

    Full-unit students are listed first; partial ones follow after `` / ``
    with their unit. New enrollments are marked with ``*``.
    """
    if not rows:
        return "(no students)"

    headers = ["Teacher", "Academies", "Students", "Count", "Units"]
    table_rows = []
    for row in rows:
        full = ", ".join(
            _student_label(s, show_unit=False) for s in row.full_unit_students
        )
        partial = ", ".join(
            _student_label(s, show_unit=True) for s in row.partial_unit_students
        )
        students = " / ".join(part for part in (full, partial) if part)
        table_rows.append(
            [
                f"{row.teacher_name} [{row.color}]",
                ", ".join(row.academies),
                students,
                str(row.head_count),
                row.total_units_label,
            ]
        )
    return format_table(headers, table_rows)
