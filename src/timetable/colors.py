"""Teacher color allocation for the grid legend and the summary table.

Colors are a pure function of the ordered set of active teacher ids: nothing
is persisted, and the same roster always yields the same mapping.
"""

from collections.abc import Iterable, Sequence

from src.timetable.errors import ConfigurationError
from src.timetable.models import Student

# Palette tokens match the academy UI's fixed Tailwind color families.
PALETTE: tuple[str, ...] = (
    "blue",
    "emerald",
    "violet",
    "amber",
    "fuchsia",
    "sky",
    "teal",
    "rose",
)


def active_teacher_ids(roster: Iterable[Student]) -> list[str]:
    """Teacher ids assigned to any student, in first-seen roster order."""
    seen: dict[str, None] = {}
    for student in roster:
        for teacher_id in student.assigned_teachers:
            seen.setdefault(teacher_id, None)
    return list(seen)


def assign_colors(
    teacher_ids: Iterable[str],
    palette: Sequence[str] = PALETTE,
) -> dict[str, str]:
    """Map each teacher id to ``palette[index % len(palette)]``.

    ``index`` is the position of the id's first appearance, so duplicates in
    the input do not shift later teachers. Past the palette size colors repeat.

    Raises:
        ConfigurationError: If the palette is empty.
    """
    if not palette:
        raise ConfigurationError("Color palette must not be empty")

    colors: dict[str, str] = {}
    for teacher_id in teacher_ids:
        if teacher_id not in colors:
            colors[teacher_id] = palette[len(colors) % len(palette)]
    return colors


def roster_colors(roster: Iterable[Student]) -> dict[str, str]:
    return assign_colors(active_teacher_ids(roster))
