"""Weekly class-schedule grid and pro-rated billing units for the academy.

Turns a roster of students with weekly schedules into an hourly day x slot
grid and a per-teacher monthly summary of registration units.
"""

from src.timetable.colors import PALETTE, assign_colors
from src.timetable.grid import build_grid, students_in_slot
from src.timetable.models import CreditPolicy, Student, TeacherSummaryRow
from src.timetable.proration import registration_unit
from src.timetable.slots import TIME_SLOTS, normalize_time_to_hour
from src.timetable.summary import summarize

__all__ = [
    "PALETTE",
    "TIME_SLOTS",
    "CreditPolicy",
    "Student",
    "TeacherSummaryRow",
    "assign_colors",
    "build_grid",
    "normalize_time_to_hour",
    "registration_unit",
    "students_in_slot",
    "summarize",
]
