"""Print the academy's weekly timetable grid and monthly teacher summary.

Reads a roster snapshot (JSON) exported from the academy database and prints
the hourly grid, the teacher legend and the per-teacher registration-unit
summary for one month.

Run with: python scripts/timetable_report.py --roster data/roster.json
Month:    python scripts/timetable_report.py --year 2026 --month 2
Summary:  python scripts/timetable_report.py --summary --threshold 8
Filter:   python scripts/timetable_report.py --academy Gangnam --teacher t-kim
JSON:     python scripts/timetable_report.py --json

Policies: by_slot (default), primary_only, full, split

Exit codes:
  0 = success (tables or JSON on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import os
import sys
from datetime import date

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.timetable.config import get_config  # noqa: E402
from src.timetable.grid import build_grid, build_legend  # noqa: E402
from src.timetable.logging import setup_logging_from_config  # noqa: E402
from src.timetable.models import CreditPolicy  # noqa: E402
from src.timetable.report import (  # noqa: E402
    format_grid,
    format_legend,
    format_summary,
)
from src.timetable.roster import filter_roster, load_roster  # noqa: E402
from src.timetable.summary import summarize  # noqa: E402


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    today = date.today()
    parser = argparse.ArgumentParser(
        description="Print the weekly timetable grid and monthly teacher summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--roster",
        type=str,
        default=None,
        help="Roster snapshot JSON (default: TIMETABLE_ROSTER_PATH or data/roster.json).",
    )
    parser.add_argument("--year", type=int, default=today.year, help="Viewed year.")
    parser.add_argument(
        "--month",
        type=int,
        default=today.month,
        choices=range(1, 13),
        metavar="1-12",
        help="Viewed month.",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Classes per month that make one full unit (default: TIMETABLE_UNIT_THRESHOLD).",
    )
    parser.add_argument(
        "--policy",
        type=str,
        default=None,
        choices=[p.value for p in CreditPolicy],
        help="How secondary teachers are credited (default: TIMETABLE_CREDIT_POLICY).",
    )
    parser.add_argument("--academy", type=str, default=None, help="Only this academy.")
    parser.add_argument(
        "--teacher", type=str, default=None, help="Only students assigned to this teacher id."
    )

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--grid", action="store_true", help="Only print the weekly grid and legend."
    )
    output_group.add_argument(
        "--summary", action="store_true", help="Only print the teacher summary."
    )
    parser.add_argument(
        "--json", action="store_true", help="Print JSON instead of text tables."
    )
    return parser.parse_args()


def main(args: argparse.Namespace) -> None:
    config = get_config()
    setup_logging_from_config(config)

    roster_path = args.roster or config.roster_path
    threshold = args.threshold if args.threshold is not None else config.unit_threshold
    policy = CreditPolicy(args.policy) if args.policy else config.credit_policy

    _log(f"timetable_report: {roster_path} ({args.year}-{args.month:02d})")

    snapshot = load_roster(roster_path)
    students = filter_roster(
        snapshot.students, academy=args.academy, teacher_id=args.teacher
    )
    names = snapshot.teacher_names
    _log(f"  {len(students)} of {len(snapshot.students)} students after filters")

    show_grid = not args.summary
    show_summary = not args.grid

    grid = build_grid(students) if show_grid else None
    legend = build_legend(students, names) if show_grid else []
    rows = (
        summarize(
            students,
            args.year,
            args.month,
            threshold,
            teacher_names=names,
            policy=policy,
        )
        if show_summary
        else []
    )

    if args.json:
        output: dict = {"year": args.year, "month": args.month, "threshold": threshold}
        if grid is not None:
            output["grid"] = grid.model_dump(mode="json")
            output["legend"] = [entry.model_dump(mode="json") for entry in legend]
        if show_summary:
            output["summary"] = [row.model_dump(mode="json") for row in rows]
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    if grid is not None:
        print(format_legend(legend))
        print()
        print(format_grid(grid))
    if show_summary:
        if grid is not None:
            print()
        print(f"Summary {args.year}-{args.month:02d} (threshold {threshold}, {policy.value})")
        print(format_summary(rows))


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
