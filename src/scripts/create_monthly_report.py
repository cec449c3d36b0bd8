#!/usr/bin/env python3
"""
Create the monthly timesheet from Toggl Track time entries.

Downloads the detailed report for the month (or reads a saved CSV export),
lays out the timesheet and writes it under output/timesheets/.

Usage:
    uv run python src/scripts/create_monthly_report.py --month 2024-03
    uv run python src/scripts/create_monthly_report.py --month 2024-03 --csv report.csv
"""

import argparse
import sys
import traceback
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import PAGE_HEIGHT, REPORT_COMPANY, REPORT_PERSON, TOGGL_WORKSPACE_ID
from models.entries import ReportSettings
from services.timesheets import generate_timesheet_file
from services.toggl import EmptyReportError, TogglClient


# =============================================================================
# DATE UTILITIES
# =============================================================================


def get_report_month(month_str: str | None) -> tuple[int, int]:
    """
    Resolve the report month.

    Args:
        month_str: Optional month string (YYYY-MM). Uses previous month if None.

    Returns:
        Tuple of (month, year)
    """
    if month_str:
        year, month = map(int, month_str.split("-"))
        return month, year

    today = date.today()
    if today.month == 1:
        return 12, today.year - 1
    return today.month - 1, today.year


# =============================================================================
# MAIN
# =============================================================================


def main(args: argparse.Namespace):
    """Main entry point for the monthly timesheet."""
    month, year = get_report_month(args.month)
    settings = ReportSettings(
        company=args.company,
        person=args.person,
        month=month,
        year=year,
        page_height=args.page_height,
    )
    print(f"Generating timesheet for {year}-{month:02d}")

    if args.csv:
        csv_text = args.csv.read_text(encoding="utf-8-sig")
        print(f"Read {args.csv}")
    else:
        if not args.workspace:
            raise ValueError("No workspace given (--workspace or TOGGL_WORKSPACE_ID)")
        print(f"Downloading detailed report for workspace {args.workspace}...")
        try:
            csv_text = TogglClient().download_detailed_report(args.workspace, month, year)
        except EmptyReportError as e:
            # An empty month still gets a timesheet with the header and footer
            print(f"{e}; writing an empty timesheet")
            csv_text = ""

    output_path = generate_timesheet_file(csv_text, settings, args.output_dir)
    print(f"\nTimesheet generated: {output_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate the monthly timesheet")
    parser.add_argument("--month", help="Target month (YYYY-MM). Defaults to previous month.")
    parser.add_argument(
        "--workspace",
        default=TOGGL_WORKSPACE_ID,
        help="Toggl workspace id (see list_workspaces.py)",
    )
    parser.add_argument("--csv", type=Path, help="Use a saved CSV export instead of downloading")
    parser.add_argument("--company", default=REPORT_COMPANY, help="Company shown in the header")
    parser.add_argument("--person", default=REPORT_PERSON, help="Person shown in the header")
    parser.add_argument("--page-height", type=int, default=PAGE_HEIGHT, help="Rows per printed page")
    parser.add_argument("--output-dir", type=Path, help="Output directory (default output/timesheets)")
    args = parser.parse_args()

    try:
        main(args)
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        sys.exit(1)
