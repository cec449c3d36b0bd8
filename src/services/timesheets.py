"""
Timesheet Generation Service

Turns a detailed time entry export into the monthly timesheet workbook, either
in memory (for the API) or as a versioned file under the output directory.
"""

from pathlib import Path

from core.config import OUTPUT_DIR
from core.time_values import format_total
from models.entries import ReportSettings, SheetStyle, TimeEntryRow, TimesheetResult
from services.layout import TimesheetLayout
from services.parser import parse_report_csv


def generate_timesheet(
    entries: list[TimeEntryRow],
    settings: ReportSettings,
    style: SheetStyle | None = None,
) -> TimesheetResult:
    """Lay out already parsed and sorted entries."""
    return TimesheetLayout(settings, style).run(entries)


def _process_timesheet(csv_text: str, settings: ReportSettings, silent: bool = False) -> TimesheetResult:
    """
    Core processing shared by the file and bytes generators.

    Raises:
        ValueError: unparseable date or time in the export
    """
    entries = parse_report_csv(csv_text)
    if not silent:
        days = len({e.date for e in entries if e.date})
        print(f"Found {len(entries)} entries across {days} days")

    result = generate_timesheet(entries, settings)

    if not silent:
        print(
            f"Laid out {result.rows_written} rows and {result.gap_days} days without entries "
            f"on {result.page_count} page(s)"
        )
        if result.warnings:
            print("\nWARNING: incomplete entries found:")
            for warning in result.warnings:
                print(f"  - {warning}")

    return result


def generate_output_filename(settings: ReportSettings, output_dir: Path | None = None) -> Path:
    """
    Generate output filename with versioning.

    Format: timesheet_YYYY_MM_a.xlsx, then _b, _c... when the file exists.
    """
    output_dir = output_dir or OUTPUT_DIR / "timesheets"
    output_dir.mkdir(parents=True, exist_ok=True)
    base_name = f"timesheet_{settings.year}_{settings.month:02d}"

    suffix_char = ord("a")

    while True:
        output_path = output_dir / f"{base_name}_{chr(suffix_char)}.xlsx"
        if not output_path.exists():
            return output_path
        suffix_char += 1
        if suffix_char > ord("z"):
            raise RuntimeError("Too many output files exist")


def generate_timesheet_to_bytes(csv_text: str, settings: ReportSettings) -> tuple[bytes, str, TimesheetResult]:
    """
    Generate the timesheet and return it as bytes (for API usage).

    Returns:
        Tuple of (excel_bytes, filename, result)
    """
    result = _process_timesheet(csv_text, settings, silent=True)

    filename = f"timesheet_{settings.year}_{settings.month:02d}.xlsx"
    return result.sheet.to_bytes(), filename, result


def generate_timesheet_file(csv_text: str, settings: ReportSettings, output_dir: Path | None = None) -> Path:
    """
    Main entry point for timesheet generation (file output).

    Returns:
        Path to the generated workbook
    """
    result = _process_timesheet(csv_text, settings, silent=False)

    output_file = generate_output_filename(settings, output_dir)
    print(f"Writing output: {output_file}")
    result.sheet.save(output_file)

    print(f"\nComplete! Worked time: {format_total(result.total_worked)}")
    return output_file
