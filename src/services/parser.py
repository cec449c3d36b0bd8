"""
Parse the detailed time entry CSV export into TimeEntryRow records.
"""

import csv
from datetime import date, datetime
from io import StringIO

from core.config import (
    COL_CLIENT,
    COL_DATE,
    COL_DESCRIPTION,
    COL_END,
    COL_PROJECT,
    COL_START,
    CSV_FIELDS,
    CSV_TAGS_FIELD,
    INPUT_DATE_FORMAT,
)
from core.time_values import ReportFormatError
from models.entries import TimeEntryRow


def parse_entry_date(value: str, line_number: int) -> date:
    try:
        return datetime.strptime(value.strip(), INPUT_DATE_FORMAT).date()
    except ValueError as e:
        raise ReportFormatError(
            f"Line {line_number}: invalid start date '{value}' (expected YYYY-MM-DD)"
        ) from e


def sort_key(entry: TimeEntryRow) -> tuple:
    """Order by start date, then start time; undated rows go last."""
    return (
        entry.date is None,
        entry.date or date.max,
        entry.start_time or "",
    )


def parse_report_csv(text: str) -> list[TimeEntryRow]:
    """
    Read the CSV export and return entries sorted by date and start time.

    Missing columns give None fields. Raises ReportFormatError when a start
    date cannot be parsed.
    """
    # Exports may start with a byte order mark
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))

    entries = []
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue

        line_number = reader.line_num
        raw_date = row.get(CSV_FIELDS[COL_DATE])
        entry_date = parse_entry_date(raw_date, line_number) if raw_date else None

        entries.append(
            TimeEntryRow(
                date=entry_date,
                client=row.get(CSV_FIELDS[COL_CLIENT]),
                project=row.get(CSV_FIELDS[COL_PROJECT]),
                description=row.get(CSV_FIELDS[COL_DESCRIPTION]),
                start_time=row.get(CSV_FIELDS[COL_START]) or None,
                end_time=row.get(CSV_FIELDS[COL_END]) or None,
                tags=row.get(CSV_TAGS_FIELD) or "",
            )
        )

    entries.sort(key=sort_key)
    return entries
