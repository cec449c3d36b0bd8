"""
Data models for time entries and the timesheet layout.

Input rows are immutable once parsed. The cursor is the only mutable state
threaded through a layout pass and is created fresh for every run.
"""

from dataclasses import dataclass, field
from datetime import date, time, timedelta
from enum import Enum
from typing import Any

from core.config import (
    COLUMN_WIDTHS,
    DARK_GREEN,
    LIGHT_GREEN,
    LIGHT_GREY,
    PAGE_HEIGHT,
    PALE_GREEN,
    TABLE_HEADER_ROW,
)


class Classification(str, Enum):
    """How a day counts in the report."""

    WORKED = "worked"
    LEAVE = "leave"


@dataclass(frozen=True)
class TimeEntryRow:
    """One record of the detailed time tracking export."""

    date: date | None
    client: str | None
    project: str | None
    description: str | None
    start_time: str | None  # HH:MM:SS
    end_time: str | None  # HH:MM:SS
    tags: str | None = ""


@dataclass
class LayoutRow:
    """A report row derived from an entry or synthesized for a gap day."""

    display_date: str
    is_synthesized: bool
    classification: Classification
    remote: bool | None = None
    rounded_start: time | None = None
    rounded_end: time | None = None
    duration: timedelta | None = None


@dataclass
class PageCursor:
    """Row position and running state of one layout pass."""

    row_counter: int
    merge_anchor: int
    page_number: int = 1
    running_total: timedelta = field(default_factory=timedelta)


@dataclass(frozen=True)
class ReportSettings:
    """Identity and page policy of a report."""

    company: str
    person: str
    month: int
    year: int
    page_height: int = PAGE_HEIGHT

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        # The first page boundary must fall on or after the first data row
        if self.page_height <= TABLE_HEADER_ROW + 1:
            raise ValueError(f"Page height too small: {self.page_height}")


@dataclass(frozen=True)
class SheetStyle:
    """Palette and column widths used by every write site."""

    dark_green: str = DARK_GREEN
    light_green: str = LIGHT_GREEN
    pale_green: str = PALE_GREEN
    light_grey: str = LIGHT_GREY
    column_widths: tuple[int, ...] = tuple(COLUMN_WIDTHS)


@dataclass
class TimesheetResult:
    """Result of a timesheet layout run."""

    workbook: Any  # openpyxl.Workbook
    rows_written: int
    gap_days: int
    page_count: int
    total_worked: timedelta
    sheet: Any = None  # services.sheet.ExcelSheet
    warnings: list[str] = field(default_factory=list)
