"""
Timesheet layout engine.

Walks the sorted time entries once and writes the monthly timesheet grid:
one row per entry, placeholder rows for days without entries, merged date
blocks, a running worked-time total, repeated table headers on every page
and a blank expense table at the end.
"""

from collections.abc import Iterable
from datetime import timedelta

from core.classification import classify, is_remote
from core.config import (
    COL_CLIENT,
    COL_DATE,
    COL_DESCRIPTION,
    COL_END,
    COL_LEAVE,
    COL_PRESENCE,
    COL_PROJECT,
    COL_START,
    COL_TOTAL,
    DATA_COLUMNS,
    DISPLAY_DATE_FORMAT,
    EXPENSE_BLANK_ROWS,
    EXPENSE_COLUMNS,
    EXPENSE_TITLE,
    FIRST_COLUMN,
    HEADER_BLOCK_ROW,
    HEADER_LABELS,
    MERGE_COLUMNS,
    MONTH_NAMES,
    PAGE_WIDTH,
    PRESENT_FLAG,
    REMOTE_FLAG,
    SHEET_TITLE,
    TABLE_HEADER_ROW,
    TITLE_ROW,
    WHITE,
)
from core.time_values import (
    duration,
    format_clock_time,
    format_duration,
    format_total,
    parse_clock_time,
    round_to_minute,
)
from models.entries import (
    Classification,
    LayoutRow,
    PageCursor,
    ReportSettings,
    SheetStyle,
    TimeEntryRow,
    TimesheetResult,
)
from services.gaps import gap_rows
from services.merging import begin_run, close_run
from services.pagination import (
    advance_row,
    final_page_number,
    is_page_boundary,
    new_cursor,
    page_break_rows,
    start_new_page,
)
from services.sheet import CellStyle, ExcelSheet, header_style

# Report column -> worksheet column index (B..J)
COLUMN_INDEX = {name: FIRST_COLUMN + i for i, name in enumerate(DATA_COLUMNS)}
EXPENSE_COLUMN_INDEX = {name: FIRST_COLUMN + i for i, name in enumerate(EXPENSE_COLUMNS)}
LAST_COLUMN = COLUMN_INDEX[COL_PRESENCE]

# Columns centred in data rows
CENTERED_COLUMNS = {COL_DATE, COL_LEAVE, COL_PRESENCE}


def month_label(month: int, year: int) -> str:
    """Italian month name and year, e.g. 'marzo 2024'."""
    return f"{MONTH_NAMES[month - 1]} {year}"


class TimesheetLayout:
    """
    Lays out one monthly timesheet.

    Settings and style are fixed for the lifetime of the object; every call to
    run() starts from a fresh cursor and a fresh sheet.
    """

    def __init__(self, settings: ReportSettings, style: SheetStyle | None = None):
        self.settings = settings
        self.style = style or SheetStyle()
        self.merge_columns = [COLUMN_INDEX[name] for name in MERGE_COLUMNS]

    # -------------------------------------------------------------------------
    # Static blocks
    # -------------------------------------------------------------------------

    def write_sheet_title(self, sheet: ExcelSheet):
        sheet.write(TITLE_ROW, FIRST_COLUMN, SHEET_TITLE)
        sheet.merge_range(
            TITLE_ROW,
            FIRST_COLUMN,
            LAST_COLUMN,
            CellStyle(fill=self.style.dark_green, bold=True, font_color=WHITE, horizontal="center"),
        )

    def write_sheet_header(self, sheet: ExcelSheet):
        """Company, person and period block (B4:C6)."""
        values = [
            self.settings.company,
            self.settings.person,
            month_label(self.settings.month, self.settings.year),
        ]
        for offset, (label, value) in enumerate(zip(HEADER_LABELS, values)):
            row = HEADER_BLOCK_ROW + offset
            sheet.write(row, FIRST_COLUMN, label, CellStyle(bold=True))
            sheet.write(row, FIRST_COLUMN + 1, value, CellStyle(fill=self.style.pale_green))

    def write_table_header(self, sheet: ExcelSheet, row: int):
        dark_columns = {COL_CLIENT, COL_PROJECT, COL_DESCRIPTION, COL_TOTAL}
        for name in DATA_COLUMNS:
            dark = name in dark_columns
            fill = self.style.dark_green if dark else self.style.light_green
            sheet.write(row, COLUMN_INDEX[name], name, header_style(fill, dark))

    def write_expense_footer(self, sheet: ExcelSheet, row: int) -> int:
        """
        Write the monthly expense table starting at row.

        Returns the row of the expense total cell.
        """
        sheet.write(row, FIRST_COLUMN, EXPENSE_TITLE)
        sheet.merge_range(
            row,
            FIRST_COLUMN,
            EXPENSE_COLUMN_INDEX[EXPENSE_COLUMNS[-1]],
            CellStyle(fill=self.style.dark_green, bold=True, font_color=WHITE, horizontal="center"),
        )

        header_row = row + 2
        light_columns = {EXPENSE_COLUMNS[0], EXPENSE_COLUMNS[-1]}
        for name in EXPENSE_COLUMNS:
            dark = name not in light_columns
            fill = self.style.dark_green if dark else self.style.light_green
            sheet.write(header_row, EXPENSE_COLUMN_INDEX[name], name, header_style(fill, dark))

        amount_column = EXPENSE_COLUMN_INDEX[EXPENSE_COLUMNS[-1]]
        for offset in range(1, EXPENSE_BLANK_ROWS + 1):
            for column in EXPENSE_COLUMN_INDEX.values():
                fill = self.style.pale_green if column == amount_column else None
                sheet.apply_style(header_row + offset, column, CellStyle(fill=fill))

        total_row = header_row + EXPENSE_BLANK_ROWS + 1
        sheet.write(total_row, amount_column, 0, self.total_style())
        return total_row

    def total_style(self) -> CellStyle:
        return CellStyle(fill=self.style.dark_green, bold=True, font_color=WHITE)

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    def build_layout_row(self, entry: TimeEntryRow, row: int, warnings: list[str]) -> LayoutRow:
        """Classify an entry, round its times and compute its duration."""
        layout_row = LayoutRow(
            display_date=entry.date.strftime(DISPLAY_DATE_FORMAT),
            is_synthesized=False,
            classification=classify(entry.tags),
            remote=is_remote(entry.tags),
        )

        for name, raw in ((COL_START, entry.start_time), (COL_END, entry.end_time)):
            if raw is None:
                warnings.append(f"Row {row}: missing value for {name}")
                continue
            rounded = round_to_minute(parse_clock_time(raw))
            if name == COL_START:
                layout_row.rounded_start = rounded
            else:
                layout_row.rounded_end = rounded

        if layout_row.rounded_start is not None and layout_row.rounded_end is not None:
            layout_row.duration = duration(layout_row.rounded_start, layout_row.rounded_end)
            if layout_row.duration < timedelta(0):
                warnings.append(
                    f"Row {row}: end time {entry.end_time} is before start time {entry.start_time}"
                )

        return layout_row

    def write_data_row(
        self, sheet: ExcelSheet, row: int, layout_row: LayoutRow, entry: TimeEntryRow, warnings: list[str]
    ):
        is_leave = layout_row.classification == Classification.LEAVE
        span = format_duration(layout_row.duration) if layout_row.duration is not None else ""
        start, end = (
            format_clock_time(t) if t is not None else ""
            for t in (layout_row.rounded_start, layout_row.rounded_end)
        )

        values = {
            COL_DATE: layout_row.display_date,
            COL_CLIENT: entry.client,
            COL_PROJECT: entry.project,
            COL_DESCRIPTION: entry.description,
            COL_START: start,
            COL_END: end,
            COL_TOTAL: "" if is_leave else span,
            COL_LEAVE: span if is_leave else "",
            COL_PRESENCE: REMOTE_FLAG if layout_row.remote else PRESENT_FLAG,
        }

        for name in DATA_COLUMNS:
            value = values[name]
            if value is None:
                warnings.append(f"Row {row}: missing value for {name}")
                value = ""
            style = CellStyle(
                fill=self.style.pale_green if name == COL_TOTAL else None,
                horizontal="center" if name in CENTERED_COLUMNS else None,
            )
            sheet.write(row, COLUMN_INDEX[name], value, style)

    def write_gap_row(self, sheet: ExcelSheet, row: int, layout_row: LayoutRow):
        """Grey placeholder row carrying only the date."""
        sheet.write(row, COLUMN_INDEX[COL_DATE], layout_row.display_date)
        style = CellStyle(fill=self.style.light_grey, horizontal="center")
        for column in COLUMN_INDEX.values():
            sheet.apply_style(row, column, style)

    # -------------------------------------------------------------------------
    # Pass
    # -------------------------------------------------------------------------

    def turn_page(self, sheet: ExcelSheet, cursor: PageCursor):
        """Close the open run up to the current row and move to a new page."""
        close_run(sheet, cursor, cursor.row_counter - 1, self.merge_columns)
        start_new_page(cursor, lambda row: self.write_table_header(sheet, row))

    def run(self, entries: Iterable[TimeEntryRow]) -> TimesheetResult:
        """
        Lay out all entries on a new sheet.

        Entries must be sorted by date then start time. Raises ValueError
        (ReportFormatError) on an unparseable time.
        """
        page_height = self.settings.page_height
        sheet = ExcelSheet()
        warnings: list[str] = []

        sheet.set_column_widths(self.style.column_widths)
        self.write_sheet_title(sheet)
        self.write_sheet_header(sheet)
        self.write_table_header(sheet, TABLE_HEADER_ROW)

        cursor = new_cursor(TABLE_HEADER_ROW + 1)
        run_date = None
        previous_date = None
        rows_written = 0
        gap_days = 0

        for line_number, entry in enumerate(entries, start=1):
            if entry.date is None:
                warnings.append(f"Entry {line_number}: missing start date, skipped")
                continue

            if run_date is None:
                run_date = previous_date = entry.date

            if entry.date != run_date:
                # New day: close the previous block and fill skipped days
                close_run(sheet, cursor, cursor.row_counter - 1, self.merge_columns)
                begin_run(cursor, cursor.row_counter)
                run_date = entry.date

                if is_page_boundary(cursor.row_counter, page_height):
                    self.turn_page(sheet, cursor)

                for gap_row in gap_rows(previous_date, entry.date):
                    self.write_gap_row(sheet, cursor.row_counter, gap_row)
                    gap_days += 1
                    _, crossed = advance_row(cursor, page_height)
                    begin_run(cursor, cursor.row_counter)
                    if crossed:
                        self.turn_page(sheet, cursor)

                previous_date = entry.date

            # A single day can itself run across the page boundary
            if is_page_boundary(cursor.row_counter, page_height):
                self.turn_page(sheet, cursor)

            layout_row = self.build_layout_row(entry, cursor.row_counter, warnings)
            self.write_data_row(sheet, cursor.row_counter, layout_row, entry, warnings)
            if (
                layout_row.classification == Classification.WORKED
                and layout_row.duration is not None
                and layout_row.duration >= timedelta(0)
            ):
                cursor.running_total += layout_row.duration

            advance_row(cursor, page_height)
            rows_written += 1

        if run_date is not None:
            close_run(sheet, cursor, cursor.row_counter - 1, self.merge_columns)

        page_count = self.finalize(sheet, cursor)

        return TimesheetResult(
            workbook=sheet.workbook,
            rows_written=rows_written,
            gap_days=gap_days,
            page_count=page_count,
            total_worked=cursor.running_total,
            sheet=sheet,
            warnings=warnings,
        )

    def finalize(self, sheet: ExcelSheet, cursor: PageCursor) -> int:
        """Grand total, expense footer and print layout. Returns the page count."""
        page_height = self.settings.page_height

        sheet.write(
            cursor.row_counter,
            COLUMN_INDEX[COL_TOTAL],
            format_total(cursor.running_total),
            self.total_style(),
        )

        page_count = final_page_number(cursor, page_height)
        self.write_expense_footer(sheet, page_height * page_count + 2)

        sheet.add_column_break(PAGE_WIDTH)
        for row in page_break_rows(page_count, page_height):
            sheet.add_row_break(row)
        sheet.apply_print_setup()

        return page_count
