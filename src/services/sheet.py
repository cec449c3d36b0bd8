"""
Excel worksheet output for the timesheet layout.

The layout engine only addresses cells by (row, column) and describes styling
with CellStyle; this module turns that into openpyxl calls.
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Color, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.pagebreak import Break

from core.config import PRINT_SIDE_MARGIN, PRINT_VERTICAL_MARGIN, SHEET_NAME, WHITE


@dataclass(frozen=True)
class CellStyle:
    """Declarative styling for one cell."""

    border: bool = True
    fill: str | None = None
    bold: bool = False
    font_color: str | None = None
    horizontal: str | None = None
    vertical: str | None = None


THIN = Side(style="thin")

# Alignment only; the cells of a merged block keep their own borders and fills
MERGED_BLOCK = CellStyle(border=False, horizontal="center", vertical="center")


def header_style(fill: str, dark: bool) -> CellStyle:
    """Table header cell: dark fills get bold white text."""
    return CellStyle(
        fill=fill,
        bold=dark,
        font_color=WHITE if dark else None,
        horizontal="center",
    )


class ExcelSheet:
    """A single worksheet addressed by 1-based (row, column)."""

    def __init__(self, workbook: Workbook | None = None, title: str = SHEET_NAME):
        self.workbook = workbook or Workbook()
        self.worksheet = self.workbook.active
        self.worksheet.title = title

    def write(self, row: int, column: int, value, style: CellStyle | None = None):
        cell = self.worksheet.cell(row=row, column=column, value=value)
        if style is not None:
            self.apply_style(row, column, style)
        return cell

    def apply_style(self, row: int, column: int, style: CellStyle):
        cell = self.worksheet.cell(row=row, column=column)
        if style.border:
            cell.border = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)
        if style.fill:
            cell.fill = PatternFill(patternType="solid", fgColor=Color(rgb=f"FF{style.fill}"))
        if style.bold or style.font_color:
            color = Color(rgb=f"FF{style.font_color}") if style.font_color else None
            cell.font = Font(bold=style.bold, color=color)
        if style.horizontal or style.vertical:
            cell.alignment = Alignment(horizontal=style.horizontal, vertical=style.vertical)

    def merge(self, start_row: int, end_row: int, column: int):
        """Merge one column over [start_row, end_row] and centre the block."""
        if end_row < start_row:
            return
        if end_row > start_row:
            letter = get_column_letter(column)
            self.worksheet.merge_cells(f"{letter}{start_row}:{letter}{end_row}")
        self.apply_style(start_row, column, MERGED_BLOCK)

    def merge_range(self, row: int, start_column: int, end_column: int, style: CellStyle):
        """Merge one row across columns, styling every cell of the block."""
        for column in range(start_column, end_column + 1):
            self.apply_style(row, column, style)
        self.worksheet.merge_cells(
            start_row=row, start_column=start_column, end_row=row, end_column=end_column
        )

    def set_column_widths(self, widths):
        for col_idx, width in enumerate(widths, start=1):
            self.worksheet.column_dimensions[get_column_letter(col_idx)].width = width

    def add_row_break(self, row: int):
        self.worksheet.row_breaks.append(Break(id=row))

    def add_column_break(self, column: int):
        self.worksheet.col_breaks.append(Break(id=column))

    def apply_print_setup(self):
        """A4 landscape, narrow side margins, centred on the page."""
        ws = self.worksheet
        ws.page_setup.paperSize = ws.PAPERSIZE_A4
        ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
        ws.page_margins.left = PRINT_SIDE_MARGIN
        ws.page_margins.right = PRINT_SIDE_MARGIN
        ws.page_margins.top = PRINT_VERTICAL_MARGIN
        ws.page_margins.bottom = PRINT_VERTICAL_MARGIN
        ws.print_options.horizontalCentered = True
        ws.print_options.verticalCentered = True

    def value(self, row: int, column: int):
        return self.worksheet.cell(row=row, column=column).value

    def save(self, output_path: Path):
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.workbook.save(str(output_path))

    def to_bytes(self) -> bytes:
        buffer = BytesIO()
        self.workbook.save(buffer)
        buffer.seek(0)
        return buffer.getvalue()
