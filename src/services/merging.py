"""
Merge runs: consecutive rows sharing a date, shown as one block in the
day-identifying columns.
"""

from models.entries import PageCursor
from services.sheet import ExcelSheet


def begin_run(cursor: PageCursor, row: int) -> None:
    cursor.merge_anchor = row


def close_run(sheet: ExcelSheet, cursor: PageCursor, through_row: int, columns: list[int]) -> bool:
    """
    Merge [merge_anchor, through_row] in each of the given columns.

    Returns False without touching the sheet when the run is empty.
    """
    if through_row < cursor.merge_anchor:
        return False
    for column in columns:
        sheet.merge(cursor.merge_anchor, through_row, column)
    return True
