"""
Fixed-height page tracking for the timesheet grid.

A page boundary is reached when the next row would be the last row of a
page. Crossing it leaves a few blank rows, repeats the table header and
starts a new merge run on the row after the header.
"""

from collections.abc import Callable

from core.config import PAGE_SKIP_ROWS
from models.entries import PageCursor


def new_cursor(first_row: int) -> PageCursor:
    """Create the cursor for a single layout pass."""
    return PageCursor(row_counter=first_row, merge_anchor=first_row)


def is_page_boundary(row: int, page_height: int) -> bool:
    return (row + 1) % page_height == 0


def advance_row(cursor: PageCursor, page_height: int) -> tuple[int, bool]:
    """Move to the next row; report whether it sits on a page boundary."""
    cursor.row_counter += 1
    return cursor.row_counter, is_page_boundary(cursor.row_counter, page_height)


def start_new_page(cursor: PageCursor, write_table_header: Callable[[int], None]) -> int:
    """
    Skip to the next page and repeat the table header.

    Returns the first data row of the new page, which is also the new merge
    anchor.
    """
    cursor.row_counter += PAGE_SKIP_ROWS
    write_table_header(cursor.row_counter)
    cursor.row_counter += 1
    cursor.merge_anchor = cursor.row_counter
    cursor.page_number += 1
    return cursor.row_counter


def final_page_number(cursor: PageCursor, page_height: int) -> int:
    return cursor.row_counter // page_height + 1


def page_break_rows(page_count: int, page_height: int) -> list[int]:
    """Rows after which a printed page ends, one per completed page."""
    return [(page + 1) * page_height for page in range(page_count - 1)]
