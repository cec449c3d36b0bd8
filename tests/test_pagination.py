from services.merging import begin_run, close_run
from services.pagination import (
    advance_row,
    final_page_number,
    is_page_boundary,
    new_cursor,
    page_break_rows,
    start_new_page,
)
from services.sheet import ExcelSheet


def test_page_boundary_rows():
    assert is_page_boundary(32, 33)
    assert is_page_boundary(65, 33)
    assert not is_page_boundary(33, 33)
    assert not is_page_boundary(10, 33)


def test_advance_row_reports_boundary():
    cursor = new_cursor(30)
    assert advance_row(cursor, 33) == (31, False)
    assert advance_row(cursor, 33) == (32, True)
    assert cursor.row_counter == 32


def test_start_new_page_skips_rows_and_repeats_header():
    cursor = new_cursor(10)
    cursor.row_counter = 32
    header_rows = []

    first_row = start_new_page(cursor, header_rows.append)

    assert header_rows == [35]
    assert first_row == 36
    assert cursor.row_counter == 36
    assert cursor.merge_anchor == 36
    assert cursor.page_number == 2


def test_final_page_number_and_breaks():
    cursor = new_cursor(10)
    assert final_page_number(cursor, 33) == 1
    assert page_break_rows(1, 33) == []

    cursor.row_counter = 70
    assert final_page_number(cursor, 33) == 3
    assert page_break_rows(3, 33) == [33, 66]


def test_close_run_merges_rows_of_the_run():
    sheet = ExcelSheet()
    cursor = new_cursor(10)
    begin_run(cursor, 10)

    assert close_run(sheet, cursor, 12, [2, 9])

    merged = {r.coord for r in sheet.worksheet.merged_cells.ranges}
    assert merged == {"B10:B12", "I10:I12"}


def test_single_row_run_is_not_merged():
    sheet = ExcelSheet()
    sheet.write(10, 2, "04/03/2024")
    cursor = new_cursor(10)

    assert close_run(sheet, cursor, 10, [2])
    assert not sheet.worksheet.merged_cells.ranges
    assert sheet.value(10, 2) == "04/03/2024"


def test_empty_run_is_a_no_op():
    sheet = ExcelSheet()
    cursor = new_cursor(10)

    assert not close_run(sheet, cursor, 9, [2])
    assert not sheet.worksheet.merged_cells.ranges
