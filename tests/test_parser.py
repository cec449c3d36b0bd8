from datetime import date

import pytest

from fixtures.generate_entries import HEADER as CSV_HEADER, csv_line
from services.parser import parse_report_csv


def test_parses_and_sorts_entries():
    text = "\n".join(
        [
            CSV_HEADER,
            csv_line("2024-03-05", "14:00:00", "18:00:00"),
            csv_line("2024-03-04", "14:00:00", "18:00:00", tags="remoto"),
            csv_line("2024-03-04", "09:00:00", "13:00:00"),
        ]
    )

    entries = parse_report_csv(text)

    assert [(e.date, e.start_time) for e in entries] == [
        (date(2024, 3, 4), "09:00:00"),
        (date(2024, 3, 4), "14:00:00"),
        (date(2024, 3, 5), "14:00:00"),
    ]
    assert entries[1].tags == "remoto"
    assert entries[0].client == "Acme"
    assert entries[0].end_time == "13:00:00"


def test_quoted_fields_and_bom():
    text = "\ufeff" + "\n".join(
        [
            CSV_HEADER,
            csv_line("2024-03-04", "09:00:00", "13:00:00", description='"Review, part 1"'),
            "",
        ]
    )

    entries = parse_report_csv(text)

    assert len(entries) == 1
    assert entries[0].description == "Review, part 1"


def test_missing_columns_give_none():
    text = "Start date,Start time,End time\n2024-03-04,09:00:00,13:00:00\n"

    (entry,) = parse_report_csv(text)

    assert entry.client is None
    assert entry.project is None
    assert entry.description is None
    assert entry.tags == ""


def test_rows_without_date_are_kept_last():
    text = "\n".join(
        [
            CSV_HEADER,
            csv_line("", "09:00:00", "10:00:00"),
            csv_line("2024-03-04", "09:00:00", "13:00:00"),
        ]
    )

    entries = parse_report_csv(text)

    assert entries[0].date == date(2024, 3, 4)
    assert entries[1].date is None


def test_invalid_date_is_an_input_error():
    text = "\n".join([CSV_HEADER, csv_line("04/03/2024", "09:00:00", "13:00:00")])

    with pytest.raises(ValueError, match="04/03/2024"):
        parse_report_csv(text)


def test_empty_export():
    assert parse_report_csv("") == []
    assert parse_report_csv(CSV_HEADER + "\n") == []
