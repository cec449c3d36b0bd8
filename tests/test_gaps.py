from datetime import date

from models.entries import Classification
from services.gaps import gap_rows, missing_days


def test_missing_days_strictly_between():
    days = list(missing_days(date(2024, 3, 4), date(2024, 3, 7)))
    assert days == [date(2024, 3, 5), date(2024, 3, 6)]


def test_no_gap_for_consecutive_or_repeated_dates():
    assert list(missing_days(date(2024, 3, 4), date(2024, 3, 5))) == []
    assert list(missing_days(date(2024, 3, 4), date(2024, 3, 4))) == []


def test_gap_across_month_end():
    days = list(missing_days(date(2024, 2, 27), date(2024, 3, 2)))
    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_gap_rows_are_presumed_leave():
    rows = list(gap_rows(date(2024, 3, 1), date(2024, 3, 11)))

    assert len(rows) == 9
    assert [r.display_date for r in rows[:2]] == ["02/03/2024", "03/03/2024"]
    for row in rows:
        assert row.is_synthesized
        assert row.classification == Classification.LEAVE
        assert row.duration is None
        assert row.remote is None
