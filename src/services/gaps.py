"""
Placeholder rows for calendar days with no tracked entries.
"""

from collections.abc import Iterator
from datetime import date, timedelta

from core.config import DISPLAY_DATE_FORMAT
from models.entries import Classification, LayoutRow


def missing_days(previous: date, current: date) -> Iterator[date]:
    """Yield every date strictly between previous and current, in order."""
    day = previous + timedelta(days=1)
    while day < current:
        yield day
        day += timedelta(days=1)


def gap_rows(previous: date, current: date) -> Iterator[LayoutRow]:
    """Synthesized rows for skipped days, presumed to be holidays or weekends."""
    for day in missing_days(previous, current):
        yield LayoutRow(
            display_date=day.strftime(DISPLAY_DATE_FORMAT),
            is_synthesized=True,
            classification=Classification.LEAVE,
        )
