"""
Clock time rounding and duration helpers.
"""

from datetime import datetime, time, timedelta

from core.config import INPUT_TIME_FORMAT


class ReportFormatError(ValueError):
    """Raised when an entry carries an unparseable date or time."""


def parse_clock_time(value: str) -> time:
    """Parse an 'HH:MM:SS' string (an already rounded 'HH:MM' is accepted too)."""
    text = value.strip()
    for fmt in (INPUT_TIME_FORMAT, "%H:%M"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ReportFormatError(f"Invalid time '{value}' (expected HH:MM:SS)")


def round_to_minute(value: time) -> time:
    """
    Round a clock time to the nearest minute.

    Seconds above 30 round up, 30 and below are truncated. Anything in the
    23:59 minute stays at 23:59 so a time never rolls over into the next day.
    """
    if value.hour == 23 and value.minute == 59:
        return time(23, 59)

    truncated = time(value.hour, value.minute)
    if value.second > 30:
        as_datetime = datetime.combine(datetime.min.date(), truncated) + timedelta(minutes=1)
        return as_datetime.time()
    return truncated


def duration(start: time, end: time) -> timedelta:
    """Return end - start. Negative when end is earlier than start."""
    anchor = datetime.min.date()
    return datetime.combine(anchor, end) - datetime.combine(anchor, start)


def format_clock_time(value: time) -> str:
    return value.strftime("%H:%M")


def format_duration(span: timedelta) -> str:
    """Format a day-scale duration as 'HH:MM' (leading '-' when negative)."""
    sign = "-" if span < timedelta(0) else ""
    minutes = abs(int(span.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_total(span: timedelta) -> str:
    """Format a report total as 'H:MM'; hours are not capped at 24."""
    minutes = int(span.total_seconds()) // 60
    return f"{minutes // 60}:{minutes % 60:02d}"
