"""Small builders shared by the test modules."""

from datetime import date, datetime

DAY = date(2025, 3, 10)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    """Naive wall-clock instant on the test day."""
    return datetime(day.year, day.month, day.day, hour, minute)
