"""Clock and timestamp formatting utilities."""

from datetime import date, timedelta
from typing import Callable

# Anything returning "today"; injected into the template helpers so tests can pin it
Clock = Callable[[], date]

ISO_DATE_FORMAT = "%Y-%m-%d"


def system_clock() -> date:
    """Return today's date from the local wall clock."""
    return date.today()


def fixed_clock(day: date) -> Clock:
    """
    Build a clock that always returns the same day.

    Example:
        clock = fixed_clock(date(2024, 1, 31))
        clock()  # date(2024, 1, 31)
    """
    return lambda: day


def relative_date(clock: Clock, days: int = 0, fmt: str = ISO_DATE_FORMAT) -> str:
    """
    Format the clock's today shifted by a signed number of days.

    Args:
        clock: Source of today's date
        days: Offset in days (negative for the past)
        fmt: strftime-style pattern

    Returns:
        Formatted date string
    """
    return (clock() + timedelta(days=days)).strftime(fmt)

