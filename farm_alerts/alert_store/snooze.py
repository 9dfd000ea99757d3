"""Snooze expiry calculation.

Durations are calendar arithmetic on the caller's own datetime: days are
added to the date (wall clock preserved) and months move the month number,
clamping the day to the end of a shorter month (Jan 31 + 3 months is
Apr 30).
"""

import calendar
from datetime import datetime, timedelta

from .errors import InvalidDurationError

SNOOZE_ONE_DAY = "1-day"
SNOOZE_THREE_DAYS = "3-days"
SNOOZE_NEXT_SEASON = "next-season"

# token -> (days, months)
SNOOZE_DURATIONS: dict[str, tuple[int, int]] = {
    SNOOZE_ONE_DAY: (1, 0),
    SNOOZE_THREE_DAYS: (3, 0),
    SNOOZE_NEXT_SEASON: (0, 3),
}


def add_months(value: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def compute_snooze_expiry(now: datetime, duration_token: str) -> datetime:
    """Map a snooze duration token to a concrete expiry timestamp.

    Args:
        now: Reference time; the result keeps its timezone.
        duration_token: One of "1-day", "3-days", "next-season".

    Raises:
        InvalidDurationError: For any other token.
    """
    try:
        days, months = SNOOZE_DURATIONS[duration_token]
    except (KeyError, TypeError):
        raise InvalidDurationError(duration_token) from None

    expiry = now + timedelta(days=days)
    if months:
        expiry = add_months(expiry, months)
    return expiry
