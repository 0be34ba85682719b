"""Helper functions for reminder and statistics calculations."""

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

from .status import Status

# Fixed alert policy, not configurable per reminder.
SOON_MILES = 500
SOON_DAYS = 7

DateLike = Union[date, datetime]


def as_datetime(value: DateLike) -> datetime:
    """Promote a date to midnight; datetimes pass through unchanged."""
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def calc_next_service_miles(last_miles: float, interval: float) -> Optional[float]:
    """Next due odometer reading, or None when the mileage interval is disabled."""
    if interval <= 0:
        return None
    return last_miles + interval


def calc_next_service_date(
    last_date: Optional[DateLike], interval_days: int
) -> Optional[datetime]:
    """
    Next due moment: last service + interval days.

    None when the day interval is disabled or there is no last service date.
    """
    if interval_days <= 0 or last_date is None:
        return None
    return as_datetime(last_date) + timedelta(days=interval_days)


def calc_days_until(due: datetime, now: DateLike) -> int:
    """Whole days from now until due, floored (negative once past due)."""
    seconds = (due - as_datetime(now)).total_seconds()
    return math.floor(seconds / 3600 / 24)


def check_miles_status(miles_to_go: float) -> Status:
    """Status from the mileage dimension alone."""
    if miles_to_go <= 0:
        return Status.OVERDUE
    if miles_to_go < SOON_MILES:
        return Status.SOON
    return Status.UPCOMING


def check_days_status(days_until: int) -> Status:
    """Status from the calendar dimension alone."""
    if days_until <= 0:
        return Status.OVERDUE
    if days_until < SOON_DAYS:
        return Status.SOON
    return Status.UPCOMING


def month_key(value: DateLike) -> str:
    """Calendar month bucket key, e.g. '2024-01'."""
    return f"{value.year:04d}-{value.month:02d}"


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator
    return 0.0
