"""Reference-timezone time helpers."""

from typing import Callable

import pendulum
from pendulum import DateTime

from .constants import REFERENCE_TIMEZONE

Clock = Callable[[], DateTime]


def reference_now(tz: str = REFERENCE_TIMEZONE) -> DateTime:
    """Current time in the reference timezone."""
    return pendulum.now(tz)


def today_start(clock: Clock = reference_now, tz: str = REFERENCE_TIMEZONE) -> DateTime:
    """Midnight of the current day in the reference timezone."""
    return clock().in_timezone(tz).start_of("day")


def parse_date(date: str, tz: str = REFERENCE_TIMEZONE) -> DateTime:
    """Parse YYYY-MM-DD as midnight in the reference timezone.

    Raises ValueError for dates that do not exist on the calendar.
    """
    year, month, day = (int(part) for part in date.split("-"))
    return pendulum.datetime(year, month, day, tz=tz)


def format_date(value: DateTime) -> str:
    return value.format("YYYY-MM-DD")
