"""
Wall-clock and calendar-date primitives.

Times are plain ``HH:MM`` strings on a 24-hour clock with no timezone
attached; they are converted to minutes since midnight for arithmetic.
Dates are calendar dates (year, month, day). Nothing in here ever converts
an instant to UTC: the day of week comes from the date's own components.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

import pendulum

from .exceptions import MalformedDateError, MalformedTimeError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")


class DayKey(str, Enum):
    """Day of week, indexed with Sunday as 0."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @classmethod
    def from_index(cls, index: int) -> "DayKey":
        """Map a 0-6 index (0 = Sunday) to its day key."""
        if not 0 <= index <= 6:
            raise ValueError(f"Day index must be between 0 and 6, got {index}")
        return _DAY_KEYS[index]

    @property
    def day_index(self) -> int:
        return _DAY_KEYS.index(self)


_DAY_KEYS = (
    DayKey.SUNDAY,
    DayKey.MONDAY,
    DayKey.TUESDAY,
    DayKey.WEDNESDAY,
    DayKey.THURSDAY,
    DayKey.FRIDAY,
    DayKey.SATURDAY,
)


def time_to_minutes(value: str) -> int:
    """
    Convert an ``HH:MM`` string to minutes since midnight.

    Args:
        value: Wall-clock time such as ``"09:30"`` (``"9:30"`` is accepted)

    Returns:
        Integer in ``[0, 1440)``

    Raises:
        MalformedTimeError: If the value is not a valid wall-clock time
    """
    if not isinstance(value, str):
        raise MalformedTimeError(f"Time must be an HH:MM string, got {value!r}")

    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedTimeError(f"Time must be in HH:MM format, got {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise MalformedTimeError(f"Time out of range: {value!r}")

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as a zero-padded ``HH:MM`` string."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise MalformedTimeError(
            f"Minutes must be between 0 and {MINUTES_PER_DAY - 1}, got {minutes}"
        )
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True, order=True)
class WallClockTime:
    """
    A time of day with minute precision and no timezone.

    Invariant: 0 <= minutes < 1440.
    """
    minutes: int

    def __post_init__(self):
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise MalformedTimeError(
                f"Minutes must be between 0 and {MINUTES_PER_DAY - 1}, got {self.minutes}"
            )

    @classmethod
    def parse(cls, value: str) -> "WallClockTime":
        """Parse an ``HH:MM`` string."""
        return cls(time_to_minutes(value))

    def __str__(self) -> str:
        return minutes_to_time(self.minutes)


def as_calendar_date(value: date | str) -> pendulum.Date:
    """
    Reduce a date, datetime or ``YYYY-MM-DD`` string to a calendar date.

    A datetime keeps its own wall-clock components; it is never shifted to
    UTC first, so 23:30 on a Monday stays a Monday.
    """
    if isinstance(value, str):
        return parse_iso_date(value)
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)
    raise MalformedDateError(f"Expected a calendar date, got {value!r}")


def day_key_from_date(value: date) -> DayKey:
    """Return the day key of a calendar date (Sunday = 0)."""
    calendar_date = as_calendar_date(value)
    return DayKey.from_index(calendar_date.isoweekday() % 7)


def format_date_to_iso(value: date) -> str:
    """Format a calendar date as zero-padded ``YYYY-MM-DD``."""
    calendar_date = as_calendar_date(value)
    return f"{calendar_date.year:04d}-{calendar_date.month:02d}-{calendar_date.day:02d}"


def parse_iso_date(value: str) -> pendulum.Date:
    """
    Parse a ``YYYY-MM-DD`` string into a calendar date.

    Raises:
        MalformedDateError: If the string is not a valid date
    """
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except (ValueError, TypeError) as exc:
        raise MalformedDateError(f"Date must be in YYYY-MM-DD format, got {value!r}") from exc
