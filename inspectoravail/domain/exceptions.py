"""
Domain-specific exception hierarchy for the availability engine.
"""


class AvailabilityError(Exception):
    """Base class for all application-level errors."""


class MalformedTimeError(AvailabilityError, ValueError):
    """Raised when a wall-clock time is not a valid HH:MM value."""


class MalformedDateError(AvailabilityError, ValueError):
    """Raised when a calendar date is not a valid YYYY-MM-DD value."""


class ScheduleSourceError(AvailabilityError):
    """Raised when schedule documents cannot be loaded or parsed."""
