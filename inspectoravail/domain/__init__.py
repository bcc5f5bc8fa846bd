"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_resolver import (
    AvailabilityResolver,
    available_dates_in_month,
    check_inspector_availability,
    get_available_times_for_date,
    is_date_available,
)
from .exclusion_filter import DateExclusionFilter, ExclusionSet
from .models import (
    Availability,
    AvailabilityCheck,
    DateOverride,
    DayDefinition,
    DayKey,
    Inspector,
    TimeBlock,
    ViewMode,
    WallClockTime,
)
from .schedule_expander import SLOT_INTERVAL_MINUTES, WeeklyScheduleExpander

__all__ = [
    "Availability",
    "AvailabilityCheck",
    "AvailabilityResolver",
    "DateExclusionFilter",
    "DateOverride",
    "DayDefinition",
    "DayKey",
    "ExclusionSet",
    "Inspector",
    "SLOT_INTERVAL_MINUTES",
    "TimeBlock",
    "ViewMode",
    "WallClockTime",
    "WeeklyScheduleExpander",
    "available_dates_in_month",
    "check_inspector_availability",
    "get_available_times_for_date",
    "is_date_available",
]
