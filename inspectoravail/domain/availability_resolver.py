"""
Core business logic for resolving an inspector's bookable times.

Pure domain logic: no I/O, no shared state, no timezone handling. Every
query degrades to an empty or negative answer instead of raising, so the
booking page always has something well-defined to render.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List

import pendulum

from .exceptions import MalformedDateError, MalformedTimeError
from .exclusion_filter import DateExclusionFilter, ExclusionSet
from .models import Availability, AvailabilityCheck, DaySchedule, ViewMode
from .schedule_expander import WeeklyScheduleExpander
from .timeutils import WallClockTime, as_calendar_date, day_key_from_date, format_date_to_iso

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _DayResolution:
    schedule: DaySchedule
    exclusions: ExclusionSet
    times: List[WallClockTime]


class AvailabilityResolver:
    """
    Resolves availability for one inspector snapshot.

    Algorithm:
    1. Map the calendar date to its day key (Sunday = 0)
    2. No weekly definition for that day means no availability at all
    3. Expand the day under the company view mode
    4. Subtract the exclusions recorded for that exact date
    5. Return the remaining instants sorted and deduplicated
    """

    def __init__(
        self,
        expander: WeeklyScheduleExpander | None = None,
        exclusion_filter: DateExclusionFilter | None = None,
    ):
        self.expander = expander or WeeklyScheduleExpander()
        self.exclusion_filter = exclusion_filter or DateExclusionFilter()

    def get_available_times_for_date(
        self,
        target_date: date | str,
        view_mode: ViewMode | str,
        availability: Availability,
    ) -> List[str]:
        """
        Get all bookable times for a calendar date.

        Args:
            target_date: Calendar date (a datetime keeps its own local date)
            view_mode: Company view mode
            availability: Inspector snapshot

        Returns:
            ``HH:MM`` strings sorted ascending without duplicates
        """
        resolution = self._resolve_day(target_date, view_mode, availability)
        if resolution is None:
            return []
        return [str(time) for time in resolution.times]

    def check_inspector_availability(
        self,
        target_date: date | str,
        time: str,
        view_mode: ViewMode | str,
        availability: Availability,
    ) -> AvailabilityCheck:
        """
        Check one time on one date and return the date's bookable times.

        The time is tested directly against the weekly definition (exact
        match for TimeSlots, half-open containment for OpenSchedule) and the
        date's exclusions. A block's end time is therefore never available
        here, even though the expander offers it in the list.
        """
        resolution = self._resolve_day(target_date, view_mode, availability)
        if resolution is None:
            return AvailabilityCheck(available=False, available_times=[])

        available_times = [str(slot) for slot in resolution.times]

        try:
            requested = WallClockTime.parse(time)
        except MalformedTimeError as exc:
            logger.warning("Treating malformed requested time %r as unavailable: %s", time, exc)
            return AvailabilityCheck(available=False, available_times=available_times)

        available = (
            resolution.schedule.contains(requested)
            and not resolution.exclusions.is_excluded(requested)
        )
        return AvailabilityCheck(available=available, available_times=available_times)

    def is_date_available(
        self,
        target_date: date | str,
        view_mode: ViewMode | str,
        availability: Availability,
    ) -> bool:
        """Whether the date has at least one bookable time."""
        return bool(self.get_available_times_for_date(target_date, view_mode, availability))

    def available_dates_in_month(
        self,
        year: int,
        month: int,
        view_mode: ViewMode | str,
        availability: Availability,
    ) -> Dict[str, bool]:
        """
        Evaluate ``is_date_available`` for every day of a month.

        Returns:
            Mapping of ``YYYY-MM-DD`` to availability, in calendar order

        Raises:
            MalformedDateError: If year/month do not name a real month
        """
        try:
            current = pendulum.date(year, month, 1)
        except (ValueError, TypeError) as exc:
            raise MalformedDateError(f"Invalid month {year}-{month}: {exc}") from exc

        calendar: Dict[str, bool] = {}
        while current.month == month:
            calendar[format_date_to_iso(current)] = self.is_date_available(
                current, view_mode, availability
            )
            current = current.add(days=1)

        return calendar

    def _resolve_day(
        self,
        target_date: date | str,
        view_mode: ViewMode | str,
        availability: Availability,
    ) -> _DayResolution | None:
        try:
            calendar_date = as_calendar_date(target_date)
        except MalformedDateError as exc:
            logger.warning("Treating malformed date %r as unavailable: %s", target_date, exc)
            return None

        mode = ViewMode.coerce(view_mode)
        day_key = day_key_from_date(calendar_date)
        day = availability.day(day_key)

        if day is None:
            return None

        schedule = day.project(mode)
        candidates = self.expander.expand(schedule)

        iso_date = format_date_to_iso(calendar_date)
        exclusions = self.exclusion_filter.build(availability.overrides_for(iso_date), mode)
        times = sorted(set(self.exclusion_filter.apply(candidates, exclusions)))

        logger.debug(
            "Resolved %s (%s, %s): %d of %d candidates bookable",
            iso_date,
            day_key.value,
            mode.value,
            len(times),
            len(candidates),
        )
        return _DayResolution(schedule=schedule, exclusions=exclusions, times=times)


_default_resolver = AvailabilityResolver()


def get_available_times_for_date(
    target_date: date | str,
    view_mode: ViewMode | str,
    availability: Availability,
) -> List[str]:
    """Module-level shortcut using a resolver with the default 30 minute step."""
    return _default_resolver.get_available_times_for_date(target_date, view_mode, availability)


def check_inspector_availability(
    target_date: date | str,
    time: str,
    view_mode: ViewMode | str,
    availability: Availability,
) -> AvailabilityCheck:
    return _default_resolver.check_inspector_availability(target_date, time, view_mode, availability)


def is_date_available(
    target_date: date | str,
    view_mode: ViewMode | str,
    availability: Availability,
) -> bool:
    return _default_resolver.is_date_available(target_date, view_mode, availability)


def available_dates_in_month(
    year: int,
    month: int,
    view_mode: ViewMode | str,
    availability: Availability,
) -> Dict[str, bool]:
    return _default_resolver.available_dates_in_month(year, month, view_mode, availability)
