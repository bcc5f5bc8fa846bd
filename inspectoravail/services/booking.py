"""
Application services for the public booking scheduler.

The service loads an inspector's schedule snapshot and the company view mode
through a schedule source adapter and delegates the actual resolution to the
domain-level ``AvailabilityResolver``. Endpoints stay thin, and the data
dependency can be stubbed in tests through a simple protocol.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Protocol

from ..domain.availability_resolver import AvailabilityResolver
from ..domain.models import Availability, AvailabilityCheck, Inspector, ViewMode

logger = logging.getLogger(__name__)


class ScheduleSourceProtocol(Protocol):
    """Protocol describing the schedule data the service needs."""

    async def get_view_mode(self, company_id: str) -> ViewMode:
        """Return the company's view mode (the default when unset)."""

    async def get_availability(self, company_id: str, inspector_id: str) -> Optional[Availability]:
        """Return the inspector's snapshot, or None when no document exists."""

    async def list_inspectors(self, company_id: str) -> List[Inspector]:
        """Return the company's bookable inspectors."""


class BookingAvailabilityService:
    """
    Orchestrates schedule retrieval and availability resolution.

    Each call fetches a fresh snapshot; nothing is cached between calls.
    """

    def __init__(
        self,
        schedule_source: ScheduleSourceProtocol,
        resolver: AvailabilityResolver | None = None,
        view_mode_override: ViewMode | None = None,
    ) -> None:
        self._schedule_source = schedule_source
        self._resolver = resolver or AvailabilityResolver()
        self._view_mode_override = view_mode_override

    async def available_times(
        self,
        *,
        company_id: str,
        inspector_id: str,
        target_date: date | str,
    ) -> List[str]:
        """Bookable times of one inspector on one date."""
        view_mode, availability = await self.load_snapshot(
            company_id=company_id,
            inspector_id=inspector_id,
        )
        return self._resolver.get_available_times_for_date(target_date, view_mode, availability)

    async def check_time(
        self,
        *,
        company_id: str,
        inspector_id: str,
        target_date: date | str,
        time: str,
    ) -> AvailabilityCheck:
        """Yes/no for one time plus the date's bookable times."""
        view_mode, availability = await self.load_snapshot(
            company_id=company_id,
            inspector_id=inspector_id,
        )
        return self._resolver.check_inspector_availability(
            target_date, time, view_mode, availability
        )

    async def month_view(
        self,
        *,
        company_id: str,
        inspector_id: str,
        year: int,
        month: int,
    ) -> Dict[str, bool]:
        """Per-day availability for a calendar month, keyed by ISO date."""
        view_mode, availability = await self.load_snapshot(
            company_id=company_id,
            inspector_id=inspector_id,
        )
        return self._resolver.available_dates_in_month(year, month, view_mode, availability)

    async def available_inspectors(
        self,
        *,
        company_id: str,
        target_date: date | str,
    ) -> Dict[Inspector, List[str]]:
        """
        Inspectors with at least one bookable time on a date.

        Returns:
            Mapping of inspector to their bookable times, in listing order
        """
        view_mode = await self.resolve_view_mode(company_id)
        inspectors = await self._schedule_source.list_inspectors(company_id)

        result: Dict[Inspector, List[str]] = {}
        for inspector in inspectors:
            availability = await self._fetch_availability(company_id, inspector.inspector_id)
            times = self._resolver.get_available_times_for_date(
                target_date, view_mode, availability
            )
            if times:
                result[inspector] = times

        logger.debug(
            "%d of %d inspectors of %s bookable on %s",
            len(result),
            len(inspectors),
            company_id,
            target_date,
        )
        return result

    async def load_snapshot(
        self,
        *,
        company_id: str,
        inspector_id: str,
    ) -> tuple[ViewMode, Availability]:
        """Fetch the view mode and availability snapshot for one inspector."""
        view_mode = await self.resolve_view_mode(company_id)
        availability = await self._fetch_availability(company_id, inspector_id)
        return view_mode, availability

    async def resolve_view_mode(self, company_id: str) -> ViewMode:
        if self._view_mode_override is not None:
            return self._view_mode_override
        return await self._schedule_source.get_view_mode(company_id)

    async def _fetch_availability(self, company_id: str, inspector_id: str) -> Availability:
        """
        Fetch a snapshot, normalising a missing document to no availability.

        An inspector who never saved a schedule is simply not bookable.
        """
        availability = await self._schedule_source.get_availability(company_id, inspector_id)
        if availability is None:
            logger.info("No availability document for inspector %s in %s", inspector_id, company_id)
            return Availability.empty()
        return availability
