"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking import BookingAvailabilityService, ScheduleSourceProtocol

__all__ = ["BookingAvailabilityService", "ScheduleSourceProtocol"]
