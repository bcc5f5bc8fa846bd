"""
Domain models for weekly schedules, date exclusions and availability results.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Tuple, Union

from .exceptions import MalformedTimeError
from .timeutils import DayKey, WallClockTime

logger = logging.getLogger(__name__)

__all__ = [
    "Availability",
    "AvailabilityCheck",
    "BlockSchedule",
    "DateOverride",
    "DayDefinition",
    "DayKey",
    "DaySchedule",
    "Inspector",
    "OpenBlock",
    "SlotSchedule",
    "TimeBlock",
    "ViewMode",
    "WallClockTime",
]


class ViewMode(str, Enum):
    """Company-wide choice of which weekly representation is authoritative."""

    TIME_SLOTS = "timeSlots"
    OPEN_SCHEDULE = "openSchedule"

    @classmethod
    def default(cls) -> "ViewMode":
        """View mode used when a company has no explicit setting."""
        return cls.OPEN_SCHEDULE

    @classmethod
    def coerce(cls, value: object) -> "ViewMode":
        """Resolve a stored setting, falling back to the default for anything unknown."""
        if isinstance(value, cls):
            return value
        for mode in cls:
            if value == mode.value:
                return mode
        return cls.default()


@dataclass(frozen=True)
class TimeBlock:
    """
    A wall-clock interval as stored, ``{start, end}`` in ``HH:MM``.

    Used both for recurring open blocks and for date exclusions. The strings
    are kept as-is; they are only parsed when a block is resolved.
    """
    start: str
    end: str

    def resolve(self) -> "OpenBlock":
        """
        Parse the block into an ``OpenBlock``.

        Raises:
            MalformedTimeError: If either bound is not a valid time
            ValueError: If start is not before end
        """
        return OpenBlock(start=WallClockTime.parse(self.start), end=WallClockTime.parse(self.end))


@dataclass(frozen=True)
class OpenBlock:
    """
    A parsed half-open interval ``[start, end)``.

    Invariant: start must be before end.
    """
    start: WallClockTime
    end: WallClockTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def contains(self, time: WallClockTime) -> bool:
        """Half-open membership: start inclusive, end exclusive."""
        return self.start <= time < self.end


@dataclass(frozen=True)
class DateOverride:
    """A one-off exclusion on a concrete calendar date."""
    date: str  # YYYY-MM-DD
    start: str
    end: str


@dataclass(frozen=True)
class SlotSchedule:
    """A day resolved in TimeSlots mode: discrete appointment start times."""
    slots: Tuple[WallClockTime, ...]

    def contains(self, time: WallClockTime) -> bool:
        return time in self.slots


@dataclass(frozen=True)
class BlockSchedule:
    """A day resolved in OpenSchedule mode: continuous open ranges."""
    blocks: Tuple[OpenBlock, ...]

    def contains(self, time: WallClockTime) -> bool:
        return any(block.contains(time) for block in self.blocks)


DaySchedule = Union[SlotSchedule, BlockSchedule]


@dataclass(frozen=True)
class DayDefinition:
    """
    One day of an inspector's weekly availability as persisted.

    Both representations are stored side by side; ``project`` picks the one
    the view mode makes authoritative, so callers never mix them.
    """
    time_slots: Tuple[str, ...] = ()
    open_schedule: Tuple[TimeBlock, ...] = ()

    def project(self, view_mode: ViewMode) -> DaySchedule:
        """
        Resolve the authoritative representation for a view mode.

        Entries that cannot be parsed are dropped and logged; the remaining
        entries still resolve.
        """
        if view_mode == ViewMode.TIME_SLOTS:
            return SlotSchedule(slots=tuple(self._parse_slots()))
        return BlockSchedule(blocks=tuple(self._parse_blocks()))

    def _parse_slots(self) -> List[WallClockTime]:
        slots: List[WallClockTime] = []
        for raw in self.time_slots:
            try:
                slots.append(WallClockTime.parse(raw))
            except MalformedTimeError as exc:
                logger.warning("Ignoring malformed time slot %r: %s", raw, exc)
        return slots

    def _parse_blocks(self) -> List[OpenBlock]:
        blocks: List[OpenBlock] = []
        for block in self.open_schedule:
            try:
                blocks.append(block.resolve())
            except ValueError as exc:
                logger.warning("Ignoring invalid open block %s-%s: %s", block.start, block.end, exc)
        return blocks


@dataclass(frozen=True)
class Availability:
    """
    Snapshot of one inspector's weekly schedule plus date exclusions.

    Built by the caller for a single resolution and never mutated by the
    engine. A day key missing from ``days`` means no availability that day.
    """
    days: Mapping[DayKey, DayDefinition] = field(default_factory=dict)
    date_specific: Tuple[DateOverride, ...] = ()

    @classmethod
    def empty(cls) -> "Availability":
        return cls()

    def day(self, day_key: DayKey) -> DayDefinition | None:
        return self.days.get(day_key)

    def overrides_for(self, iso_date: str) -> List[DateOverride]:
        """Return the exclusions recorded for one ``YYYY-MM-DD`` date."""
        # Exact string match. The document adapters store dates zero padded.
        return [entry for entry in self.date_specific if entry.date == iso_date]


@dataclass
class AvailabilityCheck:
    """
    Result of a point-in-time query.

    ``available_times`` is the full bookable list for the date so a picker
    can be rendered from the same response.
    """
    available: bool
    available_times: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {"available": self.available, "availableTimes": list(self.available_times)}


@dataclass(frozen=True)
class Inspector:
    """An inspector who can be booked through the public scheduler."""
    inspector_id: str
    name: str = ""

    def display_name(self) -> str:
        return self.name or self.inspector_id
