"""
Pydantic models for the persisted availability and company documents.

The documents use the camelCase field names of the stored collections. They
are validated here and converted into immutable domain snapshots; nothing in
this module touches a database.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.exceptions import MalformedDateError, MalformedTimeError, ScheduleSourceError
from ..domain.models import (
    Availability,
    DateOverride,
    DayDefinition,
    DayKey,
    Inspector,
    TimeBlock,
    ViewMode,
)
from ..domain.timeutils import format_date_to_iso, minutes_to_time

logger = logging.getLogger(__name__)


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _wall_clock_string(value: Any) -> Any:
    """
    Undo YAML 1.1 sexagesimal integers.

    An unquoted ``10:00`` in a YAML file loads as the integer 600 (minutes).
    Values outside one day keep their digits and are dropped later as
    malformed times.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return minutes_to_time(value)
        except MalformedTimeError:
            return str(value)
    return value


class TimeBlockDocument(_Document):
    """Stored ``{start, end}`` pair."""
    start: str
    end: str

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_times(cls, value: Any) -> Any:
        return _wall_clock_string(value)

    def to_domain(self) -> TimeBlock:
        return TimeBlock(start=self.start, end=self.end)


class DayDocument(_Document):
    """One entry of the ``days`` array."""
    day: str
    time_slots: List[str] = Field(default_factory=list, alias="timeSlots")
    open_schedule: List[TimeBlockDocument] = Field(default_factory=list, alias="openSchedule")

    @field_validator("time_slots", mode="before")
    @classmethod
    def validate_time_slots(cls, value: Any) -> Any:
        """Stored documents may carry null for an unused representation."""
        if value is None:
            return []
        if isinstance(value, list):
            return [_wall_clock_string(slot) for slot in value]
        return value

    @field_validator("open_schedule", mode="before")
    @classmethod
    def missing_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def day_key(self) -> DayKey | None:
        try:
            return DayKey(self.day.strip().lower())
        except ValueError:
            return None

    def to_domain(self) -> DayDefinition:
        return DayDefinition(
            time_slots=tuple(self.time_slots),
            open_schedule=tuple(block.to_domain() for block in self.open_schedule),
        )


class DateOverrideDocument(_Document):
    """One entry of the ``dateSpecific`` array."""
    date: str
    start: str
    end: str

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: Any) -> Any:
        """
        Store the zero-padded ``YYYY-MM-DD`` form.

        Unquoted YAML dates load as date objects, and ``2025-3-10`` must match
        the same day as ``2025-03-10``. Unreadable values are kept as written
        and never match a queried date.
        """
        try:
            return format_date_to_iso(value)
        except MalformedDateError:
            return value

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_times(cls, value: Any) -> Any:
        return _wall_clock_string(value)

    def to_domain(self) -> DateOverride:
        return DateOverride(date=self.date, start=self.start, end=self.end)


def _stringify_id(value: Any) -> Any:
    return None if value is None else str(value)


class AvailabilityDocument(_Document):
    """An inspector's weekly availability document."""
    company: Optional[str] = None
    inspector: Optional[str] = None
    days: List[DayDocument] = Field(default_factory=list)
    date_specific: List[DateOverrideDocument] = Field(default_factory=list, alias="dateSpecific")

    @field_validator("company", "inspector", mode="before")
    @classmethod
    def validate_ids(cls, value: Any) -> Any:
        """Object ids arrive as strings or id objects; keep their string form."""
        return _stringify_id(value)

    @field_validator("days", "date_specific", mode="before")
    @classmethod
    def missing_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_availability(self) -> Availability:
        """
        Build the immutable snapshot the resolver works on.

        Unknown day names are skipped. When a day appears twice the later
        entry wins.
        """
        days: Dict[DayKey, DayDefinition] = {}
        for day_doc in self.days:
            day_key = day_doc.day_key()
            if day_key is None:
                logger.warning(
                    "Ignoring unknown day %r in availability of inspector %s",
                    day_doc.day,
                    self.inspector,
                )
                continue
            days[day_key] = day_doc.to_domain()

        return Availability(
            days=days,
            date_specific=tuple(entry.to_domain() for entry in self.date_specific),
        )


class CompanyDocument(_Document):
    """The company fields the scheduler needs."""
    id: str = Field(alias="_id")
    name: str = ""
    availability_view_mode: ViewMode = Field(
        default_factory=ViewMode.default, alias="availabilityViewMode"
    )

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, value: Any) -> Any:
        return _stringify_id(value)

    @field_validator("availability_view_mode", mode="before")
    @classmethod
    def validate_view_mode(cls, value: Any) -> ViewMode:
        """Anything other than a known mode falls back to the default."""
        return ViewMode.coerce(value)


class InspectorDocument(_Document):
    """The user fields identifying a bookable inspector."""
    id: str = Field(alias="_id")
    company: Optional[str] = None
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("id", "company", mode="before")
    @classmethod
    def validate_ids(cls, value: Any) -> Any:
        return _stringify_id(value)

    def to_domain(self) -> Inspector:
        name = f"{self.first_name} {self.last_name}".strip()
        return Inspector(inspector_id=self.id, name=name)


def availability_from_document(document: Optional[Mapping[str, Any]]) -> Availability:
    """
    Convert a raw availability document into a domain snapshot.

    Args:
        document: Stored document, or None when the inspector has none

    Returns:
        Availability (empty when no document exists)

    Raises:
        ScheduleSourceError: If the document does not have the expected shape
    """
    if document is None:
        return Availability.empty()

    try:
        return AvailabilityDocument.model_validate(document).to_availability()
    except ValidationError as exc:
        raise ScheduleSourceError(f"Invalid availability document: {exc}") from exc


def view_mode_from_company(document: Optional[Mapping[str, Any]]) -> ViewMode:
    """Read the company's view mode, defaulting when the company or field is absent."""
    if document is None:
        return ViewMode.default()
    return ViewMode.coerce(document.get("availabilityViewMode"))
