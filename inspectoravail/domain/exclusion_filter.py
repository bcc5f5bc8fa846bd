"""
Removal of date-specific exclusions from a day's candidate instants.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Sequence, Tuple

from .exceptions import MalformedTimeError
from .models import DateOverride, ViewMode
from .timeutils import WallClockTime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExclusionSet:
    """
    The exclusions that apply to one calendar date under one view mode.

    In TimeSlots mode an exclusion is the single slot named by its start. In
    OpenSchedule mode it is the half-open window ``[start, end)``. Several
    exclusions compose by union.
    """
    view_mode: ViewMode
    slots: FrozenSet[WallClockTime] = frozenset()
    windows: Tuple[Tuple[WallClockTime, WallClockTime], ...] = ()
    blocks_whole_day: bool = False

    def is_excluded(self, time: WallClockTime) -> bool:
        if self.blocks_whole_day:
            return True
        if self.view_mode == ViewMode.TIME_SLOTS:
            return time in self.slots
        return any(start <= time < end for start, end in self.windows)

    def is_empty(self) -> bool:
        return not (self.blocks_whole_day or self.slots or self.windows)


class DateExclusionFilter:
    """
    Carves date-specific exclusions out of the weekly candidates.

    Exclusions only ever subtract. A date without exclusions passes through
    untouched, and an exclusion that cannot be parsed blocks the whole date
    rather than being skipped.
    """

    def build(self, overrides: Sequence[DateOverride], view_mode: ViewMode) -> ExclusionSet:
        """
        Parse the overrides of one date into an ``ExclusionSet``.

        Args:
            overrides: Exclusions already matched to the target date
            view_mode: Company view mode deciding how an exclusion is read
        """
        if not overrides:
            return ExclusionSet(view_mode=view_mode)

        try:
            if view_mode == ViewMode.TIME_SLOTS:
                slots = frozenset(WallClockTime.parse(entry.start) for entry in overrides)
                return ExclusionSet(view_mode=view_mode, slots=slots)

            windows = tuple(
                (WallClockTime.parse(entry.start), WallClockTime.parse(entry.end))
                for entry in overrides
            )
            return ExclusionSet(view_mode=view_mode, windows=windows)
        except MalformedTimeError as exc:
            logger.warning(
                "Blocking %s entirely, unreadable date exclusion: %s",
                overrides[0].date,
                exc,
            )
            return ExclusionSet(view_mode=view_mode, blocks_whole_day=True)

    def apply(
        self,
        candidates: Sequence[WallClockTime],
        exclusions: ExclusionSet,
    ) -> List[WallClockTime]:
        """Drop every candidate matched by any exclusion."""
        if exclusions.is_empty():
            return list(candidates)

        remaining = [time for time in candidates if not exclusions.is_excluded(time)]

        logger.debug(
            "Date exclusions removed %d of %d candidates",
            len(candidates) - len(remaining),
            len(candidates),
        )
        return remaining

    def filter(
        self,
        candidates: Sequence[WallClockTime],
        overrides: Sequence[DateOverride],
        view_mode: ViewMode,
    ) -> List[WallClockTime]:
        """Build the exclusions for a date and apply them in one step."""
        return self.apply(candidates, self.build(overrides, view_mode))
