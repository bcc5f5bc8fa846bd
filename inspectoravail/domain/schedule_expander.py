"""
Expansion of one day's recurring definition into bookable instants.
"""

import logging
from typing import List

from .models import BlockSchedule, DayDefinition, DaySchedule, OpenBlock, SlotSchedule, ViewMode
from .timeutils import MINUTES_PER_DAY, WallClockTime

logger = logging.getLogger(__name__)

SLOT_INTERVAL_MINUTES = 30


class WeeklyScheduleExpander:
    """
    Turns a day of the weekly schedule into an ordered list of start times.

    TimeSlots mode returns the stored slots sorted, nothing is synthesised.
    OpenSchedule mode walks every block from its start in fixed steps while
    strictly before its end, then also offers the block's literal end time
    when the steps did not already land on it.

    The end time is offered even though a booking starting there has no
    room before the block closes. That matches what inspectors see in the
    booking page today and is left as a policy decision for the callers.
    """

    def __init__(self, interval_minutes: int = SLOT_INTERVAL_MINUTES):
        if not 0 < interval_minutes <= MINUTES_PER_DAY:
            raise ValueError(
                f"interval_minutes must be between 1 and {MINUTES_PER_DAY}, got {interval_minutes}"
            )
        self.interval_minutes = interval_minutes

    def expand_day(self, day: DayDefinition, view_mode: ViewMode) -> List[WallClockTime]:
        """Expand a persisted day definition under the given view mode."""
        return self.expand(day.project(view_mode))

    def expand(self, schedule: DaySchedule) -> List[WallClockTime]:
        """
        Expand a projected day schedule.

        Returns:
            Candidate instants sorted ascending and free of duplicates
        """
        if isinstance(schedule, SlotSchedule):
            return sorted(set(schedule.slots))

        if isinstance(schedule, BlockSchedule):
            candidates: List[WallClockTime] = []
            for block in schedule.blocks:
                candidates.extend(self._expand_block(block))
            return sorted(set(candidates))

        raise TypeError(f"Unsupported day schedule: {type(schedule).__name__}")

    def _expand_block(self, block: OpenBlock) -> List[WallClockTime]:
        """
        Generate the instants of a single open block.

        Example with a 30 minute interval:
        Block: 09:00 - 09:45
        Result: [09:00, 09:30, 09:45]
        """
        times: List[WallClockTime] = []

        minutes = block.start.minutes
        while minutes < block.end.minutes:
            times.append(WallClockTime(minutes))
            minutes += self.interval_minutes

        if not times or times[-1] != block.end:
            times.append(block.end)

        logger.debug("Expanded block %s-%s into %d instants", block.start, block.end, len(times))
        return times
