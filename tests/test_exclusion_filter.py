"""
Tests for the date exclusion filter.
"""

from inspectoravail.domain.exclusion_filter import DateExclusionFilter
from inspectoravail.domain.models import DateOverride, ViewMode, WallClockTime


def times(*values: str) -> list:
    return [WallClockTime.parse(value) for value in values]


def as_strings(values) -> list:
    return [str(value) for value in values]


DATE = "2025-03-10"


class TestPassThrough:
    """Tests for dates without exclusions."""

    def test_no_overrides_passes_candidates_through(self):
        """Test that nothing is removed when the date has no overrides."""
        candidates = times("09:00", "09:30", "10:00")

        result = DateExclusionFilter().filter(candidates, [], ViewMode.OPEN_SCHEDULE)

        assert result == candidates

    def test_empty_exclusion_set(self):
        """Test the empty set reports itself as empty."""
        exclusions = DateExclusionFilter().build([], ViewMode.TIME_SLOTS)

        assert exclusions.is_empty()
        assert not exclusions.is_excluded(WallClockTime.parse("09:00"))


class TestTimeSlotsExclusions:
    """Tests for TimeSlots exclusions (matched by start only)."""

    def test_removes_slot_equal_to_start(self):
        """Test that the slot named by the override start is removed."""
        overrides = [DateOverride(DATE, "10:00", "10:30")]

        result = DateExclusionFilter().filter(
            times("09:00", "10:00", "11:00"), overrides, ViewMode.TIME_SLOTS
        )

        assert as_strings(result) == ["09:00", "11:00"]

    def test_end_is_ignored(self):
        """Test that a wide override still only removes its start slot."""
        overrides = [DateOverride(DATE, "09:00", "17:00")]

        result = DateExclusionFilter().filter(
            times("09:00", "10:00", "11:00"), overrides, ViewMode.TIME_SLOTS
        )

        assert as_strings(result) == ["10:00", "11:00"]

    def test_malformed_end_is_irrelevant(self):
        """Test that only the start has to be readable in TimeSlots mode."""
        overrides = [DateOverride(DATE, "10:00", "")]

        result = DateExclusionFilter().filter(
            times("09:00", "10:00"), overrides, ViewMode.TIME_SLOTS
        )

        assert as_strings(result) == ["09:00"]

    def test_spelling_differences_still_match(self):
        """Test that 9:00 and 09:00 name the same slot."""
        overrides = [DateOverride(DATE, "9:00", "9:30")]

        result = DateExclusionFilter().filter(
            times("09:00", "10:00"), overrides, ViewMode.TIME_SLOTS
        )

        assert as_strings(result) == ["10:00"]


class TestOpenScheduleExclusions:
    """Tests for OpenSchedule exclusions (half-open windows)."""

    def test_window_is_half_open(self):
        """Test that the start is removed and the end kept."""
        overrides = [DateOverride(DATE, "10:00", "10:30")]

        result = DateExclusionFilter().filter(
            times("09:30", "10:00", "10:30", "11:00"), overrides, ViewMode.OPEN_SCHEDULE
        )

        assert as_strings(result) == ["09:30", "10:30", "11:00"]

    def test_overlapping_overrides_compose_by_union(self):
        """Test that overlapping windows are simply combined."""
        overrides = [
            DateOverride(DATE, "09:00", "10:15"),
            DateOverride(DATE, "10:00", "11:00"),
        ]

        result = DateExclusionFilter().filter(
            times("09:00", "09:30", "10:00", "10:30", "11:00"), overrides, ViewMode.OPEN_SCHEDULE
        )

        assert as_strings(result) == ["11:00"]

    def test_inverted_window_excludes_nothing(self):
        """Test that a window with start after end matches no instant."""
        overrides = [DateOverride(DATE, "11:00", "10:00")]

        result = DateExclusionFilter().filter(
            times("10:00", "10:30"), overrides, ViewMode.OPEN_SCHEDULE
        )

        assert as_strings(result) == ["10:00", "10:30"]

    def test_is_excluded_point_query(self):
        """Test the single-instant rule matches the list rule."""
        exclusions = DateExclusionFilter().build(
            [DateOverride(DATE, "12:00", "13:00")], ViewMode.OPEN_SCHEDULE
        )

        assert exclusions.is_excluded(WallClockTime.parse("12:00"))
        assert exclusions.is_excluded(WallClockTime.parse("12:59"))
        assert not exclusions.is_excluded(WallClockTime.parse("13:00"))


class TestUnreadableExclusions:
    """Tests for exclusions that cannot be parsed."""

    def test_unreadable_window_blocks_the_whole_date(self, caplog):
        """Test that an unreadable exclusion never becomes bookable time."""
        overrides = [
            DateOverride(DATE, "10:00", "10:30"),
            DateOverride(DATE, "noon", "13:00"),
        ]

        exclusions = DateExclusionFilter().build(overrides, ViewMode.OPEN_SCHEDULE)
        result = DateExclusionFilter().apply(times("09:00", "15:00"), exclusions)

        assert exclusions.blocks_whole_day
        assert result == []
        assert "Blocking 2025-03-10 entirely" in caplog.text

    def test_unreadable_slot_blocks_the_whole_date(self):
        """Test the same rule in TimeSlots mode."""
        overrides = [DateOverride(DATE, "", "")]

        result = DateExclusionFilter().filter(
            times("09:00", "10:00"), overrides, ViewMode.TIME_SLOTS
        )

        assert result == []
