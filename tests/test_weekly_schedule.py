"""
Tests for weekly schedule editing.
"""

import itertools
import random

from rentalcalendar.domain.models import DAY_ORDER, TimeRange, WeeklySchedule
from rentalcalendar.domain.weekly_schedule import (
    add_range,
    copy_to_all_days,
    copy_to_weekdays,
    remove_range,
    time_options,
)


class TestAddRange:
    """Tests for add_range."""

    def test_add_range_sorts_by_start(self):
        """Test ranges are kept in ascending start order."""
        schedule = add_range(WeeklySchedule(), "mon", TimeRange.from_hours(14, 18))
        schedule = add_range(schedule, "mon", TimeRange.from_hours(8, 12))

        assert schedule.ranges("mon") == (
            TimeRange.from_hours(8, 12),
            TimeRange.from_hours(14, 18),
        )

    def test_adjacent_ranges_are_accepted(self):
        """Test that a range starting where another ends is not an overlap."""
        schedule = add_range(WeeklySchedule(), "tue", TimeRange.from_hours(8, 12))
        schedule = add_range(schedule, "tue", TimeRange.from_hours(12, 16))

        assert schedule is not None
        assert len(schedule.ranges("tue")) == 2

    def test_overlapping_range_is_rejected(self):
        """Test overlapping ranges return None and leave the input untouched."""
        schedule = add_range(WeeklySchedule(), "wed", TimeRange.from_hours(8, 12))

        assert add_range(schedule, "wed", TimeRange.from_hours(11, 13)) is None
        assert add_range(schedule, "wed", TimeRange.from_hours(6, 20)) is None
        assert schedule.ranges("wed") == (TimeRange.from_hours(8, 12),)

    def test_inverted_or_empty_range_is_rejected(self):
        """Test malformed ranges are ignored."""
        assert add_range(WeeklySchedule(), "thu", TimeRange.from_hours(18, 8)) is None
        assert add_range(WeeklySchedule(), "thu", TimeRange.from_hours(9, 9)) is None

    def test_malformed_hours_are_ignored(self):
        """Test unparsable or out-of-day hour strings are rejected, not raised."""
        schedule = add_range(WeeklySchedule(), "fri", TimeRange.from_hours(8, 12))

        assert add_range(schedule, "fri", TimeRange("8am", "10:00")) is None
        assert add_range(schedule, "fri", TimeRange("08:00", "25:00")) is None
        assert add_range(WeeklySchedule(), "fri", TimeRange("", "10:00")) is None
        assert schedule.ranges("fri") == (TimeRange.from_hours(8, 12),)

    def test_other_days_unaffected(self):
        """Test overlap is only checked within the same day."""
        schedule = add_range(WeeklySchedule(), "mon", TimeRange.from_hours(8, 12))
        schedule = add_range(schedule, "tue", TimeRange.from_hours(8, 12))

        assert schedule.active_days() == ["mon", "tue"]

    def test_random_sequences_never_overlap(self):
        """Test no sequence of add_range calls produces overlapping ranges."""
        rng = random.Random(1234)
        schedule = WeeklySchedule()

        for _ in range(500):
            day = rng.choice(DAY_ORDER)
            start = rng.randint(0, 23)
            end = rng.randint(0, 24)
            schedule = add_range(schedule, day, TimeRange.from_hours(start, end)) or schedule

        for day in DAY_ORDER:
            ranges = schedule.ranges(day)
            for first, second in itertools.combinations(ranges, 2):
                assert not first.overlaps(second)
            assert list(ranges) == sorted(ranges, key=lambda r: r.start_hour)


class TestRemoveAndCopy:
    """Tests for remove_range and the copy helpers."""

    def _schedule(self) -> WeeklySchedule:
        return WeeklySchedule(
            mon=(TimeRange.from_hours(8, 12), TimeRange.from_hours(13, 17)),
            sat=(TimeRange.from_hours(10, 14),),
            sun=(TimeRange.from_hours(11, 15),),
        )

    def test_remove_range_by_index(self):
        """Test removing a range by its position."""
        schedule = remove_range(self._schedule(), "mon", 0)

        assert schedule.ranges("mon") == (TimeRange.from_hours(13, 17),)
        assert schedule.ranges("sat") == (TimeRange.from_hours(10, 14),)

    def test_remove_range_bad_index(self):
        """Test an out-of-range index returns None."""
        assert remove_range(self._schedule(), "mon", 5) is None
        assert remove_range(self._schedule(), "tue", 0) is None

    def test_copy_to_weekdays_overwrites(self):
        """Test weekdays are overwritten and weekends kept."""
        schedule = copy_to_weekdays(self._schedule(), "sat")

        for day in ("mon", "tue", "wed", "thu", "fri"):
            assert schedule.ranges(day) == (TimeRange.from_hours(10, 14),)
        assert schedule.ranges("sun") == (TimeRange.from_hours(11, 15),)

    def test_copy_to_all_days_overwrites_other_days(self):
        """Test every other day receives the source day's ranges."""
        source = self._schedule()
        schedule = copy_to_all_days(source, "sun")

        for day in DAY_ORDER:
            assert schedule.ranges(day) == (TimeRange.from_hours(11, 15),)
        assert source.ranges("mon") == (TimeRange.from_hours(8, 12), TimeRange.from_hours(13, 17))

    def test_copy_empty_day_clears_targets(self):
        """Test copying an empty day empties the targets."""
        schedule = copy_to_all_days(self._schedule(), "wed")

        assert not schedule.has_any_hours()


def test_time_options_inclusive():
    """Test hour options cover the operating window inclusively."""
    options = time_options("06:00", "22:00")

    assert options[0] == "06:00"
    assert options[-1] == "22:00"
    assert len(options) == 17
