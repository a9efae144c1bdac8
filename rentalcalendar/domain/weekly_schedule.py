"""
Editing operations for recurring weekly schedules.

Each operation takes a ``WeeklySchedule`` and returns a new one. Edits that
would break the per-day invariant (ranges must be valid and must not overlap)
return ``None`` instead of raising, so interactive editors can simply keep the
previous schedule.
"""

from typing import List, Optional

from .models import DAY_ORDER, WEEKDAYS, TimeRange, WeeklySchedule, format_hour, normalize_day, parse_hour

DEFAULT_OPERATING_START = "06:00"
DEFAULT_OPERATING_END = "22:00"


def time_options(
    operating_start: str = DEFAULT_OPERATING_START,
    operating_end: str = DEFAULT_OPERATING_END
) -> List[str]:
    """
    List the selectable hour strings within the operating-hours window.

    Both ends are inclusive: ``06:00`` to ``22:00`` yields 17 options.
    """
    start_hour = parse_hour(operating_start)
    end_hour = parse_hour(operating_end)

    return [format_hour(hour) for hour in range(start_hour, end_hour + 1)]


def add_range(
    schedule: WeeklySchedule,
    day: str,
    time_range: TimeRange
) -> Optional[WeeklySchedule]:
    """
    Add a time range to a day.

    Returns:
        The new schedule with the day's ranges sorted by start, or None if the
        range is empty/inverted, has a malformed hour, or overlaps an existing
        range on that day.
    """
    existing = schedule.ranges(day)

    try:
        if not time_range.is_valid():
            return None
        if any(time_range.overlaps(current) for current in existing):
            return None
    except ValueError:
        return None

    updated = sorted([*existing, time_range], key=lambda r: r.start_hour)

    return schedule.with_day(day, updated)


def remove_range(
    schedule: WeeklySchedule,
    day: str,
    index: int
) -> Optional[WeeklySchedule]:
    """
    Remove the range at ``index`` from a day.

    Returns None when the index does not point at an existing range.
    """
    existing = schedule.ranges(day)

    if not 0 <= index < len(existing):
        return None

    return schedule.with_day(
        day,
        [time_range for position, time_range in enumerate(existing) if position != index]
    )


def copy_to_weekdays(schedule: WeeklySchedule, source_day: str) -> WeeklySchedule:
    """
    Overwrite Monday through Friday with the source day's ranges.

    Weekend days keep their own ranges.
    """
    source_ranges = schedule.ranges(source_day)
    result = schedule

    for day in WEEKDAYS:
        result = result.with_day(day, source_ranges)

    return result


def copy_to_all_days(schedule: WeeklySchedule, source_day: str) -> WeeklySchedule:
    """Overwrite every other day with the source day's ranges."""
    source_day = normalize_day(source_day)
    source_ranges = schedule.ranges(source_day)
    result = schedule

    for day in DAY_ORDER:
        if day != source_day:
            result = result.with_day(day, source_ranges)

    return result

