"""
Human-readable projections of a weekly schedule for previews and listing pages.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import DAY_ORDER, WEEKDAYS, WEEKEND, TimeRange, WeeklySchedule

DAY_ABBREVIATIONS = {
    "mon": "Mon",
    "tue": "Tue",
    "wed": "Wed",
    "thu": "Thu",
    "fri": "Fri",
    "sat": "Sat",
    "sun": "Sun",
}


@dataclass(frozen=True)
class ScheduleSummary:
    """Short description of when an asset is open, e.g. Weekdays / 8am–6pm."""
    days_text: str
    hours_text: Optional[str] = None


@dataclass(frozen=True)
class HoursGroup:
    """Consecutive days sharing identical ranges."""
    days: Tuple[str, ...]
    ranges: Tuple[TimeRange, ...]

    @property
    def label(self) -> str:
        if len(self.days) == 1:
            return DAY_ABBREVIATIONS[self.days[0]]
        if len(self.days) == 7:
            return "Every day"
        if self.days == WEEKDAYS:
            return "Mon – Fri"
        if self.days == WEEKEND:
            return "Sat – Sun"
        return f"{DAY_ABBREVIATIONS[self.days[0]]} – {DAY_ABBREVIATIONS[self.days[-1]]}"

    @property
    def hours_text(self) -> str:
        if not self.ranges:
            return "Closed"
        return ", ".join(
            f"{_hour_with_space(r.start_hour)} – {_hour_with_space(r.end_hour)}"
            for r in self.ranges
        )


def _compact_hour(hour: int) -> str:
    # 8 -> "8am", 18 -> "6pm", 0 and 24 -> "12am"
    hour %= 24
    period = "am" if hour < 12 else "pm"
    return f"{hour % 12 or 12}{period}"


def _hour_with_space(hour: int) -> str:
    hour %= 24
    period = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {period}"


def _days_text(active_days: List[str]) -> str:
    active = set(active_days)

    if len(active) == 7:
        return "Every day"
    if active == set(WEEKDAYS):
        return "Weekdays"
    if active == set(WEEKEND):
        return "Weekends"
    if len(active) <= 3:
        return ", ".join(DAY_ABBREVIATIONS[day] for day in active_days)
    return f"{len(active)} days"


def summarize(schedule: WeeklySchedule) -> Optional[ScheduleSummary]:
    """
    Summarize which days are open and the overall opening hours.

    The hour window only looks at the first range of each open day, so a
    later second range on a day does not widen it.

    Returns:
        A ScheduleSummary, or None if no day has any range
    """
    active_days = schedule.active_days()

    if not active_days:
        return None

    earliest: Optional[int] = None
    latest: Optional[int] = None

    for day in active_days:
        first = schedule.ranges(day)[0]
        if earliest is None or first.start_hour < earliest:
            earliest = first.start_hour
        if latest is None or first.end_hour > latest:
            latest = first.end_hour

    hours_text = None
    if earliest is not None and latest is not None:
        hours_text = f"{_compact_hour(earliest)}–{_compact_hour(latest)}"

    return ScheduleSummary(days_text=_days_text(active_days), hours_text=hours_text)


def group_weekly_hours(schedule: WeeklySchedule) -> List[HoursGroup]:
    """
    Group consecutive days with identical ranges, Monday first.

    Closed days form groups too. Returns an empty list if the schedule has
    no hours at all.
    """
    if not schedule.has_any_hours():
        return []

    groups: List[HoursGroup] = []

    for day in DAY_ORDER:
        ranges = schedule.ranges(day)
        if groups and groups[-1].ranges == ranges:
            last = groups[-1]
            groups[-1] = HoursGroup(days=(*last.days, day), ranges=last.ranges)
        else:
            groups.append(HoursGroup(days=(day,), ranges=ranges))

    return groups
