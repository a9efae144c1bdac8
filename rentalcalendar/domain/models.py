"""
Domain models for weekly schedules, hourly price tiers, blocked dates and bookings.

All models are immutable value objects. Operations that "edit" them live in the
sibling modules and always return new values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pendulum
from pendulum import Date

DateLike = Union[date, datetime, str]

DAY_ORDER: Tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
WEEKDAYS: Tuple[str, ...] = DAY_ORDER[:5]
WEEKEND: Tuple[str, ...] = DAY_ORDER[5:]

_DAY_ALIASES = {
    "monday": "mon",
    "tuesday": "tue",
    "tues": "tue",
    "wednesday": "wed",
    "thursday": "thu",
    "thur": "thu",
    "thurs": "thu",
    "friday": "fri",
    "saturday": "sat",
    "sunday": "sun",
}


def normalize_day(day: str) -> str:
    """
    Normalize a day key to its three-letter form.

    Accepts both ``"mon"`` and ``"monday"`` style keys (case-insensitive).

    Raises:
        ValueError: If the key does not name a day of the week
    """
    key = day.strip().lower()
    key = _DAY_ALIASES.get(key, key)
    if key not in DAY_ORDER:
        raise ValueError(f"Unknown day key: {day!r}")
    return key


def to_date(value: DateLike) -> Date:
    """
    Convert a date, datetime or ISO string into a pendulum ``Date``.

    Datetimes are truncated to their calendar day in their own timezone.
    """
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)

    if isinstance(value, str):
        try:
            parsed = pendulum.parse(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid date: {value!r}") from exc

        if not isinstance(parsed, date):
            raise ValueError(f"Invalid date: {value!r}")

        return pendulum.date(parsed.year, parsed.month, parsed.day)

    raise ValueError(f"Cannot convert {type(value).__name__} to a date")


def parse_hour(value: str) -> int:
    """Parse an ``"HH:00"`` string into its hour (0-24)."""
    try:
        hour = int(value.split(":")[0])
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid hour string: {value!r}") from exc

    if not 0 <= hour <= 24:
        raise ValueError(f"Hour must be between 0 and 24, got {hour}")
    return hour


def format_hour(hour: int) -> str:
    """Format an hour as an ``"HH:00"`` string."""
    return f"{hour:02d}:00"


@dataclass(frozen=True)
class TimeRange:
    """
    An hour-aligned range within a single day, e.g. ``08:00 - 18:00``.

    Validity (end after start) is not enforced here; editors reject invalid
    ranges when they are added to a schedule.
    """
    start: str
    end: str

    @classmethod
    def from_hours(cls, start_hour: int, end_hour: int) -> "TimeRange":
        """Build a range from two integer hours."""
        return cls(start=format_hour(start_hour), end=format_hour(end_hour))

    @property
    def start_hour(self) -> int:
        return parse_hour(self.start)

    @property
    def end_hour(self) -> int:
        return parse_hour(self.end)

    def is_valid(self) -> bool:
        """Return True when the range ends after it starts."""
        return self.end_hour > self.start_hour

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another (touching ends do not overlap)."""
        return not (self.end_hour <= other.start_hour or self.start_hour >= other.end_hour)

    def hours(self) -> range:
        """Hours of the day covered by this range."""
        return range(self.start_hour, self.end_hour)

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimeRange":
        return cls(start=str(data["start"]), end=str(data["end"]))

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class WeeklySchedule:
    """
    Recurring weekly availability: for each day, ordered non-overlapping ranges.
    """
    mon: Tuple[TimeRange, ...] = ()
    tue: Tuple[TimeRange, ...] = ()
    wed: Tuple[TimeRange, ...] = ()
    thu: Tuple[TimeRange, ...] = ()
    fri: Tuple[TimeRange, ...] = ()
    sat: Tuple[TimeRange, ...] = ()
    sun: Tuple[TimeRange, ...] = ()

    def __post_init__(self):
        for day in DAY_ORDER:
            object.__setattr__(self, day, tuple(getattr(self, day)))

    def ranges(self, day: str) -> Tuple[TimeRange, ...]:
        """Get the ranges configured for a day."""
        return getattr(self, normalize_day(day))

    def with_day(self, day: str, ranges: Iterable[TimeRange]) -> "WeeklySchedule":
        """Return a copy with one day's ranges replaced."""
        return replace(self, **{normalize_day(day): tuple(ranges)})

    def active_days(self) -> List[str]:
        """Days with at least one range, in week order."""
        return [day for day in DAY_ORDER if self.ranges(day)]

    def has_any_hours(self) -> bool:
        return any(self.ranges(day) for day in DAY_ORDER)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            day: [time_range.to_dict() for time_range in self.ranges(day)]
            for day in DAY_ORDER
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "WeeklySchedule":
        """
        Build a schedule from its persisted form.

        Missing days are treated as closed and full day names are accepted.
        """
        days: Dict[str, Tuple[TimeRange, ...]] = {}

        for key, raw_ranges in (data or {}).items():
            ranges = [TimeRange.from_dict(item) for item in (raw_ranges or [])]
            days[normalize_day(key)] = tuple(sorted(ranges, key=lambda r: r.start_hour))

        return cls(**days)


class TierKind(str, Enum):
    """Kind of an hourly price tier."""
    PEAK = "peak"
    OFFPEAK = "offpeak"
    CUSTOM = "custom"

    @classmethod
    def _missing_(cls, value: object) -> Optional["TierKind"]:
        # Accept "off-peak" and "off_peak" spellings
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "").replace("_", "")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclass(frozen=True)
class HourlyPriceTier:
    """
    A named, priced subset of the 24 hours of a day.

    Hours are canonicalized to a sorted tuple without duplicates.
    """
    id: str
    label: str
    hours: Tuple[int, ...]
    price: float
    kind: TierKind = TierKind.CUSTOM

    def __post_init__(self):
        hours = tuple(sorted(set(self.hours)))
        invalid = [hour for hour in hours if not 0 <= hour <= 23]
        if invalid:
            raise ValueError(f"Tier hours must be between 0 and 23, got {invalid}")
        if self.price <= 0:
            raise ValueError(f"Tier price must be positive, got {self.price}")

        object.__setattr__(self, "hours", hours)
        object.__setattr__(self, "kind", TierKind(self.kind))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "hours": list(self.hours),
            "price": self.price,
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HourlyPriceTier":
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            hours=tuple(int(hour) for hour in data.get("hours", [])),
            price=data["price"],
            kind=TierKind(data.get("type", data.get("kind", TierKind.CUSTOM.value))),
        )


@dataclass(frozen=True)
class HourlyPricingConfig:
    """
    Special hourly pricing for an asset.

    Invariant: across all tiers, each hour belongs to at most one tier.
    Unclaimed hours bill at ``default_price``.
    """
    enabled: bool = False
    tiers: Tuple[HourlyPriceTier, ...] = ()
    default_price: float = 0

    def __post_init__(self):
        object.__setattr__(self, "tiers", tuple(self.tiers))

        seen: Dict[int, str] = {}
        for tier in self.tiers:
            for hour in tier.hours:
                if hour in seen:
                    raise ValueError(
                        f"Hour {hour} is claimed by both tier {seen[hour]!r} and tier {tier.id!r}"
                    )
                seen[hour] = tier.id

    def tier(self, tier_id: str) -> Optional[HourlyPriceTier]:
        """Find a tier by id."""
        for tier in self.tiers:
            if tier.id == tier_id:
                return tier
        return None

    def tier_for_hour(self, hour: int) -> Optional[HourlyPriceTier]:
        """Find the tier claiming an hour, if any."""
        for tier in self.tiers:
            if hour in tier.hours:
                return tier
        return None

    def claimed_hours(self) -> List[int]:
        """All hours claimed by any tier, ascending."""
        return sorted(hour for tier in self.tiers for hour in tier.hours)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "tiers": [tier.to_dict() for tier in self.tiers],
            "defaultPrice": self.default_price,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HourlyPricingConfig":
        return cls(
            enabled=bool(data.get("enabled", False)),
            tiers=tuple(HourlyPriceTier.from_dict(item) for item in data.get("tiers", [])),
            default_price=data.get("defaultPrice", data.get("default_price", 0)) or 0,
        )


@dataclass(frozen=True)
class BlockedDateEntry:
    """An explicit owner exclusion of one calendar day."""
    date: Date
    reason: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "date", to_date(self.date))

    def to_dict(self) -> Dict[str, Any]:
        return {"blocked_date": self.date.to_date_string(), "reason": self.reason}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BlockedDateEntry":
        return cls(
            date=data.get("blocked_date", data.get("date")),
            reason=data.get("reason") or None,
        )


@dataclass(frozen=True)
class AvailabilityWindow:
    """
    Optional overall bound outside which the asset is never bookable.

    Either side may be open (None).
    """
    available_from: Optional[Date] = None
    available_to: Optional[Date] = None

    def __post_init__(self):
        if self.available_from is not None:
            object.__setattr__(self, "available_from", to_date(self.available_from))
        if self.available_to is not None:
            object.__setattr__(self, "available_to", to_date(self.available_to))

    def is_active(self) -> bool:
        return self.available_from is not None or self.available_to is not None

    def contains(self, day: DateLike) -> bool:
        """Check whether a day falls inside the window (inclusive)."""
        day = to_date(day)
        if self.available_from is not None and day < self.available_from:
            return False
        if self.available_to is not None and day > self.available_to:
            return False
        return True

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "from": self.available_from.to_date_string() if self.available_from else None,
            "to": self.available_to.to_date_string() if self.available_to else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AvailabilityWindow":
        return cls(
            available_from=data.get("from") or data.get("available_from") or None,
            available_to=data.get("to") or data.get("available_to") or None,
        )


class BookingStatus(str, Enum):
    """Status of a booking as reported by the booking subsystem."""
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class HourlySlot:
    """Hours booked on one day of an hourly booking."""
    date: Date
    hours: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "date", to_date(self.date))
        object.__setattr__(self, "hours", tuple(self.hours))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HourlySlot":
        return cls(date=data["date"], hours=tuple(data.get("slots", data.get("hours", []))))


@dataclass(frozen=True)
class BookingRecord:
    """
    A booking as read from the external booking subsystem.

    The date range is inclusive on both ends.
    """
    id: str
    start_date: Date
    end_date: Date
    status: BookingStatus
    is_hourly: bool = False
    hourly_slots: Tuple[HourlySlot, ...] = ()
    asset_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "start_date", to_date(self.start_date))
        object.__setattr__(self, "end_date", to_date(self.end_date))
        object.__setattr__(self, "status", BookingStatus(self.status))
        object.__setattr__(self, "hourly_slots", tuple(self.hourly_slots))

    def covers(self, day: DateLike) -> bool:
        """Check whether the booking's inclusive date range contains a day."""
        day = to_date(day)
        return self.start_date <= day <= self.end_date

    def dates(self) -> List[Date]:
        """Every calendar day in the booking, in order."""
        days: List[Date] = []
        current = self.start_date
        while current <= self.end_date:
            days.append(current)
            current = current.add(days=1)
        return days

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BookingRecord":
        return cls(
            id=str(data["id"]),
            start_date=data["start_date"],
            end_date=data["end_date"],
            status=BookingStatus(data["status"]),
            is_hourly=bool(data.get("is_hourly_booking", data.get("is_hourly", False))),
            hourly_slots=tuple(
                HourlySlot.from_dict(item) for item in (data.get("hourly_slots") or [])
            ),
            asset_id=data.get("asset_id", data.get("listing_id")),
        )


class DayStatus(str, Enum):
    """Derived availability classification for one calendar day."""
    AVAILABLE = "available"
    BLOCKED = "blocked"
    BOOKED = "booked"
    PENDING = "pending"
    PAST = "past"
    OUTSIDE_WINDOW = "outside_window"
    UNKNOWN = "unknown"
