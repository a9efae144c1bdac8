"""
Domain layer - Pure business logic without external dependencies.
"""

from .asset import AssetConfiguration
from .availability import AvailabilityResolver
from .date_blocking import DateBlockingStore
from .models import (
    AvailabilityWindow,
    BlockedDateEntry,
    BookingRecord,
    BookingStatus,
    DayStatus,
    HourlyPriceTier,
    HourlyPricingConfig,
    HourlySlot,
    TierKind,
    TimeRange,
    WeeklySchedule,
)
from .schedule_summary import ScheduleSummary, summarize

__all__ = [
    "AssetConfiguration",
    "AvailabilityResolver",
    "AvailabilityWindow",
    "BlockedDateEntry",
    "BookingRecord",
    "BookingStatus",
    "DateBlockingStore",
    "DayStatus",
    "HourlyPriceTier",
    "HourlyPricingConfig",
    "HourlySlot",
    "ScheduleSummary",
    "TierKind",
    "TimeRange",
    "WeeklySchedule",
    "summarize",
]
