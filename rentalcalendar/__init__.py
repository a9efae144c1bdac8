"""
rentalcalendar - availability, hourly schedules and tier pricing for rentable assets.
"""

from .domain import (
    AssetConfiguration,
    AvailabilityResolver,
    DateBlockingStore,
    DayStatus,
    HourlyPricingConfig,
    WeeklySchedule,
)

__version__ = "0.1.0"

__all__ = [
    "AssetConfiguration",
    "AvailabilityResolver",
    "DateBlockingStore",
    "DayStatus",
    "HourlyPricingConfig",
    "WeeklySchedule",
    "__version__",
]
