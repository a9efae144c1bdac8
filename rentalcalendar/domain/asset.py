"""
Per-asset configuration bundle persisted by the configuration repository.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .date_blocking import DateBlockingStore
from .models import AvailabilityWindow, HourlyPricingConfig, WeeklySchedule


@dataclass(frozen=True)
class AssetConfiguration:
    """
    Everything an owner configures for one asset.

    ``version`` is a monotonically increasing stamp assigned by the repository
    on every save. Saves are last-write-wins; the stamp only tells a writer
    whether it overwrote something newer than what it loaded.
    """
    asset_id: str
    schedule: WeeklySchedule = field(default_factory=WeeklySchedule)
    pricing: Optional[HourlyPricingConfig] = None
    blocking: DateBlockingStore = field(default_factory=DateBlockingStore)
    window: Optional[AvailabilityWindow] = None
    version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "version": self.version,
            "hourly_schedule": self.schedule.to_dict(),
            "hourly_special_pricing": self.pricing.to_dict() if self.pricing else None,
            "blocked_dates": self.blocking.to_list(),
            "availability_window": self.window.to_dict() if self.window else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetConfiguration":
        pricing = data.get("hourly_special_pricing")
        window = data.get("availability_window")

        return cls(
            asset_id=str(data["asset_id"]),
            schedule=WeeklySchedule.from_dict(data.get("hourly_schedule")),
            pricing=HourlyPricingConfig.from_dict(pricing) if pricing else None,
            blocking=DateBlockingStore.from_list(data.get("blocked_dates")),
            window=AvailabilityWindow.from_dict(window) if window else None,
            version=int(data.get("version", 0)),
        )
