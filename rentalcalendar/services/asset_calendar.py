"""
Application service for asset availability calendars.

The service coordinates loading bookings and owner configuration via adapter
protocols and delegates the per-date logic to the domain-level
``AvailabilityResolver`` and the schedule, pricing and blocking editors.
Callers (CLI, web layer) stay thin and the collaborators can be replaced with
stubs in tests.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Protocol, Union

from pendulum import Date

from ..domain.asset import AssetConfiguration
from ..domain.availability import AvailabilityResolver
from ..domain.exceptions import BookingSourceError
from ..domain.hourly_pricing import (
    FALLBACK_HOURLY_RATE,
    PRESET_TIERS,
    TierPreset,
    add_tier,
    assign_hour_to_tier,
    set_enabled,
)
from ..domain.models import BookingRecord, DateLike, DayStatus, HourlyPricingConfig, TierKind, TimeRange
from ..domain.weekly_schedule import (
    DEFAULT_OPERATING_END,
    DEFAULT_OPERATING_START,
    add_range,
    copy_to_all_days,
    copy_to_weekdays,
    remove_range,
    time_options,
)

logger = logging.getLogger(__name__)


class BookingSourceProtocol(Protocol):
    """Read-only access to the bookings of an asset."""

    async def get_bookings(self, asset_id: str) -> List[BookingRecord]:
        """Return all bookings for the asset."""


class ConfigurationRepositoryProtocol(Protocol):
    """Persistence for per-asset configuration."""

    async def load(self, asset_id: str) -> AssetConfiguration:
        """Return the stored configuration, or an empty one for unknown assets."""

    async def save(self, configuration: AssetConfiguration) -> AssetConfiguration:
        """Store the configuration (last write wins) and return it with its new version."""


class AssetCalendarService:
    """
    Orchestrates configuration/booking retrieval and availability resolution.
    """

    def __init__(
        self,
        booking_source: BookingSourceProtocol,
        repository: ConfigurationRepositoryProtocol,
        timezone: str = "UTC",
        *,
        operating_start: str = DEFAULT_OPERATING_START,
        operating_end: str = DEFAULT_OPERATING_END,
        presets: Mapping[TierKind, TierPreset] = PRESET_TIERS,
        fallback_rate: float = FALLBACK_HOURLY_RATE,
    ) -> None:
        self._booking_source = booking_source
        self._repository = repository
        self._timezone = timezone
        self._operating_start = operating_start
        self._operating_end = operating_end
        self._presets = presets
        self._fallback_rate = fallback_rate

    async def load_configuration(self, asset_id: str) -> AssetConfiguration:
        """Load the owner configuration for an asset."""
        return await self._repository.load(asset_id)

    async def save_configuration(self, configuration: AssetConfiguration) -> AssetConfiguration:
        """Persist an edited configuration and return the stored version."""
        return await self._repository.save(configuration)

    async def fetch_bookings(self, asset_id: str) -> Optional[List[BookingRecord]]:
        """
        Fetch bookings for an asset.

        Returns None when the booking source fails, so that dates resolve to
        ``unknown`` rather than looking available.
        """
        try:
            return await self._booking_source.get_bookings(asset_id)
        except BookingSourceError as exc:
            logger.warning("Could not load bookings for asset %s: %s", asset_id, exc)
            return None

    async def build_resolver(
        self,
        asset_id: str,
        *,
        today: Optional[DateLike] = None,
    ) -> AvailabilityResolver:
        """Load everything needed to resolve day statuses for an asset."""
        configuration = await self.load_configuration(asset_id)
        bookings = await self.fetch_bookings(asset_id)

        return AvailabilityResolver(
            blocking=configuration.blocking,
            bookings=bookings,
            window=configuration.window,
            today=today,
            timezone=self._timezone,
        )

    async def day_statuses(
        self,
        asset_id: str,
        *,
        start_date: DateLike,
        end_date: DateLike,
        today: Optional[DateLike] = None,
    ) -> Dict[Date, DayStatus]:
        """Resolve the status of every day in an inclusive date range."""
        resolver = await self.build_resolver(asset_id, today=today)
        return resolver.statuses_between(start_date, end_date)

    async def month_calendar(
        self,
        asset_id: str,
        *,
        year: int,
        month: int,
        today: Optional[DateLike] = None,
    ) -> Dict[Date, DayStatus]:
        """Resolve the status of every day in a calendar month."""
        resolver = await self.build_resolver(asset_id, today=today)
        return resolver.month_statuses(year, month)

    async def block_dates(
        self,
        asset_id: str,
        *,
        start_date: DateLike,
        end_date: Optional[DateLike] = None,
        reason: Optional[str] = None,
    ) -> AssetConfiguration:
        """Block a single day, or an inclusive range when ``end_date`` is given."""
        configuration = await self.load_configuration(asset_id)

        if end_date is None:
            blocking = configuration.blocking.block_date(start_date, reason)
        else:
            blocking = configuration.blocking.block_range(start_date, end_date, reason)

        return await self._save_if_changed(configuration, replace(configuration, blocking=blocking))

    async def unblock_dates(
        self,
        asset_id: str,
        *,
        start_date: DateLike,
        end_date: Optional[DateLike] = None,
    ) -> AssetConfiguration:
        """Unblock a single day, or an inclusive range when ``end_date`` is given."""
        configuration = await self.load_configuration(asset_id)

        if end_date is None:
            blocking = configuration.blocking.unblock_date(start_date)
        else:
            blocking = configuration.blocking.unblock_range(start_date, end_date)

        return await self._save_if_changed(configuration, replace(configuration, blocking=blocking))

    async def block_until(
        self,
        asset_id: str,
        *,
        until: DateLike,
        today: DateLike,
        reason: Optional[str] = None,
    ) -> AssetConfiguration:
        """Block every day from today through ``until``."""
        configuration = await self.load_configuration(asset_id)
        blocking = configuration.blocking.block_until(until, today, reason)

        return await self._save_if_changed(configuration, replace(configuration, blocking=blocking))

    async def clear_blocks(self, asset_id: str) -> AssetConfiguration:
        """Remove every blocked date for an asset."""
        configuration = await self.load_configuration(asset_id)
        blocking = configuration.blocking.clear_all()

        return await self._save_if_changed(configuration, replace(configuration, blocking=blocking))

    def time_options(self) -> List[str]:
        """Selectable hour strings within the configured operating window."""
        return time_options(self._operating_start, self._operating_end)

    async def add_hours(
        self,
        asset_id: str,
        *,
        day: str,
        start: str,
        end: str,
    ) -> Optional[AssetConfiguration]:
        """
        Add an opening range to one day of the weekly schedule.

        Returns None without saving when the range is malformed, falls outside
        the operating window, or overlaps an existing range on that day.
        """
        options = self.time_options()
        if start not in options or end not in options:
            logger.debug("Range %s-%s is outside the operating window", start, end)
            return None

        configuration = await self.load_configuration(asset_id)
        schedule = add_range(configuration.schedule, day, TimeRange(start=start, end=end))
        if schedule is None:
            return None

        return await self._save_if_changed(configuration, replace(configuration, schedule=schedule))

    async def remove_hours(self, asset_id: str, *, day: str, index: int) -> Optional[AssetConfiguration]:
        """Remove one range from a day; None if the index does not exist."""
        configuration = await self.load_configuration(asset_id)
        schedule = remove_range(configuration.schedule, day, index)
        if schedule is None:
            return None

        return await self._save_if_changed(configuration, replace(configuration, schedule=schedule))

    async def copy_hours(
        self,
        asset_id: str,
        *,
        source_day: str,
        weekdays_only: bool = False,
    ) -> AssetConfiguration:
        """Copy one day's ranges to the weekdays, or to every other day."""
        configuration = await self.load_configuration(asset_id)

        if weekdays_only:
            schedule = copy_to_weekdays(configuration.schedule, source_day)
        else:
            schedule = copy_to_all_days(configuration.schedule, source_day)

        return await self._save_if_changed(configuration, replace(configuration, schedule=schedule))

    async def set_hourly_pricing(self, asset_id: str, *, enabled: bool) -> AssetConfiguration:
        """Switch special hourly pricing on or off, seeding a peak tier from the presets."""
        configuration = await self.load_configuration(asset_id)
        pricing = set_enabled(
            configuration.pricing or HourlyPricingConfig(),
            enabled,
            presets=self._presets,
            fallback_rate=self._fallback_rate,
        )

        return await self._save_if_changed(configuration, replace(configuration, pricing=pricing))

    async def add_pricing_tier(
        self,
        asset_id: str,
        *,
        kind: Union[TierKind, str],
    ) -> AssetConfiguration:
        """Append a peak, off-peak or custom tier seeded from the presets."""
        configuration = await self.load_configuration(asset_id)
        pricing = add_tier(
            configuration.pricing or HourlyPricingConfig(),
            kind,
            presets=self._presets,
            fallback_rate=self._fallback_rate,
        )

        return await self._save_if_changed(configuration, replace(configuration, pricing=pricing))

    async def toggle_tier_hour(
        self,
        asset_id: str,
        *,
        tier_id: str,
        hour: int,
    ) -> Optional[AssetConfiguration]:
        """Toggle an hour in a tier; None if the asset has no such tier."""
        configuration = await self.load_configuration(asset_id)
        if configuration.pricing is None:
            return None

        pricing = assign_hour_to_tier(configuration.pricing, tier_id, hour)
        if pricing is None:
            return None

        return await self._save_if_changed(configuration, replace(configuration, pricing=pricing))

    async def _save_if_changed(
        self,
        original: AssetConfiguration,
        updated: AssetConfiguration,
    ) -> AssetConfiguration:
        if updated == original:
            logger.debug("No changes for asset %s, skipping save", original.asset_id)
            return original
        return await self.save_configuration(updated)
