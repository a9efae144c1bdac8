"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .asset_calendar import AssetCalendarService, BookingSourceProtocol, ConfigurationRepositoryProtocol

__all__ = ["AssetCalendarService", "BookingSourceProtocol", "ConfigurationRepositoryProtocol"]
