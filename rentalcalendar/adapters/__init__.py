"""
Adapters layer - Storage and booking-data integrations.
"""

from .json_booking_source import JsonBookingSource
from .yaml_repository import YamlConfigurationRepository

__all__ = ["JsonBookingSource", "YamlConfigurationRepository"]
