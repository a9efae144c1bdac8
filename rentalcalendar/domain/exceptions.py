"""
Domain-specific exception hierarchy for the rental calendar.
"""


class RentalCalendarError(Exception):
    """Base class for all application-level errors."""


class BookingSourceError(RentalCalendarError):
    """Raised when booking data cannot be fetched or parsed."""


class ConfigurationStoreError(RentalCalendarError):
    """Raised when a persisted asset configuration cannot be read or written."""
