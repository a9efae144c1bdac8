"""
Per-date availability resolution.

Combines blackout dates, bookings and an optional availability window into a
single ``DayStatus`` per calendar day. Pure query logic: no I/O, no mutation.
"""

from typing import Dict, List, Optional, Sequence

import pendulum
from pendulum import Date

from .date_blocking import DateBlockingStore
from .models import AvailabilityWindow, BookingRecord, BookingStatus, DateLike, DayStatus, to_date


class AvailabilityResolver:
    """
    Resolves the status of calendar days for one asset.

    Rules are evaluated in order and the first match wins:
    1. past           - the day is before today
    2. outside_window - an active availability window excludes the day
    3. unknown        - booking data is missing, so nothing below can be decided
    4. booked         - an approved booking covers the day
    5. pending        - a pending booking covers the day
    6. blocked        - the owner blocked the day
    7. available      - otherwise

    A booking always outranks a manual block: a block on a booked day never
    hides the booking.
    """

    def __init__(
        self,
        blocking: Optional[DateBlockingStore] = None,
        bookings: Optional[Sequence[BookingRecord]] = (),
        window: Optional[AvailabilityWindow] = None,
        today: Optional[DateLike] = None,
        timezone: str = "UTC"
    ):
        """
        Initialize the resolver.

        Args:
            blocking: Blocked dates for the asset
            bookings: Bookings for the asset, or None when they could not be loaded
            window: Optional availability window
            today: Reference day; defaults to today in ``timezone``
            timezone: The asset's local timezone
        """
        self.blocking = blocking or DateBlockingStore()
        self.bookings = None if bookings is None else list(bookings)
        self.window = window
        self.today = to_date(today) if today is not None else to_date(pendulum.today(timezone))

    def day_status(self, day: DateLike) -> DayStatus:
        """Get the status of a single day."""
        day = to_date(day)

        if day < self.today:
            return DayStatus.PAST

        if self.window is not None and self.window.is_active() and not self.window.contains(day):
            return DayStatus.OUTSIDE_WINDOW

        if self.bookings is None:
            return DayStatus.UNKNOWN

        if self._has_booking(day, BookingStatus.APPROVED):
            return DayStatus.BOOKED

        if self._has_booking(day, BookingStatus.PENDING):
            return DayStatus.PENDING

        if self.blocking.is_blocked(day):
            return DayStatus.BLOCKED

        return DayStatus.AVAILABLE

    def is_bookable(self, day: DateLike) -> bool:
        """A day is bookable only when it is plainly available."""
        return self.day_status(day) is DayStatus.AVAILABLE

    def statuses_between(self, start: DateLike, end: DateLike) -> Dict[Date, DayStatus]:
        """Status of every day from start to end inclusive, in date order."""
        start, end = to_date(start), to_date(end)
        statuses: Dict[Date, DayStatus] = {}

        current = start
        while current <= end:
            statuses[current] = self.day_status(current)
            current = current.add(days=1)

        return statuses

    def month_statuses(self, year: int, month: int) -> Dict[Date, DayStatus]:
        """Status of every day in a calendar month."""
        first = pendulum.date(year, month, 1)
        return self.statuses_between(first, first.end_of("month"))

    def booked_dates(self) -> List[Date]:
        """Every day covered by an approved booking."""
        return self._dates_with_status(BookingStatus.APPROVED)

    def pending_dates(self) -> List[Date]:
        """Every day covered by a pending booking."""
        return self._dates_with_status(BookingStatus.PENDING)

    def upcoming_bookings(self, limit: int = 5) -> List[BookingRecord]:
        """Approved bookings that end today or later, earliest first."""
        upcoming = [
            booking for booking in (self.bookings or [])
            if booking.status is BookingStatus.APPROVED and booking.end_date >= self.today
        ]
        upcoming.sort(key=lambda booking: booking.start_date)
        return upcoming[:limit]

    def pending_bookings(self) -> List[BookingRecord]:
        """Pending bookings, earliest first."""
        pending = [
            booking for booking in (self.bookings or [])
            if booking.status is BookingStatus.PENDING
        ]
        return sorted(pending, key=lambda booking: booking.start_date)

    def _has_booking(self, day: Date, status: BookingStatus) -> bool:
        return any(
            booking.status is status and booking.covers(day)
            for booking in self.bookings or []
        )

    def _dates_with_status(self, status: BookingStatus) -> List[Date]:
        days = set()
        for booking in self.bookings or []:
            if booking.status is status:
                days.update(booking.dates())
        return sorted(days)
