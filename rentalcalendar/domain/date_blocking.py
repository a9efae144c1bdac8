"""
Owner-imposed blackout dates.

``DateBlockingStore`` is an immutable collection of ``BlockedDateEntry`` rows,
one per calendar day. Blocking and unblocking are idempotent.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from pendulum import Date

from .models import BlockedDateEntry, DateLike, to_date


def _ordered(start: DateLike, end: DateLike) -> Tuple[Date, Date]:
    start, end = to_date(start), to_date(end)
    if end < start:
        start, end = end, start
    return start, end


def _days_between(start: Date, end: Date) -> List[Date]:
    days: List[Date] = []
    current = start
    while current <= end:
        days.append(current)
        current = current.add(days=1)
    return days


@dataclass(frozen=True)
class DateBlockingStore:
    """
    Blocked dates for one asset, kept sorted by date with at most one entry per day.
    """
    entries: Tuple[BlockedDateEntry, ...] = ()

    def __post_init__(self):
        by_date: Dict[Date, BlockedDateEntry] = {}
        for entry in self.entries:
            by_date.setdefault(entry.date, entry)
        object.__setattr__(
            self,
            "entries",
            tuple(by_date[day] for day in sorted(by_date)),
        )

    def __len__(self) -> int:
        return len(self.entries)

    def is_blocked(self, day: DateLike) -> bool:
        """Check whether a day has a block entry."""
        return self.entry_for(day) is not None

    def entry_for(self, day: DateLike) -> Optional[BlockedDateEntry]:
        day = to_date(day)
        for entry in self.entries:
            if entry.date == day:
                return entry
        return None

    def dates(self) -> List[Date]:
        return [entry.date for entry in self.entries]

    def block_date(self, day: DateLike, reason: Optional[str] = None) -> "DateBlockingStore":
        """
        Block a single day.

        Blocking an already-blocked day leaves the store (and its reason) unchanged.
        """
        if self.is_blocked(day):
            return self
        return DateBlockingStore((*self.entries, BlockedDateEntry(date=to_date(day), reason=reason)))

    def unblock_date(self, day: DateLike) -> "DateBlockingStore":
        """Remove a day's block. Unblocking an unblocked day is a no-op."""
        day = to_date(day)
        if not self.is_blocked(day):
            return self
        return DateBlockingStore(tuple(entry for entry in self.entries if entry.date != day))

    def block_range(
        self,
        start: DateLike,
        end: DateLike,
        reason: Optional[str] = None
    ) -> "DateBlockingStore":
        """
        Block every day from start to end inclusive (either order).

        Days already blocked inside the range take the new reason.
        """
        start, end = _ordered(start, end)
        new_entries = [BlockedDateEntry(date=day, reason=reason) for day in _days_between(start, end)]
        kept = [entry for entry in self.entries if not start <= entry.date <= end]

        return DateBlockingStore((*kept, *new_entries))

    def unblock_range(self, start: DateLike, end: DateLike) -> "DateBlockingStore":
        """Remove every block between start and end inclusive (either order)."""
        start, end = _ordered(start, end)
        kept = tuple(entry for entry in self.entries if not start <= entry.date <= end)

        if len(kept) == len(self.entries):
            return self
        return DateBlockingStore(kept)

    def block_until(
        self,
        until: DateLike,
        today: DateLike,
        reason: Optional[str] = None
    ) -> "DateBlockingStore":
        """
        Block every day from today through ``until``.

        The default reason reads like ``"Blocked until Mar 31"``.
        """
        until = to_date(until)
        if reason is None:
            reason = f"Blocked until {until.format('MMM D')}"
        return self.block_range(today, until, reason)

    def clear_all(self) -> "DateBlockingStore":
        """Remove every block."""
        if not self.entries:
            return self
        return DateBlockingStore()

    def to_list(self) -> List[dict]:
        return [entry.to_dict() for entry in self.entries]

    @classmethod
    def from_list(cls, data: Optional[Iterable[dict]]) -> "DateBlockingStore":
        return cls(tuple(BlockedDateEntry.from_dict(item) for item in (data or [])))
