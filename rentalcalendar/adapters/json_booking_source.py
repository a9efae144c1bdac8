"""
Booking source backed by a JSON export of the booking subsystem.
"""

import json
import logging
from pathlib import Path
from typing import List

from ..domain.exceptions import BookingSourceError
from ..domain.models import BookingRecord

logger = logging.getLogger(__name__)


class JsonBookingSource:
    """
    Read-only booking source that loads booking records from a JSON file.

    The file holds a list of booking objects in the booking subsystem's shape
    (``listing_id``/``asset_id``, ``start_date``, ``end_date``, ``status``,
    ``is_hourly_booking``, ``hourly_slots``). The file is re-read on every call
    so edits made by the booking subsystem show up immediately.
    """

    def __init__(self, bookings_file: Path):
        self.bookings_file = bookings_file

    def _load_records(self) -> list:
        if not self.bookings_file.exists():
            logger.debug("Bookings file %s does not exist, treating as empty", self.bookings_file)
            return []

        try:
            with open(self.bookings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as exc:
            raise BookingSourceError(f"Could not read {self.bookings_file}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise BookingSourceError(f"Invalid JSON in {self.bookings_file}: {exc}") from exc

        if not isinstance(data, list):
            raise BookingSourceError(f"{self.bookings_file} must contain a list of bookings")

        return data

    async def get_bookings(self, asset_id: str) -> List[BookingRecord]:
        """
        Load bookings for one asset.

        Raises:
            BookingSourceError: If the file cannot be read or a record is malformed
        """
        bookings: List[BookingRecord] = []

        for item in self._load_records():
            if not isinstance(item, dict):
                raise BookingSourceError(f"Booking records must be objects, got {item!r}")
            if str(item.get("asset_id", item.get("listing_id"))) != asset_id:
                continue
            try:
                bookings.append(BookingRecord.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise BookingSourceError(f"Malformed booking record {item.get('id')!r}: {exc}") from exc

        logger.debug("Loaded %d bookings for asset %s", len(bookings), asset_id)
        return bookings
