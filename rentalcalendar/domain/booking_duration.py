"""
Display formatting for a booking's duration and date range.
"""

from .models import BookingRecord, parse_hour


def _clock_label(hour: int) -> str:
    # 0 and 24 -> "12am", 12 -> "12pm", 14 -> "2pm"
    period = "am" if hour % 24 < 12 else "pm"
    display = hour - 12 if hour > 12 else hour
    if display == 0 or display == 12:
        display = 12
    return f"{display}{period}"


def _is_single_day_hourly(booking: BookingRecord) -> bool:
    return booking.is_hourly and len(booking.hourly_slots) == 1


def describe_duration(booking: BookingRecord) -> str:
    """
    Describe how long a booking lasts.

    Examples:
        single-day hourly ["11:00", "12:00", "13:00"] -> "11am - 2pm (3h)"
        hourly over two days with 5 slots            -> "5 hours over 2 days"
        whole days 2025-04-01 to 2025-04-03          -> "3 days"
    """
    slots = booking.hourly_slots if booking.is_hourly else ()
    total_hours = sum(len(slot.hours) for slot in slots)

    if total_hours:
        if len(slots) == 1:
            hours = sorted(slots[0].hours)
            start_hour = parse_hour(hours[0])
            end_hour = parse_hour(hours[-1]) + 1
            return f"{_clock_label(start_hour)} - {_clock_label(end_hour)} ({total_hours}h)"

        return f"{total_hours} hours over {len(slots)} days"

    days = booking.start_date.diff(booking.end_date, False).in_days() + 1
    return "1 day" if days == 1 else f"{days} days"


def describe_date_range(booking: BookingRecord) -> str:
    """
    Describe the dates a booking covers.

    Examples:
        "Apr 1, 2025"
        "Apr 1 - Apr 3, 2025"
    """
    start = booking.start_date
    end = booking.end_date

    if _is_single_day_hourly(booking) or start == end:
        return start.format("MMM D, YYYY")

    return f"{start.format('MMM D')} - {end.format('MMM D, YYYY')}"
