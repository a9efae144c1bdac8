"""
Tests for schedule summaries and grouped weekly hours.
"""

from rentalcalendar.domain.models import TimeRange, WeeklySchedule
from rentalcalendar.domain.schedule_summary import ScheduleSummary, group_weekly_hours, summarize

NINE_TO_FIVE = (TimeRange.from_hours(9, 17),)
EIGHT_TO_SIX = (TimeRange.from_hours(8, 18),)


class TestSummarize:
    """Tests for summarize."""

    def test_empty_schedule(self):
        """Test a schedule without hours has no summary."""
        assert summarize(WeeklySchedule()) is None

    def test_weekdays(self):
        """Test Monday-Friday only."""
        schedule = WeeklySchedule(
            mon=EIGHT_TO_SIX, tue=EIGHT_TO_SIX, wed=EIGHT_TO_SIX, thu=EIGHT_TO_SIX, fri=EIGHT_TO_SIX,
        )

        assert summarize(schedule) == ScheduleSummary(days_text="Weekdays", hours_text="8am–6pm")

    def test_every_day(self):
        """Test all seven days."""
        schedule = WeeklySchedule(
            mon=NINE_TO_FIVE, tue=NINE_TO_FIVE, wed=NINE_TO_FIVE, thu=NINE_TO_FIVE,
            fri=NINE_TO_FIVE, sat=NINE_TO_FIVE, sun=NINE_TO_FIVE,
        )

        assert summarize(schedule).days_text == "Every day"

    def test_weekends(self):
        """Test Saturday and Sunday only."""
        schedule = WeeklySchedule(sat=(TimeRange.from_hours(10, 12),), sun=NINE_TO_FIVE)

        summary = summarize(schedule)

        assert summary.days_text == "Weekends"
        assert summary.hours_text == "9am–5pm"

    def test_few_days_are_listed(self):
        """Test three or fewer days are listed by abbreviation."""
        schedule = WeeklySchedule(mon=NINE_TO_FIVE, wed=NINE_TO_FIVE, sat=NINE_TO_FIVE)

        assert summarize(schedule).days_text == "Mon, Wed, Sat"

    def test_many_days_are_counted(self):
        """Test four or more (non-special) days are counted."""
        schedule = WeeklySchedule(mon=NINE_TO_FIVE, tue=NINE_TO_FIVE, wed=NINE_TO_FIVE, sat=NINE_TO_FIVE)

        assert summarize(schedule).days_text == "4 days"

    def test_six_days_are_counted(self):
        """Test weekdays plus one weekend day is not 'Weekdays'."""
        schedule = WeeklySchedule(
            mon=NINE_TO_FIVE, tue=NINE_TO_FIVE, wed=NINE_TO_FIVE, thu=NINE_TO_FIVE,
            fri=NINE_TO_FIVE, sat=NINE_TO_FIVE,
        )

        assert summarize(schedule).days_text == "6 days"

    def test_only_first_range_counts(self):
        """Test a second range on a day does not widen the hour window."""
        schedule = WeeklySchedule(
            mon=(TimeRange.from_hours(8, 12), TimeRange.from_hours(13, 22)),
            tue=(TimeRange.from_hours(10, 14),),
        )

        assert summarize(schedule).hours_text == "8am–2pm"

    def test_noon_and_midnight(self):
        """Test 12-hour formatting at noon and midnight."""
        schedule = WeeklySchedule(fri=(TimeRange.from_hours(12, 24),))

        assert summarize(schedule).hours_text == "12pm–12am"


class TestGroupWeeklyHours:
    """Tests for group_weekly_hours."""

    def test_empty_schedule(self):
        assert group_weekly_hours(WeeklySchedule()) == []

    def test_weekdays_and_closed_weekend(self):
        """Test consecutive equal days are grouped."""
        schedule = WeeklySchedule(
            mon=EIGHT_TO_SIX, tue=EIGHT_TO_SIX, wed=EIGHT_TO_SIX, thu=EIGHT_TO_SIX, fri=EIGHT_TO_SIX,
        )

        groups = group_weekly_hours(schedule)

        assert [(g.label, g.hours_text) for g in groups] == [
            ("Mon – Fri", "8 AM – 6 PM"),
            ("Sat – Sun", "Closed"),
        ]

    def test_every_day_and_single_days(self):
        """Test labels for a full week and for isolated days."""
        full_week = WeeklySchedule(**{day: NINE_TO_FIVE for day in ("mon", "tue", "wed", "thu", "fri", "sat", "sun")})
        assert [g.label for g in group_weekly_hours(full_week)] == ["Every day"]

        mixed = WeeklySchedule(
            mon=NINE_TO_FIVE, tue=NINE_TO_FIVE, wed=NINE_TO_FIVE,
            thu=EIGHT_TO_SIX,
            fri=(TimeRange.from_hours(9, 12), TimeRange.from_hours(13, 17)),
        )
        groups = group_weekly_hours(mixed)

        assert [g.label for g in groups] == ["Mon – Wed", "Thu", "Fri", "Sat – Sun"]
        assert groups[2].hours_text == "9 AM – 12 PM, 1 PM – 5 PM"
