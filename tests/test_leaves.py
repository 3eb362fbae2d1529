"""
Tests for leaf temporal expressions.
"""

from datetime import date, datetime, time

import pendulum
import pytest

from temporalrules.domain.exceptions import InvalidRuleError
from temporalrules.domain.leaves import (
    DateRangeExpression,
    DayInMonthExpression,
    DayOfWeekExpression,
    NthWeekdayInMonthExpression,
    SpecificDatesExpression,
    TimeOfDayExpression,
)


class TestDayOfWeekExpression:
    """Tests for DayOfWeekExpression."""

    def test_includes_configured_weekdays(self):
        """Test working day detection."""
        weekdays = DayOfWeekExpression([0, 1, 2, 3, 4])

        # Monday
        monday = pendulum.parse("2024-11-25", tz="Europe/Berlin")
        assert weekdays.includes(monday)

        # Saturday
        saturday = pendulum.parse("2024-11-23", tz="Europe/Berlin")
        assert not weekdays.includes(saturday)

        # Sunday
        sunday = pendulum.parse("2024-11-24", tz="Europe/Berlin")
        assert not weekdays.includes(sunday)

    def test_accepts_plain_datetime(self):
        """Standard library datetimes work as well as pendulum ones."""
        assert DayOfWeekExpression([0]).includes(datetime(2024, 11, 25, 10, 0))

    def test_empty_weekdays_includes_nothing(self):
        """No weekdays configured means no date matches."""
        assert not DayOfWeekExpression([]).includes(datetime(2024, 11, 25))

    def test_invalid_weekday_raises_error(self):
        """Weekdays outside 0..6 are rejected."""
        with pytest.raises(InvalidRuleError, match="Weekday must be between 0"):
            DayOfWeekExpression([1, 7])

    def test_is_immutable(self):
        """Leaves cannot be modified after construction."""
        expression = DayOfWeekExpression([0])

        with pytest.raises(AttributeError):
            expression.weekdays = frozenset([1])


class TestTimeOfDayExpression:
    """Tests for TimeOfDayExpression."""

    def test_half_open_window(self):
        """Start is included, end is excluded."""
        business_hours = TimeOfDayExpression(start=time(9, 30), end=time(17, 0))

        assert business_hours.includes(pendulum.parse("2024-11-25 09:30", tz="Europe/Berlin"))
        assert business_hours.includes(pendulum.parse("2024-11-25 16:59", tz="Europe/Berlin"))
        assert not business_hours.includes(pendulum.parse("2024-11-25 09:29", tz="Europe/Berlin"))
        assert not business_hours.includes(pendulum.parse("2024-11-25 17:00", tz="Europe/Berlin"))

    def test_uses_wall_clock_time(self):
        """The local time of the supplied datetime is compared, whatever its zone."""
        business_hours = TimeOfDayExpression(start=time(9, 0), end=time(17, 0))

        assert business_hours.includes(pendulum.parse("2024-11-25 10:00", tz="America/New_York"))

    def test_invalid_window_raises_error(self):
        """Test that an inverted window raises InvalidRuleError."""
        with pytest.raises(InvalidRuleError, match="Start time .* must be before end time"):
            TimeOfDayExpression(start=time(17, 0), end=time(9, 0))

        with pytest.raises(ValueError):
            TimeOfDayExpression(start=time(9, 0), end=time(9, 0))


class TestDateRangeExpression:
    """Tests for DateRangeExpression."""

    def test_inclusive_bounds(self):
        """Both the first and the last day are part of the range."""
        december = DateRangeExpression(start=date(2024, 12, 1), end=date(2024, 12, 31))

        assert december.includes(pendulum.parse("2024-12-01 00:00", tz="Europe/Berlin"))
        assert december.includes(pendulum.parse("2024-12-31 23:59", tz="Europe/Berlin"))
        assert not december.includes(pendulum.parse("2024-11-30 23:59", tz="Europe/Berlin"))
        assert not december.includes(pendulum.parse("2025-01-01 00:00", tz="Europe/Berlin"))

    def test_single_day_range(self):
        """Start and end may be the same day."""
        day = DateRangeExpression(start=date(2024, 11, 25), end=date(2024, 11, 25))

        assert day.includes(datetime(2024, 11, 25, 12, 0))

    def test_invalid_range_raises_error(self):
        """Test that an inverted range raises InvalidRuleError."""
        with pytest.raises(InvalidRuleError, match="must not be after end date"):
            DateRangeExpression(start=date(2024, 12, 31), end=date(2024, 12, 1))


class TestSpecificDatesExpression:
    """Tests for SpecificDatesExpression."""

    def test_includes_listed_dates_at_any_time(self):
        """Every instant of a listed day is included."""
        holidays = SpecificDatesExpression([date(2024, 12, 25), date(2024, 12, 26)])

        assert holidays.includes(pendulum.parse("2024-12-25 00:00", tz="Europe/Berlin"))
        assert holidays.includes(pendulum.parse("2024-12-26 18:30", tz="Europe/Berlin"))
        assert not holidays.includes(pendulum.parse("2024-12-27 10:00", tz="Europe/Berlin"))

    def test_duplicates_collapse(self):
        """Duplicate dates are stored once."""
        holidays = SpecificDatesExpression([date(2024, 12, 25), date(2024, 12, 25)])

        assert holidays.dates == frozenset([date(2024, 12, 25)])


class TestDayInMonthExpression:
    """Tests for DayInMonthExpression."""

    def test_day_from_start(self):
        """Positive days count from the first of the month."""
        fifteenth = DayInMonthExpression(15)

        assert fifteenth.includes(datetime(2024, 2, 15, 9, 0))
        assert not fifteenth.includes(datetime(2024, 2, 16, 9, 0))

    def test_day_from_end(self):
        """-1 is the last day of each month, whatever its length."""
        last_day = DayInMonthExpression(-1)

        assert last_day.includes(datetime(2024, 2, 29))
        assert last_day.includes(datetime(2023, 2, 28))
        assert last_day.includes(datetime(2024, 4, 30))
        assert not last_day.includes(datetime(2024, 3, 30))

    def test_short_months_are_skipped(self):
        """Day 31 never matches a 30-day month."""
        thirty_first = DayInMonthExpression(31)

        assert not any(
            thirty_first.includes(datetime(2024, 4, day)) for day in range(1, 31)
        )

    @pytest.mark.parametrize("day", [0, 32, -32])
    def test_invalid_day_raises_error(self, day):
        """Day zero and days beyond 31 are rejected."""
        with pytest.raises(InvalidRuleError):
            DayInMonthExpression(day)


class TestNthWeekdayInMonthExpression:
    """Tests for NthWeekdayInMonthExpression."""

    def test_second_tuesday(self):
        """November 2024 has Tuesdays on the 5th, 12th, 19th and 26th."""
        second_tuesday = NthWeekdayInMonthExpression(weekday=1, occurrence=2)

        assert second_tuesday.includes(pendulum.parse("2024-11-12 10:00", tz="Europe/Berlin"))
        assert not second_tuesday.includes(pendulum.parse("2024-11-05 10:00", tz="Europe/Berlin"))
        assert not second_tuesday.includes(pendulum.parse("2024-11-19 10:00", tz="Europe/Berlin"))
        assert not second_tuesday.includes(pendulum.parse("2024-11-13 10:00", tz="Europe/Berlin"))

    def test_last_friday(self):
        """November 2024 ends with Friday the 29th."""
        last_friday = NthWeekdayInMonthExpression(weekday=4, occurrence=-1)

        assert last_friday.includes(datetime(2024, 11, 29))
        assert not last_friday.includes(datetime(2024, 11, 22))

    def test_fifth_occurrence_only_in_long_months(self):
        """There is a fifth Friday in November 2024 but not in December."""
        fifth_friday = NthWeekdayInMonthExpression(weekday=4, occurrence=5)

        assert fifth_friday.includes(datetime(2024, 11, 29))
        assert not any(
            fifth_friday.includes(datetime(2024, 12, day)) for day in range(1, 32)
        )

    @pytest.mark.parametrize(
        "weekday, occurrence",
        [(7, 1), (-1, 1), (0, 0), (0, 6), (0, -6)],
    )
    def test_invalid_configuration_raises_error(self, weekday, occurrence):
        """Weekday must be 0..6 and occurrence 1..5 or -1..-5."""
        with pytest.raises(InvalidRuleError):
            NthWeekdayInMonthExpression(weekday=weekday, occurrence=occurrence)
