"""
Leaf temporal expressions - concrete recurrence rules.

Every leaf is an immutable value evaluated against a ``datetime`` (a
``pendulum.DateTime`` works too). Equal configuration means equal leaves, but
composites still deduplicate by instance, never by equality.
"""

import calendar
import datetime as dt
from dataclasses import dataclass
from typing import FrozenSet, Iterable

from .exceptions import InvalidRuleError


WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def _days_in_month(date: dt.date) -> int:
    return calendar.monthrange(date.year, date.month)[1]


def _calendar_date(date: dt.datetime) -> dt.date:
    # Plain date so lookups do not depend on the datetime subclass in use
    return dt.date(date.year, date.month, date.day)


def _validate_weekday(weekday: int) -> None:
    if weekday not in range(7):
        raise InvalidRuleError(f"Weekday must be between 0 (Monday) and 6 (Sunday), got {weekday}")


@dataclass(frozen=True)
class DayOfWeekExpression:
    """
    Includes dates falling on one of the given weekdays.

    Weekdays follow ``datetime.weekday()``: 0=Monday, 6=Sunday.
    """
    weekdays: FrozenSet[int]

    def __init__(self, weekdays: Iterable[int]):
        object.__setattr__(self, "weekdays", frozenset(weekdays))
        for weekday in self.weekdays:
            _validate_weekday(weekday)

    def includes(self, date: dt.datetime) -> bool:
        return date.weekday() in self.weekdays

    def __repr__(self) -> str:
        names = ", ".join(WEEKDAY_NAMES[d] for d in sorted(self.weekdays))
        return f"DayOfWeekExpression({names})"


@dataclass(frozen=True)
class TimeOfDayExpression:
    """
    Includes instants whose wall-clock time lies in ``[start, end)``.

    Invariant: start must be before end.
    """
    start: dt.time
    end: dt.time

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidRuleError(f"Start time {self.start} must be before end time {self.end}")

    def includes(self, date: dt.datetime) -> bool:
        return self.start <= date.time() < self.end


@dataclass(frozen=True)
class DateRangeExpression:
    """Includes every instant whose calendar date lies in ``[start, end]``."""
    start: dt.date
    end: dt.date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRuleError(f"Start date {self.start} must not be after end date {self.end}")

    def includes(self, date: dt.datetime) -> bool:
        return self.start <= _calendar_date(date) <= self.end


@dataclass(frozen=True)
class SpecificDatesExpression:
    """Includes the listed calendar dates, e.g. public holidays."""
    dates: FrozenSet[dt.date]

    def __init__(self, dates: Iterable[dt.date]):
        object.__setattr__(self, "dates", frozenset(dates))

    def includes(self, date: dt.datetime) -> bool:
        return _calendar_date(date) in self.dates


@dataclass(frozen=True)
class DayInMonthExpression:
    """
    Includes one day of every month.

    Positive values count from the start of the month (1 = first day),
    negative values from the end (-1 = last day). Months too short for the
    requested day are skipped, so ``day=31`` never matches in April.
    """
    day: int

    def __post_init__(self):
        if self.day == 0 or not -31 <= self.day <= 31:
            raise InvalidRuleError(f"Day must be between 1 and 31 or -1 and -31, got {self.day}")

    def includes(self, date: dt.datetime) -> bool:
        if self.day > 0:
            return date.day == self.day
        return date.day == _days_in_month(date) + self.day + 1


@dataclass(frozen=True)
class NthWeekdayInMonthExpression:
    """
    Includes the n-th given weekday of every month.

    ``occurrence=2, weekday=1`` is "the second Tuesday"; negative
    occurrences count from the end, so ``occurrence=-1, weekday=4`` is "the
    last Friday".
    """
    weekday: int
    occurrence: int

    def __post_init__(self):
        _validate_weekday(self.weekday)
        if self.occurrence == 0 or not -5 <= self.occurrence <= 5:
            raise InvalidRuleError(
                f"Occurrence must be between 1 and 5 or -1 and -5, got {self.occurrence}"
            )

    def includes(self, date: dt.datetime) -> bool:
        if date.weekday() != self.weekday:
            return False
        if self.occurrence > 0:
            return (date.day - 1) // 7 + 1 == self.occurrence
        return (_days_in_month(date) - date.day) // 7 + 1 == -self.occurrence
