"""
Temporal rules - boolean combinations of recurrence rules.
"""

from .domain import (
    DateRangeExpression,
    DayInMonthExpression,
    DayOfWeekExpression,
    DifferenceTemporalExpression,
    IntersectionTemporalExpression,
    NotTemporalExpression,
    NthWeekdayInMonthExpression,
    SpecificDatesExpression,
    TemporalExpression,
    TimeOfDayExpression,
    UnionTemporalExpression,
)

__version__ = "0.1.0"

__all__ = [
    "TemporalExpression",
    "IntersectionTemporalExpression",
    "UnionTemporalExpression",
    "DifferenceTemporalExpression",
    "NotTemporalExpression",
    "DayOfWeekExpression",
    "TimeOfDayExpression",
    "DateRangeExpression",
    "SpecificDatesExpression",
    "DayInMonthExpression",
    "NthWeekdayInMonthExpression",
]
