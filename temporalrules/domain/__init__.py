"""
Domain layer - Temporal expressions without external dependencies.
"""

from .composites import (
    CollectionTemporalExpression,
    DifferenceTemporalExpression,
    IntersectionTemporalExpression,
    NotTemporalExpression,
    UnionTemporalExpression,
)
from .exceptions import (
    ConfigurationError,
    InvalidExpressionError,
    InvalidRuleError,
    TemporalRulesError,
)
from .expressions import TemporalExpression, is_temporal_expression
from .leaves import (
    DateRangeExpression,
    DayInMonthExpression,
    DayOfWeekExpression,
    NthWeekdayInMonthExpression,
    SpecificDatesExpression,
    TimeOfDayExpression,
)

__all__ = [
    "TemporalExpression",
    "is_temporal_expression",
    "CollectionTemporalExpression",
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
    "TemporalRulesError",
    "InvalidExpressionError",
    "InvalidRuleError",
    "ConfigurationError",
]
