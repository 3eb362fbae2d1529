"""
Domain-specific exception hierarchy for the temporal rules library.
"""


class TemporalRulesError(Exception):
    """Base class for all library-level errors."""


class InvalidExpressionError(TemporalRulesError, TypeError):
    """Raised when a value cannot act as (or configure) a temporal expression."""


class ConfigurationError(TemporalRulesError, ValueError):
    """Raised when the calendar configuration cannot be loaded or validated."""


class InvalidRuleError(TemporalRulesError, ValueError):
    """Raised when a leaf expression is configured with out-of-range values."""
