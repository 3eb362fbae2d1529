"""
The temporal expression capability shared by leaf rules and composites.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TemporalExpression(Protocol):
    """
    Anything that can answer whether a date is part of its recurrence.

    ``includes`` must be free of side effects: asking twice about the same
    date yields the same answer unless the expression itself was mutated.
    """

    def includes(self, date: datetime) -> bool:
        """Return True if ``date`` satisfies this expression."""


def is_temporal_expression(value: Any) -> bool:
    """Check whether ``value`` is an expression instance (not a class)."""
    if isinstance(value, type):
        return False
    return isinstance(value, TemporalExpression) and callable(value.includes)
