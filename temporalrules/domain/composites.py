"""
Composite temporal expressions.

Composites combine other temporal expressions with a set operation and are
themselves temporal expressions, so trees of arbitrary depth can be built:

    schedule = IntersectionTemporalExpression(
        weekdays,
        business_hours,
        NotTemporalExpression(public_holidays),
    )
    schedule.includes(pendulum.parse("2024-11-25 10:00"))

Children are shared, not owned: the same expression instance may be a member
of several composites at once.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Dict, Iterator

from .exceptions import InvalidExpressionError
from .expressions import TemporalExpression, is_temporal_expression

logger = logging.getLogger(__name__)


def _require_expression(value: Any, operation: str) -> TemporalExpression:
    if not is_temporal_expression(value):
        raise InvalidExpressionError(
            f"{operation}() expects a temporal expression, got {type(value).__name__}"
        )
    return value


class CollectionTemporalExpression(ABC):
    """
    Base for composites that hold an unbounded set of member expressions.

    Membership is keyed by instance identity: adding the same instance twice
    keeps a single entry, while two equal-looking instances stay separate.
    The table maps ``id(member)`` to the member; holding the reference keeps
    the id stable for as long as the member is present.

    Not thread-safe. Callers mutating a composite from several threads while
    it is being evaluated must synchronise access themselves.
    """

    def __init__(self, *expressions: Any) -> None:
        """
        Create a composite from a list of expressions.

        Each argument may be a temporal expression or a sequence of them.
        Sequences are flattened one level; anything else is skipped with a
        warning.
        """
        self._expressions: Dict[int, TemporalExpression] = {}

        for argument in expressions:
            if is_temporal_expression(argument):
                self.add(argument)
            elif isinstance(argument, Sequence) and not isinstance(argument, (str, bytes)):
                for element in argument:
                    if is_temporal_expression(element):
                        self.add(element)
                    else:
                        self._skip(element)
            else:
                self._skip(argument)

    def _skip(self, value: Any) -> None:
        logger.warning(
            "%s ignoring non-expression argument of type %s",
            type(self).__name__,
            type(value).__name__,
        )

    def add(self, expression: TemporalExpression) -> "CollectionTemporalExpression":
        """Add a member; a no-op if this instance is already present."""
        _require_expression(expression, "add")
        key = id(expression)
        if key not in self._expressions:
            self._expressions[key] = expression
            logger.debug("%s added %r", type(self).__name__, expression)
        return self

    def remove(self, expression: TemporalExpression) -> "CollectionTemporalExpression":
        """Remove a member; a no-op if this instance is not present."""
        _require_expression(expression, "remove")
        if self._expressions.pop(id(expression), None) is not None:
            logger.debug("%s removed %r", type(self).__name__, expression)
        return self

    def clear(self) -> "CollectionTemporalExpression":
        """Remove every member."""
        self._expressions.clear()
        logger.debug("%s cleared", type(self).__name__)
        return self

    @abstractmethod
    def includes(self, date: datetime) -> bool:
        """Combine the members' answers for ``date``."""

    def __len__(self) -> int:
        return len(self._expressions)

    def __iter__(self) -> Iterator[TemporalExpression]:
        return iter(list(self._expressions.values()))

    def __contains__(self, expression: object) -> bool:
        return self._expressions.get(id(expression)) is expression

    def __repr__(self) -> str:
        members = ", ".join(repr(e) for e in self._expressions.values())
        return f"{type(self).__name__}({members})"


class IntersectionTemporalExpression(CollectionTemporalExpression):
    """
    A temporal expression whose result is the intersection of its members.

    A date is included only if every member includes it. Evaluation stops at
    the first member that rejects the date. With no members every date is
    included: the intersection of zero sets is the universal set.
    """

    def includes(self, date: datetime) -> bool:
        for expression in self._expressions.values():
            if not expression.includes(date):
                return False
        return True


class UnionTemporalExpression(CollectionTemporalExpression):
    """
    A temporal expression whose result is the union of its members.

    A date is included if any member includes it; evaluation stops at the
    first match. An empty union includes nothing.
    """

    def includes(self, date: datetime) -> bool:
        for expression in self._expressions.values():
            if expression.includes(date):
                return True
        return False


class DifferenceTemporalExpression:
    """
    Dates included by one expression but not by another.

    ``excluded`` is only consulted for dates that ``included`` accepts.
    """

    def __init__(self, included: TemporalExpression, excluded: TemporalExpression) -> None:
        self.included = _require_expression(included, "DifferenceTemporalExpression")
        self.excluded = _require_expression(excluded, "DifferenceTemporalExpression")

    def includes(self, date: datetime) -> bool:
        return self.included.includes(date) and not self.excluded.includes(date)

    def __repr__(self) -> str:
        return f"DifferenceTemporalExpression({self.included!r}, {self.excluded!r})"


class NotTemporalExpression:
    """The complement of a temporal expression."""

    def __init__(self, expression: TemporalExpression) -> None:
        self.expression = _require_expression(expression, "NotTemporalExpression")

    def includes(self, date: datetime) -> bool:
        return not self.expression.includes(date)

    def __repr__(self) -> str:
        return f"NotTemporalExpression({self.expression!r})"
