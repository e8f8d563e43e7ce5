"""
Filter expressions evaluated against list records.

A filter is written as ``<name> <operator> <value>``, for example
``status = running``, ``step >= 100`` or ``learning_rate < 1e-3``.
The name is resolved through the record's ``get_value`` accessor, so it
can refer to a virtual field, a best-checkpoint metric or a param.

All filters must match for a record to be kept. A name that does not
resolve on a record never matches, and ordering operators never match
NaN. Comparing operands whose types cannot be compared raises
FilterError: an ambiguous filter must not silently select or drop
records.

Usage:
    >>> filters = Filters.parse(["status = running", "step > 10"])
    >>> kept = [r for r in records if filters.matches(r)]
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from explister.params.value import Incomparable, ParamType, Value

logger = logging.getLogger(__name__)


class FilterError(Exception):
    """Raised when a filter cannot be evaluated against a record."""


class ValueGetter(Protocol):
    """Anything exposing the list record field accessor."""

    def get_value(self, name: str) -> Optional[Value]:
        ...


_OPERATORS: Dict[str, Callable[[int], bool]] = {
    "==": lambda c: c == 0,
    "!=": lambda c: c != 0,
    "<=": lambda c: c <= 0,
    ">=": lambda c: c >= 0,
    "=": lambda c: c == 0,
    "<": lambda c: c < 0,
    ">": lambda c: c > 0,
}

_EQUALITY_OPERATORS = ("=", "==", "!=")

_FILTER_RE = re.compile(
    r"^\s*(?P<name>[^\s=!<>]+)\s*(?P<op>==|!=|<=|>=|=|<|>)\s*(?P<value>.*?)\s*$"
)


@dataclass(frozen=True)
class Filter:
    """A single ``name op value`` condition."""

    name: str
    operator: str
    value: Value

    @classmethod
    def parse(cls, expression: str) -> "Filter":
        """
        Parse one filter expression.

        Raises:
            ValueError: If the expression is malformed.
        """
        match = _FILTER_RE.match(expression)
        if match is None or not match.group("value"):
            raise ValueError(
                f"Invalid filter: {expression!r}. "
                "Expected '<name> <operator> <value>' with operator one of "
                "=, ==, !=, <, <=, >, >="
            )
        return cls(
            name=match.group("name"),
            operator=match.group("op"),
            value=Value.parse(match.group("value")),
        )

    def matches(self, record: ValueGetter) -> bool:
        actual = record.get_value(self.name)
        if actual is None:
            return False

        result = actual.compare(self.value)
        if isinstance(result, Incomparable):
            raise FilterError(f"Filter '{self}' on field '{self.name}': {result}")

        unordered = (ParamType.OBJECT, ParamType.NONE)
        if self.operator not in _EQUALITY_OPERATORS and actual.type in unordered:
            raise FilterError(
                f"Filter '{self}': operator {self.operator} is not supported "
                f"for values of type {actual.type.value}"
            )
        if self.operator not in _EQUALITY_OPERATORS and (actual.is_nan() or self.value.is_nan()):
            return False
        return _OPERATORS[self.operator](result)

    def __str__(self) -> str:
        return f"{self.name} {self.operator} {self.value}"


@dataclass
class Filters:
    """A conjunction of filters. An empty set matches everything."""

    filters: List[Filter] = field(default_factory=list)

    @classmethod
    def parse(cls, expressions: Optional[Iterable[str]]) -> "Filters":
        filters = [Filter.parse(expr) for expr in (expressions or [])]
        if filters:
            logger.debug(f"Parsed filters: {[str(f) for f in filters]}")
        return cls(filters)

    def matches(self, record: ValueGetter) -> bool:
        """
        True if every filter matches the record.

        Raises:
            FilterError: If a filter compares incomparable values.
        """
        return all(f.matches(record) for f in self.filters)

    def __len__(self) -> int:
        return len(self.filters)
