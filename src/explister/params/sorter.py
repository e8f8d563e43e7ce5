"""
Sort order for list records.

A sort key is a field name with an optional ``-asc`` or ``-desc`` suffix,
e.g. ``started-desc`` or ``val_loss``. Fields are resolved through the
record's ``get_value`` accessor, like filters.

The ordering is total so that repeated listings are reproducible:
- records missing the field always come last, in either direction
- values of types that cannot be compared are ordered by type
  (bool < numbers < strings < objects < none)
"""

import functools
import json
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from explister.params.filters import ValueGetter
from explister.params.value import TYPE_RANK, Incomparable, ParamType, Value

DEFAULT_SORT_KEY = "started"

T = TypeVar("T", bound=ValueGetter)


@dataclass(frozen=True)
class Sorter:
    """
    Compares records by a single field.

    Args:
        key: Field name passed to ``get_value``.
        descending: Reverse the order of present values.
    """

    key: str = DEFAULT_SORT_KEY
    descending: bool = False

    @classmethod
    def parse(cls, expression: Optional[str]) -> "Sorter":
        """
        Parse ``<key>[-asc|-desc]``. An empty expression sorts by start time.

        Raises:
            ValueError: If the key is empty.
        """
        expression = (expression or DEFAULT_SORT_KEY).strip()
        descending = False
        if expression.endswith("-desc"):
            expression = expression[: -len("-desc")]
            descending = True
        elif expression.endswith("-asc"):
            expression = expression[: -len("-asc")]
        if not expression:
            raise ValueError("Sort key must not be empty")
        return cls(key=expression, descending=descending)

    def less_than(self, a: ValueGetter, b: ValueGetter) -> bool:
        return self._compare(a, b) < 0

    def _compare(self, a: ValueGetter, b: ValueGetter) -> int:
        va = a.get_value(self.key)
        vb = b.get_value(self.key)

        # Missing values last regardless of direction
        if va is None or vb is None:
            if va is None and vb is None:
                return 0
            return 1 if va is None else -1

        result = _compare_values(va, vb)
        return -result if self.descending else result

    def sort(self, records: Sequence[T]) -> List[T]:
        """Return a new, stably sorted list."""
        return sorted(records, key=functools.cmp_to_key(self._compare))

    def __str__(self) -> str:
        return f"{self.key}-desc" if self.descending else self.key


def _compare_values(a: Value, b: Value) -> int:
    if a.type == b.type and a.type in (ParamType.OBJECT, ParamType.NONE):
        # Equality-only types, order by their JSON text
        sa = json.dumps(a.raw, sort_keys=True)
        sb = json.dumps(b.raw, sort_keys=True)
        return (sa > sb) - (sa < sb)

    result = a.compare(b)
    if isinstance(result, Incomparable):
        return _sign(TYPE_RANK[a.type] - TYPE_RANK[b.type])
    return result


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)
