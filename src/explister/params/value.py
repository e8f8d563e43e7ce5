"""
Typed values for experiment params and checkpoint metrics.

Params and metrics are recorded by user code, so they arrive as arbitrary
JSON-ish Python objects. Value wraps them with an explicit type tag so that
list views can compare, sort and print them without guessing.

Comparisons between values of unrelated types (e.g. a string and a float)
do not raise: they return an ``Incomparable`` result that callers must
handle explicitly.

Usage:
    >>> lr = Value.from_python(0.1)
    >>> lr.type
    <ParamType.FLOAT: 'float'>
    >>> lr.not_equal(Value.from_python(0.2))
    True
    >>> lr.not_equal(Value.from_python("0.1"))
    Incomparable(left=<ParamType.FLOAT: 'float'>, right=<ParamType.STRING: 'string'>)
"""

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import numpy as np


class ParamType(str, Enum):
    """Type tag of a Value."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    OBJECT = "object"
    """Dicts and lists. Compared for equality only."""

    NONE = "none"


# Types whose values can be compared with each other
_NUMERIC_TYPES = (ParamType.INT, ParamType.FLOAT)

# Used by sorters to order values that cannot be compared directly
TYPE_RANK = {
    ParamType.BOOL: 0,
    ParamType.INT: 1,
    ParamType.FLOAT: 1,
    ParamType.STRING: 2,
    ParamType.OBJECT: 3,
    ParamType.NONE: 4,
}


@dataclass(frozen=True)
class Incomparable:
    """Result of comparing two values whose types cannot be compared."""

    left: ParamType
    right: ParamType

    def __str__(self) -> str:
        return f"Cannot compare values of type {self.left.value} and {self.right.value}"


class Value:
    """
    A typed param or metric value.

    Args:
        type: Type tag.
        raw: Underlying Python value (int, float, str, bool, dict/list or None).
    """

    __slots__ = ("type", "raw")

    def __init__(self, type: ParamType, raw: Any):
        self.type = type
        self.raw = raw

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """
        Wrap a Python object, inferring its type tag.

        NumPy scalars and arrays are unwrapped first.
        """
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, np.ndarray):
            obj = obj.tolist()
        elif isinstance(obj, np.generic):
            obj = obj.item()

        # bool is a subclass of int, check it first
        if isinstance(obj, bool):
            return cls(ParamType.BOOL, obj)
        if isinstance(obj, int):
            return cls(ParamType.INT, obj)
        if isinstance(obj, float):
            return cls(ParamType.FLOAT, obj)
        if isinstance(obj, str):
            return cls(ParamType.STRING, obj)
        if obj is None:
            return cls(ParamType.NONE, None)
        if isinstance(obj, (dict, list, tuple)):
            return cls(ParamType.OBJECT, obj)
        raise TypeError(f"Unsupported value type: {type(obj).__name__}")

    @classmethod
    def parse(cls, text: str) -> "Value":
        """
        Parse a literal typed on the command line.

        ``10`` is an int, ``0.1`` and ``1e-4`` are floats, ``true``/``false``
        are bools, ``null`` is none and anything else is a string.
        Surrounding quotes force a string.
        """
        text = text.strip()
        if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
            return cls(ParamType.STRING, text[1:-1])
        lowered = text.lower()
        if lowered in ("true", "false"):
            return cls(ParamType.BOOL, lowered == "true")
        if lowered in ("null", "none"):
            return cls(ParamType.NONE, None)
        try:
            return cls(ParamType.INT, int(text))
        except ValueError:
            pass
        try:
            return cls(ParamType.FLOAT, float(text))
        except ValueError:
            pass
        return cls(ParamType.STRING, text)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def compare(self, other: "Value") -> Union[int, Incomparable]:
        """
        Three-way compare with another value.

        Returns:
            -1, 0 or 1, or Incomparable if the types cannot be compared.
            Objects and nones only support equality (0 or 1). NaN equals
            NaN and sorts after every other number.
        """
        if self.type in _NUMERIC_TYPES and other.type in _NUMERIC_TYPES:
            return _cmp_numbers(self.raw, other.raw)
        if self.type != other.type:
            return Incomparable(self.type, other.type)
        if self.type in (ParamType.OBJECT, ParamType.NONE):
            return 0 if self.raw == other.raw else 1
        return _cmp(self.raw, other.raw)

    def is_nan(self) -> bool:
        return self.type == ParamType.FLOAT and math.isnan(self.raw)

    def not_equal(self, other: "Value") -> Union[bool, Incomparable]:
        """True if the values differ, or Incomparable on a type mismatch."""
        result = self.compare(other)
        if isinstance(result, Incomparable):
            return result
        return result != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.type == other.type and self.raw == other.raw

    def __hash__(self) -> int:
        return hash((self.type, json.dumps(self.raw, sort_keys=True)))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        if self.type == ParamType.STRING:
            return self.raw
        if self.type == ParamType.BOOL:
            return "true" if self.raw else "false"
        if self.type == ParamType.NONE:
            return "null"
        if self.type == ParamType.OBJECT:
            return json.dumps(self.raw, separators=(",", ":"))
        return repr(self.raw)

    def __repr__(self) -> str:
        return f"Value({self.type.value}, {self.raw!r})"

    def short_string(self, max_length: int, truncate_length: int) -> str:
        """
        String form bounded for table cells.

        Values longer than ``max_length`` are cut to their first
        ``truncate_length`` characters followed by an ellipsis.
        """
        s = str(self)
        if len(s) > max_length:
            return s[:truncate_length] + "..."
        return s

    def to_json(self) -> Any:
        """Natural JSON form (NaN and infinities become strings, also inside objects)."""
        return _json_safe(self.raw)


def _cmp(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _cmp_numbers(a: Union[int, float], b: Union[int, float]) -> int:
    a_nan = isinstance(a, float) and math.isnan(a)
    b_nan = isinstance(b, float) and math.isnan(b)
    if a_nan or b_nan:
        return a_nan - b_nan
    return _cmp(a, b)


def _json_safe(obj: Any) -> Any:
    if isinstance(obj, float) and not math.isfinite(obj):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(v) for v in obj]
    return obj

