"""
Tests for typed param/metric values.

Tests Value construction, comparison and rendering:
- Type inference from Python and numpy objects
- Literal parsing for filters
- Comparison across types returns Incomparable instead of raising
- Short string truncation for table cells
"""

import numpy as np
import pytest

from explister.params.value import Incomparable, ParamType, Value


# =============================================================================
# Construction
# =============================================================================


class TestFromPython:
    """Test type inference."""

    @pytest.mark.parametrize("obj,expected", [
        (1, ParamType.INT),
        (0.1, ParamType.FLOAT),
        ("adam", ParamType.STRING),
        (True, ParamType.BOOL),
        (None, ParamType.NONE),
        ({"layers": 2}, ParamType.OBJECT),
        ([1, 2, 3], ParamType.OBJECT),
    ])
    def test_infers_type(self, obj, expected):
        assert Value.from_python(obj).type == expected

    def test_bool_is_not_int(self):
        """bool subclasses int but must keep its own tag."""
        assert Value.from_python(False).type == ParamType.BOOL

    def test_numpy_scalars_are_unwrapped(self):
        assert Value.from_python(np.float32(0.5)).type == ParamType.FLOAT
        assert Value.from_python(np.int64(7)).raw == 7
        assert Value.from_python(np.bool_(True)).type == ParamType.BOOL

    def test_numpy_array_is_object(self):
        value = Value.from_python(np.array([1, 2]))
        assert value.type == ParamType.OBJECT
        assert value.raw == [1, 2]

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError, match="Unsupported value type"):
            Value.from_python(object())


class TestParse:
    """Test parsing of command-line literals."""

    @pytest.mark.parametrize("text,expected_type,expected_raw", [
        ("10", ParamType.INT, 10),
        ("-3", ParamType.INT, -3),
        ("0.1", ParamType.FLOAT, 0.1),
        ("1e-4", ParamType.FLOAT, 1e-4),
        ("true", ParamType.BOOL, True),
        ("False", ParamType.BOOL, False),
        ("null", ParamType.NONE, None),
        ("running", ParamType.STRING, "running"),
        ("'10'", ParamType.STRING, "10"),
        ('"a b"', ParamType.STRING, "a b"),
    ])
    def test_parse(self, text, expected_type, expected_raw):
        value = Value.parse(text)
        assert value.type == expected_type
        assert value.raw == expected_raw


# =============================================================================
# Comparison
# =============================================================================


class TestCompare:
    """Test three-way comparison and inequality."""

    def test_same_type(self):
        assert Value.from_python(1).compare(Value.from_python(2)) == -1
        assert Value.from_python("b").compare(Value.from_python("a")) == 1
        assert Value.from_python(0.1).compare(Value.from_python(0.1)) == 0

    def test_int_and_float_compare_numerically(self):
        assert Value.from_python(1).compare(Value.from_python(1.0)) == 0
        assert Value.from_python(2).not_equal(Value.from_python(1.5)) is True

    def test_mismatched_types_are_incomparable(self):
        result = Value.from_python(0.1).not_equal(Value.from_python("0.1"))
        assert isinstance(result, Incomparable)
        assert result.left == ParamType.FLOAT
        assert result.right == ParamType.STRING
        assert "float" in str(result) and "string" in str(result)

    def test_bool_and_int_are_incomparable(self):
        result = Value.from_python(True).compare(Value.from_python(1))
        assert isinstance(result, Incomparable)

    def test_objects_support_equality_only(self):
        a = Value.from_python({"x": 1})
        assert a.not_equal(Value.from_python({"x": 1})) is False
        assert a.not_equal(Value.from_python({"x": 2})) is True

    def test_nan_differs_from_every_number(self):
        nan = Value.from_python(float("nan"))
        assert nan.not_equal(Value.from_python(0.1)) is True
        assert Value.from_python(0).not_equal(nan) is True
        assert nan.compare(Value.from_python(float("nan"))) == 0

    def test_nan_orders_after_numbers(self):
        nan = Value.from_python(float("nan"))
        assert nan.compare(Value.from_python(float("inf"))) == 1
        assert Value.from_python(10 ** 9).compare(nan) == -1

    def test_equality_operator(self):
        assert Value.from_python(3) == Value.from_python(3)
        assert Value.from_python(3) != Value.from_python(3.0)


# =============================================================================
# Rendering
# =============================================================================


class TestRendering:
    """Test string forms."""

    @pytest.mark.parametrize("obj,expected", [
        (10, "10"),
        (0.1, "0.1"),
        ("adam", "adam"),
        (True, "true"),
        (None, "null"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
    ])
    def test_str(self, obj, expected):
        assert str(Value.from_python(obj)) == expected

    def test_short_string_keeps_short_values(self):
        assert Value.from_python("short").short_string(20, 5) == "short"

    def test_short_string_keeps_values_at_limit(self):
        text = "x" * 20
        assert Value.from_python(text).short_string(20, 5) == text

    def test_short_string_truncates_long_values(self):
        value = Value.from_python("this-is-a-very-long-value-12345")
        assert value.short_string(20, 5) == "this-..."

    def test_short_string_applies_to_numbers(self):
        value = Value.from_python(123456789012345678901)
        assert value.short_string(20, 5) == "12345..."

    def test_to_json(self):
        assert Value.from_python(0.5).to_json() == 0.5
        assert Value.from_python([1]).to_json() == [1]
        assert Value.from_python(float("nan")).to_json() == "nan"

    def test_to_json_nested_non_finite(self):
        value = Value.from_python({"a": [1.0, float("nan")], "b": {"c": float("-inf")}})
        assert value.to_json() == {"a": [1.0, "nan"], "b": {"c": "-inf"}}
