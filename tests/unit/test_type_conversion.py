"""
Unit tests for field value converters
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.type_conversion import (
    BooleanConverter,
    ConversionError,
    DoubleConverter,
    IntegerConverter,
    NumberFormatError,
    SourceKind,
    StringConverter,
    TargetType,
    TypeConverter,
    UnsupportedConversionError,
    classify,
    get_converter,
)

double_converter = DoubleConverter()


@pytest.mark.parametrize(
    "value,expected",
    [
        ("3.14", 3.14),
        ("-2", -2.0),
        ("1e3", 1000.0),
        (2.5, 2.5),
        (5, 5.0),
        (True, 1.0),
        (False, 0.0),
    ],
)
def test_double_conversion_table(value, expected):
    result = double_converter.convert(value)

    assert result == expected
    assert isinstance(result, float)


def test_double_truncates_non_float_numbers():
    """Non-float numbers lose their fractional part before widening"""
    assert double_converter.convert(Decimal("3.99")) == 3.0
    assert double_converter.convert(Fraction(7, 2)) == 3.0
    assert double_converter.convert(Decimal("-3.99")) == -3.0


def test_double_passes_floats_through():
    value = 3.99
    assert double_converter.convert(value) is value


def test_double_rejects_none():
    with pytest.raises(UnsupportedConversionError):
        double_converter.convert(None)


@pytest.mark.parametrize("value", [[1.0], {"value": 1}, object(), b"1.0", 1j])
def test_double_rejects_unsupported_types(value):
    with pytest.raises(UnsupportedConversionError) as exc_info:
        double_converter.convert(value)

    assert exc_info.value.target_type == "double"


@pytest.mark.parametrize(
    "value",
    ["abc", "", "1.2.3", "3,14", "1_000", "inf", "infinity", "nan", "-inf", "\u0661"],
)
def test_double_rejects_non_numeric_text(value):
    with pytest.raises(NumberFormatError) as exc_info:
        double_converter.convert(value)

    assert exc_info.value.value == value


@pytest.mark.parametrize(
    "value,expected",
    [(" 2.5 ", 2.5), (".5", 0.5), ("1.", 1.0), ("+4", 4.0), ("Infinity", float("inf"))],
)
def test_double_accepts_decimal_literals(value, expected):
    assert double_converter.convert(value) == expected


def test_double_accepts_nan_spelling():
    result = double_converter.convert("NaN")

    assert result != result


def test_conversion_errors_share_a_base_class():
    with pytest.raises(ConversionError):
        double_converter.convert("abc")
    with pytest.raises(ConversionError):
        double_converter.convert(None)

    assert issubclass(NumberFormatError, ValueError)
    assert issubclass(UnsupportedConversionError, TypeError)


@pytest.mark.parametrize(
    "value,kind",
    [
        ("1", SourceKind.TEXT),
        (1.0, SourceKind.FLOAT),
        (1, SourceKind.NUMBER),
        (Decimal("1"), SourceKind.NUMBER),
        (True, SourceKind.BOOLEAN),
        (None, SourceKind.UNSUPPORTED),
        (1j, SourceKind.UNSUPPORTED),
    ],
)
def test_classify(value, kind):
    assert classify(value) is kind


def test_converter_missing_a_source_kind_cannot_be_created():
    class TextOnlyConverter(TypeConverter):
        target_type = "text_only"

        def from_text(self, value):
            return value

    with pytest.raises(TypeError):
        TextOnlyConverter()


@pytest.mark.parametrize(
    "value,expected",
    [("42", 42), (3.9, 3), (-3.9, -3), (7, 7), (Decimal("2.5"), 2), (True, 1), (False, 0)],
)
def test_integer_conversion(value, expected):
    result = IntegerConverter().convert(value)

    assert result == expected
    assert type(result) is int


@pytest.mark.parametrize(
    "value", ["4.2", "four", "1_000", "", "\u0661", float("nan"), float("inf")]
)
def test_integer_rejects_invalid_numbers(value):
    with pytest.raises(NumberFormatError):
        IntegerConverter().convert(value)


@pytest.mark.parametrize(
    "value,expected",
    [("true", True), ("TRUE", True), ("yes", False), (0, False), (2, True), (0.0, False), (False, False)],
)
def test_boolean_conversion(value, expected):
    assert BooleanConverter().convert(value) is expected


@pytest.mark.parametrize(
    "value,expected", [("abc", "abc"), (1.5, "1.5"), (3, "3"), (True, "true")]
)
def test_string_conversion(value, expected):
    assert StringConverter().convert(value) == expected


def test_string_rejects_none():
    with pytest.raises(UnsupportedConversionError):
        StringConverter().convert(None)


@pytest.mark.parametrize(
    "type_name,converter_class",
    [
        ("double", DoubleConverter),
        ("DOUBLE", DoubleConverter),
        ("float", DoubleConverter),
        ("integer", IntegerConverter),
        ("int", IntegerConverter),
        ("boolean", BooleanConverter),
        (" string ", StringConverter),
    ],
)
def test_get_converter(type_name, converter_class):
    assert isinstance(get_converter(type_name), converter_class)


def test_converters_are_shared_instances():
    assert get_converter("double") is get_converter("float")
    assert TargetType.DOUBLE.converter is get_converter("double")


@pytest.mark.parametrize("type_name", ["decimal", "", None])
def test_unknown_target_type(type_name):
    with pytest.raises(UnsupportedConversionError):
        TargetType.from_name(type_name)
