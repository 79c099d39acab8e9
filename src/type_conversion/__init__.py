"""
Typed-field coercion for record values
"""

from .converters import (
    BooleanConverter,
    ConversionError,
    DoubleConverter,
    IntegerConverter,
    NumberFormatError,
    SourceKind,
    StringConverter,
    TypeConverter,
    UnsupportedConversionError,
    classify,
)
from .target_types import TargetType, get_converter

__all__ = [
    "BooleanConverter",
    "ConversionError",
    "DoubleConverter",
    "IntegerConverter",
    "NumberFormatError",
    "SourceKind",
    "StringConverter",
    "TargetType",
    "TypeConverter",
    "UnsupportedConversionError",
    "classify",
    "get_converter",
]
