"""
Declared field types and the converter lookup used by field mapping
"""

from enum import Enum

from .converters import (
    BooleanConverter,
    DoubleConverter,
    IntegerConverter,
    StringConverter,
    TypeConverter,
    UnsupportedConversionError,
)

# Converters are stateless, so one shared instance per type is enough
_CONVERTERS = {
    "integer": IntegerConverter(),
    "double": DoubleConverter(),
    "boolean": BooleanConverter(),
    "string": StringConverter(),
}

_ALIASES = {
    "int": "integer",
    "float": "double",
    "bool": "boolean",
    "str": "string",
}


class TargetType(Enum):
    """Field types a pipeline configuration can declare"""

    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    STRING = "string"

    @classmethod
    def from_name(cls, type_name: str) -> "TargetType":
        """
        Resolve a declared type name, ignoring case

        Raises:
            UnsupportedConversionError: If the name is not a known type
        """
        if not isinstance(type_name, str):
            raise UnsupportedConversionError(
                f"Invalid target type name: {type_name!r}", type_name
            )

        normalized = type_name.strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as e:
            raise UnsupportedConversionError(
                f"Unknown target type: '{type_name}'", type_name
            ) from e

    @property
    def converter(self) -> TypeConverter:
        return _CONVERTERS[self.value]


def get_converter(type_name: str) -> TypeConverter:
    """Get the converter for a declared field type name"""
    return TargetType.from_name(type_name).converter
