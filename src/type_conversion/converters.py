"""
Converters that coerce untyped record field values into a target type

Every converter classifies the incoming value into one SourceKind and hands
it to the matching ``from_*`` method. The methods are abstract, so a
converter that forgets a source kind cannot be instantiated.
"""

import numbers
import re
from decimal import Decimal
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict

# Text accepted as a number: plain decimal literals without digit underscores,
# and the exact spellings NaN and Infinity
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
SPECIAL_FLOAT_PATTERN = re.compile(r"[+-]?(NaN|Infinity)")
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


class ConversionError(Exception):
    """Base exception for field value conversion errors"""

    def __init__(self, message: str, value: Any = None, target_type: str = ""):
        super().__init__(message)
        self.value = value
        self.target_type = target_type


class NumberFormatError(ConversionError, ValueError):
    """Raised when text cannot be parsed as a number"""


class UnsupportedConversionError(ConversionError, TypeError):
    """Raised when no conversion rule applies to the value"""


class SourceKind(Enum):
    """Closed set of source representations a converter handles"""

    TEXT = "text"
    FLOAT = "float"
    NUMBER = "number"  # any other real number, e.g. int, Decimal
    BOOLEAN = "boolean"
    UNSUPPORTED = "unsupported"


def classify(value: Any) -> SourceKind:
    """Determine the source kind of a raw field value"""
    if isinstance(value, str):
        return SourceKind.TEXT
    # bool is a subclass of int, so it must be checked before numbers
    if isinstance(value, bool):
        return SourceKind.BOOLEAN
    if isinstance(value, float):
        return SourceKind.FLOAT
    if isinstance(value, (numbers.Real, Decimal)):
        return SourceKind.NUMBER
    return SourceKind.UNSUPPORTED


class TypeConverter(ABC):
    """
    Converts a raw field value into a concrete target type

    Subclasses implement one method per supported source kind.
    """

    target_type = ""

    def convert(self, value: Any) -> Any:
        """
        Convert a raw value into the target type

        Args:
            value: Untyped field value taken from a record

        Returns:
            The converted value

        Raises:
            NumberFormatError: If text is not a valid literal for the target
            UnsupportedConversionError: If the value's type has no rule
        """
        handlers: Dict[SourceKind, Callable[[Any], Any]] = {
            SourceKind.TEXT: self.from_text,
            SourceKind.FLOAT: self.from_float,
            SourceKind.NUMBER: self.from_number,
            SourceKind.BOOLEAN: self.from_boolean,
            SourceKind.UNSUPPORTED: self.unsupported,
        }
        return handlers[classify(value)](value)

    @abstractmethod
    def from_text(self, value: str) -> Any:
        pass

    @abstractmethod
    def from_float(self, value: float) -> Any:
        pass

    @abstractmethod
    def from_number(self, value: numbers.Real) -> Any:
        pass

    @abstractmethod
    def from_boolean(self, value: bool) -> Any:
        pass

    def unsupported(self, value: Any) -> Any:
        raise UnsupportedConversionError(
            f"Unsupported type conversion from {type(value).__name__} to {self.target_type}",
            value,
            self.target_type,
        )

    def _number_format_error(self, value: Any) -> NumberFormatError:
        return NumberFormatError(
            f"Cannot convert {value!r} to {self.target_type}", value, self.target_type
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(target_type='{self.target_type}')>"


class DoubleConverter(TypeConverter):
    """Converts values to float"""

    target_type = "double"

    def from_text(self, value: str) -> float:
        text = value.strip()
        if not (
            DECIMAL_PATTERN.fullmatch(text) or SPECIAL_FLOAT_PATTERN.fullmatch(text)
        ):
            raise self._number_format_error(value)
        return float(text)

    def from_float(self, value: float) -> float:
        return value

    def from_number(self, value: numbers.Real) -> float:
        # Non-float numbers are truncated to an integer before widening
        try:
            return float(int(value))
        except (ValueError, OverflowError) as e:
            raise self._number_format_error(value) from e

    def from_boolean(self, value: bool) -> float:
        return 1.0 if value else 0.0


class IntegerConverter(TypeConverter):
    """Converts values to int"""

    target_type = "integer"

    def from_text(self, value: str) -> int:
        text = value.strip()
        if not INTEGER_PATTERN.fullmatch(text):
            raise self._number_format_error(value)
        try:
            return int(text)
        except ValueError as e:
            raise self._number_format_error(value) from e

    def from_float(self, value: float) -> int:
        try:
            return int(value)
        except (ValueError, OverflowError) as e:
            raise self._number_format_error(value) from e

    def from_number(self, value: numbers.Real) -> int:
        return self.from_float(value)

    def from_boolean(self, value: bool) -> int:
        return 1 if value else 0


class BooleanConverter(TypeConverter):
    """Converts values to bool"""

    target_type = "boolean"

    def from_text(self, value: str) -> bool:
        return value.lower() == "true"

    def from_float(self, value: float) -> bool:
        return value != 0

    def from_number(self, value: numbers.Real) -> bool:
        return value != 0

    def from_boolean(self, value: bool) -> bool:
        return value


class StringConverter(TypeConverter):
    """Converts values to str"""

    target_type = "string"

    def from_text(self, value: str) -> str:
        return value

    def from_float(self, value: float) -> str:
        return str(value)

    def from_number(self, value: numbers.Real) -> str:
        return str(value)

    def from_boolean(self, value: bool) -> str:
        return str(value).lower()
