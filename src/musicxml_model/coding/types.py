"""Scalar value types for attribute values and element text.

Each type parses the wire text into a Python value and formats it back.
Parse failures raise ``ValueError``; the codec turns those into
``InvalidValue`` errors carrying the coding path.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Generic, TypeVar

E = TypeVar("E", bound=Enum)


class ScalarType(ABC):
    """Base class for scalar value types."""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse wire text into a value.

        Args:
            text: The attribute value or element text.

        Returns:
            The parsed value.

        Raises:
            ValueError: If the text is not a valid lexical form.
        """

    @abstractmethod
    def format(self, value: Any) -> str:
        """Format a value as wire text."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StringType(ScalarType):
    """Strings with optional length and pattern constraints."""

    def __init__(
        self,
        min_length: int | None = None,
        pattern: str | None = None,
    ):
        self.min_length = min_length
        self.pattern = re.compile(pattern) if pattern else None

    def parse(self, text: str) -> str:
        if self.min_length is not None and len(text) < self.min_length:
            raise ValueError(f"String length {len(text)} is less than minimum {self.min_length}")
        if self.pattern is not None and not self.pattern.match(text):
            raise ValueError("Value does not match required pattern")
        return text

    def format(self, value: Any) -> str:
        return str(value)


class IntegerType(ScalarType):
    """Integers with an optional lower bound."""

    def __init__(self, min_value: int | None = None):
        self.min_value = min_value

    def parse(self, text: str) -> int:
        try:
            parsed = int(text.strip())
        except ValueError:
            raise ValueError("Not an integer") from None
        if self.min_value is not None and parsed < self.min_value:
            raise ValueError(f"Value {parsed} is less than minimum {self.min_value}")
        return parsed

    def format(self, value: Any) -> str:
        return str(int(value))


class OptionalIntegerType(IntegerType):
    """Integers that may also be empty (``positive-integer-or-empty``)."""

    def parse(self, text: str) -> int | None:  # type: ignore[override]
        if not text.strip():
            return None
        return super().parse(text)

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        return super().format(value)


class DecimalType(ScalarType):
    """Decimal numbers, kept as ``Decimal`` to preserve the lexical value."""

    def parse(self, text: str) -> Decimal:
        try:
            parsed = Decimal(text.strip())
        except InvalidOperation:
            raise ValueError("Not a decimal number") from None
        if not parsed.is_finite():
            raise ValueError("Not a finite decimal number")
        return parsed

    def format(self, value: Any) -> str:
        return str(value)


class YesNoType(ScalarType):
    """MusicXML ``yes-no`` values mapped to ``bool``."""

    def parse(self, text: str) -> bool:
        if text == "yes":
            return True
        if text == "no":
            return False
        raise ValueError("Expected yes or no")

    def format(self, value: Any) -> str:
        return "yes" if value else "no"


class EnumType(ScalarType, Generic[E]):
    """Enumerated string values backed by an ``Enum`` class."""

    def __init__(self, enum_class: type[E]):
        self.enum_class = enum_class

    def parse(self, text: str) -> E:
        try:
            return self.enum_class(text)
        except ValueError:
            allowed = ", ".join(str(member.value) for member in self.enum_class)
            raise ValueError(f"Not in allowed values: {allowed}") from None

    def format(self, value: Any) -> str:
        return str(self.enum_class(value).value)

    def __repr__(self) -> str:
        return f"EnumType({self.enum_class.__name__})"


class CommaSeparatedTextType(ScalarType):
    """Comma-separated lists such as ``font-family``, kept as a tuple."""

    def parse(self, text: str) -> tuple[str, ...]:
        items = tuple(item.strip() for item in text.split(","))
        if not any(items):
            raise ValueError("Empty comma-separated text")
        return items

    def format(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        return ",".join(value)


class CssFontSize(Enum):
    """CSS font sizes allowed by the ``font-size`` attribute."""

    XX_SMALL = "xx-small"
    X_SMALL = "x-small"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    X_LARGE = "x-large"
    XX_LARGE = "xx-large"


class FontSizeType(ScalarType):
    """A CSS size keyword or a numeric point size."""

    _css = EnumType(CssFontSize)
    _points = DecimalType()

    def parse(self, text: str) -> CssFontSize | Decimal:
        try:
            return self._css.parse(text)
        except ValueError:
            pass
        try:
            return self._points.parse(text)
        except ValueError:
            raise ValueError("Expected a CSS font size or a point size") from None

    def format(self, value: Any) -> str:
        if isinstance(value, CssFontSize):
            return value.value
        return self._points.format(value)


class ColorType(StringType):
    """``#RRGGBB`` or ``#AARRGGBB`` hexadecimal colors."""

    def __init__(self) -> None:
        super().__init__(pattern=r"^#[\dA-F]{6}([\dA-F]{2})?$")


STRING = StringType()
TOKEN = StringType(min_length=1)
INTEGER = IntegerType()
POSITIVE_INTEGER = IntegerType(min_value=1)
POSITIVE_INTEGER_OR_EMPTY = OptionalIntegerType(min_value=1)
DECIMAL = DecimalType()
YES_NO = YesNoType()
COMMA_SEPARATED_TEXT = CommaSeparatedTextType()
FONT_SIZE = FontSizeType()
COLOR = ColorType()
