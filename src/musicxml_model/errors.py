"""Coding error types and decode reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    """Kinds of coding errors."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    UNRECOGNIZED_CHOICE = "unrecognized_choice"
    INVALID_VALUE = "invalid_value"
    MALFORMED_XML = "malformed_xml"  # Rejected by the XML parser
    ENCODING = "encoding"
    PACKAGE = "package"  # Compressed .mxl archive problem


class CodingError(Exception):
    """Base class for errors raised while encoding or decoding."""

    kind: ErrorKind = ErrorKind.ENCODING

    def __init__(self, description: str, coding_path: tuple[str, ...] = ()):
        self.description = description
        self.coding_path = tuple(coding_path)
        super().__init__(str(self))

    @property
    def path(self) -> str:
        """Get the coding path joined with slashes."""
        return "/".join(self.coding_path)

    def __str__(self) -> str:
        if self.coding_path:
            return f"[{self.kind.value}] {self.path}: {self.description}"
        return f"[{self.kind.value}] {self.description}"


class DecodingError(CodingError):
    """Raised when XML text cannot be turned into a typed value."""


class MissingRequiredField(DecodingError):
    """A non-optional field had no attribute or element in the input."""

    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, field: str, coding_path: tuple[str, ...] = ()):
        self.field = field
        super().__init__(f"Required field '{field}' is missing", coding_path)


class UnrecognizedChoice(DecodingError):
    """None of a choice type's declared tags was present."""

    kind = ErrorKind.UNRECOGNIZED_CHOICE

    def __init__(
        self,
        type_name: str,
        coding_path: tuple[str, ...] = (),
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ):
        self.type_name = type_name
        self.expected = tuple(expected)
        self.found = found
        description = f"Unrecognized choice for {type_name}"
        if found is not None:
            description += f": element '{found}' is not a variant"
        if self.expected:
            description += f". Expected one of: {', '.join(self.expected)}"
        super().__init__(description, coding_path)


class InvalidValue(DecodingError):
    """A scalar attribute or text could not be parsed."""

    kind = ErrorKind.INVALID_VALUE

    def __init__(
        self,
        field: str,
        value: str,
        reason: str,
        coding_path: tuple[str, ...] = (),
    ):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for '{field}': {reason}", coding_path)


class MalformedXml(DecodingError):
    """The input is not well-formed XML."""

    kind = ErrorKind.MALFORMED_XML


class EncodingError(CodingError):
    """Raised when a value cannot be written as XML."""

    kind = ErrorKind.ENCODING


class PackageError(CodingError):
    """Raised when a compressed MusicXML archive cannot be read."""

    kind = ErrorKind.PACKAGE


@dataclass
class DecodeReport:
    """Result of decoding a file."""

    ok: bool
    file_path: str = ""
    root_tag: str = ""
    errors: list[CodingError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)
