"""Generic XML mapping for structured, choice and scalar types."""

from musicxml_model.coding.choice import Choice, Variant, is_choice, variant
from musicxml_model.coding.codec import XmlDecoder, XmlEncoder, decode, encode, parse_xml
from musicxml_model.coding.fields import (
    ALL_FIELDS,
    FieldKind,
    FieldSpec,
    NodeEncoding,
    attribute,
    choice,
    choices,
    classify,
    element,
    elements,
    fields_of,
    group,
    is_structure,
    structure,
    text,
)
from musicxml_model.coding.types import (
    ColorType,
    CommaSeparatedTextType,
    CssFontSize,
    DecimalType,
    EnumType,
    FontSizeType,
    IntegerType,
    OptionalIntegerType,
    ScalarType,
    StringType,
    YesNoType,
)

__all__ = [
    # Codec
    "XmlDecoder",
    "XmlEncoder",
    "decode",
    "encode",
    "parse_xml",
    # Choices
    "Choice",
    "Variant",
    "is_choice",
    "variant",
    # Fields
    "ALL_FIELDS",
    "FieldKind",
    "FieldSpec",
    "NodeEncoding",
    "attribute",
    "choice",
    "choices",
    "classify",
    "element",
    "elements",
    "fields_of",
    "group",
    "is_structure",
    "structure",
    "text",
    # Scalar types
    "ColorType",
    "CommaSeparatedTextType",
    "CssFontSize",
    "DecimalType",
    "EnumType",
    "FontSizeType",
    "IntegerType",
    "OptionalIntegerType",
    "ScalarType",
    "StringType",
    "YesNoType",
]
