"""XML encoder and decoder for structured, choice and scalar types.

Tokenising and tree construction are left to lxml; this module walks the
element tree using the field tables built by :func:`structure`.
"""

from __future__ import annotations

import logging
from typing import Any

from lxml import etree

from musicxml_model.coding.choice import Choice, is_choice
from musicxml_model.coding.fields import (
    FieldKind,
    FieldSpec,
    NodeEncoding,
    Overrides,
    fields_of,
    is_structure,
    merge_overrides,
    resolve_encoding,
    tag_of,
)
from musicxml_model.coding.types import ScalarType
from musicxml_model.context import CodingContext
from musicxml_model.errors import (
    EncodingError,
    InvalidValue,
    MalformedXml,
    MissingRequiredField,
    UnrecognizedChoice,
)

logger = logging.getLogger(__name__)


def local_name(tag: str) -> str:
    """Strip a Clark-notation namespace from a tag."""
    if tag.startswith("{"):
        return tag.split("}")[-1]
    return tag


def child_elements(element: etree._Element) -> list[etree._Element]:
    """Get child elements, skipping comments and processing instructions."""
    return [child for child in element if isinstance(child.tag, str)]


def parse_xml(data: bytes | str) -> etree._Element:
    """Parse XML text into an element tree.

    Raises:
        MalformedXml: If the text is not well-formed.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    parser = etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedXml(f"XML parse error: {exc}") from exc


class XmlEncoder:
    """Encodes typed values as MusicXML text."""

    def __init__(
        self,
        pretty_print: bool = True,
        xml_declaration: bool = False,
        encoding: str = "UTF-8",
        doctype: str | None = None,
    ):
        """Initialize the encoder.

        Args:
            pretty_print: Indent nested elements.
            xml_declaration: Emit an ``<?xml ...?>`` declaration.
            encoding: Output character encoding.
            doctype: Optional DOCTYPE declaration placed before the root.
        """
        self.pretty_print = pretty_print
        self.xml_declaration = xml_declaration
        self.encoding = encoding
        self.doctype = doctype

    def encode(
        self,
        value: Any,
        tag: str | None = None,
        overrides: Overrides | None = None,
    ) -> bytes:
        """Encode a structured or choice value as an XML document.

        Args:
            value: The value to encode.
            tag: Root element tag, defaulting to the type's own tag.
            overrides: Attribute/element classification overrides for the
                root value's fields.

        Returns:
            The encoded document.
        """
        root = self.encode_element(value, tag=tag, overrides=overrides)
        return etree.tostring(
            root,
            pretty_print=self.pretty_print,
            xml_declaration=self.xml_declaration,
            encoding=self.encoding,
            doctype=self.doctype,
        )

    def encode_element(
        self,
        value: Any,
        tag: str | None = None,
        overrides: Overrides | None = None,
    ) -> etree._Element:
        """Encode a structured or choice value as an lxml element."""
        context = CodingContext()
        if isinstance(value, Choice):
            return self._encode_choice(value, context)

        cls = type(value)
        if not is_structure(cls):
            raise EncodingError(f"Cannot encode {cls.__name__} as a document")
        tag = tag or tag_of(cls)
        if tag is None:
            raise EncodingError(f"{cls.__name__} has no element tag; pass tag=")
        return self._encode_structure(value, tag, overrides, context)

    def _encode_structure(
        self,
        value: Any,
        tag: str,
        overrides: Overrides | None,
        context: CodingContext,
    ) -> etree._Element:
        element = etree.Element(tag)
        with context.enter(tag):
            self._write_fields(element, value, overrides, context)
        return element

    def _write_fields(
        self,
        element: etree._Element,
        value: Any,
        overrides: Overrides | None,
        context: CodingContext,
    ) -> None:
        for spec in fields_of(type(value)):
            field_value = getattr(value, spec.name)

            if spec.kind is FieldKind.GROUP:
                if field_value is not None:
                    self._write_fields(
                        element,
                        field_value,
                        merge_overrides(overrides, spec.overrides),
                        context,
                    )
                continue

            if field_value is None or (spec.is_sequence and not field_value):
                if spec.required:
                    raise EncodingError(
                        f"Required field '{spec.label}' is not set", context.coding_path
                    )
                continue

            if spec.kind is FieldKind.VALUE:
                self._write_value(element, spec, field_value, overrides, context)
            elif spec.kind is FieldKind.TEXT:
                formatted = spec.value_type.format(field_value)
                if formatted:
                    element.text = formatted
            elif spec.kind is FieldKind.SEQUENCE:
                for item in field_value:
                    element.append(
                        self._encode_value(item, spec.value_type, spec.xml_name or "", None, context)
                    )
            elif spec.kind is FieldKind.CHOICE:
                self._check_choice(spec, field_value, context)
                element.append(self._encode_choice(field_value, context))
            else:
                for item in field_value:
                    self._check_choice(spec, item, context)
                    element.append(self._encode_choice(item, context))

    def _write_value(
        self,
        element: etree._Element,
        spec: FieldSpec,
        field_value: Any,
        overrides: Overrides | None,
        context: CodingContext,
    ) -> None:
        if spec.pinned and overrides and spec.xml_name in overrides:
            logger.debug("Ignoring override for pinned field '%s'", spec.xml_name)

        encoding = resolve_encoding(spec, overrides)
        if encoding is NodeEncoding.ATTRIBUTE:
            if not isinstance(spec.value_type, ScalarType):
                raise EncodingError(
                    f"Field '{spec.label}' has a structured value and cannot be an attribute",
                    context.coding_path,
                )
            element.set(spec.xml_name or "", spec.value_type.format(field_value))
        else:
            element.append(
                self._encode_value(
                    field_value, spec.value_type, spec.xml_name or "", spec.overrides, context
                )
            )

    def _encode_value(
        self,
        value: Any,
        value_type: Any,
        tag: str,
        overrides: Overrides | None,
        context: CodingContext,
    ) -> etree._Element:
        if isinstance(value_type, ScalarType):
            child = etree.Element(tag)
            formatted = value_type.format(value)
            if formatted:
                child.text = formatted
            return child
        if not isinstance(value, value_type):
            raise EncodingError(
                f"Expected {value_type.__name__} for '{tag}', got {type(value).__name__}",
                context.coding_path,
            )
        return self._encode_structure(value, tag, overrides, context)

    def _encode_choice(self, value: Choice, context: CodingContext) -> etree._Element:
        spec = value.variant
        return self._encode_value(value.value, spec.value_type, spec.tag, None, context)

    def _check_choice(self, spec: FieldSpec, value: Any, context: CodingContext) -> None:
        if not isinstance(value, spec.value_type):
            raise EncodingError(
                f"Expected {spec.value_type.__name__} for '{spec.name}', "
                f"got {type(value).__name__}",
                context.coding_path,
            )


class XmlDecoder:
    """Decodes MusicXML text into typed values."""

    def __init__(self, trim_whitespace: bool = False):
        """Initialize the decoder.

        Args:
            trim_whitespace: Strip leading and trailing whitespace from
                element text before parsing it.
        """
        self.trim_whitespace = trim_whitespace

    def decode(self, value_type: Any, data: bytes | str) -> Any:
        """Decode XML text as ``value_type``.

        Args:
            value_type: A structured type, a choice type or a scalar type.
            data: The XML document.

        Returns:
            The decoded value.

        Raises:
            MalformedXml: If the text is not well-formed.
            MissingRequiredField: If a required field is absent.
            UnrecognizedChoice: If no variant of a choice type is present.
            InvalidValue: If a scalar value cannot be parsed.
        """
        return self.decode_element(value_type, parse_xml(data))

    def decode_element(self, value_type: Any, element: etree._Element) -> Any:
        """Decode an already parsed lxml element as ``value_type``.

        For a choice type, a root element carrying one of the variant tags
        is that variant, as written by :meth:`XmlEncoder.encode`. Any other
        root is searched for a variant among its children.
        """
        context = CodingContext(trim_whitespace=self.trim_whitespace)
        tag = local_name(element.tag)
        with context.enter(tag):
            if is_choice(value_type):
                spec = value_type.variant_for_tag(tag)
                if spec is not None:
                    return value_type(spec.name, self._decode_node(spec.value_type, element, context))
            return self._decode_node(value_type, element, context)

    def _decode_node(self, value_type: Any, element: etree._Element, context: CodingContext) -> Any:
        if isinstance(value_type, ScalarType):
            return self._parse(
                value_type, self._text(element, context), local_name(element.tag), context
            )
        if is_structure(value_type):
            return self._decode_structure(value_type, element, context)
        if is_choice(value_type):
            children = child_elements(element)
            return self._decode_choice(value_type, children, set(), True, context)
        raise TypeError(f"Cannot decode into {value_type!r}")

    def _decode_structure(self, cls: type, element: etree._Element, context: CodingContext) -> Any:
        children = child_elements(element)
        claimed: set[int] = set()
        values = self._decode_fields(cls, element, children, claimed, context)

        sequence = next(
            (s for s in fields_of(cls) if s.kind is FieldKind.CHOICE_SEQUENCE), None
        )
        if sequence is not None:
            values[sequence.name] = self._decode_choice_sequence(
                sequence.value_type, children, claimed, context
            )
        elif len(claimed) < len(children):
            ignored = [local_name(c.tag) for i, c in enumerate(children) if i not in claimed]
            logger.debug(
                "Ignoring unknown children of %s at %s: %s",
                cls.__name__,
                "/".join(context.coding_path),
                ", ".join(ignored),
            )
        return cls(**values)

    def _decode_fields(
        self,
        cls: type,
        element: etree._Element,
        children: list[etree._Element],
        claimed: set[int],
        context: CodingContext,
    ) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for spec in fields_of(cls):
            if spec.kind is FieldKind.VALUE:
                values[spec.name] = self._decode_value(spec, element, children, claimed, context)
            elif spec.kind is FieldKind.TEXT:
                values[spec.name] = self._decode_text(spec, element, context)
            elif spec.kind is FieldKind.GROUP:
                members = self._decode_fields(spec.value_type, element, children, claimed, context)
                if any(v is not None for v in members.values()):
                    values[spec.name] = spec.value_type(**members)
                else:
                    values[spec.name] = None
            elif spec.kind is FieldKind.SEQUENCE:
                values[spec.name] = self._decode_sequence(spec, children, claimed, context)
            elif spec.kind is FieldKind.CHOICE:
                values[spec.name] = self._decode_choice(
                    spec.value_type, children, claimed, spec.required, context
                )
        return values

    def _decode_value(
        self,
        spec: FieldSpec,
        element: etree._Element,
        children: list[etree._Element],
        claimed: set[int],
        context: CodingContext,
    ) -> Any:
        # Look in the classified store first, then the other one
        if spec.encoding is NodeEncoding.ATTRIBUTE:
            lookups = (self._from_attribute, self._from_child)
        else:
            lookups = (self._from_child, self._from_attribute)

        for lookup in lookups:
            found, value = lookup(spec, element, children, claimed, context)
            if found:
                return value

        if spec.required:
            raise MissingRequiredField(spec.label, context.coding_path)
        return None

    def _from_attribute(
        self,
        spec: FieldSpec,
        element: etree._Element,
        children: list[etree._Element],
        claimed: set[int],
        context: CodingContext,
    ) -> tuple[bool, Any]:
        if not isinstance(spec.value_type, ScalarType):
            return False, None
        raw = element.get(spec.xml_name or "")
        if raw is None:
            return False, None
        return True, self._parse(spec.value_type, raw, spec.label, context)

    def _from_child(
        self,
        spec: FieldSpec,
        element: etree._Element,
        children: list[etree._Element],
        claimed: set[int],
        context: CodingContext,
    ) -> tuple[bool, Any]:
        for index, child in enumerate(children):
            if index in claimed or local_name(child.tag) != spec.xml_name:
                continue
            claimed.add(index)
            with context.enter(spec.xml_name):
                return True, self._decode_node(spec.value_type, child, context)
        return False, None

    def _decode_text(
        self, spec: FieldSpec, element: etree._Element, context: CodingContext
    ) -> Any:
        raw = self._text(element, context)
        if not raw:
            if spec.required:
                raise MissingRequiredField(spec.label, context.coding_path)
            return None
        return self._parse(spec.value_type, raw, spec.label, context)

    def _decode_sequence(
        self,
        spec: FieldSpec,
        children: list[etree._Element],
        claimed: set[int],
        context: CodingContext,
    ) -> list[Any]:
        items: list[Any] = []
        for index, child in enumerate(children):
            if index in claimed or local_name(child.tag) != spec.xml_name:
                continue
            claimed.add(index)
            with context.enter(f"{spec.xml_name}[{len(items)}]"):
                items.append(self._decode_node(spec.value_type, child, context))
        return items

    def _decode_choice(
        self,
        choice_type: type[Choice],
        children: list[etree._Element],
        claimed: set[int],
        required: bool,
        context: CodingContext,
    ) -> Choice | None:
        """Decode a single choice from the children of one element.

        Variants are tried in declaration order and the first one whose tag
        is present wins, whatever the document order of the children.
        """
        present = {
            local_name(child.tag): index
            for index, child in reversed(list(enumerate(children)))
            if index not in claimed
        }
        matches = [v for v in choice_type.variants() if v.tag in present]
        if not matches:
            if required:
                raise UnrecognizedChoice(
                    choice_type.__name__, context.coding_path, expected=choice_type.tags()
                )
            return None

        spec = matches[0]
        if len(matches) > 1:
            logger.debug(
                "Several variants of %s present at %s; taking '%s'",
                choice_type.__name__,
                "/".join(context.coding_path),
                spec.tag,
            )
        index = present[spec.tag]
        claimed.add(index)
        with context.enter(spec.tag):
            payload = self._decode_node(spec.value_type, children[index], context)
        return choice_type(spec.name, payload)

    def _decode_choice_sequence(
        self,
        choice_type: type[Choice],
        children: list[etree._Element],
        claimed: set[int],
        context: CodingContext,
    ) -> list[Choice]:
        """Decode every unclaimed child, in document order, as a choice value."""
        items: list[Choice] = []
        for index, child in enumerate(children):
            if index in claimed:
                continue
            claimed.add(index)
            tag = local_name(child.tag)
            with context.enter(f"{tag}[{len(items)}]"):
                spec = choice_type.variant_for_tag(tag)
                if spec is None:
                    raise UnrecognizedChoice(
                        choice_type.__name__,
                        context.coding_path,
                        expected=choice_type.tags(),
                        found=tag,
                    )
                payload = self._decode_node(spec.value_type, child, context)
            items.append(choice_type(spec.name, payload))
        return items

    def _text(self, element: etree._Element, context: CodingContext) -> str:
        raw = element.text or ""
        if context.trim_whitespace:
            raw = raw.strip()
        return raw

    def _parse(
        self, value_type: ScalarType, raw: str, label: str, context: CodingContext
    ) -> Any:
        try:
            return value_type.parse(raw)
        except ValueError as exc:
            raise InvalidValue(label, raw, str(exc), context.coding_path) from exc


def decode(value_type: Any, data: bytes | str, trim_whitespace: bool = False) -> Any:
    """Decode XML text as ``value_type``.

    Example:
        name = decode(PartName, b"<part-name>Violin</part-name>")
    """
    return XmlDecoder(trim_whitespace=trim_whitespace).decode(value_type, data)


def encode(
    value: Any,
    tag: str | None = None,
    overrides: Overrides | None = None,
    pretty_print: bool = True,
    xml_declaration: bool = False,
    doctype: str | None = None,
) -> bytes:
    """Encode a structured or choice value as XML text."""
    encoder = XmlEncoder(
        pretty_print=pretty_print,
        xml_declaration=xml_declaration,
        doctype=doctype,
    )
    return encoder.encode(value, tag=tag, overrides=overrides)
