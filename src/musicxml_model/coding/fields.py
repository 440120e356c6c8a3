"""Field declarations and attribute/element classification for structured types.

A structured type is a dataclass decorated with :func:`structure`. Every
dataclass field must be declared with one of the helpers below, which record
how the field appears on the wire:

- :func:`attribute` / :func:`element`: a single value, classified as an XML
  attribute or a child element
- :func:`text`: the element's text content
- :func:`group`: an attribute group flattened onto the owning element
- :func:`elements`: a repeated child element
- :func:`choice` / :func:`choices`: one choice value, or an ordered list of them

Example:
    @structure("part-name")
    class PartName:
        value: str = text(STRING)
        print_object: bool | None = attribute("print-object", YES_NO)
        font: Font | None = group(Font)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from musicxml_model.coding.choice import is_choice
from musicxml_model.coding.types import ScalarType

T = TypeVar("T")

FIELD_SPEC = "musicxml_model.field_spec"

# Override key matching every overridable field
ALL_FIELDS = "*"


class NodeEncoding(Enum):
    """Where a single-valued field is written."""

    ATTRIBUTE = "attribute"
    ELEMENT = "element"


class FieldKind(Enum):
    """Shapes a declared field can take on the wire."""

    VALUE = "value"
    TEXT = "text"
    GROUP = "group"
    SEQUENCE = "sequence"
    CHOICE = "choice"
    CHOICE_SEQUENCE = "choice_sequence"


Overrides = Mapping[str, NodeEncoding]


@dataclass(frozen=True)
class FieldSpec:
    """Wire description of one dataclass field."""

    kind: FieldKind
    value_type: Any
    xml_name: str | None = None
    encoding: NodeEncoding = NodeEncoding.ELEMENT
    required: bool = False
    pinned: bool = False  # Ignores embedding overrides
    overrides: Overrides | None = None
    name: str = ""

    @property
    def label(self) -> str:
        """Name used in diagnostics."""
        return self.xml_name or self.name

    @property
    def is_sequence(self) -> bool:
        return self.kind in (FieldKind.SEQUENCE, FieldKind.CHOICE_SEQUENCE)


def _declare(spec: FieldSpec) -> Any:
    metadata = {FIELD_SPEC: spec}
    if spec.is_sequence:
        return dataclasses.field(default_factory=list, metadata=metadata)
    if spec.required:
        return dataclasses.field(metadata=metadata)
    return dataclasses.field(default=None, metadata=metadata)


def attribute(
    xml_name: str,
    value_type: ScalarType,
    *,
    required: bool = False,
    pinned: bool = False,
) -> Any:
    """Declare a field written as an XML attribute.

    Args:
        xml_name: The attribute name.
        value_type: The scalar type of the value.
        required: If True, decoding fails when the attribute is missing.
        pinned: If True, embedding overrides never turn it into an element.
    """
    return _declare(
        FieldSpec(
            kind=FieldKind.VALUE,
            value_type=value_type,
            xml_name=xml_name,
            encoding=NodeEncoding.ATTRIBUTE,
            required=required,
            pinned=pinned,
        )
    )


def element(
    xml_name: str,
    value_type: Any,
    *,
    required: bool = False,
    overrides: Overrides | None = None,
) -> Any:
    """Declare a field written as a child element.

    Args:
        xml_name: The child element tag.
        value_type: A scalar type or a structured type.
        required: If True, decoding fails when the element is missing.
        overrides: Classification overrides applied when encoding the
            nested structured value.
    """
    return _declare(
        FieldSpec(
            kind=FieldKind.VALUE,
            value_type=value_type,
            xml_name=xml_name,
            encoding=NodeEncoding.ELEMENT,
            required=required,
            overrides=overrides,
        )
    )


def text(value_type: ScalarType, *, required: bool = True) -> Any:
    """Declare a field holding the element's text content.

    Empty text and no text are the same on the wire, so an optional text
    field decodes both as None and ``""`` does not round-trip.
    """
    return _declare(FieldSpec(kind=FieldKind.TEXT, value_type=value_type, required=required))


def group(group_type: type, *, overrides: Overrides | None = None) -> Any:
    """Declare an attribute group flattened onto the owning element."""
    return _declare(FieldSpec(kind=FieldKind.GROUP, value_type=group_type, overrides=overrides))


def elements(xml_name: str, value_type: Any) -> Any:
    """Declare a repeated child element, decoded to a list."""
    return _declare(FieldSpec(kind=FieldKind.SEQUENCE, value_type=value_type, xml_name=xml_name))


def choice(choice_type: type, *, required: bool = False) -> Any:
    """Declare a single choice among the owning element's children."""
    return _declare(FieldSpec(kind=FieldKind.CHOICE, value_type=choice_type, required=required))


def choices(choice_type: type) -> Any:
    """Declare an ordered list of choice values.

    The list claims every child element not taken by another field, so a
    child whose tag is not one of the choice's variants is a decode error.
    """
    return _declare(FieldSpec(kind=FieldKind.CHOICE_SEQUENCE, value_type=choice_type))


def is_structure(value_type: Any) -> bool:
    """Check whether a type was declared with :func:`structure`."""
    return isinstance(value_type, type) and "__xml_fields__" in value_type.__dict__


def fields_of(cls: type) -> tuple[FieldSpec, ...]:
    """Get the field specs of a structured type in declaration order."""
    return cls.__xml_fields__  # type: ignore[attr-defined]


def tag_of(cls: type) -> str | None:
    """Get the default element tag of a structured type."""
    return cls.__xml_tag__  # type: ignore[attr-defined]


def merge_overrides(outer: Overrides | None, inner: Overrides | None) -> Overrides | None:
    """Combine call-site overrides with those declared at an embedding site."""
    if not outer:
        return inner
    if not inner:
        return outer
    return {**outer, **inner}


def resolve_encoding(spec: FieldSpec, overrides: Overrides | None = None) -> NodeEncoding:
    """Get the encoding of a single-valued field under the given overrides."""
    if spec.kind is not FieldKind.VALUE:
        return NodeEncoding.ELEMENT
    if overrides and not spec.pinned:
        encoding = overrides.get(spec.xml_name or "", overrides.get(ALL_FIELDS))
        if encoding is not None:
            return encoding
    return spec.encoding


def classify(cls: type, xml_name: str, overrides: Overrides | None = None) -> NodeEncoding:
    """Classify a field of a structured type as attribute or element.

    Members of embedded attribute groups are found through the group, with
    the group's declared overrides applied on top of ``overrides``.

    Args:
        cls: A structured type.
        xml_name: The attribute or element name of the field.
        overrides: Per-call-site classification overrides.

    Returns:
        The node encoding of the field.

    Raises:
        KeyError: If the type declares no field with that name.
    """
    for spec in fields_of(cls):
        if spec.kind is FieldKind.GROUP:
            try:
                return classify(spec.value_type, xml_name, merge_overrides(overrides, spec.overrides))
            except KeyError:
                continue
        if spec.xml_name == xml_name:
            return resolve_encoding(spec, overrides)
    raise KeyError(f"{cls.__name__} has no field named '{xml_name}'")


def _static_names(cls: type) -> tuple[list[str], list[str]]:
    """Collect statically attribute- and element-classified XML names."""
    attributes: list[str] = []
    children: list[str] = []
    for spec in fields_of(cls):
        if spec.kind is FieldKind.GROUP:
            group_attributes, group_children = _static_names(spec.value_type)
            attributes.extend(group_attributes)
            children.extend(group_children)
        elif spec.kind is FieldKind.VALUE and spec.encoding is NodeEncoding.ATTRIBUTE:
            attributes.append(spec.xml_name or "")
        elif spec.kind in (FieldKind.VALUE, FieldKind.SEQUENCE):
            children.append(spec.xml_name or "")
        elif spec.kind in (FieldKind.CHOICE, FieldKind.CHOICE_SEQUENCE):
            children.extend(v.tag for v in spec.value_type.variants())
    return attributes, children


def _check_spec(cls: type, spec: FieldSpec) -> None:
    where = f"{cls.__name__}.{spec.name}"
    if spec.kind is FieldKind.VALUE and spec.encoding is NodeEncoding.ATTRIBUTE:
        if not isinstance(spec.value_type, ScalarType):
            raise TypeError(f"{where}: attributes must have a scalar type")
    elif spec.kind in (FieldKind.VALUE, FieldKind.SEQUENCE):
        if not isinstance(spec.value_type, ScalarType) and not is_structure(spec.value_type):
            raise TypeError(f"{where}: element values must be scalar or structured types")
    elif spec.kind is FieldKind.TEXT:
        if not isinstance(spec.value_type, ScalarType):
            raise TypeError(f"{where}: text content must have a scalar type")
    elif spec.kind is FieldKind.GROUP:
        if not is_structure(spec.value_type):
            raise TypeError(f"{where}: groups must be structured types")
        for member in fields_of(spec.value_type):
            if member.kind not in (FieldKind.VALUE, FieldKind.GROUP) or member.required:
                raise TypeError(
                    f"{where}: group members must be optional attributes or elements"
                )
    elif not is_choice(spec.value_type):
        raise TypeError(f"{where}: choice fields must have a Choice type")


def structure(
    tag: str | None = None,
    *,
    kw_only: bool = False,
) -> Callable[[type[T]], type[T]]:
    """Class decorator declaring a structured XML type.

    Applies ``dataclass`` and builds the static classification table. All
    checks run here, so a malformed declaration fails when the class is
    defined rather than when a document is decoded.

    Args:
        tag: Default element tag, used when the value is encoded as a
            document root. Attribute groups and types only ever nested
            under a field name may leave it unset.
        kw_only: Make the constructor keyword-only, which lets a required
            field follow optional ones in schema order.

    Raises:
        TypeError: If a field is unclassified, a name is used twice, a
            name is both attribute and element, or the type declares more
            than one text or choice-sequence field.
    """

    def wrap(cls: type[T]) -> type[T]:
        cls = dataclass(cls, kw_only=kw_only)
        specs: list[FieldSpec] = []
        for f in dataclasses.fields(cls):  # type: ignore[arg-type]
            spec = f.metadata.get(FIELD_SPEC)
            if spec is None:
                raise TypeError(
                    f"{cls.__name__}.{f.name} is not classified as an attribute or element"
                )
            spec = dataclasses.replace(spec, name=f.name)
            _check_spec(cls, spec)
            specs.append(spec)

        for kind in (FieldKind.TEXT, FieldKind.CHOICE_SEQUENCE):
            if sum(1 for s in specs if s.kind is kind) > 1:
                raise TypeError(f"{cls.__name__} declares more than one {kind.value} field")

        cls.__xml_fields__ = tuple(specs)  # type: ignore[attr-defined]
        cls.__xml_tag__ = tag  # type: ignore[attr-defined]

        attributes, children = _static_names(cls)
        for names, what in ((attributes, "attribute"), (children, "element")):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise TypeError(f"{cls.__name__} declares {what} {duplicates} twice")
        overlap = sorted(set(attributes) & set(children))
        if overlap:
            raise TypeError(f"{cls.__name__} uses {overlap} as both attribute and element")
        return cls

    return wrap
