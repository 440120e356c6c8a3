"""Choice types: closed sets of variants discriminated by element tag.

A choice type lists its variants in declaration order. Each variant binds a
wire tag to a payload type; the tag itself is the discriminator, there is no
separate attribute. Decoding checks the variants in declaration order and
takes the first whose tag is present, so that order is also the tie-break
when an element holds more than one candidate.

Example:
    class PartListItem(Choice):
        group = variant("part-group", PartGroup)
        part = variant("score-part", ScorePart)

    item = PartListItem.part(ScorePart(id="P1"))
    item.part      # -> ScorePart(id="P1")
    item.group     # -> None
    item.tag       # -> "score-part"
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar

_MISSING = object()


@dataclass(frozen=True)
class Variant:
    """One alternative of a choice type."""

    name: str
    tag: str
    value_type: Any


class VariantDescriptor:
    """Class attribute declaring a variant.

    On the class it returns a constructor for that variant; on an instance
    it returns the payload when the variant is active, else None.
    """

    def __init__(self, tag: str, value_type: Any):
        self.tag = tag
        self.value_type = value_type
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @property
    def spec(self) -> Variant:
        return Variant(name=self.name, tag=self.tag, value_type=self.value_type)

    def __get__(self, obj: Choice | None, owner: type[Choice]) -> Any:
        if obj is None:
            name = self.name
            value_type = self.value_type

            def construct(value: Any = _MISSING) -> Choice:
                if value is _MISSING:
                    # Structured payloads default to an instance with no fields set
                    value = value_type() if dataclasses.is_dataclass(value_type) else None
                return owner(name, value)

            construct.__name__ = name
            construct.__qualname__ = f"{owner.__name__}.{name}"
            return construct
        if obj.variant.name == self.name:
            return obj.value
        return None


def variant(tag: str, value_type: Any) -> Any:
    """Declare a choice variant bound to the element tag ``tag``."""
    return VariantDescriptor(tag, value_type)


class Choice:
    """Base class for choice types.

    Subclasses declare their variants with :func:`variant`. Instances hold
    exactly one active variant and its payload.
    """

    __variants__: ClassVar[tuple[Variant, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        variants = [
            attr.spec for attr in cls.__dict__.values() if isinstance(attr, VariantDescriptor)
        ]
        if not variants:
            raise TypeError(f"{cls.__name__} declares no variants")
        tags = [v.tag for v in variants]
        duplicates = sorted({t for t in tags if tags.count(t) > 1})
        if duplicates:
            raise TypeError(f"{cls.__name__} binds tags {duplicates} to more than one variant")
        cls.__variants__ = tuple(variants)

    def __init__(self, variant: str, value: Any = None):
        for spec in self.__variants__:
            if spec.name == variant:
                self._variant = spec
                break
        else:
            raise ValueError(f"{type(self).__name__} has no variant named '{variant}'")
        self._value = value

    @classmethod
    def variants(cls) -> tuple[Variant, ...]:
        """Get the variants in declaration order."""
        return cls.__variants__

    @classmethod
    def tags(cls) -> tuple[str, ...]:
        """Get the variant tags in declaration order."""
        return tuple(v.tag for v in cls.__variants__)

    @classmethod
    def variant_for_tag(cls, tag: str) -> Variant | None:
        for spec in cls.__variants__:
            if spec.tag == tag:
                return spec
        return None

    @property
    def variant(self) -> Variant:
        """Get the active variant."""
        return self._variant

    @property
    def value(self) -> Any:
        """Get the payload of the active variant."""
        return self._value

    @property
    def tag(self) -> str:
        """Get the wire tag of the active variant."""
        return self._variant.tag

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._variant == other._variant and self._value == other._value  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self._variant.name}({self._value!r})"


def is_choice(value_type: Any) -> bool:
    """Check whether a type is a choice type."""
    return isinstance(value_type, type) and issubclass(value_type, Choice) and value_type is not Choice
