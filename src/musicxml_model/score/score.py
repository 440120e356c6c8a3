"""The ``score-partwise`` document root and its header."""

from __future__ import annotations

from decimal import Decimal

from musicxml_model.coding.fields import attribute, element, elements, structure, text
from musicxml_model.coding.types import DECIMAL, STRING, TOKEN, YES_NO
from musicxml_model.score.part_list import PartList


@structure()
class TypedText:
    """Text with an optional ``type``, as in ``<creator type="composer">``."""

    value: str = text(STRING, required=False)
    type: str | None = attribute("type", TOKEN)


@structure()
class Work:
    number: str | None = element("work-number", STRING)
    title: str | None = element("work-title", STRING)


@structure()
class Encoding:
    """How the document was encoded."""

    software: list[str] = elements("software", STRING)
    encoding_date: str | None = element("encoding-date", STRING)
    encoders: list[TypedText] = elements("encoder", TypedText)
    description: str | None = element("encoding-description", STRING)


@structure("identification")
class Identification:
    creators: list[TypedText] = elements("creator", TypedText)
    rights: list[TypedText] = elements("rights", TypedText)
    encoding: Encoding | None = element("encoding", Encoding)
    source: str | None = element("source", STRING)


@structure("measure")
class Measure:
    """A measure of a part.

    Only the measure's attributes are modelled; its musical content is
    outside the scope of this package and is dropped when decoding.
    """

    number: str = attribute("number", TOKEN, required=True)
    implicit: bool | None = attribute("implicit", YES_NO)
    non_controlling: bool | None = attribute("non-controlling", YES_NO)
    width: Decimal | None = attribute("width", DECIMAL)


@structure("part")
class Part:
    id: str = attribute("id", TOKEN, required=True)
    measures: list[Measure] = elements("measure", Measure)


@structure("score-partwise", kw_only=True)
class ScorePartwise:
    """A partwise score: a part list followed by the measures of each part."""

    version: str | None = attribute("version", TOKEN)
    work: Work | None = element("work", Work)
    movement_number: str | None = element("movement-number", STRING)
    movement_title: str | None = element("movement-title", STRING)
    identification: Identification | None = element("identification", Identification)
    part_list: PartList = element("part-list", PartList, required=True)
    parts: list[Part] = elements("part", Part)

    def part(self, part_id: str) -> Part | None:
        """Get a part by id."""
        for part in self.parts:
            if part.id == part_id:
                return part
        return None
