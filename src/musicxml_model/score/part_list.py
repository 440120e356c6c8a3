"""The part list: score parts and part groups."""

from __future__ import annotations

from collections.abc import Iterator

from musicxml_model.coding.choice import Choice, variant
from musicxml_model.coding.fields import (
    attribute,
    choice,
    choices,
    element,
    elements,
    structure,
)
from musicxml_model.coding.types import POSITIVE_INTEGER_OR_EMPTY, STRING, TOKEN
from musicxml_model.score.common import (
    GROUP_BARLINE_VALUE,
    GROUP_SYMBOL_VALUE,
    START_STOP,
    Empty,
    GroupBarlineValue,
    GroupSymbolValue,
    StartStop,
)
from musicxml_model.score.names import NameDisplay, PartName


class SoloOrEnsemble(Choice):
    """Whether an instrument plays solo or as an ensemble of a given size.

    An ensemble with no size (``<ensemble/>``) has a payload of None.
    """

    solo = variant("solo", Empty)
    ensemble = variant("ensemble", POSITIVE_INTEGER_OR_EMPTY)


@structure("score-instrument")
class ScoreInstrument:
    id: str = attribute("id", TOKEN, required=True)
    name: str = element("instrument-name", STRING, required=True)
    abbreviation: str | None = element("instrument-abbreviation", STRING)
    sound: str | None = element("instrument-sound", STRING)
    solo_or_ensemble: SoloOrEnsemble | None = choice(SoloOrEnsemble)


@structure("score-part")
class ScorePart:
    """A part in the score, referenced later by ``<part id=...>``."""

    id: str = attribute("id", TOKEN, required=True)
    name: PartName | None = element("part-name", PartName)
    name_display: NameDisplay | None = element("part-name-display", NameDisplay)
    abbreviation: PartName | None = element("part-abbreviation", PartName)
    abbreviation_display: NameDisplay | None = element("part-abbreviation-display", NameDisplay)
    groups: list[str] = elements("group", STRING)
    instruments: list[ScoreInstrument] = elements("score-instrument", ScoreInstrument)


@structure("part-group")
class PartGroup:
    """Start or end of a bracketed or braced group of parts."""

    type: StartStop | None = attribute("type", START_STOP)
    number: str | None = attribute("number", TOKEN)
    name: str | None = element("group-name", STRING)
    abbreviation: str | None = element("group-abbreviation", STRING)
    symbol: GroupSymbolValue | None = element("group-symbol", GROUP_SYMBOL_VALUE)
    barline: GroupBarlineValue | None = element("group-barline", GROUP_BARLINE_VALUE)
    time: Empty | None = element("group-time", Empty)


class PartListItem(Choice):
    group = variant("part-group", PartGroup)
    part = variant("score-part", ScorePart)


@structure("part-list")
class PartList:
    """The parts of a movement, ordered top to bottom as in the score.

    Example:
        PartList([
            PartListItem.group(PartGroup(type=StartStop.START)),
            PartListItem.part(ScorePart(id="P1")),
            PartListItem.part(ScorePart(id="P2")),
            PartListItem.group(PartGroup(type=StartStop.STOP)),
        ])
    """

    items: list[PartListItem] = choices(PartListItem)

    @classmethod
    def of(cls, *items: PartListItem) -> PartList:
        return cls(list(items))

    @property
    def parts(self) -> list[ScorePart]:
        """Get the score parts, skipping groups."""
        return [item.part for item in self.items if item.part is not None]

    def __iter__(self) -> Iterator[PartListItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
