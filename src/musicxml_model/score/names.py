"""Part names and their display forms."""

from __future__ import annotations

from musicxml_model.coding.choice import Choice, variant
from musicxml_model.coding.fields import attribute, choices, group, structure, text
from musicxml_model.coding.types import COLOR, STRING, YES_NO
from musicxml_model.score.common import (
    ACCIDENTAL_VALUE,
    LEFT_CENTER_RIGHT,
    AccidentalValue,
    LeftCenterRight,
)
from musicxml_model.score.font import Font


@structure("part-name")
class PartName:
    """Name of a part as written in the score.

    Also used for ``part-abbreviation``. Formatting attributes are
    deprecated in favour of ``part-name-display`` but still read and written.
    """

    value: str = text(STRING)
    print_object: bool | None = attribute("print-object", YES_NO)
    justify: LeftCenterRight | None = attribute("justify", LEFT_CENTER_RIGHT)
    color: str | None = attribute("color", COLOR)
    font: Font | None = group(Font)


@structure("display-text")
class FormattedText:
    value: str = text(STRING)
    justify: LeftCenterRight | None = attribute("justify", LEFT_CENTER_RIGHT)
    color: str | None = attribute("color", COLOR)
    font: Font | None = group(Font)


@structure("accidental-text")
class AccidentalText:
    value: AccidentalValue = text(ACCIDENTAL_VALUE)
    smufl: str | None = attribute("smufl", STRING)
    color: str | None = attribute("color", COLOR)
    font: Font | None = group(Font)


class NameDisplayItem(Choice):
    display_text = variant("display-text", FormattedText)
    accidental_text = variant("accidental-text", AccidentalText)


@structure("part-name-display")
class NameDisplay:
    """Formatted display of a part name or abbreviation.

    The texts are rendered in order, so ``["Trumpet in B", flat, " 1"]``
    reads "Trumpet in B♭ 1".
    """

    texts: list[NameDisplayItem] = choices(NameDisplayItem)
    print_object: bool | None = attribute("print-object", YES_NO)

    @classmethod
    def of(cls, *texts: NameDisplayItem, print_object: bool | None = None) -> NameDisplay:
        return cls(texts=list(texts), print_object=print_object)
