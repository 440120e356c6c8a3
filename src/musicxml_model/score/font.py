"""The font attribute group."""

from __future__ import annotations

from decimal import Decimal

from musicxml_model.coding.fields import attribute, structure
from musicxml_model.coding.types import COMMA_SEPARATED_TEXT, FONT_SIZE, CssFontSize
from musicxml_model.score.common import FONT_STYLE, FONT_WEIGHT, FontStyle, FontWeight


@structure("font")
class Font:
    """Font attributes for credits, directions and names.

    Based on CSS text styles. ``font-family`` is a comma-separated list of
    font names, either specific fonts such as Maestro or Opus or generic
    styles (music, engraved, handwritten, text, serif, sans-serif, cursive,
    fantasy, monospace). ``font-size`` is a CSS size keyword or a point size.

    All members are attributes when the group is embedded. An embedding
    context may turn style, size and weight into child elements;
    ``font-family`` stays an attribute everywhere.
    """

    family: tuple[str, ...] | None = attribute("font-family", COMMA_SEPARATED_TEXT, pinned=True)
    style: FontStyle | None = attribute("font-style", FONT_STYLE)
    size: CssFontSize | Decimal | None = attribute("font-size", FONT_SIZE)
    weight: FontWeight | None = attribute("font-weight", FONT_WEIGHT)
