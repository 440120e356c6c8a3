"""Simple MusicXML types shared across elements."""

from __future__ import annotations

from enum import Enum

from musicxml_model.coding.fields import structure
from musicxml_model.coding.types import EnumType


class StartStop(Enum):
    START = "start"
    STOP = "stop"


class LeftCenterRight(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FontStyle(Enum):
    NORMAL = "normal"
    ITALIC = "italic"


class FontWeight(Enum):
    NORMAL = "normal"
    BOLD = "bold"


class AccidentalValue(Enum):
    """Accidental glyphs usable in ``accidental-text``."""

    SHARP = "sharp"
    NATURAL = "natural"
    FLAT = "flat"
    DOUBLE_SHARP = "double-sharp"
    SHARP_SHARP = "sharp-sharp"
    FLAT_FLAT = "flat-flat"
    NATURAL_SHARP = "natural-sharp"
    NATURAL_FLAT = "natural-flat"
    QUARTER_FLAT = "quarter-flat"
    QUARTER_SHARP = "quarter-sharp"
    THREE_QUARTERS_FLAT = "three-quarters-flat"
    THREE_QUARTERS_SHARP = "three-quarters-sharp"
    SHARP_DOWN = "sharp-down"
    SHARP_UP = "sharp-up"
    NATURAL_DOWN = "natural-down"
    NATURAL_UP = "natural-up"
    FLAT_DOWN = "flat-down"
    FLAT_UP = "flat-up"
    TRIPLE_SHARP = "triple-sharp"
    TRIPLE_FLAT = "triple-flat"
    SLASH_QUARTER_SHARP = "slash-quarter-sharp"
    SLASH_SHARP = "slash-sharp"
    SLASH_FLAT = "slash-flat"
    DOUBLE_SLASH_FLAT = "double-slash-flat"
    SORI = "sori"
    KORON = "koron"
    OTHER = "other"


class GroupSymbolValue(Enum):
    NONE = "none"
    BRACE = "brace"
    LINE = "line"
    BRACKET = "bracket"
    SQUARE = "square"


class GroupBarlineValue(Enum):
    YES = "yes"
    NO = "no"
    MENSURSTRICH = "Mensurstrich"


START_STOP = EnumType(StartStop)
LEFT_CENTER_RIGHT = EnumType(LeftCenterRight)
FONT_STYLE = EnumType(FontStyle)
FONT_WEIGHT = EnumType(FontWeight)
ACCIDENTAL_VALUE = EnumType(AccidentalValue)
GROUP_SYMBOL_VALUE = EnumType(GroupSymbolValue)
GROUP_BARLINE_VALUE = EnumType(GroupBarlineValue)


@structure()
class Empty:
    """An element with no content, such as ``<solo/>`` or ``<group-time/>``."""
