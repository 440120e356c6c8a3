"""Typed MusicXML elements."""

from musicxml_model.score.common import (
    AccidentalValue,
    Empty,
    FontStyle,
    FontWeight,
    GroupBarlineValue,
    GroupSymbolValue,
    LeftCenterRight,
    StartStop,
)
from musicxml_model.score.font import Font
from musicxml_model.score.names import (
    AccidentalText,
    FormattedText,
    NameDisplay,
    NameDisplayItem,
    PartName,
)
from musicxml_model.score.part_list import (
    PartGroup,
    PartList,
    PartListItem,
    ScoreInstrument,
    ScorePart,
    SoloOrEnsemble,
)
from musicxml_model.score.score import (
    Encoding,
    Identification,
    Measure,
    Part,
    ScorePartwise,
    TypedText,
    Work,
)

# Types that can be decoded from a document of their own, keyed by root tag
ROOT_TYPES: dict[str, type] = {
    "score-partwise": ScorePartwise,
    "part-list": PartList,
    "score-part": ScorePart,
    "part-group": PartGroup,
    "score-instrument": ScoreInstrument,
    "part-name": PartName,
    "part-abbreviation": PartName,
    "part-name-display": NameDisplay,
    "part-abbreviation-display": NameDisplay,
    "identification": Identification,
    "font": Font,
}

__all__ = [
    "ROOT_TYPES",
    # Simple types
    "AccidentalValue",
    "Empty",
    "FontStyle",
    "FontWeight",
    "GroupBarlineValue",
    "GroupSymbolValue",
    "LeftCenterRight",
    "StartStop",
    # Attribute groups
    "Font",
    # Names
    "AccidentalText",
    "FormattedText",
    "NameDisplay",
    "NameDisplayItem",
    "PartName",
    # Part list
    "PartGroup",
    "PartList",
    "PartListItem",
    "ScoreInstrument",
    "ScorePart",
    "SoloOrEnsemble",
    # Score
    "Encoding",
    "Identification",
    "Measure",
    "Part",
    "ScorePartwise",
    "TypedText",
    "Work",
]
