"""musicxml-model - typed MusicXML elements with XML encoding and decoding.

Declare a dataclass per schema entity, classify its fields as attributes or
elements, and let the codec read and write the XML.

Example:
    from musicxml_model import PartList, decode, encode

    part_list = decode(PartList, b'''
        <part-list>
          <score-part id="P1"><part-name>Flute</part-name></score-part>
          <part-group type="start"/>
          <score-part id="P2"><part-name>Oboe</part-name></score-part>
        </part-list>
    ''')
    [part.id for part in part_list.parts]   # ['P1', 'P2']
    xml = encode(part_list)

    # Files, including compressed .mxl
    from musicxml_model import decode_file

    score = decode_file("score.mxl")
"""

from musicxml_model.coding import (
    ALL_FIELDS,
    Choice,
    NodeEncoding,
    XmlDecoder,
    XmlEncoder,
    classify,
    decode,
    encode,
)
from musicxml_model.errors import (
    CodingError,
    DecodeReport,
    DecodingError,
    EncodingError,
    ErrorKind,
    InvalidValue,
    MalformedXml,
    MissingRequiredField,
    PackageError,
    UnrecognizedChoice,
)
from musicxml_model.helpers import check_file, decode_file, encode_score, read_document
from musicxml_model.package import MxlPackage
from musicxml_model.score import (
    AccidentalText,
    Font,
    FormattedText,
    NameDisplay,
    NameDisplayItem,
    PartGroup,
    PartList,
    PartListItem,
    PartName,
    ScoreInstrument,
    ScorePart,
    ScorePartwise,
    SoloOrEnsemble,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "decode",
    "encode",
    "XmlDecoder",
    "XmlEncoder",
    "classify",
    "NodeEncoding",
    "ALL_FIELDS",
    "Choice",
    # Errors
    "CodingError",
    "DecodingError",
    "EncodingError",
    "ErrorKind",
    "InvalidValue",
    "MalformedXml",
    "MissingRequiredField",
    "PackageError",
    "UnrecognizedChoice",
    "DecodeReport",
    # Files
    "MxlPackage",
    "check_file",
    "decode_file",
    "encode_score",
    "read_document",
    # Elements
    "AccidentalText",
    "Font",
    "FormattedText",
    "NameDisplay",
    "NameDisplayItem",
    "PartGroup",
    "PartList",
    "PartListItem",
    "PartName",
    "ScoreInstrument",
    "ScorePart",
    "ScorePartwise",
    "SoloOrEnsemble",
]
