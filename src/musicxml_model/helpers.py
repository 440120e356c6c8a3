"""File-level helpers for musicxml_model.

Provides convenient utilities around the codec:
- Reading plain and compressed MusicXML files
- Picking the root type from the document's root element
- Decode reports for batch checking
- Writing scores with the MusicXML declaration and DOCTYPE
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from lxml import etree

from musicxml_model.coding.codec import XmlDecoder, XmlEncoder, local_name, parse_xml
from musicxml_model.doctypes import COMPRESSED_EXTENSIONS, PARTWISE_DOCTYPE
from musicxml_model.errors import CodingError, DecodeReport, DecodingError
from musicxml_model.package import MxlPackage
from musicxml_model.score import ROOT_TYPES, ScorePartwise

logger = logging.getLogger(__name__)


def read_document(path: str | Path) -> bytes:
    """Read the XML text of a ``.musicxml``/``.xml`` or ``.mxl`` file."""
    path = Path(path)
    if path.suffix.lower() in COMPRESSED_EXTENSIONS:
        with MxlPackage(path) as package:
            return package.read_score()
    return path.read_bytes()


def root_type_for(element: etree._Element) -> type:
    """Get the registered type for a document's root element.

    Raises:
        DecodingError: If no type is registered for the root tag.
    """
    tag = local_name(element.tag)
    value_type = ROOT_TYPES.get(tag)
    if value_type is None:
        raise DecodingError(
            f"No type is registered for root element '{tag}'. "
            f"Known roots: {', '.join(sorted(ROOT_TYPES))}",
            (tag,),
        )
    logger.debug("Decoding root element '%s' as %s", tag, value_type.__name__)
    return value_type


def decode_file(
    path: str | Path,
    value_type: Any = None,
    trim_whitespace: bool = False,
) -> Any:
    """Decode a MusicXML file.

    Args:
        path: A ``.musicxml``, ``.xml`` or compressed ``.mxl`` file.
        value_type: Type to decode into. Chosen from the root tag if None.
        trim_whitespace: Strip whitespace around element text.

    Returns:
        The decoded value.

    Example:
        from musicxml_model.helpers import decode_file

        score = decode_file("quartet.mxl")
        for part in score.part_list.parts:
            print(part.id, part.name.value if part.name else "")
    """
    root = parse_xml(read_document(path))
    if value_type is None:
        value_type = root_type_for(root)
    return XmlDecoder(trim_whitespace=trim_whitespace).decode_element(value_type, root)


def check_file(
    path: str | Path,
    value_type: Any = None,
    trim_whitespace: bool = False,
) -> DecodeReport:
    """Decode a file and report the outcome instead of raising."""
    report = DecodeReport(ok=True, file_path=str(path))
    try:
        root = parse_xml(read_document(path))
        report.root_tag = local_name(root.tag)
        if value_type is None:
            value_type = root_type_for(root)
        XmlDecoder(trim_whitespace=trim_whitespace).decode_element(value_type, root)
    except CodingError as exc:
        report.ok = False
        report.errors.append(exc)
    except OSError as exc:
        report.ok = False
        report.errors.append(DecodingError(f"Cannot read file: {exc}"))
    return report


def encode_score(score: ScorePartwise, pretty_print: bool = True) -> bytes:
    """Encode a partwise score as a complete MusicXML document."""
    encoder = XmlEncoder(
        pretty_print=pretty_print,
        xml_declaration=True,
        doctype=PARTWISE_DOCTYPE,
    )
    return encoder.encode(score)
