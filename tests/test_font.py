"""Tests for the font attribute group and embedding overrides."""

from __future__ import annotations

from decimal import Decimal

from musicxml_model import ALL_FIELDS, NodeEncoding, XmlDecoder, XmlEncoder, decode, encode
from musicxml_model.coding.codec import parse_xml
from musicxml_model.coding.fields import element, group, structure, text
from musicxml_model.coding.types import STRING, CssFontSize
from musicxml_model.score import Font, PartName
from musicxml_model.score.common import FontStyle, FontWeight

ALL_ELEMENTS = {ALL_FIELDS: NodeEncoding.ELEMENT}


@structure("label")
class Label:
    value: str = text(STRING)
    font: Font | None = group(Font, overrides={"font-size": NodeEncoding.ELEMENT})


@structure("heading")
class Heading:
    title: str | None = element("title", STRING)
    font: Font | None = element("font", Font, overrides=ALL_ELEMENTS)


FULL_FONT = Font(
    family=("Maestro", "engraved"),
    style=FontStyle.ITALIC,
    size=CssFontSize.LARGE,
    weight=FontWeight.BOLD,
)


class TestFontEncoding:
    """Tests for how font members are placed."""

    def test_standalone_font(self, encoder: XmlEncoder) -> None:
        """Test a font element carries everything as attributes."""
        root = parse_xml(encoder.encode(FULL_FONT))

        assert root.tag == "font"
        assert dict(root.attrib) == {
            "font-family": "Maestro,engraved",
            "font-style": "italic",
            "font-size": "large",
            "font-weight": "bold",
        }
        assert len(root) == 0

    def test_call_site_override(self, encoder: XmlEncoder) -> None:
        """Test a wildcard override turns overridable members into elements."""
        root = parse_xml(encoder.encode(FULL_FONT, overrides=ALL_ELEMENTS))

        assert dict(root.attrib) == {"font-family": "Maestro,engraved"}
        assert [child.tag for child in root] == ["font-style", "font-size", "font-weight"]

    def test_family_never_an_element(self, encoder: XmlEncoder) -> None:
        """Test font-family stays an attribute even when named explicitly."""
        overrides = {ALL_FIELDS: NodeEncoding.ELEMENT, "font-family": NodeEncoding.ELEMENT}

        root = parse_xml(encoder.encode(PartName("Flute", font=FULL_FONT), overrides=overrides))

        assert root.get("font-family") == "Maestro,engraved"
        assert root.find("font-family") is None
        assert root.find("font-weight").text == "bold"

    def test_group_declared_override(self, encoder: XmlEncoder) -> None:
        """Test overrides declared on the group apply where it is embedded."""
        label = Label("Coda", font=Font(family=("serif",), size=Decimal("14")))

        root = parse_xml(encoder.encode(label))

        assert root.get("font-family") == "serif"
        assert root.get("font-size") is None
        assert root.find("font-size").text == "14"

    def test_element_declared_override(self, encoder: XmlEncoder) -> None:
        """Test overrides declared on a nested element reach its fields."""
        heading = Heading(title="Intro", font=Font(family=("Opus",), weight=FontWeight.NORMAL))

        root = parse_xml(encoder.encode(heading))
        font = root.find("font")

        assert font.get("font-family") == "Opus"
        assert font.find("font-weight").text == "normal"


class TestFontDecoding:
    """Tests for decoding font members from either place."""

    def test_attributes(self, decoder: XmlDecoder) -> None:
        """Test decoding the usual attribute form."""
        font = decoder.decode(Font, '<font font-family="Opus" font-size="x-small"/>')

        assert font == Font(family=("Opus",), size=CssFontSize.X_SMALL)

    def test_element_form(self, decoder: XmlDecoder) -> None:
        """Test members written as child elements are accepted too."""
        xml = "<font font-family='Opus'><font-style>italic</font-style><font-size>9</font-size></font>"

        font = decoder.decode(Font, xml)

        assert font == Font(family=("Opus",), style=FontStyle.ITALIC, size=Decimal("9"))

    def test_absent_group_is_none(self, decoder: XmlDecoder) -> None:
        """Test a group with no members present decodes to None."""
        assert decoder.decode(Label, "<label>Coda</label>").font is None

    def test_round_trips(self) -> None:
        """Test values survive encoding under each override."""
        label = Label("Coda", font=Font(size=Decimal("14"), style=FontStyle.NORMAL))
        heading = Heading(title="Intro", font=FULL_FONT)
        name = PartName("Flute", font=FULL_FONT)

        assert decode(Label, encode(label, pretty_print=False)) == label
        assert decode(Heading, encode(heading)) == heading
        assert decode(PartName, encode(name, overrides=ALL_ELEMENTS, pretty_print=False)) == name
        assert decode(Font, encode(Font())) == Font()
