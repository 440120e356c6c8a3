"""Tests for choice types and their decoding."""

from __future__ import annotations

import pytest

from musicxml_model import (
    MissingRequiredField,
    UnrecognizedChoice,
    XmlDecoder,
    XmlEncoder,
    decode,
    encode,
)
from musicxml_model.coding.choice import Choice, is_choice, variant
from musicxml_model.coding.types import STRING
from musicxml_model.score import (
    Empty,
    PartGroup,
    PartListItem,
    ScoreInstrument,
    ScorePart,
    SoloOrEnsemble,
    StartStop,
)


class TestChoiceValues:
    """Tests for constructing and inspecting choice values."""

    def test_variant_constructors(self) -> None:
        """Test class attributes build values of that variant."""
        item = PartListItem.part(ScorePart(id="P1"))

        assert item.variant.name == "part"
        assert item.tag == "score-part"
        assert item.value == ScorePart(id="P1")

    def test_instance_accessors(self) -> None:
        """Test the active variant returns its payload, others None."""
        item = PartListItem.group(PartGroup())

        assert item.group == PartGroup()
        assert item.part is None

    def test_equality(self) -> None:
        """Test values compare by variant and payload."""
        assert PartListItem.part(ScorePart(id="P1")) == PartListItem.part(ScorePart(id="P1"))
        assert PartListItem.part(ScorePart(id="P1")) != PartListItem.part(ScorePart(id="P2"))
        assert SoloOrEnsemble.ensemble(None) != SoloOrEnsemble.solo(Empty())

    def test_repr(self) -> None:
        """Test repr shows the constructor form."""
        assert repr(SoloOrEnsemble.ensemble(4)) == "SoloOrEnsemble.ensemble(4)"

    def test_unknown_variant_name(self) -> None:
        """Test constructing an undeclared variant fails."""
        with pytest.raises(ValueError, match="no variant named 'voice'"):
            PartListItem("voice", None)

    def test_declaration_order(self) -> None:
        """Test variants keep declaration order."""
        assert PartListItem.tags() == ("part-group", "score-part")
        assert PartListItem.variant_for_tag("score-part").name == "part"
        assert PartListItem.variant_for_tag("part") is None
        assert is_choice(PartListItem)
        assert not is_choice(Choice)

    def test_duplicate_tags_rejected(self) -> None:
        """Test two variants cannot share a tag."""
        with pytest.raises(TypeError, match="more than one variant"):

            class Bad(Choice):
                first = variant("text", STRING)
                second = variant("text", STRING)

    def test_no_variants_rejected(self) -> None:
        """Test a choice type needs at least one variant."""
        with pytest.raises(TypeError, match="no variants"):

            class Bad(Choice):
                pass


class TestChoiceDecoding:
    """Tests for decoding a single choice value."""

    def test_declared_order_wins_over_document_order(self, decoder: XmlDecoder) -> None:
        """Test the first declared variant present is chosen."""
        xml = '<item><score-part id="P1"/><part-group type="start"/></item>'

        item = decoder.decode(PartListItem, xml)

        assert item.variant.name == "group"
        assert item.group.type.value == "start"

    def test_single_variant_present(self, decoder: XmlDecoder) -> None:
        """Test the present variant is chosen when it is the only one."""
        item = decoder.decode(PartListItem, '<item><score-part id="P7"/></item>')

        assert item == PartListItem.part(ScorePart(id="P7"))

    def test_no_variant_present(self, decoder: XmlDecoder) -> None:
        """Test a missing choice reports the type, path and tried tags."""
        with pytest.raises(UnrecognizedChoice) as exc_info:
            decoder.decode(PartListItem, "<item><part/></item>")

        error = exc_info.value
        assert error.type_name == "PartListItem"
        assert error.coding_path == ("item",)
        assert error.expected == ("part-group", "score-part")

    def test_payload_error_propagates(self, decoder: XmlDecoder) -> None:
        """Test a matched variant's own failure is not masked."""
        with pytest.raises(MissingRequiredField) as exc_info:
            decoder.decode(PartListItem, "<item><score-part/></item>")

        assert exc_info.value.field == "id"
        assert exc_info.value.coding_path == ("item", "score-part")

    def test_optional_choice_field_absent(self, decoder: XmlDecoder) -> None:
        """Test an optional choice field binds None when nothing matches."""
        instrument = decoder.decode(
            ScoreInstrument,
            '<score-instrument id="I1"><instrument-name>Oboe</instrument-name></score-instrument>',
        )

        assert instrument.solo_or_ensemble is None

    def test_choice_field_tie_break(self, decoder: XmlDecoder) -> None:
        """Test the tie-break also applies to choice fields of a structure."""
        instrument = decoder.decode(
            ScoreInstrument,
            '<score-instrument id="I1"><instrument-name>Violins</instrument-name>'
            "<ensemble>8</ensemble><solo/></score-instrument>",
        )

        assert instrument.solo_or_ensemble == SoloOrEnsemble.solo(Empty())

    def test_scalar_payload(self, decoder: XmlDecoder) -> None:
        """Test a scalar variant decodes its text, empty meaning None."""
        sized = decoder.decode(SoloOrEnsemble, "<x><ensemble>16</ensemble></x>")
        unsized = decoder.decode(SoloOrEnsemble, "<x><ensemble/></x>")

        assert sized == SoloOrEnsemble.ensemble(16)
        assert unsized == SoloOrEnsemble.ensemble(None)


class TestChoiceEncoding:
    """Tests for encoding choice values."""

    def test_encodes_variant_element_without_wrapper(self, encoder: XmlEncoder) -> None:
        """Test only the active variant's element is written."""
        xml = encoder.encode(PartListItem.part(ScorePart(id="P1")))

        assert xml == b'<score-part id="P1"/>'

    def test_empty_payloads(self, encoder: XmlEncoder) -> None:
        """Test empty and scalar payloads."""
        assert encoder.encode(SoloOrEnsemble.solo(Empty())) == b"<solo/>"
        assert encoder.encode(SoloOrEnsemble.ensemble(None)) == b"<ensemble/>"
        assert encoder.encode(SoloOrEnsemble.ensemble(3)) == b"<ensemble>3</ensemble>"


class TestChoiceRoundTrip:
    """Round-trip tests for choice values encoded as documents."""

    @pytest.mark.parametrize(
        "value",
        [
            PartListItem.part(ScorePart(id="P1")),
            PartListItem.group(PartGroup(type=StartStop.START, name="Strings")),
            SoloOrEnsemble.solo(Empty()),
            SoloOrEnsemble.ensemble(None),
            SoloOrEnsemble.ensemble(12),
        ],
    )
    def test_round_trip(self, value: Choice) -> None:
        """Test decode(encode(v)) == v when the variant element is the root."""
        assert decode(type(value), encode(value)) == value

    def test_root_variant_payload_error(self, decoder: XmlDecoder) -> None:
        """Test a variant root reports its own payload errors."""
        with pytest.raises(MissingRequiredField) as exc_info:
            decoder.decode(PartListItem, "<score-part/>")

        assert exc_info.value.field == "id"
        assert exc_info.value.coding_path == ("score-part",)


class TestVariantConstructors:
    """Tests for variant constructors called without a payload."""

    def test_structured_payload_defaults(self, encoder: XmlEncoder) -> None:
        """Test an omitted structured payload is built with no fields set."""
        assert SoloOrEnsemble.solo() == SoloOrEnsemble.solo(Empty())
        assert PartListItem.group() == PartListItem.group(PartGroup())
        assert encoder.encode(SoloOrEnsemble.solo()) == b"<solo/>"
        assert encoder.encode(PartListItem.group()) == b"<part-group/>"

    def test_scalar_payload_defaults_to_none(self) -> None:
        """Test an omitted scalar payload is None."""
        assert SoloOrEnsemble.ensemble().value is None

    def test_required_payload_fields(self) -> None:
        """Test a payload with required fields cannot be left out."""
        with pytest.raises(TypeError):
            PartListItem.part()
