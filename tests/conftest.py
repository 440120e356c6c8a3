"""pytest configuration and fixtures for musicxml_model tests."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest
from lxml import etree

from musicxml_model import XmlDecoder, XmlEncoder
from tests.fixture_loader import FIXTURES_DIR


@pytest.fixture
def decoder() -> XmlDecoder:
    """Provide a decoder with default options."""
    return XmlDecoder()


@pytest.fixture
def encoder() -> XmlEncoder:
    """Provide an encoder writing compact output."""
    return XmlEncoder(pretty_print=False)


def _is_xml_file(path: Path) -> bool:
    return path.suffix in {".xml", ".musicxml"}


def _build_mxl_from_dir(source_dir: Path, output_path: Path) -> Path:
    buffer = io.BytesIO()

    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        # The mimetype entry goes first, as in real archives
        mimetype = source_dir / "mimetype"
        if mimetype.exists():
            zf.writestr("mimetype", mimetype.read_bytes(), compress_type=zipfile.ZIP_STORED)
        for file_path in sorted(source_dir.rglob("*")):
            if file_path.is_dir() or file_path == mimetype:
                continue
            rel_path = file_path.relative_to(source_dir).as_posix()
            data = file_path.read_bytes()
            if _is_xml_file(file_path):
                # Catch broken fixtures up front
                etree.fromstring(data)
            zf.writestr(rel_path, data)

    output_path.write_bytes(buffer.getvalue())
    return output_path


@pytest.fixture
def minimal_mxl(tmp_path: Path) -> Path:
    """Create a compressed score with a PDF rendering listed first."""
    return _build_mxl_from_dir(FIXTURES_DIR / "mxl" / "minimal", tmp_path / "minimal.mxl")


@pytest.fixture
def mxl_missing_root(tmp_path: Path) -> Path:
    """Create a compressed score whose container names a missing file."""
    return _build_mxl_from_dir(
        FIXTURES_DIR / "mxl" / "missing_root",
        tmp_path / "missing_root.mxl",
    )


@pytest.fixture
def not_a_zip(tmp_path: Path) -> Path:
    """Create an .mxl file that is not a ZIP archive."""
    path = tmp_path / "not_a_zip.mxl"
    path.write_text("This is not a ZIP file")
    return path


@pytest.fixture
def score_dir(tmp_path: Path) -> Path:
    """Create a directory with one good and one broken score."""
    directory = tmp_path / "scores"
    directory.mkdir()
    (directory / "good.musicxml").write_bytes(
        (FIXTURES_DIR / "score" / "minimal.musicxml").read_bytes()
    )
    (directory / "broken.musicxml").write_bytes(
        (FIXTURES_DIR / "score" / "broken.musicxml").read_bytes()
    )
    return directory
