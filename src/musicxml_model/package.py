"""Compressed MusicXML (``.mxl``) archive handling."""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from lxml import etree

from musicxml_model.doctypes import CONTAINER_PATH, MIMETYPE_PATH, MUSICXML_MEDIA_TYPE
from musicxml_model.errors import PackageError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@dataclass
class RootFile:
    """Entry from META-INF/container.xml."""

    full_path: str
    media_type: str


class MxlPackage:
    """A ZIP-backed compressed MusicXML file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._zip: zipfile.ZipFile | None = None
        self._root_files: list[RootFile] | None = None

    def __enter__(self) -> MxlPackage:
        self.open()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def open(self) -> None:
        """Open the archive for reading."""
        if self._zip is not None:
            return

        try:
            self._zip = zipfile.ZipFile(self._path, "r")
        except zipfile.BadZipFile as exc:
            raise PackageError(f"File is not a valid ZIP archive: {exc}") from exc
        except FileNotFoundError as exc:
            raise PackageError(f"File not found: {self._path}") from exc

    def close(self) -> None:
        """Close the archive."""
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    @property
    def path(self) -> Path:
        return self._path

    def get_part_content(self, part_path: str) -> bytes | None:
        """Get the raw content of an archive member."""
        if self._zip is None:
            raise PackageError("Package not opened")

        try:
            return self._zip.read(part_path.lstrip("/"))
        except KeyError:
            return None

    def list_parts(self) -> Iterator[str]:
        """List all members of the archive."""
        if self._zip is None:
            raise PackageError("Package not opened")

        yield from self._zip.namelist()

    @property
    def mimetype(self) -> str | None:
        """Get the mimetype declared by the archive, if any."""
        content = self.get_part_content(MIMETYPE_PATH)
        if content is None:
            return None
        return content.decode("utf-8", errors="replace").strip()

    @property
    def root_files(self) -> list[RootFile]:
        """Get the root files listed in the container."""
        if self._root_files is None:
            content = self.get_part_content(CONTAINER_PATH)
            if content is None:
                raise PackageError(f"Missing {CONTAINER_PATH}")

            try:
                xml = etree.fromstring(content)
            except etree.XMLSyntaxError as exc:
                raise PackageError(f"Invalid container.xml: {exc}") from exc

            entries: list[RootFile] = []
            for entry in xml.iter("{*}rootfile"):
                entries.append(
                    RootFile(
                        full_path=entry.get("full-path", ""),
                        media_type=entry.get("media-type", MUSICXML_MEDIA_TYPE),
                    )
                )
            self._root_files = entries
        return self._root_files

    @property
    def score_path(self) -> str:
        """Get the path of the main score.

        The first root file with the MusicXML media type wins; other root
        files (PDF or MIDI renderings) are skipped.
        """
        for entry in self.root_files:
            if entry.full_path and entry.media_type == MUSICXML_MEDIA_TYPE:
                return entry.full_path
        raise PackageError("Container lists no MusicXML root file")

    def read_score(self) -> bytes:
        """Read the main score document."""
        score_path = self.score_path
        content = self.get_part_content(score_path)
        if content is None:
            raise PackageError(f"Root file '{score_path}' is missing from the archive")
        logger.debug("Reading score %s from %s", score_path, self._path)
        return content
