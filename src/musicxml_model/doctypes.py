"""MusicXML document type declarations and package constants.

Based on the MusicXML 4.0 DTDs and the compressed ``.mxl`` container format.
"""

MUSICXML_VERSION = "4.0"

# Document types
PARTWISE_PUBLIC_ID = "-//Recordare//DTD MusicXML 4.0 Partwise//EN"
PARTWISE_SYSTEM_ID = "http://www.musicxml.org/dtds/partwise.dtd"
PARTWISE_DOCTYPE = f'<!DOCTYPE score-partwise PUBLIC "{PARTWISE_PUBLIC_ID}" "{PARTWISE_SYSTEM_ID}">'

# Compressed archives
MXL_MIMETYPE = "application/vnd.recordare.musicxml"
MUSICXML_MEDIA_TYPE = "application/vnd.recordare.musicxml+xml"
CONTAINER_PATH = "META-INF/container.xml"
MIMETYPE_PATH = "mimetype"

# File extensions
UNCOMPRESSED_EXTENSIONS = {".musicxml", ".xml"}
COMPRESSED_EXTENSIONS = {".mxl"}
