# -*- coding: utf-8 -*-
"""Constants used throughout the sdl_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers/strings scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# File Encodings
# -----------------------------------------------------------------------------

#: Default encoding for SDL files (Windows-1252 / CP1252, SDF Loader output)
SDL_ENCODING = "cp1252"

#: Encoding used for JSON / GeoJSON files
JSON_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Scanner
# -----------------------------------------------------------------------------

#: Maximum number of characters that may be read ahead of a mark
MARK_SIZE: int = 8 * 1024

#: First character of a comment line
COMMENT_CHAR: str = ";"

#: First character of a header line
HEADER_CHAR: str = "#"

#: First character of a record attribute line (resynchronisation anchor)
QUOTE_CHAR: str = '"'

# -----------------------------------------------------------------------------
# Header Directives
# -----------------------------------------------------------------------------

VERSION_DIRECTIVE: str = "#version"
METADATA_BEGIN_DIRECTIVE: str = "#metadata_begin"
METADATA_END_DIRECTIVE: str = "#metadata_end"

#: Metadata block holding the coordinate system WKT on its first line
COORDINATE_SYSTEM_METADATA: str = "coordinatesystem"

# -----------------------------------------------------------------------------
# Schema
# -----------------------------------------------------------------------------

#: Type name used when the source has no file name
UNKNOWN_TYPE_NAME: str = "unknown_sdl"

#: Number of attribute fields on a record attribute line (key, name, url)
ATTRIBUTE_FIELD_COUNT: int = 3

GEOMETRY_ATTRIBUTE: str = "geometry"
NAME_ATTRIBUTE: str = "name"
KEY_ATTRIBUTE: str = "key"
URL_LINK_ATTRIBUTE: str = "urlLink"
ENTRY_LINE_NUMBER_ATTRIBUTE: str = "entryLineNumber"
PARSE_ERROR_ATTRIBUTE: str = "parseError"
ERROR_ATTRIBUTE: str = "error"

#: Separator used when a record collects more than one error message
ERROR_SEPARATOR: str = "; "

# -----------------------------------------------------------------------------
# GeoJSON
# -----------------------------------------------------------------------------

#: Decimal precision for GeoJSON coordinates (WGS84)
GEOJSON_COORDINATE_PRECISION: int = 7

#: EPSG code of WGS 84, the only CRS allowed by RFC 7946
WGS84_EPSG: int = 4326
