# -*- coding: utf-8 -*-
"""Enumerations for the SDL file format.

This module contains the enumerations used while scanning and parsing SDL
files: line classes, geometry kinds and error severities.
"""

from enum import Enum

from sdl_lib.constants import COMMENT_CHAR
from sdl_lib.constants import HEADER_CHAR


class FileExtension(str, Enum):
    """File extensions for the formats handled by this library (with dot).

    Attributes:
        SDL: SDF Loader text file extension
        JSON: JSON file extension
        GEOJSON: GeoJSON file extension
    """

    SDL = ".sdl"
    JSON = ".json"
    GEOJSON = ".geojson"


class LineKind(str, Enum):
    """Classification of a single line of an SDL file.

    Attributes:
        BLANK: Empty or whitespace-only line
        COMMENT: Line starting with ``;``
        HEADER: Line starting with ``#``
        DATA: Any other line (record attributes, geometry, coordinates)
    """

    BLANK = "blank"
    COMMENT = "comment"
    HEADER = "header"
    DATA = "data"

    @classmethod
    def of(cls, line: str) -> "LineKind":
        """Classify a line (without its line terminator)."""
        if not line.strip():
            return cls.BLANK
        if line[0] == COMMENT_CHAR:
            return cls.COMMENT
        if line[0] == HEADER_CHAR:
            return cls.HEADER
        return cls.DATA

    @property
    def skippable(self) -> bool:
        """Whether the scanner skips this kind of line between records."""
        return self in (LineKind.BLANK, LineKind.COMMENT)


class GeometryKind(str, Enum):
    """Geometry kind declared by a record's geometry block header.

    Attributes:
        POINT: A single point
        LINE: One or more polylines (assembled as a MultiLineString)
        POLYGON: One or more rings (assembled as a MultiPolygon)
    """

    POINT = "Point"
    LINE = "Line"
    POLYGON = "Polygon"

    @classmethod
    def from_token(cls, token: str) -> "GeometryKind | None":
        """Get the geometry kind for a block header keyword.

        Args:
            token: Keyword as found in the file (case-insensitive)

        Returns:
            GeometryKind or None if not recognized
        """
        mapping = {
            "point": cls.POINT,
            "polyline": cls.LINE,
            "line": cls.LINE,
            "polygon": cls.POLYGON,
            "region": cls.POLYGON,
        }
        return mapping.get(token.strip().lower())


class Severity(str, Enum):
    """Severity level for parse errors.

    Attributes:
        ERROR: Record could not be read reliably
        WARNING: Record was repaired and its geometry kept
    """

    ERROR = "error"
    WARNING = "warning"
