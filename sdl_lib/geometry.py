# -*- coding: utf-8 -*-
"""Geometry assembly for SDL records.

Converts the raw coordinate parts of an `SDLEntry` into shapely geometries:

- Point -> ``Point``
- Line -> ``MultiLineString`` (one component per block)
- Polygon -> ``MultiPolygon`` (rings grouped into shells and holes)

Polygon blocks list the coordinates of all their rings one after the other,
each ring repeating its first coordinate to close. A duplicated coordinate
can therefore not always be told apart from a ring closing coordinate. The
rules applied here are a best effort: every suspect case flags the record
but the geometry is still returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field

from shapely.geometry import LineString
from shapely.geometry import MultiLineString
from shapely.geometry import MultiPolygon
from shapely.geometry import Point
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from sdl_lib.enums import GeometryKind
from sdl_lib.errors import SDLParseError
from sdl_lib.errors import describe_errors
from sdl_lib.models import Coordinate

logger = logging.getLogger(__name__)

#: Minimum number of distinct vertices of a ring
MIN_RING_VERTICES = 3


@dataclass
class AssembledGeometry:
    """Outcome of assembling one record's geometry.

    Attributes:
        geometry: The assembled geometry, or None if nothing usable was found
        errors: Problems found while assembling; any of them flags the record.
            WARNING for repaired coordinates, ERROR for dropped ones
    """

    geometry: BaseGeometry | None = None
    errors: list[SDLParseError] = field(default_factory=list)

    @property
    def parse_error(self) -> bool:
        return bool(self.errors)

    @property
    def error_description(self) -> str | None:
        return describe_errors(self.errors)


def assemble_geometry(
    kind: GeometryKind | None,
    parts: list[list[Coordinate]],
) -> AssembledGeometry:
    """Assemble the geometry of one record.

    Args:
        kind: Geometry kind declared by the record (None if unknown)
        parts: Coordinate sequences, one per geometry block

    Returns:
        AssembledGeometry with the geometry (or None) and any errors
    """
    result = AssembledGeometry()

    match kind:
        case GeometryKind.POINT:
            _assemble_point(parts, result)
        case GeometryKind.LINE:
            _assemble_lines(parts, result)
        case GeometryKind.POLYGON:
            _assemble_polygons(parts, result)
        case _:
            result.errors.append(SDLParseError.error("no geometry kind"))

    if result.geometry is None and not result.errors:
        result.errors.append(SDLParseError.error(f"no coordinates for {kind.value}"))
    return result


# -----------------------------------------------------------------------------
# Points & Lines
# -----------------------------------------------------------------------------


def _assemble_point(parts: list[list[Coordinate]], result: AssembledGeometry) -> None:
    coordinates = [coord for part in parts for coord in part]
    if len(coordinates) != 1:
        message = f"point requires exactly one coordinate, got {len(coordinates)}"
        if coordinates:
            # the first coordinate is kept
            result.errors.append(SDLParseError.warning(message))
        else:
            result.errors.append(SDLParseError.error(message))
    if coordinates:
        result.geometry = Point(coordinates[0])


def _assemble_lines(parts: list[list[Coordinate]], result: AssembledGeometry) -> None:
    lines: list[LineString] = []
    for idx, part in enumerate(parts):
        if len(part) < 2:
            result.errors.append(
                SDLParseError.error(
                    f"polyline part {idx + 1} has {len(part)} coordinate(s), "
                    "at least 2 required"
                )
            )
            continue
        lines.append(LineString(part))

    if lines:
        result.geometry = MultiLineString(lines)


# -----------------------------------------------------------------------------
# Polygons
# -----------------------------------------------------------------------------


def split_rings(
    coordinates: list[Coordinate],
    errors: list[SDLParseError],
) -> list[list[Coordinate]]:
    """Split the coordinates of one polygon block into closed rings.

    A ring closes on the first coordinate equal to its start once it has at
    least three distinct vertices. Suspect coordinates are reported through
    `errors`.

    Args:
        coordinates: Coordinates of one polygon block
        errors: List receiving the problems found

    Returns:
        Closed rings (first coordinate repeated at the end)
    """
    rings: list[list[Coordinate]] = []
    ring: list[Coordinate] = []
    last_closing: Coordinate | None = None

    for idx, coord in enumerate(coordinates):
        if not ring:
            if coord == last_closing:
                errors.append(
                    SDLParseError.warning(
                        f"duplicated ring closing coordinate {_fmt(coord)} "
                        f"at position {idx + 1}"
                    )
                )
                continue
            ring.append(coord)
            continue

        if coord == ring[-1]:
            errors.append(
                SDLParseError.warning(
                    f"duplicated coordinate {_fmt(coord)} at position {idx + 1}"
                )
            )
            continue

        if coord == ring[0]:
            if len(set(ring)) >= MIN_RING_VERTICES:
                ring.append(coord)
                rings.append(ring)
                last_closing = coord
                ring = []
                continue
            errors.append(
                SDLParseError.warning(
                    f"ring start {_fmt(coord)} repeated at position {idx + 1} "
                    f"before {MIN_RING_VERTICES} distinct vertices"
                )
            )

        ring.append(coord)

    if ring:
        if len(set(ring)) >= MIN_RING_VERTICES:
            errors.append(
                SDLParseError.warning(
                    f"ring starting at {_fmt(ring[0])} is not closed"
                )
            )
            ring.append(ring[0])
            rings.append(ring)
        else:
            errors.append(
                SDLParseError.error(
                    f"ring starting at {_fmt(ring[0])} has fewer than "
                    f"{MIN_RING_VERTICES} distinct vertices, discarded"
                )
            )

    return rings


def group_rings(rings: list[list[Coordinate]]) -> list[Polygon]:
    """Group closed rings into polygons.

    A ring inside the shell of an earlier polygon becomes a hole of that
    polygon; any other ring starts a new polygon.
    """
    shells: list[tuple[Polygon, list[list[Coordinate]]]] = []
    for ring in rings:
        candidate = Polygon(ring)
        for shell, holes in shells:
            if shell.contains(candidate):
                holes.append(ring)
                break
        else:
            shells.append((candidate, []))

    return [Polygon(shell.exterior.coords, holes) for shell, holes in shells]


def _assemble_polygons(
    parts: list[list[Coordinate]],
    result: AssembledGeometry,
) -> None:
    rings: list[list[Coordinate]] = []
    for part in parts:
        rings.extend(split_rings(part, result.errors))

    if rings:
        result.geometry = MultiPolygon(group_rings(rings))

    if result.errors:
        logger.debug("Suspect polygon coordinates: %s", result.error_description)


def _fmt(coord: Coordinate) -> str:
    return f"({coord[0]:g}, {coord[1]:g})"
