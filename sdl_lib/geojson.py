# -*- coding: utf-8 -*-
"""GeoJSON export for SDL features.

Features are written as a FeatureCollection. The record attributes become
the feature properties and the record id becomes the feature id.

GeoJSON (RFC 7946) only allows WGS84 longitude/latitude. When the source
CRS is known, coordinates are reprojected with pyproj; when it is not, they
are written untouched and a warning is logged.

Records flagged with parse errors are included by default so that nothing
is lost silently; records without any geometry are written with a null
geometry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np
import orjson
import shapely
from geojson import Feature
from geojson import FeatureCollection
from pyproj import CRS
from pyproj import Transformer
from shapely.geometry import mapping

from sdl_lib.constants import GEOJSON_COORDINATE_PRECISION
from sdl_lib.constants import JSON_ENCODING
from sdl_lib.constants import WGS84_EPSG
from sdl_lib.io import open_sdl

if TYPE_CHECKING:
    from pathlib import Path

    from shapely.geometry.base import BaseGeometry

    from sdl_lib.models import SDLFeature

logger = logging.getLogger(__name__)


# Cache for pyproj transformers (source CRS as WKT -> transformer)
_transformer_cache: dict[str, Transformer] = {}


def _get_transformer(crs: CRS) -> Transformer:
    """Get or create a cached transformer from `crs` to WGS84 lon/lat."""
    source_wkt = crs.to_wkt()
    if source_wkt not in _transformer_cache:
        _transformer_cache[source_wkt] = Transformer.from_crs(
            crs,
            f"EPSG:{WGS84_EPSG}",
            always_xy=True,
        )
    return _transformer_cache[source_wkt]


def to_wgs84(geometry: BaseGeometry, crs: CRS | None) -> BaseGeometry:
    """Reproject `geometry` to WGS84 and round to GeoJSON precision.

    Geometries without a CRS are only rounded.
    """
    transformer = None
    if crs is not None and not crs.equals(
        CRS.from_epsg(WGS84_EPSG), ignore_axis_order=True
    ):
        transformer = _get_transformer(crs)

    def _project(coords: np.ndarray) -> np.ndarray:
        if transformer is not None:
            xs, ys = transformer.transform(coords[:, 0], coords[:, 1])
            coords = np.column_stack((xs, ys))
        return np.round(coords, GEOJSON_COORDINATE_PRECISION)

    return shapely.transform(geometry, _project)


def feature_to_geojson(feature: SDLFeature, crs: CRS | None = None) -> Feature:
    """Convert one SDL feature to a GeoJSON Feature."""
    geometry = None
    if feature.geometry is not None:
        geometry = mapping(to_wgs84(feature.geometry, crs))
    return Feature(
        id=feature.fid,
        geometry=geometry,
        properties=feature.properties(),
    )


def records_to_geojson(
    features: Iterable[SDLFeature],
    crs: CRS | None = None,
    *,
    include_errors: bool = True,
) -> FeatureCollection:
    """Convert SDL features to a GeoJSON FeatureCollection.

    Args:
        features: Features to convert
        crs: CRS of the feature coordinates (None: written as-is)
        include_errors: Whether to keep records flagged with parse errors

    Returns:
        The FeatureCollection
    """
    if crs is None:
        logger.warning("No CRS known, coordinates are written without reprojection")

    skipped = 0
    geojson_features: list[Feature] = []
    for feature in features:
        if feature.parse_error and not include_errors:
            skipped += 1
            continue
        geojson_features.append(feature_to_geojson(feature, crs))

    if skipped:
        logger.info("Skipped %d record(s) with parse errors", skipped)

    return FeatureCollection(geojson_features)


def convert_sdl_to_geojson(
    input_path: Path,
    output_path: Path | None = None,
    *,
    srs: str | None = None,
    include_errors: bool = True,
    minify: bool = False,
) -> str:
    """Convert an SDL file to GeoJSON.

    Args:
        input_path: Path to the .sdl file
        output_path: Optional path to write the GeoJSON to
        srs: Optional CRS override for the SDL file
        include_errors: Whether to keep records flagged with parse errors
        minify: Write compact JSON instead of indented JSON

    Returns:
        The GeoJSON document as a string
    """
    with open_sdl(input_path, srs) as reader:
        collection = records_to_geojson(
            reader,
            reader.crs,
            include_errors=include_errors,
        )

    # Use orjson for fast serialization
    opts = 0 if minify else orjson.OPT_INDENT_2
    json_str = orjson.dumps(collection, option=opts).decode(JSON_ENCODING)

    if output_path is not None:
        output_path.write_text(json_str, encoding=JSON_ENCODING)

    return json_str
