# -*- coding: utf-8 -*-
"""Coordinate reference system resolution for SDL sources.

The effective CRS is decided once, when a reader is opened:

1. an explicit ``srs`` override such as ``"EPSG:28992"`` wins;
2. otherwise the WKT on the first line of the ``CoordinateSystem``
   metadata block is used;
3. otherwise the features carry no CRS.
"""

import logging
from collections.abc import Mapping
from collections.abc import Sequence

from pyproj import CRS
from pyproj.exceptions import CRSError

from sdl_lib.constants import COORDINATE_SYSTEM_METADATA
from sdl_lib.errors import SDLConfigurationError

logger = logging.getLogger(__name__)


def decode_srs(srs: str) -> CRS:
    """Decode an authority-qualified identifier (``AUTHORITY:CODE``).

    Raises:
        SDLConfigurationError: If the identifier cannot be decoded
    """
    authority, sep, code = srs.strip().partition(":")
    if not sep or not authority or not code:
        raise SDLConfigurationError(
            f'Error parsing CoordinateSystem srs: "{srs}" '
            "(expected AUTHORITY:CODE, e.g. EPSG:28992)"
        )
    try:
        return CRS.from_authority(authority.upper(), code.strip())
    except CRSError as e:
        raise SDLConfigurationError(
            f'Error parsing CoordinateSystem srs: "{srs}"'
        ) from e


def parse_wkt(wkt: str) -> CRS:
    """Parse a well-known-text coordinate system description.

    Raises:
        SDLConfigurationError: If the WKT cannot be parsed
    """
    try:
        return CRS.from_wkt(wkt)
    except CRSError as e:
        raise SDLConfigurationError(
            f'Error parsing CoordinateSystem WKT: "{wkt}"'
        ) from e


def resolve_crs(
    srs: str | None,
    metadata: Mapping[str, Sequence[str]],
) -> CRS | None:
    """Resolve the effective CRS of an SDL source.

    Args:
        srs: Optional override, as an authority-qualified identifier
        metadata: Header metadata blocks keyed by lower-cased name

    Returns:
        The CRS, or None when neither an override nor a WKT is available

    Raises:
        SDLConfigurationError: If the override or the WKT is invalid
    """
    if srs is not None:
        crs = decode_srs(srs)
        logger.info("Using CRS override %s: %s", srs, crs.name)
        return crs

    cs_metadata = metadata.get(COORDINATE_SYSTEM_METADATA)
    if cs_metadata:
        crs = parse_wkt(cs_metadata[0])
        logger.info("Using CRS from CoordinateSystem metadata: %s", crs.name)
        return crs

    logger.debug("No CRS override and no CoordinateSystem metadata")
    return None
