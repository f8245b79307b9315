# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared fixtures for the test artifacts and small,
hand-written SDL documents.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from sdl_lib.scanner import RecordScanner

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Path Constants
# =============================================================================

ARTIFACTS_DIR = Path(__file__).parent / "artifacts"
PARCELS_SDL = ARTIFACTS_DIR / "parcels.sdl"

# =============================================================================
# SDL Snippets
# =============================================================================

UTM31N_WKT = (
    'PROJCS["WGS 84 / UTM zone 31N",GEOGCS["WGS 84",DATUM["WGS_1984",'
    'SPHEROID["WGS 84",6378137,298.257223563]],PRIMEM["Greenwich",0],'
    'UNIT["degree",0.0174532925199433]],PROJECTION["Transverse_Mercator"],'
    'PARAMETER["latitude_of_origin",0],PARAMETER["central_meridian",3],'
    'PARAMETER["scale_factor",0.9996],PARAMETER["false_easting",500000],'
    'PARAMETER["false_northing",0],UNIT["metre",1]]'
)

SQUARE_RECORD = """\
"SQ","Square","http://example.com/sq"
Polygon 5
0,0
10,0
10,10
0,10
0,0
"""

POINT_RECORD = """\
"PT","Point",""
Point
5,5
"""


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def artifacts_dir() -> Path:
    """Return path to test artifacts directory."""
    return ARTIFACTS_DIR


@pytest.fixture
def parcels_sdl() -> Path:
    """Return path to the sample SDL file."""
    return PARCELS_SDL


@pytest.fixture
def utm31n_wkt() -> str:
    return UTM31N_WKT


@pytest.fixture
def square_record() -> str:
    return SQUARE_RECORD


@pytest.fixture
def point_record() -> str:
    return POINT_RECORD


@pytest.fixture
def make_scanner():
    """Factory building a RecordScanner over in-memory text."""

    def _make(text: str, **kwargs) -> RecordScanner:
        return RecordScanner(io.BytesIO(text.encode("cp1252")), "<test>", **kwargs)

    return _make


class FailingStream(io.RawIOBase):
    """Binary stream serving `data` on the first read and failing after."""

    def __init__(self, data: bytes):
        super().__init__()
        self._data = data

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._data is None:
            raise OSError("link down")
        size = len(self._data)
        buffer[:size] = self._data
        self._data = None
        return size


@pytest.fixture
def make_failing_stream():
    """Factory building a stream that fails once `text` has been served."""

    def _make(text: str) -> FailingStream:
        return FailingStream(text.encode("cp1252"))

    return _make
