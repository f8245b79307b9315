# -*- coding: utf-8 -*-
"""SDL Parser Library.

A Python library for reading SDL files, the line-oriented text format
produced by the Autodesk SDF Loader. Records are read lazily as points,
multi line strings and multi polygons with a fixed set of attributes;
malformed records are flagged instead of aborting the read.

Usage:
    # Stream the records of a file
    from sdl_lib import open_sdl
    with open_sdl(Path("parcels.sdl"), srs="EPSG:28992") as reader:
        print(reader.feature_type.attribute_names)
        for feature in reader:
            if feature.parse_error:
                print(f"line {feature.entry_line_number}: {feature.error}")

    # Or read everything at once
    from sdl_lib import read_sdl_file
    features = read_sdl_file(Path("parcels.sdl"))
"""

__version__ = "0.1.0"

# Constants
from sdl_lib.constants import JSON_ENCODING
from sdl_lib.constants import MARK_SIZE
from sdl_lib.constants import SDL_ENCODING

# Public API
from sdl_lib.datastore import SDLDataStore
from sdl_lib.datastore import ServiceInfo
from sdl_lib.enums import GeometryKind
from sdl_lib.enums import LineKind
from sdl_lib.enums import Severity
from sdl_lib.errors import ReadOnlyOperationError
from sdl_lib.errors import SDLConfigurationError
from sdl_lib.errors import SDLError
from sdl_lib.errors import SDLParseError
from sdl_lib.errors import SDLParseException
from sdl_lib.errors import SDLSchemaError
from sdl_lib.errors import SDLStreamError
from sdl_lib.errors import SourceLocation
from sdl_lib.geometry import AssembledGeometry
from sdl_lib.geometry import assemble_geometry
from sdl_lib.io import CancellationToken
from sdl_lib.io import iter_sdl_records
from sdl_lib.io import open_sdl
from sdl_lib.io import read_sdl_file
from sdl_lib.models import SDLAttribute
from sdl_lib.models import SDLEntry
from sdl_lib.models import SDLFeature
from sdl_lib.models import SDLFeatureType
from sdl_lib.models import SDLHeader
from sdl_lib.reader import SDLFeatureReader
from sdl_lib.reader import get_type_name

__all__ = [
    # Constants
    "JSON_ENCODING",
    "MARK_SIZE",
    "SDL_ENCODING",
    # Geometry
    "AssembledGeometry",
    # I/O
    "CancellationToken",
    # Enums
    "GeometryKind",
    "LineKind",
    # Errors
    "ReadOnlyOperationError",
    # Models
    "SDLAttribute",
    "SDLConfigurationError",
    # Data store
    "SDLDataStore",
    "SDLEntry",
    "SDLError",
    "SDLFeature",
    # Reader
    "SDLFeatureReader",
    "SDLFeatureType",
    "SDLHeader",
    "SDLParseError",
    "SDLParseException",
    "SDLSchemaError",
    "SDLStreamError",
    "ServiceInfo",
    "Severity",
    "SourceLocation",
    "assemble_geometry",
    "get_type_name",
    "iter_sdl_records",
    "open_sdl",
    "read_sdl_file",
]
