# -*- coding: utf-8 -*-
"""GeoJSON export command for SDL files.

This command converts an SDL file to a GeoJSON FeatureCollection,
reprojecting coordinates to WGS84 when the CRS of the file is known.
"""

import argparse
import logging
from pathlib import Path

from sdl_lib.errors import SDLError
from sdl_lib.geojson import convert_sdl_to_geojson

logger = logging.getLogger(__name__)


def geojson(args: list[str]) -> int:
    """Entry point for the geojson command."""
    parser = argparse.ArgumentParser(
        prog="sdl geojson",
        description="Convert an SDL file to GeoJSON format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sdl geojson -i parcels.sdl                         # Output to stdout
  sdl geojson -i parcels.sdl -o parcels.geojson      # Output to file
  sdl geojson -i parcels.sdl --srs EPSG:28992        # Override the CRS
  sdl geojson -i parcels.sdl --skip-errors           # Drop malformed records

Output:
  One Feature per SDL record. Properties are the record attributes:
  name, key, urlLink, entryLineNumber, parseError and error.

Notes:
  - The CRS comes from --srs, else from the CoordinateSystem metadata
  - Without a CRS, coordinates are written as found in the file
  - Records with parse errors are kept unless --skip-errors is given
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input SDL file path",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output GeoJSON file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "--srs",
        default=None,
        help="CRS override, e.g. EPSG:28992",
    )
    parser.add_argument(
        "--skip-errors",
        action="store_true",
        help="Exclude records flagged with parse errors",
    )
    parser.add_argument(
        "--minify",
        action="store_true",
        help="Write compact JSON",
    )

    parsed_args = parser.parse_args(args)

    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    try:
        result = convert_sdl_to_geojson(
            parsed_args.input_file,
            output_path=parsed_args.output_file,
            srs=parsed_args.srs,
            include_errors=not parsed_args.skip_errors,
            minify=parsed_args.minify,
        )

        if parsed_args.output_file is None:
            print(result)  # noqa: T201

        else:
            logger.info(
                "Converted %s -> %s", parsed_args.input_file, parsed_args.output_file
            )

    except SDLError:
        logger.exception("Could not read %s", parsed_args.input_file)
        return 1

    except Exception:
        logger.exception("Unknown Problem ...")
        return 1

    return 0
