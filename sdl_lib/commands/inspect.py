# -*- coding: utf-8 -*-
"""Inspect command for SDL files.

Prints the header, the CRS and record statistics of an SDL file without
converting it.
"""

import argparse
import logging
from collections import Counter
from pathlib import Path

from sdl_lib.errors import SDLError
from sdl_lib.io import open_sdl

logger = logging.getLogger(__name__)


def summarize(input_path: Path, srs: str | None = None) -> str:
    """Read an SDL file and describe its content.

    Args:
        input_path: Path to the .sdl file
        srs: Optional CRS override

    Returns:
        Multi-line, human-readable summary
    """
    geometry_types: Counter[str] = Counter()
    errors: list[str] = []
    total = 0

    with open_sdl(input_path, srs) as reader:
        header = reader.header
        feature_type = reader.feature_type
        for feature in reader:
            total += 1
            geometry_types[feature.geometry_type or "None"] += 1
            if feature.parse_error:
                errors.append(f"  line {feature.entry_line_number}: {feature.error}")
        byte_count = reader.byte_count

    lines = [
        f"File:       {input_path}",
        f"Type name:  {feature_type.type_name}",
        f"Version:    {header.version or '-'}",
        f"Metadata:   {', '.join(sorted(header.metadata)) or '-'}",
        f"CRS:        {feature_type.crs.name if feature_type.crs is not None else '-'}",
        f"Attributes: {', '.join(feature_type.attribute_names)}",
        f"Bytes read: {byte_count}",
        f"Records:    {total}",
    ]
    lines.extend(
        f"  {geometry_type}: {count}"
        for geometry_type, count in sorted(geometry_types.items())
    )
    lines.append(f"Errors:     {len(errors)}")
    lines.extend(errors)
    return "\n".join(lines)


def inspect(args: list[str]) -> int:
    """Entry point for the inspect command."""
    parser = argparse.ArgumentParser(
        prog="sdl inspect",
        description="Summarize the content of an SDL file",
    )
    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input SDL file path",
    )
    parser.add_argument(
        "--srs",
        default=None,
        help="CRS override, e.g. EPSG:28992",
    )

    parsed_args = parser.parse_args(args)

    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    try:
        print(summarize(parsed_args.input_file, srs=parsed_args.srs))  # noqa: T201
    except SDLError:
        logger.exception("Could not read %s", parsed_args.input_file)
        return 1

    return 0
