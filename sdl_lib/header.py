# -*- coding: utf-8 -*-
"""Parser for the leading header block of SDL files.

Header lines start with ``#`` and precede the first record::

    #version=1.0
    #metadata_begin=CoordinateSystem
    #PROJCS["Amersfoort / RD New", ...]
    #metadata_end

All lines between ``#metadata_begin`` and ``#metadata_end`` are stored
verbatim minus their first character under the lower-cased block name.
Unrecognized header lines are ignored.
"""

import logging
from typing import Any

from sdl_lib.constants import HEADER_CHAR
from sdl_lib.constants import METADATA_BEGIN_DIRECTIVE
from sdl_lib.constants import METADATA_END_DIRECTIVE
from sdl_lib.constants import VERSION_DIRECTIVE
from sdl_lib.enums import LineKind
from sdl_lib.models import SDLHeader
from sdl_lib.scanner import RecordScanner

logger = logging.getLogger(__name__)


def _directive_value(line: str) -> str:
    """Return the text after the first ``=`` of a directive (empty if none)."""
    return line.partition("=")[2].strip()


def parse_header_to_dict(scanner: RecordScanner) -> dict[str, Any]:
    """Consume the header block and return it as a dictionary.

    The scanner is left positioned at the first line that is not part of the
    header, i.e. the first line of the first record.

    Args:
        scanner: Scanner positioned at the start of the stream

    Returns:
        Dictionary with "version" and "metadata" keys
    """
    version: str | None = None
    metadata: dict[str, tuple[str, ...]] = {}

    while True:
        mark = scanner.mark()
        line = scanner.read_line()
        if line is None:
            # end of stream in or before the header, empty file?
            break

        if LineKind.of(line).skippable:
            continue

        if line[0] != HEADER_CHAR:
            # end of header, this line belongs to the first record
            scanner.reset(mark)
            break

        lc_line = line.lower()
        if lc_line.startswith(VERSION_DIRECTIVE):
            version = _directive_value(line)

        elif lc_line.startswith(METADATA_BEGIN_DIRECTIVE):
            name = _directive_value(lc_line)
            contents: list[str] = []
            while (block_line := scanner.read_line()) is not None:
                if block_line.lower().startswith(METADATA_END_DIRECTIVE):
                    break
                contents.append(block_line[1:])
            else:
                logger.debug(
                    "Metadata block `%s` not closed before end of %s",
                    name,
                    scanner.source,
                )

            if contents:
                metadata[name] = tuple(contents)

        else:
            logger.debug(
                "Ignoring header line %d of %s: %s",
                scanner.line_number,
                scanner.source,
                line,
            )

    return {"version": version, "metadata": metadata}


def parse_header(scanner: RecordScanner) -> SDLHeader:
    """Consume the header block of an SDL stream.

    Args:
        scanner: Scanner positioned at the start of the stream

    Returns:
        The parsed header (empty when the stream has none)
    """
    return SDLHeader.model_validate(parse_header_to_dict(scanner))
