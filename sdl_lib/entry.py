# -*- coding: utf-8 -*-
"""Parser for SDL records.

A record is an attribute line followed by one or more geometry blocks::

    "1017","Parcel 1017","http://example.com/1017"
    Polygon 5
    1000.0,2000.0
    1100.0,2000.0
    1100.0,2100.0
    1000.0,2100.0
    1000.0,2000.0

Blank lines and ``;`` comment lines may appear anywhere between lines.
Geometry block keywords are ``Point`` (count optional), ``Polyline`` /
``Line`` and ``Polygon`` / ``Region``, followed by the number of coordinate
lines of the block. A record ends at the first line that is not a block
header, normally the next attribute line.

Architecture: as with the other parsers of this library, the record is
first collected in a dictionary and then fed to `SDLEntry.model_validate()`.
Faults in a record are raised as `SDLParseException`, caught in
`parse_entry()` and stored on the entry; the scanner is then moved to the
next attribute line so the following record parses normally.
"""

import logging
import re
from typing import Any

from sdl_lib.constants import ATTRIBUTE_FIELD_COUNT
from sdl_lib.constants import QUOTE_CHAR
from sdl_lib.enums import GeometryKind
from sdl_lib.errors import SDLParseError
from sdl_lib.errors import SDLParseException
from sdl_lib.errors import SourceLocation
from sdl_lib.models import Coordinate
from sdl_lib.models import SDLEntry
from sdl_lib.scanner import RecordScanner

logger = logging.getLogger(__name__)


def is_attribute_line(line: str) -> bool:
    """Whether `line` starts a record (resynchronisation anchor)."""
    return line.lstrip().startswith(QUOTE_CHAR)


class SDLEntryParser:
    """Parser turning the lines of one record into an `SDLEntry`.

    Only `SDLStreamError` escapes `parse_entry()`; every other problem is
    reported on the returned entry.
    """

    # Regex patterns
    ATTRIBUTE_FIELD = re.compile(r'\s*"((?:[^"]|"")*)"\s*(,|$)')
    GEOMETRY_HEADER = re.compile(
        r"^\s*(point|polyline|line|polygon|region)\b\s*(\S+)?\s*$",
        re.IGNORECASE,
    )
    NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
    COORDINATE = re.compile(rf"^\s*({NUMBER})\s*(?:,\s*|\s+)({NUMBER})\s*,?\s*$")

    def __init__(self, scanner: RecordScanner) -> None:
        self.scanner = scanner

    def _location(self, line: str, column: int = 0) -> SourceLocation:
        """Location of the line last read by the scanner."""
        return SourceLocation(
            source=self.scanner.source,
            line=self.scanner.line_number - 1,
            column=column,
            text=line,
        )

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def parse_entry_to_dict(self) -> dict[str, Any] | None:
        """Parse the next record to a dictionary.

        Returns:
            Dictionary fed to `SDLEntry.model_validate()`, or None at the end
            of the stream
        """
        if not self.scanner.has_more():
            return None

        entry: dict[str, Any] = {
            "key": None,
            "name": None,
            "url_link": None,
            "line_number": self.scanner.line_number + 1,
            "kind": None,
            "parts": [],
            "errors": [],
        }

        try:
            self._parse_attributes(entry)
            self._parse_geometry(entry)
        except SDLParseException as e:
            logger.debug("Record at line %d: %s", entry["line_number"], e)
            entry["errors"].append(e.to_error())
            skipped = self.scanner.skip_to_anchor(is_attribute_line)
            if skipped:
                logger.debug(
                    "Skipped %d line(s) after malformed record at line %d",
                    skipped,
                    entry["line_number"],
                )

        return entry

    def parse_entry(self) -> SDLEntry | None:
        """Parse the next record.

        Returns:
            The entry (possibly flagged as a parse error), or None at the end
            of the stream
        """
        if (entry := self.parse_entry_to_dict()) is None:
            return None
        return SDLEntry.model_validate(entry)

    # -------------------------------------------------------------------------
    # Attribute line
    # -------------------------------------------------------------------------

    def _parse_attributes(self, entry: dict[str, Any]) -> None:
        """Parse the ``"key","name","url"`` line into `entry`."""
        line = self.scanner.read_line()
        if line is None:
            raise SDLParseException("unexpected end of stream, expected a record")

        if not is_attribute_line(line):
            raise SDLParseException(
                "expected record attribute line starting with '\"'",
                self._location(line),
            )

        fields: list[str] = []
        pos = 0
        while pos < len(line):
            match = self.ATTRIBUTE_FIELD.match(line, pos)
            if match is None:
                raise SDLParseException(
                    "malformed record attribute line",
                    self._location(line, pos),
                )
            fields.append(match.group(1).replace('""', '"'))
            pos = match.end()
            if not match.group(2):
                break

        for name, value in zip(("key", "name", "url_link"), fields, strict=False):
            entry[name] = value

        if len(fields) != ATTRIBUTE_FIELD_COUNT:
            # not fatal for the record: geometry is still read
            message = (
                f"expected {ATTRIBUTE_FIELD_COUNT} record attributes "
                f"(key, name, url), got {len(fields)}"
            )
            entry["errors"].append(
                SDLParseError.warning(message, self._location(line))
            )

    # -------------------------------------------------------------------------
    # Geometry blocks
    # -------------------------------------------------------------------------

    def _parse_geometry(self, entry: dict[str, Any]) -> None:
        """Parse the geometry blocks following the attribute line."""
        kind: GeometryKind | None = None

        while self.scanner.has_more():
            mark = self.scanner.mark()
            line = self.scanner.read_line()
            match = self.GEOMETRY_HEADER.match(line)
            if match is None:
                if is_attribute_line(line):
                    self.scanner.reset(mark)
                    break
                raise SDLParseException(
                    "unexpected line, expected a geometry block or the next record",
                    self._location(line),
                )

            block_kind = GeometryKind.from_token(match.group(1))
            if kind is None:
                kind = block_kind
                entry["kind"] = kind
            elif block_kind != kind:
                raise SDLParseException(
                    f"mixed geometry kinds in one record: "
                    f"{kind.value} and {block_kind.value}",
                    self._location(line),
                )

            count = self._parse_count(match.group(2), block_kind, line)
            coordinates: list[Coordinate] = []
            entry["parts"].append(coordinates)
            self._parse_coordinates(coordinates, count)

        if kind is None:
            raise SDLParseException(
                f"record without geometry (line {entry['line_number']})"
            )

    def _parse_count(
        self,
        text: str | None,
        kind: GeometryKind,
        line: str,
    ) -> int:
        """Parse the coordinate count of a geometry block header."""
        if text is None:
            if kind is GeometryKind.POINT:
                return 1
            raise SDLParseException(
                f"missing coordinate count for {kind.value}",
                self._location(line),
            )
        try:
            count = int(text)
        except ValueError:
            count = -1
        if count < 0:
            raise SDLParseException(
                f"invalid coordinate count: {text}",
                self._location(line, line.find(text)),
            )
        return count

    def _parse_coordinates(self, coordinates: list[Coordinate], count: int) -> None:
        """Read `count` coordinate lines, appending them as they are read."""
        for idx in range(count):
            if not self.scanner.has_more():
                raise SDLParseException(
                    f"unexpected end of stream after {idx} of {count} coordinates"
                )
            mark = self.scanner.mark()
            line = self.scanner.read_line()
            match = self.COORDINATE.match(line)
            if match is None:
                # leave the line for resynchronisation, it may start a record
                location = self._location(line)
                self.scanner.reset(mark)
                raise SDLParseException(
                    f"expected coordinate {idx + 1} of {count}",
                    location,
                )
            coordinates.append((float(match.group(1)), float(match.group(2))))
