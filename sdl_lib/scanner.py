# -*- coding: utf-8 -*-
"""Line scanner for SDL files.

The scanner reads an SDL stream one line at a time and offers a one-record
lookahead through explicit marks:

    mark = scanner.mark()
    line = scanner.read_line()
    scanner.reset(mark)  # `line` will be returned again

Blank lines and comment lines are consumed for good by `has_more()`; only a
real line is pushed back.

The stream is never rewound: lines read after a mark are kept in memory until
the mark is released, which is why the amount of text read ahead of a mark is
bounded by `MARK_SIZE`.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO

from sdl_lib.constants import MARK_SIZE
from sdl_lib.constants import SDL_ENCODING
from sdl_lib.enums import LineKind
from sdl_lib.errors import SDLStreamError


class ByteCountingStream(io.RawIOBase):
    """Raw binary stream counting the bytes pulled from the wrapped stream.

    The text layer reads in chunks, so the count may run ahead of the
    characters actually returned as lines.
    """

    def __init__(self, raw: BinaryIO):
        super().__init__()
        self._raw = raw
        self.byte_count = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        data = self._raw.read(len(buffer))
        if not data:
            return 0
        size = len(data)
        buffer[:size] = data
        self.byte_count += size
        return size

    def close(self) -> None:
        if not self.closed:
            try:
                self._raw.close()
            finally:
                super().close()


@dataclass(frozen=True)
class ScanMark:
    """Cursor position returned by `RecordScanner.mark()`.

    Attributes:
        line_number: Number of lines consumed when the mark was taken
        serial: Identifies the mark; only the latest mark can be reset to
    """

    line_number: int
    serial: int


class RecordScanner:
    """Line reader with mark/reset lookahead over an SDL byte stream.

    Attributes:
        source: Source identifier used in error messages
        line_number: Number of lines consumed so far (the next line is
            ``line_number + 1``)
    """

    def __init__(
        self,
        stream: BinaryIO,
        source: str = "<stream>",
        *,
        encoding: str = SDL_ENCODING,
        mark_size: int = MARK_SIZE,
    ) -> None:
        self.source = source
        self.line_number = 0
        self._mark_size = mark_size
        self._counter = ByteCountingStream(stream)
        self._text = io.TextIOWrapper(
            io.BufferedReader(self._counter),
            encoding=encoding,
            errors="replace",
            newline=None,
        )
        self._pushback: list[str] = []
        self._recorded: list[str] | None = None
        self._recorded_size = 0
        self._mark: ScanMark | None = None
        self._serial = 0
        self._closed = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def byte_count(self) -> int:
        """Number of bytes read from the underlying stream so far."""
        return self._counter.byte_count

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Lookahead
    # -------------------------------------------------------------------------

    def mark(self) -> ScanMark:
        """Mark the current position; replaces any previous mark."""
        self._ensure_open()
        self._serial += 1
        self._mark = ScanMark(line_number=self.line_number, serial=self._serial)
        self._recorded = []
        self._recorded_size = 0
        return self._mark

    def reset(self, mark: ScanMark) -> None:
        """Return to `mark`, so the lines read since then are read again.

        Raises:
            SDLStreamError: If the mark is not the latest one, or more than
                the read-ahead limit was read since it was taken
        """
        self._ensure_open()
        if self._mark is None or mark != self._mark or self._recorded is None:
            raise SDLStreamError(
                f"Stream not marked or mark invalidated in {self.source}"
            )
        if self._recorded_size > self._mark_size:
            raise SDLStreamError(
                f"Line {mark.line_number + 1} of {self.source} exceeds the "
                f"read-ahead limit of {self._mark_size} characters"
            )
        self._pushback[:0] = self._recorded
        self.line_number = mark.line_number
        self._release_mark()

    def _release_mark(self) -> None:
        self._mark = None
        self._recorded = None
        self._recorded_size = 0

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def read_line(self) -> str | None:
        """Read the next line without its terminator.

        Returns:
            The line, or None at end of stream

        Raises:
            SDLStreamError: If the stream is closed or fails
        """
        self._ensure_open()
        if self._pushback:
            line = self._pushback.pop(0)
        else:
            try:
                raw = self._text.readline()
            except (OSError, ValueError) as e:
                raise SDLStreamError(f"Error reading {self.source}: {e}") from e
            if not raw:
                return None
            line = raw.rstrip("\r\n")

        self.line_number += 1
        if self._recorded is not None:
            self._recorded.append(line)
            self._recorded_size += len(line) + 1
        return line

    def has_more(self) -> bool:
        """Skip blank and comment lines and report whether a line remains.

        The first real line is left unread. Calling this repeatedly without
        reading is cheap and returns the same answer.
        """
        while True:
            mark = self.mark()
            line = self.read_line()
            if line is None:
                self._release_mark()
                return False
            if not LineKind.of(line).skippable:
                self.reset(mark)
                return True

    def skip_to_anchor(self, is_anchor) -> int:
        """Consume lines until `is_anchor(line)` holds; that line stays unread.

        Args:
            is_anchor: Predicate identifying the line to stop before

        Returns:
            Number of lines discarded (blank and comment lines included)
        """
        skipped = 0
        while True:
            mark = self.mark()
            line = self.read_line()
            if line is None:
                self._release_mark()
                return skipped
            if is_anchor(line):
                self.reset(mark)
                return skipped
            skipped += 1

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise SDLStreamError(f"Stream {self.source} is closed")

    def close(self) -> None:
        """Close the underlying stream. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._pushback.clear()
        self._release_mark()
        try:
            self._text.close()
        except OSError as e:
            raise SDLStreamError(f"Error closing {self.source}: {e}") from e
