# -*- coding: utf-8 -*-
"""Error handling for SDL file parsing.

Fatal conditions (broken stream, bad coordinate system, schema failure) are
raised as exceptions. Record level problems are raised as
`SDLParseException` inside the entry parser, caught there and stored on the
record as an `SDLParseError`, so they never interrupt iteration. Geometry
assembly stores its own `SDLParseError` records next to them.
"""

from dataclasses import dataclass

from sdl_lib.constants import ERROR_SEPARATOR
from sdl_lib.enums import Severity


@dataclass(frozen=True)
class SourceLocation:
    """Tracks the source location of text for error reporting.

    Attributes:
        source: The source file name or identifier
        line: Line number (0-based)
        column: Column number (0-based)
        text: The text at this location
    """

    source: str
    line: int
    column: int
    text: str

    def __str__(self) -> str:
        """Format as human-readable location string."""
        return f"(in {self.source}, line {self.line + 1}, column {self.column + 1})"


@dataclass(frozen=True)
class SDLParseError:
    """A problem found in one record, stored on the record.

    Both severities flag the record (``parseError == 1``). ERROR means part
    of the record could not be used; WARNING means the record was repaired
    (e.g. a duplicated polygon coordinate was dropped).

    Attributes:
        severity: ERROR or WARNING
        message: Human-readable error message
        location: Source location where error occurred (optional)
    """

    severity: Severity
    message: str
    location: SourceLocation | None = None

    @classmethod
    def error(
        cls, message: str, location: SourceLocation | None = None
    ) -> "SDLParseError":
        return cls(severity=Severity.ERROR, message=message, location=location)

    @classmethod
    def warning(
        cls, message: str, location: SourceLocation | None = None
    ) -> "SDLParseError":
        return cls(severity=Severity.WARNING, message=message, location=location)

    def __str__(self) -> str:
        """Format on a single line, as stored in the ``error`` attribute."""
        base = f"{self.severity.value}: {self.message}"
        if self.location:
            base += f" {self.location}"
        return base


class SDLError(Exception):
    """Base class for all errors raised by sdl_lib."""


class SDLStreamError(SDLError):
    """The underlying stream failed, was closed, or outran the read-ahead."""


class SDLConfigurationError(SDLError):
    """The coordinate reference system could not be decoded."""


class SDLSchemaError(SDLError):
    """The feature type could not be built."""


class ReadOnlyOperationError(SDLError, NotImplementedError):
    """A write, lock or schema mutation was requested on a read-only source."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"{operation}: operation not supported for read-only data source"
        )


class SDLParseException(SDLError):  # noqa: N818
    """Exception raised for a malformed record.

    Attributes:
        message: Error message
        location: Source location where error occurred
    """

    def __init__(self, message: str, location: SourceLocation | None = None):
        self.message = message
        self.location = location
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        if self.location:
            return f"{self.message} {self.location}"
        return self.message

    def to_error(self) -> SDLParseError:
        """Convert exception to the SDLParseError stored on the record."""
        return SDLParseError.error(self.message, self.location)


def describe_errors(errors: list[SDLParseError]) -> str | None:
    """Join record errors into the text of the ``error`` attribute."""
    if not errors:
        return None
    return ERROR_SEPARATOR.join(str(error) for error in errors)
