# -*- coding: utf-8 -*-
"""Tests for errors module."""

import pytest

from sdl_lib.enums import Severity
from sdl_lib.errors import ReadOnlyOperationError
from sdl_lib.errors import SDLConfigurationError
from sdl_lib.errors import SDLError
from sdl_lib.errors import SDLParseError
from sdl_lib.errors import SDLParseException
from sdl_lib.errors import SDLSchemaError
from sdl_lib.errors import SDLStreamError
from sdl_lib.errors import SourceLocation
from sdl_lib.errors import describe_errors


class TestSourceLocation:
    """Tests for SourceLocation class."""

    def test_str(self):
        """Test string representation is 1-based."""
        loc = SourceLocation(source="parcels.sdl", line=5, column=10, text="")
        result = str(loc)
        assert "parcels.sdl" in result
        assert "line 6" in result
        assert "column 11" in result

    def test_immutable(self):
        """Test that SourceLocation is immutable (frozen)."""
        loc = SourceLocation(source="parcels.sdl", line=5, column=10, text="")
        with pytest.raises(AttributeError):
            loc.source = "other.sdl"


class TestSDLParseError:
    """Tests for SDLParseError dataclass (error record)."""

    def test_str_without_location(self):
        error = SDLParseError(severity=Severity.ERROR, message="Something went wrong")
        assert str(error) == "error: Something went wrong"

    def test_str_with_location(self):
        """Test the single line stored in the error attribute."""
        loc = SourceLocation(source="parcels.sdl", line=48, column=0, text="oops")
        error = SDLParseError(
            severity=Severity.WARNING,
            message="Invalid coordinate",
            location=loc,
        )
        result = str(error)
        assert result.startswith("warning: Invalid coordinate")
        assert "line 49" in result
        assert "\n" not in result
        assert "oops" not in result

    def test_constructors(self):
        loc = SourceLocation(source="parcels.sdl", line=2, column=0, text="")
        assert SDLParseError.error("bad").severity == Severity.ERROR
        warning = SDLParseError.warning("fixed", loc)
        assert warning.severity == Severity.WARNING
        assert warning.location == loc


class TestDescribeErrors:
    """Tests for describe_errors()."""

    def test_no_errors(self):
        assert describe_errors([]) is None

    def test_joined(self):
        errors = [SDLParseError.warning("first"), SDLParseError.error("second")]
        assert describe_errors(errors) == "warning: first; error: second"


class TestSDLParseException:
    """Tests for SDLParseException class."""

    def test_str_without_location(self):
        assert str(SDLParseException("Parse failed")) == "Parse failed"

    def test_str_with_location(self):
        loc = SourceLocation(source="parcels.sdl", line=0, column=0, text="x")
        exc = SDLParseException("Parse failed", loc)
        assert str(exc) == "Parse failed (in parcels.sdl, line 1, column 1)"

    def test_to_error(self):
        """Test converting exception to error record."""
        loc = SourceLocation(source="parcels.sdl", line=5, column=10, text="bad")
        error = SDLParseException("Parse failed", loc).to_error()

        assert isinstance(error, SDLParseError)
        assert error.severity == Severity.ERROR
        assert error.message == "Parse failed"
        assert error.location == loc


class TestErrorHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error_class",
        [SDLStreamError, SDLConfigurationError, SDLSchemaError, SDLParseException],
    )
    def test_subclasses_sdl_error(self, error_class):
        with pytest.raises(SDLError):
            raise error_class("boom")

    def test_read_only_operation(self):
        """Read-only errors are also NotImplementedError."""
        exc = ReadOnlyOperationError("create_schema")
        assert isinstance(exc, NotImplementedError)
        assert isinstance(exc, SDLError)
        assert exc.operation == "create_schema"
        assert str(exc) == (
            "create_schema: operation not supported for read-only data source"
        )
