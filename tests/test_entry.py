# -*- coding: utf-8 -*-
"""Tests for the record parser."""

import pytest

from sdl_lib.entry import SDLEntryParser
from sdl_lib.entry import is_attribute_line
from sdl_lib.enums import GeometryKind
from sdl_lib.enums import Severity
from sdl_lib.errors import SDLStreamError
from sdl_lib.scanner import RecordScanner


@pytest.fixture
def make_parser(make_scanner):
    """Factory building an SDLEntryParser over in-memory text."""

    def _make(text: str) -> SDLEntryParser:
        return SDLEntryParser(make_scanner(text))

    return _make


def _all_entries(parser):
    entries = []
    while (entry := parser.parse_entry()) is not None:
        entries.append(entry)
    return entries


class TestIsAttributeLine:
    """Tests for the resynchronisation anchor."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ('"1","a",""', True),
            ('   "1"', True),
            ("Polygon 5", False),
            ("1.0,2.0", False),
            ("", False),
        ],
    )
    def test_is_attribute_line(self, line, expected):
        assert is_attribute_line(line) is expected


class TestAttributes:
    """Tests for attribute line parsing."""

    def test_three_fields(self, make_parser, square_record):
        entry = make_parser(square_record).parse_entry()
        assert entry.key == "SQ"
        assert entry.name == "Square"
        assert entry.url_link == "http://example.com/sq"
        assert entry.line_number == 1
        assert not entry.parse_error

    def test_escaped_quotes_and_commas(self, make_parser):
        text = '"K1", "He said ""hi"", twice" ,""\nPoint\n1,2\n'
        entry = make_parser(text).parse_entry()
        assert entry.key == "K1"
        assert entry.name == 'He said "hi", twice'
        assert entry.url_link == ""
        assert not entry.parse_error

    def test_wrong_field_count(self, make_parser):
        """A wrong field count flags the record, geometry is still read."""
        entry = make_parser('"K1","Name"\nPoint\n1,2\n').parse_entry()
        assert entry.key == "K1"
        assert entry.name == "Name"
        assert entry.url_link is None
        assert entry.parse_error
        assert "expected 3 record attributes" in entry.error_description
        assert entry.errors[0].severity == Severity.WARNING
        assert entry.kind == GeometryKind.POINT
        assert entry.parts == [[(1.0, 2.0)]]

    def test_malformed_attribute_line(self, make_parser, point_record):
        entry, following = _all_entries(make_parser('"K1",oops\n1,2\n' + point_record))
        assert entry.parse_error
        assert "malformed record attribute line" in entry.error_description
        assert entry.key is None
        assert following.key == "PT"
        assert not following.parse_error

    def test_not_an_attribute_line(self, make_parser, point_record):
        """Leading garbage becomes one flagged record."""
        entries = _all_entries(make_parser("Polygon 3\n1,2\n" + point_record))
        assert len(entries) == 2
        assert entries[0].parse_error
        assert entries[0].line_number == 1
        assert entries[1].key == "PT"
        assert entries[1].line_number == 3


class TestGeometryBlocks:
    """Tests for geometry block parsing."""

    def test_point_without_count(self, make_parser, point_record):
        entry = make_parser(point_record).parse_entry()
        assert entry.kind == GeometryKind.POINT
        assert entry.parts == [[(5.0, 5.0)]]

    def test_keywords_case_insensitive(self, make_parser):
        text = '"R","Region",""\nREGION 4\n0,0\n1,0\n1,1\n0,0\n'
        entry = make_parser(text).parse_entry()
        assert entry.kind == GeometryKind.POLYGON
        assert entry.coordinate_count == 4

    def test_multiple_line_blocks(self, make_parser):
        text = '"L","Lines",""\nPolyline 2\n0,0\n1,1\nLine 2\n2,2\n3,3\n'
        entry = make_parser(text).parse_entry()
        assert entry.kind == GeometryKind.LINE
        assert entry.parts == [[(0.0, 0.0), (1.0, 1.0)], [(2.0, 2.0), (3.0, 3.0)]]

    @pytest.mark.parametrize(
        "line",
        ["1.5,-2.5", "1.5 -2.5", " 1.5 , -2.5 ", "1.5,-2.5,", "1.5e0,-25E-1"],
    )
    def test_coordinate_formats(self, make_parser, line):
        entry = make_parser(f'"P","",""\nPoint\n{line}\n').parse_entry()
        assert not entry.parse_error
        assert entry.parts == [[(1.5, -2.5)]]

    def test_comments_between_lines(self, make_parser):
        entry = make_parser(
            '"P","",""\n; comment\nPolygon 4\n\n0,0\n; inside\n1,0\n1,1\n0,0\n'
        ).parse_entry()
        assert not entry.parse_error
        assert entry.coordinate_count == 4

    def test_mixed_kinds(self, make_parser, point_record):
        text = '"M","",""\nPoint\n0,0\nPolyline 2\n0,0\n1,1\n' + point_record
        entries = _all_entries(make_parser(text))
        assert len(entries) == 2
        assert entries[0].parse_error
        assert "mixed geometry kinds" in entries[0].error_description
        assert entries[0].parts == [[(0.0, 0.0)]]
        assert entries[1].key == "PT"

    def test_missing_count(self, make_parser):
        entry = make_parser('"P","",""\nPolygon\n0,0\n').parse_entry()
        assert entry.parse_error
        assert "missing coordinate count" in entry.error_description

    def test_invalid_count(self, make_parser):
        entry = make_parser('"P","",""\nPolygon x\n0,0\n').parse_entry()
        assert "invalid coordinate count: x" in entry.error_description

    def test_record_without_geometry(self, make_parser, point_record):
        entries = _all_entries(make_parser('"E","Empty",""\n' + point_record))
        assert len(entries) == 2
        assert entries[0].kind is None
        assert "record without geometry" in entries[0].error_description
        assert not entries[1].parse_error


class TestRecovery:
    """Tests for malformed records and resynchronisation."""

    def test_bad_coordinate_then_good_record(self, make_parser, point_record):
        text = '"B","Bad",""\nPolygon 4\n0,0\noops\n1,1\n0,0\n' + point_record
        bad, good = _all_entries(make_parser(text))

        assert bad.parse_error
        assert bad.kind == GeometryKind.POLYGON
        assert bad.parts == [[(0.0, 0.0)]]
        assert "expected coordinate 2 of 4" in bad.error_description
        assert "line 4" in bad.error_description
        (error,) = bad.errors
        assert error.severity == Severity.ERROR
        assert error.location.text == "oops"

        assert good.key == "PT"
        assert good.line_number == 7
        assert not good.parse_error

    def test_garbage_after_geometry(self, make_parser, point_record):
        text = '"P","",""\nPoint\n1,1\nstray\nmore\n' + point_record
        first, second = _all_entries(make_parser(text))
        assert first.parse_error
        assert "unexpected line" in first.error_description
        assert first.parts == [[(1.0, 1.0)]]
        assert second.key == "PT"
        assert second.line_number == 6

    def test_end_of_stream_mid_record(self, make_parser):
        """A truncated last record is flagged, not fatal."""
        entries = _all_entries(make_parser('"T","",""\nPolyline 3\n0,0\n1,1\n'))
        assert len(entries) == 1
        assert entries[0].parse_error
        assert "after 2 of 3 coordinates" in entries[0].error_description
        assert entries[0].parts == [[(0.0, 0.0), (1.0, 1.0)]]

    def test_stream_failure_mid_record(self, make_failing_stream):
        """A failing stream escapes instead of flagging the record."""
        stream = make_failing_stream('"A","a",""\nPolygon 5\n0,0\n1,0\n')
        parser = SDLEntryParser(RecordScanner(stream))
        with pytest.raises(SDLStreamError):
            parser.parse_entry()

    def test_line_numbers_increase(self, make_parser, square_record, point_record):
        text = square_record + "\n; gap\n" + point_record + square_record
        entries = _all_entries(make_parser(text))
        assert [entry.line_number for entry in entries] == [1, 10, 13]

    def test_empty(self, make_parser):
        assert make_parser("").parse_entry() is None
        assert make_parser("; only a comment\n\n").parse_entry() is None
