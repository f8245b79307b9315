# -*- coding: utf-8 -*-
"""Tests for the header parser."""

from sdl_lib.header import parse_header
from sdl_lib.header import parse_header_to_dict


class TestParseHeader:
    """Tests for parse_header()."""

    def test_version_and_metadata(self, make_scanner, utm31n_wkt):
        """Test a complete header."""
        scanner = make_scanner(
            "#version=2.1\n"
            "#metadata_begin=CoordinateSystem\n"
            f"#{utm31n_wkt}\n"
            "#metadata_end\n"
            '"1","a",""\n'
        )
        header = parse_header(scanner)

        assert header.version == "2.1"
        assert header.metadata == {"coordinatesystem": (utm31n_wkt,)}
        assert header.coordinate_system_wkt == utm31n_wkt
        # positioned on the first record
        assert scanner.read_line() == '"1","a",""'
        assert scanner.line_number == 5

    def test_block_names_case_insensitive(self, make_scanner):
        scanner = make_scanner(
            "#METADATA_BEGIN=Description\n#first\n#second\n#METADATA_END\n"
        )
        header = parse_header(scanner)
        assert header.metadata == {"description": ("first", "second")}
        assert header.get_metadata("DESCRIPTION") == ("first", "second")
        assert header.get_metadata("missing") is None

    def test_version_is_stripped(self, make_scanner):
        assert parse_header(make_scanner("#Version =  1.0 \n")).version == "1.0"

    def test_empty_block_dropped(self, make_scanner):
        scanner = make_scanner("#metadata_begin=Empty\n#metadata_end\n")
        assert parse_header(scanner).metadata == {}

    def test_unterminated_block(self, make_scanner):
        """An unterminated block runs to the end of the stream."""
        scanner = make_scanner('#metadata_begin=Notes\n#a\n"not a record"\n')
        header = parse_header(scanner)
        assert header.metadata == {"notes": ("a", 'not a record"')}
        assert scanner.read_line() is None

    def test_comments_and_blank_lines(self, make_scanner):
        scanner = make_scanner("; export\n\n#version=3\n\n; more\n#ignored\nPoint\n")
        header = parse_header(scanner)
        assert header.version == "3"
        assert header.metadata == {}
        assert scanner.read_line() == "Point"
        assert scanner.line_number == 7

    def test_unknown_header_lines_ignored(self, make_scanner):
        scanner = make_scanner("#generator=SDF Loader\n#version=1\n")
        result = parse_header_to_dict(scanner)
        assert result == {"version": "1", "metadata": {}}

    def test_no_header(self, make_scanner, point_record):
        scanner = make_scanner(point_record)
        header = parse_header(scanner)
        assert header.version is None
        assert header.metadata == {}
        assert header.coordinate_system_wkt is None
        assert scanner.line_number == 0

    def test_empty_stream(self, make_scanner):
        header = parse_header(make_scanner(""))
        assert header.version is None
        assert header.metadata == {}
