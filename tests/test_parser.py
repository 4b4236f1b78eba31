"""Tests for CSV text parsing."""

import pytest

from csv_preview.parser import (
    MALFORMED_QUOTE,
    UNTERMINATED_QUOTE,
    ParseError,
    parse_csv,
)


def test_simple_rows():
    """Test parsing of unquoted rows with a trailing newline."""
    assert parse_csv("id,name\n1,Alice\n") == [["id", "name"], ["1", "Alice"]]


def test_quoted_comma_preserved():
    """Test that a comma inside quotes stays in the cell."""
    assert parse_csv('a,"b,c",d\n') == [["a", "b,c", "d"]]


def test_doubled_quote_escape():
    """Test that doubled quotes inside a quoted field become a literal quote."""
    assert parse_csv('"he said ""hi"""') == [['he said "hi"']]


def test_embedded_newline_is_one_row():
    """Test that a newline inside quotes does not split the record."""
    assert parse_csv('a,"line1\nline2",b') == [["a", "line1\nline2", "b"]]


def test_embedded_crlf_kept_verbatim():
    """Test that CRLF inside a quoted field is preserved as-is."""
    assert parse_csv('a,"x\r\ny"\r\n') == [["a", "x\r\ny"]]


def test_crlf_record_terminators():
    """Test CRLF line endings."""
    assert parse_csv("a,b\r\n1,2\r\n") == [["a", "b"], ["1", "2"]]


def test_empty_lines_skipped():
    """Test that fully empty physical lines between records are skipped."""
    text = "a,b\n\n1,2\n\r\n\n3,4\n"
    assert parse_csv(text) == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_whitespace_is_significant():
    """Test that unquoted whitespace is not trimmed and blank-looking lines are kept."""
    assert parse_csv(" a , b \n   \n") == [[" a ", " b "], ["   "]]


def test_missing_trailing_newline():
    """Test that the last row is complete without a final newline."""
    assert parse_csv("a,b\n1,2") == [["a", "b"], ["1", "2"]]


def test_ragged_rows_allowed():
    """Test that rows of different widths parse without error."""
    assert parse_csv("a,b,c,d\n1,2\n1,2,3,4,5\n") == [
        ["a", "b", "c", "d"],
        ["1", "2"],
        ["1", "2", "3", "4", "5"],
    ]


def test_empty_input():
    """Test that empty text yields zero rows."""
    assert parse_csv("") == []
    assert parse_csv("\n\n") == []


def test_round_trip_plain_grid():
    """Test that a grid without special characters survives comma/newline serialization."""
    grid = [["id", "name", "city"], ["1", "Alice", "Paris"], ["2", "Bob", ""]]
    text = "\n".join(",".join(row) for row in grid) + "\n"
    assert parse_csv(text) == grid


def test_end_to_end_example():
    """Test the documented example input."""
    text = 'id,name\n1,Alice\n2,"Bob, Jr."\n'
    assert parse_csv(text) == [["id", "name"], ["1", "Alice"], ["2", "Bob, Jr."]]


def test_custom_delimiter():
    """Test parsing with a semicolon delimiter."""
    assert parse_csv('a;"b;c"\n', delimiter=";") == [["a", "b;c"]]


def test_unterminated_quote_raises():
    """Test that an unclosed quoted field at end of input is an error."""
    with pytest.raises(ParseError) as exc_info:
        parse_csv('h\n"never closed\n')

    assert exc_info.value.reason == UNTERMINATED_QUOTE
    assert exc_info.value.line == 2
    assert isinstance(exc_info.value, ValueError)


def test_text_after_closing_quote_raises():
    """Test that characters after a closing quote are rejected."""
    with pytest.raises(ParseError) as exc_info:
        parse_csv('"a"b,c\n')

    assert exc_info.value.reason == MALFORMED_QUOTE


def test_large_field_parses():
    """Test that a cell beyond the csv module default size limit is read intact."""
    blob = "x" * 200_000

    assert parse_csv(f"id,blob\n1,{blob}\n") == [["id", "blob"], ["1", blob]]
    assert parse_csv(f'id,blob\n1,"{blob}"\n')[1][1] == blob
