"""CSV text to grid parsing.

Wraps the standard library csv reader in strict mode so that malformed
quoting is reported instead of silently repaired. Unterminated quoted fields
at end of input are an error; they are never auto-closed.
"""

import csv
import io
import logging
import sys

from .models import Grid

logger = logging.getLogger(__name__)

# Cells may be arbitrarily long; lift the csv module default of 131072 characters
try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2**31 - 1)

UNTERMINATED_QUOTE = "unterminated-quote"
MALFORMED_QUOTE = "malformed-quote"
MALFORMED_CSV = "malformed-csv"


class ParseError(ValueError):
    """Raised when CSV text cannot be split into rows.

    Attributes:
        reason: Machine-readable cause (e.g. "unterminated-quote")
        line: Physical line number where the reader stopped (1-based)
    """

    def __init__(self, reason: str, message: str, line: int | None = None):
        self.reason = reason
        self.line = line
        location = f" (line {line})" if line else ""
        super().__init__(f"{message}{location}")


def _classify(error: csv.Error) -> str:
    """Map a csv module error message to a ParseError reason."""
    message = str(error)
    if "unexpected end of data" in message:
        return UNTERMINATED_QUOTE
    if "expected after" in message:
        return MALFORMED_QUOTE
    return MALFORMED_CSV


def parse_csv(text: str, delimiter: str = ",") -> Grid:
    """
    Parse CSV text into a grid of string cells.

    Supports double-quote quoting, doubled quotes as escapes, newlines inside
    quoted fields and CR, LF or CRLF record terminators. Fully empty physical
    lines are skipped. Cells are not trimmed and rows may differ in width.

    Args:
        text: Raw CSV content
        delimiter: Field separator

    Returns:
        Rows in file order, each a list of cell strings

    Raises:
        ParseError: If quoting is malformed or a quoted field is not closed
    """
    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=delimiter,
        quotechar='"',
        doublequote=True,
        strict=True,
    )

    grid: Grid = []
    try:
        for row in reader:
            # Blank physical lines come back as empty lists
            if not row:
                continue
            grid.append(row)
    except csv.Error as e:
        reason = _classify(e)
        raise ParseError(reason, f"Cannot parse CSV: {e}", line=reader.line_num) from e

    logger.debug(f"Parsed {len(grid)} rows")
    return grid
