"""Data models for the CSV preview pipeline.

This module defines the structures passed between the parser, the render
model and the presentation layer: the parsed grid, the render-ready table
and the search index with its navigation cursor.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

Row = list[str]
Grid = list[Row]


@dataclass(frozen=True)
class RawDocument:
    """Text content of a file handed to the preview pipeline.

    Attributes:
        path: Location the text was read from (None for in-memory text)
        text: Decoded file content
    """

    path: str | None
    text: str

    @property
    def length(self) -> int:
        """Character length of the document text."""
        return len(self.text)


@dataclass
class BodyRow:
    """A data row tagged with its 1-based display index.

    Attributes:
        index: Position shown in the row-number column (first data row is 1)
        cells: Cell text, padded to at least the header width
    """

    index: int
    cells: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass
class RenderModel:
    """Header plus indexed body rows, ready for display.

    Attributes:
        header: First grid row (empty for an empty grid)
        rows: Remaining grid rows in file order
    """

    header: list[str] = field(default_factory=list)
    rows: list[BodyRow] = field(default_factory=list)

    @property
    def width(self) -> int:
        """Number of header cells."""
        return len(self.header)

    @property
    def is_empty(self) -> bool:
        """True when there is neither a header nor any data row."""
        return not self.header and not self.rows

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "header": list(self.header),
            "rows": [row.to_dict() for row in self.rows],
        }


@dataclass(frozen=True)
class Match:
    """A body cell containing the search term.

    Attributes:
        row_index: 0-based position in RenderModel.rows
        column_index: 0-based cell position within the row
        matched_text: First occurrence of the term, in the cell's own case
        spans: (start, end) offsets of every occurrence in the raw cell text
    """

    row_index: int
    column_index: int
    matched_text: str
    spans: tuple[tuple[int, int], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "row_index": self.row_index,
            "column_index": self.column_index,
            "matched_text": self.matched_text,
            "spans": [list(span) for span in self.spans],
        }


@dataclass
class SearchIndex:
    """Ordered matches for one search term with a navigable cursor.

    The cursor is -1 when there is no active match, otherwise a valid
    position in ``matches``. Navigation wraps around in both directions;
    stepping from -1 lands on the first (next) or last (previous) match.

    Attributes:
        term: Search term the index was built for
        matches: Matches in row-major, then column-major order
        cursor: Position of the active match (-1 for none)
    """

    term: str = ""
    matches: list[Match] = field(default_factory=list)
    cursor: int = -1

    def __post_init__(self):
        if not self.matches:
            self.cursor = -1
        elif not -1 <= self.cursor < len(self.matches):
            raise ValueError(
                f"cursor {self.cursor} out of range for {len(self.matches)} matches"
            )

    def __len__(self) -> int:
        return len(self.matches)

    @property
    def is_empty(self) -> bool:
        return not self.matches

    @property
    def current(self) -> Match | None:
        """The active match, or None when the index is empty."""
        if self.cursor < 0:
            return None
        return self.matches[self.cursor]

    def next(self) -> int:
        """Advance to the next match, wrapping to the first. Returns the cursor."""
        if self.matches:
            self.cursor = (self.cursor + 1) % len(self.matches)
        return self.cursor

    def previous(self) -> int:
        """Step back to the previous match, wrapping to the last. Returns the cursor."""
        if self.matches:
            if self.cursor < 0:
                self.cursor = len(self.matches) - 1
            else:
                self.cursor = (self.cursor - 1) % len(self.matches)
        return self.cursor

    def describe(self) -> str:
        """Human-readable position, e.g. '2 of 5 matches'."""
        if not self.matches:
            return "No matches found"
        return f"{self.cursor + 1} of {len(self.matches)} matches"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "term": self.term,
            "cursor": self.cursor,
            "matches": [match.to_dict() for match in self.matches],
        }
