"""Render-ready table structure and cell search.

The render model separates the header from the body rows and pads short rows
so the presentation layer can index every header column. Search works on raw
cell text only; escaping belongs to the markup layer.
"""

import logging
import re

from .models import BodyRow, Grid, Match, RenderModel, SearchIndex

logger = logging.getLogger(__name__)


def build_render_model(grid: Grid) -> RenderModel:
    """
    Split a parsed grid into a header and 1-based indexed body rows.

    Rows shorter than the header are padded with empty cells. Longer rows are
    kept as they are and render with extra columns beyond the header.

    Args:
        grid: Parsed rows (may be empty)

    Returns:
        RenderModel; empty when the grid has no rows
    """
    if not grid:
        return RenderModel()

    header = list(grid[0])
    width = len(header)

    rows = []
    for position, row in enumerate(grid[1:], start=1):
        cells = list(row)
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        rows.append(BodyRow(index=position, cells=cells))

    ragged = sum(1 for row in grid[1:] if len(row) != width)
    if ragged:
        logger.debug(f"{ragged} of {len(rows)} rows differ from header width {width}")

    return RenderModel(header=header, rows=rows)


def search(model: RenderModel, term: str) -> SearchIndex:
    """
    Find body cells containing term, ignoring case.

    The term is matched literally as a substring. The header row is not
    searched. Matches are ordered by row, then by column.

    Args:
        model: Render model to search
        term: Text typed by the user

    Returns:
        SearchIndex with the cursor on the first match, or an empty index
        (cursor -1) when the term is empty or nothing matches
    """
    if not term:
        return SearchIndex()

    pattern = re.compile(re.escape(term), re.IGNORECASE)
    matches = []
    for row_index, row in enumerate(model.rows):
        for column_index, cell in enumerate(row.cells):
            spans = tuple(m.span() for m in pattern.finditer(cell))
            if not spans:
                continue
            start, end = spans[0]
            matches.append(
                Match(
                    row_index=row_index,
                    column_index=column_index,
                    matched_text=cell[start:end],
                    spans=spans,
                )
            )

    logger.debug(f"Search for {term!r} found {len(matches)} matches")
    return SearchIndex(term=term, matches=matches, cursor=0 if matches else -1)


def next_match(index: SearchIndex) -> int:
    """Advance the cursor with wrap-around; -1 for an empty index."""
    return index.next()


def previous_match(index: SearchIndex) -> int:
    """Move the cursor back with wrap-around; -1 for an empty index."""
    return index.previous()
