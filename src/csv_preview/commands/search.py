"""Search command implementation - lists cells matching a term."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from csv_preview.config import get_config
from csv_preview.parser import ParseError, parse_csv
from csv_preview.preview import read_document
from csv_preview.render_model import build_render_model, search

console = Console()


def search_file(csv_file: str, term: str, limit: int = 50) -> int:
    """Print the body cells of a CSV file that contain a term.

    Args:
        csv_file: Path to the CSV file
        term: Case-insensitive text to look for
        limit: Maximum matches to list (all matches are counted)

    Returns:
        0 on success, 1 on error
    """
    config = get_config()
    try:
        document = read_document(Path(csv_file), encoding=config.encoding)
        model = build_render_model(parse_csv(document.text, delimiter=config.delimiter))
    except ParseError as e:
        console.print(f"[red]Error:[/red] {escape(csv_file)}: {escape(str(e))}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(csv_file)}: {escape(str(e))}")
        return 1

    index = search(model, term)
    if index.is_empty:
        console.print("No matches found")
        return 0

    table = Table(title=escape(f"Matches for {term!r}"))
    table.add_column("#", justify="right")
    table.add_column("Row", justify="right")
    table.add_column("Column")
    table.add_column("Cell")

    for position, match in enumerate(index.matches[:limit], start=1):
        row = model.rows[match.row_index]
        column = (
            model.header[match.column_index]
            if match.column_index < model.width
            else f"(column {match.column_index + 1})"
        )
        table.add_row(
            str(position), str(row.index), escape(column), escape(row.cells[match.column_index])
        )

    console.print(table)
    if len(index) > limit:
        console.print(f"... {len(index) - limit} more not shown")
    console.print(f"{len(index)} matches")
    return 0
