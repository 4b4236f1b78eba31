"""Open command implementation - writes an HTML preview of a CSV file."""

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from csv_preview.config import get_config
from csv_preview.parser import ParseError
from csv_preview.preview import NotCsvError, PreviewManager

logger = logging.getLogger(__name__)
console = Console()


def default_output_path(csv_file: str) -> Path:
    """Preview path next to the input, e.g. data.csv -> data.preview.html."""
    path = Path(csv_file)
    return path.with_name(f"{path.stem}.preview.html")


def open_preview(
    csv_file: str,
    output: str | None = None,
    search_term: str = "",
    language_id: str | None = None,
    force: bool = False,
) -> int:
    """Render a CSV file as an interactive HTML preview page.

    Args:
        csv_file: Path to the CSV file
        output: Output HTML path (default: <stem>.preview.html next to the input)
        search_term: Search to run when the page opens
        language_id: Declared content type; 'csv' or 'dynamic-csv' skip detection
        force: Preview even if the content does not look like CSV

    Returns:
        0 on success, 1 on error
    """
    csv_path = Path(csv_file)
    if not csv_path.exists():
        console.print(f"[red]Error:[/red] File not found: {escape(csv_file)}")
        return 1

    if not csv_path.is_file():
        console.print(f"[red]Error:[/red] Not a file: {escape(csv_file)}")
        return 1

    manager = PreviewManager(config=get_config())
    try:
        panel = manager.create_or_show(csv_path, language_id=language_id, force=force)
        if search_term:
            panel.search(search_term)
    except NotCsvError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))} Use --force to preview it anyway.")
        return 1
    except ParseError as e:
        console.print(f"[red]Error:[/red] {escape(csv_file)}: {escape(str(e))}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(csv_file)}: {escape(str(e))}")
        return 1

    output_path = Path(output) if output else default_output_path(csv_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(panel.html)

    logger.info(f"Wrote {output_path}")
    if panel.search_index is not None:
        term = escape(repr(panel.search_term))
        console.print(f"Search {term}: {panel.search_index.describe()}")
    rows = len(panel.model.rows)
    console.print(f"[green]✓[/green] Generated preview: {escape(str(output_path))} ({rows} rows)")
    manager.dispose()
    return 0
