"""Sniff command implementation - reports whether a file looks like CSV."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from csv_preview.config import get_config
from csv_preview.preview import read_document
from csv_preview.sniffer import looks_like_csv

console = Console()


def sniff_file(path: str) -> int:
    """Check the leading lines of a file for a consistent field count.

    Returns:
        0 if the content looks like CSV, 1 if it does not or cannot be read
    """
    config = get_config()
    try:
        document = read_document(Path(path), encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(path)}: {escape(str(e))}")
        return 1

    if looks_like_csv(document.text, sample_lines=config.sniff_lines, delimiter=config.delimiter):
        console.print(f"[green]✓[/green] Looks like CSV: {escape(path)}")
        return 0

    console.print(f"Does not look like CSV: {escape(path)}")
    return 1
