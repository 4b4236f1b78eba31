"""Command-line interface for csv-preview."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich_argparse import RichHelpFormatter

try:
    from importlib.metadata import version

    __version__ = version("csv-preview")
except Exception:
    __version__ = "unknown"

console = Console()


def non_negative_int(value: str) -> int:
    """Argparse type for counts that may be zero but not negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {number}")
    return number


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="csv-preview",
        description="Render CSV files as interactive, searchable HTML tables",
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # open command
    open_parser = subparsers.add_parser(
        "open",
        help="Write an HTML preview of a CSV file",
        description=(
            "Render a CSV file as a self-contained HTML page with sticky headers, "
            "expandable rows and incremental search."
        ),
        epilog="""
Examples:
  # Preview next to the input (data.preview.html)
  csv-preview open data.csv

  # Choose the output file and pre-fill the search box
  csv-preview open data.csv --output /tmp/preview.html --search alice

  # Preview a file without a .csv extension
  csv-preview open export.txt --language-id csv
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    open_parser.add_argument("csv_file", help="Path to the CSV file")
    open_parser.add_argument(
        "--output", help="Output HTML file (default: <name>.preview.html next to the input)"
    )
    open_parser.add_argument("--search", default="", help="Search term to run on page load")
    open_parser.add_argument(
        "--language-id",
        help="Declared content type (csv or dynamic-csv skip content detection)",
    )
    open_parser.add_argument(
        "--force",
        action="store_true",
        help="Preview even if the content does not look like CSV",
    )
    open_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="List cells containing a term",
        description="Case-insensitive substring search over the data rows of a CSV file.",
        epilog="""
Examples:
  csv-preview search data.csv alice
  csv-preview search data.csv "new york" --limit 10
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    search_parser.add_argument("csv_file", help="Path to the CSV file")
    search_parser.add_argument("term", help="Text to search for")
    search_parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=50,
        help="Maximum matches to list (default: 50)",
    )

    # sniff command
    sniff_parser = subparsers.add_parser(
        "sniff",
        help="Check whether a file looks like CSV",
        description=(
            "Compare the comma count of the first lines of a file. "
            "Exit code 0 if they agree, 1 otherwise."
        ),
    )
    sniff_parser.add_argument("path", help="File to check")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    # Import command handlers
    if args.command == "open":
        from csv_preview.commands.preview import open_preview

        # Configure logging
        logging.basicConfig(
            level=logging.INFO if args.verbose else logging.WARNING,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        )

        return open_preview(
            args.csv_file,
            output=args.output,
            search_term=args.search,
            language_id=args.language_id,
            force=args.force,
        )
    elif args.command == "search":
        from csv_preview.commands.search import search_file

        return search_file(args.csv_file, args.term, args.limit)
    elif args.command == "sniff":
        from csv_preview.commands.sniff import sniff_file

        return sniff_file(args.path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
