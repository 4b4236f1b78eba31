"""CSV Preview - interactive HTML previews of CSV files."""

try:
    from importlib.metadata import version

    __version__ = version("csv-preview")
except Exception:
    __version__ = "unknown"

from .models import BodyRow, Grid, Match, RawDocument, RenderModel, SearchIndex
from .parser import ParseError, parse_csv
from .render_model import build_render_model, next_match, previous_match, search
from .sniffer import looks_like_csv

__all__ = [
    "BodyRow",
    "Grid",
    "Match",
    "ParseError",
    "RawDocument",
    "RenderModel",
    "SearchIndex",
    "build_render_model",
    "looks_like_csv",
    "next_match",
    "parse_csv",
    "previous_match",
    "search",
]
