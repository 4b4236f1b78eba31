from .preview import open_preview
from .search import search_file
from .sniff import sniff_file

__all__ = ["open_preview", "search_file", "sniff_file"]
