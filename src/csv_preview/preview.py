"""Preview panel lifecycle around the parse/render pipeline.

A PreviewPanel owns one document and the HTML it currently displays. The
PreviewManager tracks the single active panel: opening a preview reuses the
live panel when there is one, and disposing it clears the manager's handle.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .config import PreviewConfig, get_config
from .markup import render_document, render_placeholder
from .models import RawDocument, RenderModel, SearchIndex
from .parser import parse_csv
from .render_model import build_render_model, search
from .sniffer import looks_like_csv

logger = logging.getLogger(__name__)

VIEW_TYPE = "csvPreview"
NO_DOCUMENT_MESSAGE = "No CSV file selected"


class NotCsvError(ValueError):
    """Raised when a document is neither declared nor detected as CSV."""

    def __init__(self, path: str | None = None):
        self.path = path
        super().__init__("The current file does not appear to be a CSV file.")


def read_document(path: str | Path, encoding: str = "utf-8") -> RawDocument:
    """
    Read a file into a RawDocument.

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be opened
        UnicodeDecodeError: If the content is not valid in the given encoding
    """
    file_path = Path(path)
    with open(file_path, "r", encoding=encoding, newline="") as f:
        text = f.read()
    logger.debug(f"Read {len(text)} characters from {file_path}")
    return RawDocument(path=str(file_path), text=text)


def is_csv_document(
    document: RawDocument, language_id: str | None = None, config: PreviewConfig | None = None
) -> bool:
    """Check a declared language id, then the file extension, then the content."""
    config = config or get_config()
    if language_id and language_id in config.csv_language_ids:
        return True
    if document.path and document.path.lower().endswith(config.csv_extensions):
        return True
    return looks_like_csv(
        document.text, sample_lines=config.sniff_lines, delimiter=config.delimiter
    )


class PreviewPanel:
    """A single preview of one CSV document."""

    def __init__(
        self,
        path: str | Path | None = None,
        config: PreviewConfig | None = None,
        on_alert: Callable[[str], None] | None = None,
        reader: Callable[[str | Path, str], RawDocument] = read_document,
    ):
        self.config = config or get_config()
        self.on_alert = on_alert
        self._reader = reader
        self._disposables: list[Callable[[], None]] = []
        self._disposed = False

        self.path: str | None = None
        self.model = RenderModel()
        self.search_index: SearchIndex | None = None
        self.html = ""

        self.update(path)

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def search_term(self) -> str:
        return self.search_index.term if self.search_index else ""

    def _check_alive(self) -> None:
        if self._disposed:
            raise RuntimeError("Preview panel has been disposed")

    def update(self, path: str | Path | None = None) -> str:
        """
        Read, parse and render a document into this panel.

        With no path the panel keeps its current document; with no document at
        all it shows a placeholder.

        Returns:
            The HTML now displayed

        Raises:
            ParseError: If the document has malformed quoting
            OSError, UnicodeDecodeError: If the file cannot be read
        """
        self._check_alive()
        target = str(path) if path is not None else self.path

        if target is None:
            self.model = RenderModel()
            self.search_index = None
            self.html = render_placeholder(NO_DOCUMENT_MESSAGE, title=self.config.title)
            return self.html

        # Nothing is replaced until the new document has parsed
        document = self._reader(target, self.config.encoding)
        grid = parse_csv(document.text, delimiter=self.config.delimiter)
        model = build_render_model(grid)
        search_index = self.search_index
        if search_index is not None:
            search_index = search(model, search_index.term)

        self.path = target
        self.model = model
        self.search_index = search_index
        logger.info(f"Previewing {target}: {len(model.rows)} rows, {model.width} columns")
        self.html = self._render()
        return self.html

    def search(self, term: str) -> SearchIndex | None:
        """Replace the search index for a new term; an empty term clears it."""
        self._check_alive()
        self.search_index = search(self.model, term) if term else None
        self.html = self._render()
        return self.search_index

    def _render(self) -> str:
        if self.path is None:
            return render_placeholder(NO_DOCUMENT_MESSAGE, title=self.config.title)
        return render_document(self.model, title=self.config.title, search_term=self.search_term)

    def handle_message(self, message: dict[str, Any]) -> None:
        """Handle a message posted by the rendered page."""
        command = message.get("command")
        if command == "alert":
            text = str(message.get("text", ""))
            logger.error(text)
            if self.on_alert is not None:
                self.on_alert(text)
        else:
            logger.debug(f"Ignoring unknown preview message: {command!r}")

    def on_dispose(self, callback: Callable[[], None]) -> None:
        """Register a callback to run when the panel is disposed."""
        self._disposables.append(callback)

    def dispose(self) -> None:
        """Release the panel; callbacks run in reverse registration order."""
        if self._disposed:
            return
        self._disposed = True
        while self._disposables:
            callback = self._disposables.pop()
            callback()
        logger.debug(f"Disposed preview of {self.path}")

    def to_state(self) -> dict[str, Any]:
        """Serialize the panel for revival after a restart."""
        return {"view_type": VIEW_TYPE, "path": self.path, "search_term": self.search_term}

    @classmethod
    def from_state(
        cls,
        state: dict[str, Any],
        config: PreviewConfig | None = None,
        on_alert: Callable[[str], None] | None = None,
        reader: Callable[[str | Path, str], RawDocument] = read_document,
    ) -> "PreviewPanel":
        """Rebuild a panel from a dictionary produced by to_state()."""
        view_type = state.get("view_type", VIEW_TYPE)
        if view_type != VIEW_TYPE:
            raise ValueError(f"Cannot revive view type {view_type!r}")
        panel = cls(state.get("path"), config=config, on_alert=on_alert, reader=reader)
        term = state.get("search_term") or ""
        if term:
            panel.search(term)
        return panel


class PreviewManager:
    """Tracks the one active preview panel."""

    def __init__(
        self,
        config: PreviewConfig | None = None,
        on_alert: Callable[[str], None] | None = None,
        reader: Callable[[str | Path, str], RawDocument] = read_document,
    ):
        self.config = config or get_config()
        self.on_alert = on_alert
        self._reader = reader
        self._lock = threading.Lock()
        self.current: PreviewPanel | None = None

    def create_or_show(
        self, path: str | Path, language_id: str | None = None, force: bool = False
    ) -> PreviewPanel:
        """
        Show a document in the active panel, creating the panel if needed.

        Args:
            path: CSV file to preview
            language_id: Declared content type, if the caller knows one
            force: Skip CSV detection

        Returns:
            The active panel

        Raises:
            NotCsvError: If the document is not detected as CSV and force is False
        """
        with self._lock:
            if not force:
                document = self._reader(path, self.config.encoding)
                if not is_csv_document(document, language_id, self.config):
                    raise NotCsvError(str(path))

            if self.current is not None and not self.current.disposed:
                logger.debug(f"Reusing active preview for {path}")
                self.current.update(path)
            else:
                self.current = self._attach(
                    PreviewPanel(
                        path, config=self.config, on_alert=self.on_alert, reader=self._reader
                    )
                )
            return self.current

    def revive(self, state: dict[str, Any]) -> PreviewPanel:
        """Replace the active panel with one restored from saved state."""
        panel = PreviewPanel.from_state(
            state, config=self.config, on_alert=self.on_alert, reader=self._reader
        )
        with self._lock:
            previous = self.current
            self.current = self._attach(panel)
        if previous is not None:
            previous.dispose()
        return panel

    def dispose(self) -> None:
        """Dispose the active panel, if any."""
        if self.current is not None:
            self.current.dispose()

    def _attach(self, panel: PreviewPanel) -> PreviewPanel:
        def clear():
            if self.current is panel:
                self.current = None

        panel.on_dispose(clear)
        return panel
