"""HTML rendering of a render model as a self-contained preview page.

All escaping of cell text happens here. The generated page carries inline
styles and an inline script, so it needs no external resources.
"""

import re

from .models import RenderModel

_NEWLINE = re.compile(r"\r\n|\r|\n")

STYLES = """
        body {
            font-family: Arial, sans-serif;
            margin: 0;
            padding: 0;
        }
        .container {
            display: flex;
            flex-direction: column;
            height: 100vh;
        }
        .search-container {
            padding: 10px;
            background-color: #f0f0f0;
            display: flex;
            align-items: center;
        }
        #searchInput {
            flex-grow: 1;
            margin-right: 10px;
            padding: 5px;
        }
        #searchInfo {
            margin-right: 10px;
        }
        .table-container {
            flex-grow: 1;
            overflow: auto;
        }
        .no-data {
            padding: 20px;
            color: #6c757d;
        }
        table {
            border-collapse: collapse;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 8px;
            min-width: 200px;
            max-width: 200px;
        }
        th {
            background-color: black;
            color: white;
            position: sticky;
            top: 0;
            z-index: 10;
        }
        .row-number {
            position: sticky;
            left: 0;
            background-color: black;
            color: white;
            z-index: 5;
            width: 50px;
            min-width: 50px;
            max-width: 50px;
        }
        th.row-number {
            z-index: 15;
        }
        tr {
            height: 1.2em;
        }
        tr.expanded {
            height: auto;
        }
        td {
            vertical-align: top;
        }
        .cell-content {
            white-space: pre-wrap;
            overflow: hidden;
            text-overflow: ellipsis;
            max-height: 1.2em;
            transition: max-height 0.3s ease-out;
        }
        tr.expanded .cell-content {
            max-height: none;
        }
        .highlight {
            background-color: yellow;
        }
        .highlight.current {
            background-color: orange;
        }
"""

SCRIPT = """
        const rows = document.querySelectorAll('tbody tr');
        const cells = Array.from(document.querySelectorAll('tbody td:not(.row-number) .cell-content'));
        const originalHtml = new Map(cells.map(cell => [cell, cell.innerHTML]));

        function expandRow(row) {
            rows.forEach(r => r.classList.remove('expanded'));
            row.classList.add('expanded');
        }

        rows.forEach(row => {
            row.querySelectorAll('td:not(.row-number)').forEach(cell => {
                cell.addEventListener('click', () => {
                    // Selecting text must not toggle the row
                    if (window.getSelection().toString().length === 0) {
                        if (row.classList.contains('expanded')) {
                            row.classList.remove('expanded');
                        } else {
                            expandRow(row);
                        }
                    }
                });
                cell.addEventListener('mouseup', (event) => {
                    if (window.getSelection().toString().length > 0) {
                        event.stopPropagation();
                    }
                });
            });
        });

        const searchInput = document.getElementById('searchInput');
        const searchInfo = document.getElementById('searchInfo');
        const prevButton = document.getElementById('prevButton');
        const nextButton = document.getElementById('nextButton');
        let currentMatchIndex = -1;
        let matches = [];

        function textNodes(cell) {
            const walker = document.createTreeWalker(cell, NodeFilter.SHOW_TEXT);
            const nodes = [];
            while (walker.nextNode()) {
                nodes.push(walker.currentNode);
            }
            return nodes;
        }

        function highlightCell(cell, term) {
            let found = false;
            textNodes(cell).forEach(node => {
                const text = node.nodeValue;
                const lower = text.toLowerCase();
                let start = 0;
                let pos = lower.indexOf(term);
                if (pos === -1) {
                    return;
                }
                found = true;
                const fragment = document.createDocumentFragment();
                while (pos !== -1) {
                    fragment.appendChild(document.createTextNode(text.slice(start, pos)));
                    const mark = document.createElement('span');
                    mark.className = 'highlight';
                    mark.textContent = text.slice(pos, pos + term.length);
                    fragment.appendChild(mark);
                    start = pos + term.length;
                    pos = lower.indexOf(term, start);
                }
                fragment.appendChild(document.createTextNode(text.slice(start)));
                node.parentNode.replaceChild(fragment, node);
            });
            return found;
        }

        function performSearch() {
            const term = searchInput.value.toLowerCase();
            matches.forEach(cell => { cell.innerHTML = originalHtml.get(cell); });
            matches = [];
            rows.forEach(row => row.classList.remove('expanded'));

            if (term) {
                cells.forEach(cell => {
                    if (highlightCell(cell, term)) {
                        matches.push(cell);
                    }
                });
            }

            currentMatchIndex = matches.length > 0 ? 0 : -1;
            updateSearchInfo();
            highlightCurrentMatch();
        }

        function updateSearchInfo() {
            if (!searchInput.value) {
                searchInfo.textContent = '';
            } else {
                searchInfo.textContent = matches.length > 0
                    ? `${currentMatchIndex + 1} of ${matches.length} matches`
                    : 'No matches found';
            }
        }

        function highlightCurrentMatch() {
            document.querySelectorAll('.highlight.current').forEach(el => el.classList.remove('current'));
            if (currentMatchIndex >= 0 && currentMatchIndex < matches.length) {
                const currentCell = matches[currentMatchIndex];
                currentCell.querySelectorAll('.highlight').forEach(el => el.classList.add('current'));
                currentCell.scrollIntoView({ behavior: 'smooth', block: 'center' });
                expandRow(currentCell.closest('tr'));
            }
        }

        function step(delta) {
            if (matches.length > 0) {
                currentMatchIndex = (currentMatchIndex + delta + matches.length) % matches.length;
                updateSearchInfo();
                highlightCurrentMatch();
            }
        }

        searchInput.addEventListener('input', performSearch);
        searchInput.addEventListener('keydown', (e) => {
            if (e.key === 'Enter') {
                step(e.shiftKey ? -1 : 1);
            }
        });
        prevButton.addEventListener('click', () => step(-1));
        nextButton.addEventListener('click', () => step(1));

        document.addEventListener('keydown', (e) => {
            if ((e.metaKey || e.ctrlKey) && e.key === 'f') {
                e.preventDefault();
                searchInput.focus();
            }
        });

        if (searchInput.value) {
            performSearch();
        }
"""


def escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def escape_cell(text: str) -> str:
    """Escape cell text for display, turning line breaks into <br>."""
    return _NEWLINE.sub("<br>", escape_html(text))


def render_table(model: RenderModel) -> str:
    """Render the table element for a model, or a no-data notice when empty."""
    if model.is_empty:
        return '<div class="no-data">No data</div>'

    header_cells = "".join(f"<th>{escape_cell(cell)}</th>" for cell in model.header)
    body_rows = []
    for row in model.rows:
        cells = "".join(
            f'<td><div class="cell-content">{escape_cell(cell)}</div></td>' for cell in row.cells
        )
        body_rows.append(f'<tr><td class="row-number">{row.index}</td>{cells}</tr>')

    return (
        "<table>\n"
        f'<thead><tr><th class="row-number">#</th>{header_cells}</tr></thead>\n'
        "<tbody>\n" + "\n".join(body_rows) + "\n</tbody>\n"
        "</table>"
    )


def render_document(model: RenderModel, title: str = "CSV Preview", search_term: str = "") -> str:
    """
    Render a complete preview page for a model.

    Args:
        model: Table to display
        title: Page title
        search_term: Initial search input value; the page runs the search on load

    Returns:
        HTML string
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape_html(title)}</title>
    <style>{STYLES}    </style>
</head>
<body>
    <div class="container">
        <div class="search-container">
            <input type="text" id="searchInput" placeholder="Search..." value="{escape_html(search_term)}">
            <span id="searchInfo"></span>
            <button id="prevButton">Previous</button>
            <button id="nextButton">Next</button>
        </div>
        <div class="table-container">
{render_table(model)}
        </div>
    </div>
    <script>{SCRIPT}    </script>
</body>
</html>
"""


def render_placeholder(message: str, title: str = "CSV Preview") -> str:
    """Render a minimal page showing only a message."""
    return (
        f"<!DOCTYPE html>\n<html><head><title>{escape_html(title)}</title></head>"
        f"<body>{escape_html(message)}</body></html>\n"
    )
