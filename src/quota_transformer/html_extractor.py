"""HTML table → tab-separated text.

Uses selectolax for fast parsing.  The first ``<table>`` element is
converted; ``<th>`` and ``<td>`` cells are treated identically, one line per
``<tr>``.  Static parsing only: JavaScript-rendered tables are not seen.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from quota_transformer.errors import AdapterError, NoTableFoundError

if TYPE_CHECKING:
    from selectolax.parser import Node

_WHITESPACE_RE = re.compile(r"\s+")


def _get_cell_text(node: "Node") -> str:
    """Get text content from a cell, collapsing whitespace."""
    text = node.text(deep=True, separator=" ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def html_table_to_tsv(html_content: str) -> str:
    """Convert the first table in *html_content* to tab-separated text.

    Raises:
        ImportError: If selectolax is not installed.
        NoTableFoundError: The markup holds no ``<table>``.
    """
    try:
        from selectolax.parser import HTMLParser
    except ImportError as e:
        raise ImportError(
            "selectolax is required for HTML extraction. "
            "Install with: pip install selectolax"
        ) from e

    table = HTMLParser(html_content).css_first("table")
    if table is None:
        raise NoTableFoundError("HTML file")

    lines = []
    for tr in table.css("tr"):
        lines.append("\t".join(_get_cell_text(cell) for cell in tr.css("th, td")))
    return "\n".join(lines)


def html_file_to_tsv(html_path: str | Path) -> str:
    path = Path(html_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {html_path}")
    try:
        html_content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise AdapterError(f"{path.name} is not UTF-8 text: {e}") from e
    return html_table_to_tsv(html_content)
