"""Word (DOCX) table → tab-separated text.

Uses python-docx.  Only the first table of the document is converted; header
and body rows are joined the same way, one line per table row.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

from quota_transformer.errors import AdapterError, NoTableFoundError

if TYPE_CHECKING:
    from docx.table import Table, _Cell


def _get_cell_text(cell: "_Cell") -> str:
    """Get text content from a cell as a single line."""
    text_parts: list[str] = []
    for para in cell.paragraphs:
        # split()+join collapses internal runs of whitespace to single spaces
        text = " ".join(para.text.split())
        if text:
            text_parts.append(text)
    return " ".join(text_parts)


def _row_cells(row) -> list["_Cell"]:
    """Cells of a row with horizontal merges collapsed to one cell.

    python-docx repeats a merged cell for every grid column it spans.
    """
    cells: list["_Cell"] = []
    previous = None
    for cell in row.cells:
        if previous is not None and cell._tc is previous:
            continue
        cells.append(cell)
        previous = cell._tc
    return cells


def table_to_tsv(table: "Table") -> str:
    lines = []
    for row in table.rows:
        lines.append("\t".join(_get_cell_text(cell) for cell in _row_cells(row)))
    return "\n".join(lines)


def docx_to_tsv(docx_path: str | Path) -> str:
    """Convert the first table of a Word document to tab-separated text.

    Raises:
        ImportError: If python-docx is not installed.
        FileNotFoundError: If the file doesn't exist.
        NoTableFoundError: The document has no table.
        AdapterError: The file is not a readable DOCX package.
    """
    try:
        from docx import Document
        from docx.opc.exceptions import PackageNotFoundError
    except ImportError as e:
        raise ImportError(
            "python-docx is required for DOCX extraction. "
            "Install with: pip install python-docx"
        ) from e

    path = Path(docx_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {docx_path}")

    try:
        doc = Document(path)
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError) as e:
        raise AdapterError("Failed to parse Word document.") from e

    if not doc.tables:
        raise NoTableFoundError("Word document")
    return table_to_tsv(doc.tables[0])
