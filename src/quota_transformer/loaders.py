"""File → pipeline input text, dispatched on the file extension."""

from __future__ import annotations

import logging
from pathlib import Path

from quota_transformer.errors import AdapterError, UnsupportedFormatError

log = logging.getLogger(__name__)

TEXT_SUFFIXES = frozenset({".csv", ".tsv", ".txt"})
EXCEL_SUFFIXES = frozenset({".xlsx", ".xls"})
WORD_SUFFIXES = frozenset({".docx"})
HTML_SUFFIXES = frozenset({".html", ".htm"})

SUPPORTED_SUFFIXES = TEXT_SUFFIXES | EXCEL_SUFFIXES | WORD_SUFFIXES | HTML_SUFFIXES


def read_text_file(path: str | Path) -> str:
    """Decode a delimited text file verbatim (UTF-8, BOM tolerated)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise AdapterError(f"{path.name} is not UTF-8 text: {e}") from e


def load_input_text(path: str | Path, *, sheet: str | int | None = None) -> str:
    """Turn a CSV/TSV/TXT, Excel, Word or HTML file into pipeline input text.

    Args:
        path: Source file.
        sheet: Worksheet name or index for multi-sheet workbooks.

    Raises:
        UnsupportedFormatError: Unknown extension.
        AdapterError: The adapter could not read the file (no table, corrupt
            file, sheet choice required).
    """
    path = Path(path)
    suffix = path.suffix.lower()
    log.debug("Loading %s as %s", path.name, suffix or "<no extension>")

    if suffix in TEXT_SUFFIXES:
        return read_text_file(path)
    if suffix in EXCEL_SUFFIXES:
        from quota_transformer.xlsx_extractor import sheet_to_tsv
        return sheet_to_tsv(path, sheet)
    if suffix in WORD_SUFFIXES:
        from quota_transformer.docx_extractor import docx_to_tsv
        return docx_to_tsv(path)
    if suffix in HTML_SUFFIXES:
        from quota_transformer.html_extractor import html_file_to_tsv
        return html_file_to_tsv(path)
    raise UnsupportedFormatError(suffix)
