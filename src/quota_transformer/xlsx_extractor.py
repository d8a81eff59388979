"""Excel (XLSX/XLS) sheet → tab-separated text.

- XLSX (Office 2007+): Uses openpyxl
- XLS (Office 97-2003): Uses xlrd

A workbook with a single sheet is converted directly.  With several sheets
the caller must choose one (see :func:`list_sheet_names`); converting without
a choice raises :class:`SheetSelectionRequiredError`.
"""

from __future__ import annotations

import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from quota_transformer.errors import AdapterError, SheetSelectionRequiredError

if TYPE_CHECKING:
    from openpyxl.workbook import Workbook

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cell formatting
# ---------------------------------------------------------------------------


def _format_cell(value: Any) -> str:
    """Render one cell value the way it reads in the sheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value == int(value):
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    # Tabs and line breaks inside a cell would shift columns and rows.
    return " ".join(str(value).split())


def rows_to_tsv(rows: list[list[Any]]) -> str:
    return "\n".join("\t".join(_format_cell(v) for v in row) for row in rows)


# ---------------------------------------------------------------------------
# Workbook loading
# ---------------------------------------------------------------------------


def _check_path(excel_path: str | Path) -> Path:
    path = Path(excel_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {excel_path}")
    return path


def _load_xlsx(path: Path) -> Workbook:
    try:
        from openpyxl import load_workbook
        from openpyxl.utils.exceptions import InvalidFileException
    except ImportError as e:
        raise ImportError(
            "openpyxl is required for XLSX extraction. "
            "Install with: pip install openpyxl"
        ) from e

    try:
        return load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise AdapterError(f"Failed to read Excel file {path.name}: {e}") from e


def _open_xls(path: Path):
    try:
        import xlrd
    except ImportError as e:
        raise ImportError(
            "xlrd is required for XLS extraction. "
            "Install with: pip install xlrd"
        ) from e

    try:
        return xlrd.open_workbook(path)
    except (xlrd.XLRDError, OSError) as e:
        raise AdapterError(f"Failed to read Excel file {path.name}: {e}") from e


def _xls_rows(wb, sheet_index: int) -> list[list[Any]]:
    import xlrd

    ws = wb.sheet_by_index(sheet_index)
    rows: list[list[Any]] = []
    for row_idx in range(ws.nrows):
        row: list[Any] = []
        for col_idx in range(ws.ncols):
            cell = ws.cell(row_idx, col_idx)
            if cell.ctype == xlrd.XL_CELL_DATE:
                row.append(xlrd.xldate.xldate_as_datetime(cell.value, wb.datemode))
            elif cell.ctype == xlrd.XL_CELL_EMPTY:
                row.append(None)
            else:
                row.append(cell.value)
        rows.append(row)
    return rows


def _pick_sheet(sheet_names: list[str], sheet: str | int | None) -> int:
    if sheet is None:
        if len(sheet_names) == 1:
            return 0
        raise SheetSelectionRequiredError(sheet_names)
    if isinstance(sheet, int):
        if 0 <= sheet < len(sheet_names):
            return sheet
        raise AdapterError(f"Sheet index {sheet} out of range ({len(sheet_names)} sheets)")
    if sheet not in sheet_names:
        raise AdapterError(f"Sheet {sheet!r} not found; available: {', '.join(sheet_names)}")
    return sheet_names.index(sheet)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_sheet_names(excel_path: str | Path) -> list[str]:
    """Sheet names of an XLSX or XLS workbook, in workbook order."""
    path = _check_path(excel_path)
    if path.suffix.lower() == ".xls":
        return list(_open_xls(path).sheet_names())

    wb = _load_xlsx(path)
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()


def sheet_to_tsv(excel_path: str | Path, sheet: str | int | None = None) -> str:
    """Convert one worksheet to tab-separated text.

    Args:
        excel_path: Path to the .xlsx or .xls file.
        sheet: Sheet name or index.  May be omitted for single-sheet workbooks.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SheetSelectionRequiredError: Several sheets and no *sheet* given.
        AdapterError: Corrupt workbook or unknown sheet.
    """
    path = _check_path(excel_path)

    if path.suffix.lower() == ".xls":
        wb = _open_xls(path)
        index = _pick_sheet(list(wb.sheet_names()), sheet)
        rows = _xls_rows(wb, index)
        log.debug("Read %d rows from %s[%d]", len(rows), path.name, index)
        return rows_to_tsv(rows)

    wb = _load_xlsx(path)
    try:
        index = _pick_sheet(list(wb.sheetnames), sheet)
        ws = wb.worksheets[index]
        rows = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    log.debug("Read %d rows from %s[%d]", len(rows), path.name, index)
    return rows_to_tsv(rows)
