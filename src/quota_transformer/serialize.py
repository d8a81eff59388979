"""Serialization: canonical records → TSV, CSV, HTML, XLSX, JSON and DataFrames.

Every writer works on ``(records, headers)``: *headers* are English display
headers (see :data:`FINAL_HEADERS`, plus the optional ``RDQuota`` column) and
decide both the column order and which record fields are emitted.  With
``translate=True`` headers and values are passed through the static label
table; records themselves are never modified.

Rows are validated with a Pydantic model before they are written, so a
non-string value slipping into a record fails loudly instead of producing a
malformed file.

Usage::

    from quota_transformer import transform_data
    from quota_transformer.serialize import to_tsv, to_xlsx

    result = transform_data(text)
    tsv = to_tsv(result.records)
    to_xlsx(result.records, "quota.xlsx", translate=True)
"""

from __future__ import annotations

import csv
import html
import io
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, StrictStr, ValidationError, create_model

from quota_transformer.cleaners import clean_value
from quota_transformer.errors import SerializationValidationError
from quota_transformer.labels import translate_headers, translate_label
from quota_transformer.records import FINAL_HEADERS, CanonicalRecord, RequestTypeCode

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl

RDQUOTA_HEADER = "RDQuota"
XLSX_SHEET_NAME = "Quota Data"
XLSX_MAX_COLUMN_WIDTH = 50


# ─── Header selection ─────────────────────────────────────────────────────────


def visible_headers(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
) -> list[str]:
    """Headers shown for one category's records.

    Zonal enablement categories have no core counts, every other category
    has no zone, so the first record's code decides which column is hidden.
    """
    if not records:
        return list(headers)
    if records[0].request_type_code is RequestTypeCode.ZONAL_ENABLEMENT:
        hidden = "Cores"
    else:
        hidden = "Zone"
    return [h for h in headers if h != hidden]


def with_rdquota(headers: list[str] | tuple[str, ...] = FINAL_HEADERS) -> list[str]:
    return [RDQUOTA_HEADER, *headers]


def sorted_groups(
    groups: dict[str, list[CanonicalRecord]],
) -> list[tuple[str, list[CanonicalRecord]]]:
    """Category groups ordered by label, case-insensitively."""
    return sorted(groups.items(), key=lambda item: item[0].casefold())


def export_filename(
    category: str | None = None,
    *,
    translate: bool = False,
    rdquota: bool = False,
) -> str:
    """Default XLSX filename for a category view, or the unified view when None.

    *rdquota* only affects the unified view, which is named after the extra
    identifier column when it carries one.
    """
    if category is None:
        if rdquota:
            if translate:
                return "Tabela_Unificada_por_RDQuota_pt-BR.xlsx"
            return "Unified_Table_by_RDQuota_en-US.xlsx"
        if translate:
            return "Tabela_Unificada_pt-BR.xlsx"
        return "Unified_Table_en-US.xlsx"
    clean_name = "_".join(category.split())
    if translate:
        return f"{clean_name}_Dados_Cota_pt-BR.xlsx"
    return f"{clean_name}_Quota_Data_en-US.xlsx"


# ─── Row building and validation ──────────────────────────────────────────────


def _record_value(record: CanonicalRecord, header: str) -> Any:
    if header == RDQUOTA_HEADER:
        return record.original_id
    return record.as_display_dict().get(header)


def _build_validator_model(num_columns: int) -> type[BaseModel]:
    fields: dict[str, Any] = {f"c{i}": (StrictStr, ...) for i in range(num_columns)}
    return create_model("ExportRow", **fields)


def build_table(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
) -> tuple[list[str], list[list[str]]]:
    """Display headers and string rows for *records*.

    Raises:
        SerializationValidationError: If a cell is not a string.
    """
    headers = list(headers)
    model = _build_validator_model(len(headers))

    rows: list[list[str]] = []
    for index, record in enumerate(records):
        row = []
        for header in headers:
            value = clean_value(_record_value(record, header))
            if translate and isinstance(value, str):
                value = translate_label(value)
            row.append(value)

        try:
            model(**{f"c{i}": value for i, value in enumerate(row)})
        except ValidationError as e:
            bad = e.errors()[0]["loc"][0]
            column = headers[int(str(bad)[1:])]
            raise SerializationValidationError(
                f"Record {index}: column {column!r} is not a string",
                record_index=index,
                column_name=column,
            ) from e
        rows.append(row)

    display_headers = translate_headers(headers) if translate else headers
    return display_headers, rows


# ─── Public API ───────────────────────────────────────────────────────────────


def _write_delimited(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...],
    delimiter: str,
    translate: bool,
    path: str | Path | None,
) -> str | None:
    display_headers, rows = build_table(records, headers, translate=translate)

    output = io.StringIO()
    writer = csv.writer(output, delimiter=delimiter, lineterminator="\n")
    writer.writerow(display_headers)
    writer.writerows(rows)
    text = output.getvalue()

    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
        return None
    return text


def to_tsv(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
    path: str | Path | None = None,
) -> str | None:
    """Serialize records to tab-separated text (clipboard / spreadsheet paste).

    Returns:
        TSV string if ``path`` is None, otherwise None.
    """
    return _write_delimited(records, headers, "\t", translate, path)


def to_csv(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
    path: str | Path | None = None,
) -> str | None:
    """Serialize records to CSV.

    Returns:
        CSV string if ``path`` is None, otherwise None.
    """
    return _write_delimited(records, headers, ",", translate, path)


def to_html_table(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
) -> str:
    """Render records as an HTML ``<table>`` (rich clipboard format)."""
    display_headers, rows = build_table(records, headers, translate=translate)

    head = "".join(f"<th>{html.escape(h)}</th>" for h in display_headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def to_json(
    records: list[CanonicalRecord],
    *,
    groups: dict[str, list[CanonicalRecord]] | None = None,
    indent: int | None = 2,
) -> str:
    """Serialize canonical records (all fields) to JSON.

    With *groups*, the output is an object of label → record list, labels
    sorted as in :func:`sorted_groups`.
    """
    if groups is not None:
        payload: Any = {
            label: [r.to_dict() for r in members]
            for label, members in sorted_groups(groups)
        }
    else:
        payload = [r.to_dict() for r in records]
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def to_xlsx(
    records: list[CanonicalRecord],
    path: str | Path,
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
    sheet_name: str = XLSX_SHEET_NAME,
) -> Path:
    """Write records to a single-sheet XLSX workbook.

    Column widths fit the longest cell (header included), capped at
    :data:`XLSX_MAX_COLUMN_WIDTH` characters.

    Raises:
        ImportError: If openpyxl is not installed.
    """
    try:
        from openpyxl import Workbook
        from openpyxl.utils import get_column_letter
    except ImportError as e:
        raise ImportError(
            "openpyxl is required for XLSX export. "
            "Install it with: pip install openpyxl"
        ) from e

    display_headers, rows = build_table(records, headers, translate=translate)

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(display_headers)
    for row in rows:
        ws.append(row)

    for ci, header in enumerate(display_headers):
        longest = max([len(header), *(len(row[ci]) for row in rows)])
        width = min(longest + 2, XLSX_MAX_COLUMN_WIDTH)
        ws.column_dimensions[get_column_letter(ci + 1)].width = width

    out = Path(path)
    wb.save(out)
    return out


def to_pandas(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
) -> pd.DataFrame:
    """Records as a pandas DataFrame with ``string`` dtype columns.

    Raises:
        ImportError: If pandas is not installed.
    """
    try:
        import pandas as pd
    except ImportError as e:
        raise ImportError(
            "pandas is required for DataFrame export. "
            "Install it with: pip install pandas"
        ) from e

    display_headers, rows = build_table(records, headers, translate=translate)
    return pd.DataFrame(rows, columns=display_headers).astype("string")


def to_polars(
    records: list[CanonicalRecord],
    headers: list[str] | tuple[str, ...] = FINAL_HEADERS,
    *,
    translate: bool = False,
) -> pl.DataFrame:
    """Records as a polars DataFrame with ``Utf8`` columns.

    Raises:
        ImportError: If polars is not installed.
    """
    try:
        import polars as pl
    except ImportError as e:
        raise ImportError(
            "polars is required for DataFrame export. "
            "Install it with: pip install polars"
        ) from e

    display_headers, rows = build_table(records, headers, translate=translate)
    column_data: dict[str, list[str]] = {
        h: [row[ci] for row in rows] for ci, h in enumerate(display_headers)
    }
    return pl.DataFrame(column_data, schema={h: pl.Utf8 for h in display_headers})
