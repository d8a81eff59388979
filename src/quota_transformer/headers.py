"""Header row discovery.

Two strategies:

- **robust**: the first row holding an identifier cell (``ID``, ``RDQuota``,
  ``QuotaId``, any case) is the header row, so banners and blank-ish preamble
  rows above the table are skipped.
- **legacy**: row 0 is the header row and must contain an identifier alias.

With the robust strategy selected, a robust failure is retried once with the
legacy strategy before :class:`MissingHeaderError` reaches the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from quota_transformer.columns import ID_ALIASES, IDENTIFIER_NAMES, ColumnResolver
from quota_transformer.errors import MissingHeaderError

log = logging.getLogger(__name__)


class HeaderStrategy(str, Enum):
    ROBUST = "robust"
    LEGACY = "legacy"


@dataclass
class HeaderInfo:
    """Position and cells of the detected header row."""

    header_row_index: int
    header_cells: list[str]


def locate_header_robust(rows: list[list[str]]) -> HeaderInfo:
    for index, row in enumerate(rows):
        if any(cell.strip().lower() in IDENTIFIER_NAMES for cell in row):
            return HeaderInfo(header_row_index=index, header_cells=row)
    raise MissingHeaderError()


def locate_header_legacy(rows: list[list[str]]) -> HeaderInfo:
    if not rows:
        raise MissingHeaderError()
    header_cells = rows[0]
    if ColumnResolver.from_headers(header_cells).resolve(ID_ALIASES) is None:
        raise MissingHeaderError()
    return HeaderInfo(header_row_index=0, header_cells=header_cells)


def locate_header(
    rows: list[list[str]],
    strategy: HeaderStrategy = HeaderStrategy.ROBUST,
) -> HeaderInfo:
    """Find the header row with *strategy*, falling back from robust to legacy."""
    if strategy is HeaderStrategy.LEGACY:
        return locate_header_legacy(rows)

    try:
        return locate_header_robust(rows)
    except MissingHeaderError:
        log.warning("Robust header detection failed, falling back to legacy detection")
        return locate_header_legacy(rows)
