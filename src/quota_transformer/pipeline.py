"""Parse-and-normalize pipeline entry point.

Usage::

    from quota_transformer import transform_data

    result = transform_data(pasted_text)
    for label, records in result.groups.items():
        ...

The whole input is processed in one synchronous pass.  Nothing is cached
between calls, so identical input always yields identical output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quota_transformer.columns import ColumnResolver
from quota_transformer.config import TransformConfig
from quota_transformer.errors import (
    EmptyInputError,
    EmptyResultError,
    InsufficientRowsError,
    TransformError,
    UnknownParseError,
)
from quota_transformer.grouping import drop_degenerate, group_by_request_type
from quota_transformer.headers import locate_header
from quota_transformer.normalize import prepare_input
from quota_transformer.records import (
    CanonicalRecord,
    InputMode,
    detect_input_mode,
    normalize_canonical_row,
    normalize_raw_row,
    resolve_raw_columns,
)
from quota_transformer.separator import Separator, detect_separator
from quota_transformer.tokenizer import non_blank_lines, tokenize_lines

log = logging.getLogger(__name__)


@dataclass
class TransformResult:
    """Output of :func:`transform_data`.

    Attributes:
        records: Canonical records in source row order.
        groups: Request-type label → records with that label, labels in
            first-seen order.
        mode: Whether the input was raw export or already canonical.
        separator: Delimiter detected for the input.
        header_row_index: Index of the header among the non-blank lines.
    """

    records: list[CanonicalRecord]
    groups: dict[str, list[CanonicalRecord]]
    mode: InputMode
    separator: Separator
    header_row_index: int


def _transform(raw_input: str, config: TransformConfig) -> TransformResult:
    cleaned = prepare_input(raw_input, strip_export_banner=config.strip_banner)
    if not cleaned.strip():
        raise EmptyInputError()

    lines = non_blank_lines(cleaned)
    if len(lines) < 2:
        raise InsufficientRowsError()

    separator = detect_separator(lines, scan_limit=config.separator_scan_limit)
    rows = tokenize_lines(lines, separator)

    header = locate_header(rows, config.header_strategy)
    data_rows = rows[header.header_row_index + 1:]
    log.debug(
        "Header row %d: %s (%d data rows)",
        header.header_row_index, header.header_cells, len(data_rows),
    )

    resolver = ColumnResolver.from_headers(header.header_cells)
    mode = detect_input_mode(resolver)
    log.debug("Input mode: %s", mode.value)

    if mode is InputMode.CANONICAL:
        # Canonical input skips the degenerate-row filter.
        records = [
            normalize_canonical_row(values, resolver, ordinal)
            for ordinal, values in enumerate(data_rows)
        ]
    else:
        columns = resolve_raw_columns(resolver)
        processed = [normalize_raw_row(values, columns) for values in data_rows]
        records = drop_degenerate(processed)
        if len(records) < len(processed):
            log.info("Dropped %d degenerate row(s)", len(processed) - len(records))

    if not records:
        raise EmptyResultError()

    groups = group_by_request_type(records)
    log.info("Transformed %d record(s) into %d categories", len(records), len(groups))

    return TransformResult(
        records=records,
        groups=groups,
        mode=mode,
        separator=separator,
        header_row_index=header.header_row_index,
    )


def transform_data(
    raw_input: str,
    config: TransformConfig | None = None,
) -> TransformResult:
    """Parse raw delimited text into canonical records grouped by request type.

    Args:
        raw_input: Pasted text or text decoded by one of the format adapters.
        config: Pipeline options; defaults to robust header detection with
            legacy fallback.

    Returns:
        :class:`TransformResult` with the flat record list and the grouping.

    Raises:
        EmptyInputError: Input is blank after pre-processing.
        InsufficientRowsError: Fewer than two non-blank lines.
        MissingHeaderError: No identifier column in any header strategy.
        MissingColumnError: A required raw-mode field has no column.
        EmptyResultError: Every data row was degenerate.
        UnknownParseError: Any other failure, wrapping the cause.
    """
    if config is None:
        config = TransformConfig()
    try:
        return _transform(raw_input or "", config)
    except TransformError:
        raise
    except Exception as e:
        log.debug("Unexpected parse failure", exc_info=True)
        raise UnknownParseError(e) from e
