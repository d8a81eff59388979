"""Degenerate-row filtering and grouping by request-type label."""

from __future__ import annotations

from quota_transformer.records import (
    NOT_APPLICABLE,
    UNKNOWN_LABEL,
    CanonicalRecord,
    RequestTypeCode,
)


def _has_request_type(record: CanonicalRecord) -> bool:
    # An empty source value is remapped to "Unknown" before filtering.
    if record.request_type_code is RequestTypeCode.UNKNOWN:
        return record.request_type not in ("", UNKNOWN_LABEL)
    return bool(record.request_type)


def is_degenerate(record: CanonicalRecord) -> bool:
    """A row that contributed nothing except the defaulted ``N/A`` zone."""
    return record.zone == NOT_APPLICABLE and not (
        record.subscription_id
        or record.vm_type
        or record.region
        or _has_request_type(record)
    )


def drop_degenerate(records: list[CanonicalRecord]) -> list[CanonicalRecord]:
    return [record for record in records if not is_degenerate(record)]


def group_by_request_type(
    records: list[CanonicalRecord],
) -> dict[str, list[CanonicalRecord]]:
    """Label → records, both in first-seen source order."""
    groups: dict[str, list[CanonicalRecord]] = {}
    for record in records:
        groups.setdefault(record.request_type, []).append(record)
    return groups
