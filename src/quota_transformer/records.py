"""Canonical record shape and the row → record normalizer.

Two producer paths converge on :class:`CanonicalRecord`:

- **canonical mode**: the header row already carries the final display
  names (``Subscription ID``, ``Request Type``, ``VM Type``, ``Region``).
  Values are read by name; only status and region are cleaned.
- **raw mode**: ticketing-system export columns.  Fields are found through
  alias lists, then request type, status, zone and cores are remapped.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from quota_transformer.cleaners import clean_region, clean_vm_type
from quota_transformer.columns import (
    CORES_ALIASES,
    ID_ALIASES,
    REGION_ALIASES,
    REQUEST_TYPE_ALIASES,
    STATUS_ALIASES,
    SUBSCRIPTION_ID_ALIASES,
    VM_TYPE_ALIASES,
    ZONE_ALIASES,
    ColumnResolver,
    cell_at,
)
from quota_transformer.errors import MissingColumnError

NOT_APPLICABLE = "N/A"
UNKNOWN_LABEL = "Unknown"
PRE_TRANSFORMED_ID_PREFIX = "pre-transformed-"

# Display headers, in display order.
FINAL_HEADERS = (
    "Subscription ID",
    "Request Type",
    "VM Type",
    "Region",
    "Zone",
    "Cores",
    "Status",
)
ORIGINAL_ID_HEADER = "Original ID"

# Headers whose presence (exact name) marks the input as already canonical.
CANONICAL_MARKER_HEADERS = ("Subscription ID", "Request Type", "VM Type", "Region")

ZONAL_ENABLEMENT_RAW = "AZ Enablement/Whitelisting"


class InputMode(str, Enum):
    RAW = "raw"
    CANONICAL = "canonical"


class RequestTypeCode(str, Enum):
    """Stable request category tag, independent of the display label."""

    ZONAL_ENABLEMENT = "ZONAL_ENABLEMENT"
    REGIONAL_ENABLEMENT = "REGIONAL_ENABLEMENT"
    REGION_ENABLEMENT_QUOTA_INCREASE = "REGION_ENABLEMENT_QUOTA_INCREASE"
    QUOTA_INCREASE = "QUOTA_INCREASE"
    REGION_LIMIT_INCREASE = "REGION_LIMIT_INCREASE"
    RESERVED_INSTANCES = "RESERVED_INSTANCES"
    UNKNOWN = "UNKNOWN"


# ---------------------------------------------------------------------------
# Remap tables (exact, case-sensitive, first match wins)
# ---------------------------------------------------------------------------

REQUEST_TYPE_REMAP: tuple[tuple[str, tuple[str, RequestTypeCode]], ...] = (
    (ZONAL_ENABLEMENT_RAW, ("Zonal Enablement", RequestTypeCode.ZONAL_ENABLEMENT)),
    ("Region Enablement/Whitelisting", ("Region Enablement", RequestTypeCode.REGIONAL_ENABLEMENT)),
    (
        "Whitelisting/Quota Increase",
        ("Region Enablement & Quota Increase", RequestTypeCode.REGION_ENABLEMENT_QUOTA_INCREASE),
    ),
    ("Quota Increase", ("Quota Increase", RequestTypeCode.QUOTA_INCREASE)),
    ("Region Limit Increase", ("Region Limit Increase", RequestTypeCode.REGION_LIMIT_INCREASE)),
    ("RI Enablement/Whitelisting", ("Reserved Instances", RequestTypeCode.RESERVED_INSTANCES)),
)

STATUS_REMAP: tuple[tuple[str, str], ...] = (
    ("Fulfillment Actions Completed", "Fulfilled"),
    ("Verification Successful", "Approved"),
    ("Abandoned", "Backlogged"),
    ("-", "Pending Customer Response"),
)


def _first_match(table, key, default):
    for raw, mapped in table:
        if raw == key:
            return mapped
    return default


def remap_request_type(raw_type: str) -> tuple[str, RequestTypeCode]:
    """Display label and code for a raw ticket type.

    Unrecognized values keep their text with code ``UNKNOWN``; an empty value
    becomes ``"Unknown"``.
    """
    return _first_match(
        REQUEST_TYPE_REMAP,
        raw_type,
        (raw_type or UNKNOWN_LABEL, RequestTypeCode.UNKNOWN),
    )


def remap_status(status: str, table: tuple[tuple[str, str], ...] = STATUS_REMAP) -> str:
    return _first_match(table, status, status)


# ---------------------------------------------------------------------------
# Canonical record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CanonicalRecord:
    """One normalized quota request."""

    subscription_id: str = ""
    request_type: str = ""
    vm_type: str = ""
    region: str = ""
    zone: str = ""
    cores: str = ""
    status: str = ""
    original_id: str = ""
    request_type_code: RequestTypeCode | None = None

    def as_display_dict(self) -> dict[str, str]:
        """Display header → value, plus ``Original ID``."""
        return {
            "Subscription ID": self.subscription_id,
            "Request Type": self.request_type,
            "VM Type": self.vm_type,
            "Region": self.region,
            "Zone": self.zone,
            "Cores": self.cores,
            "Status": self.status,
            ORIGINAL_ID_HEADER: self.original_id,
        }

    def to_dict(self) -> dict[str, str | None]:
        data = asdict(self)
        if self.request_type_code is not None:
            data["request_type_code"] = self.request_type_code.value
        return data


# ---------------------------------------------------------------------------
# Input mode
# ---------------------------------------------------------------------------


def detect_input_mode(resolver: ColumnResolver) -> InputMode:
    if all(resolver.has(name) for name in CANONICAL_MARKER_HEADERS):
        return InputMode.CANONICAL
    return InputMode.RAW


# ---------------------------------------------------------------------------
# Canonical mode
# ---------------------------------------------------------------------------


def normalize_canonical_row(
    values: list[str],
    resolver: ColumnResolver,
    ordinal: int,
) -> CanonicalRecord:
    """Read an already-canonical row by display name.

    Zone and cores pass through untouched; the row has no real identifier so
    ``original_id`` is a ``pre-transformed-<ordinal>`` placeholder.
    """

    def get(name: str) -> str:
        return cell_at(values, resolver.resolve((name,)))

    return CanonicalRecord(
        subscription_id=get("Subscription ID"),
        request_type=get("Request Type"),
        vm_type=get("VM Type"),
        region=clean_region(get("Region")),
        zone=get("Zone"),
        cores=get("Cores"),
        status=remap_status(get("Status")),
        original_id=f"{PRE_TRANSFORMED_ID_PREFIX}{ordinal}",
    )


# ---------------------------------------------------------------------------
# Raw mode
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawColumns:
    """Resolved source column index per raw field (None = absent)."""

    id: int
    subscription_id: int
    region: int
    request_type: int | None = None
    zone: int | None = None
    cores: int | None = None
    status: int | None = None
    vm_type: int | None = None


def resolve_raw_columns(resolver: ColumnResolver) -> RawColumns:
    """Resolve every raw field; id, subscription and region are required."""
    id_index = resolver.resolve(ID_ALIASES)
    if id_index is None:
        raise MissingColumnError("ID", 'Missing required header column: "ID" or "RDQuota"')

    subscription_index = resolver.resolve(SUBSCRIPTION_ID_ALIASES)
    if subscription_index is None:
        raise MissingColumnError("Subscription ID")

    region_index = resolver.resolve(REGION_ALIASES)
    if region_index is None:
        raise MissingColumnError("Region")

    return RawColumns(
        id=id_index,
        subscription_id=subscription_index,
        region=region_index,
        request_type=resolver.resolve(REQUEST_TYPE_ALIASES),
        zone=resolver.resolve(ZONE_ALIASES),
        cores=resolver.resolve(CORES_ALIASES),
        status=resolver.resolve(STATUS_ALIASES),
        vm_type=resolver.resolve(VM_TYPE_ALIASES),
    )


def normalize_raw_row(values: list[str], columns: RawColumns) -> CanonicalRecord:
    """Map one ticketing-system export row to a canonical record."""
    raw_type = cell_at(values, columns.request_type)
    cores = cell_at(values, columns.cores)
    zone = cell_at(values, columns.zone)

    # Zonal enablement requests carry no core count.
    if raw_type == ZONAL_ENABLEMENT_RAW:
        cores = NOT_APPLICABLE
    elif cores == "-1":
        cores = ""

    if not zone:
        zone = NOT_APPLICABLE

    label, code = remap_request_type(raw_type)

    return CanonicalRecord(
        subscription_id=cell_at(values, columns.subscription_id),
        request_type=label,
        vm_type=clean_vm_type(cell_at(values, columns.vm_type)),
        region=clean_region(cell_at(values, columns.region)),
        zone=zone,
        cores=cores,
        status=remap_status(cell_at(values, columns.status)),
        original_id=cell_at(values, columns.id),
        request_type_code=code,
    )
