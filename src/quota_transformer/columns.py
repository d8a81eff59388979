"""Column resolution: canonical field → source column index.

Matching is case-insensitive and exact (no fuzzy matching).  Each canonical
field has a fixed, priority-ordered alias list; the first alias present in
the header row wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Alias tables (priority order)
# ---------------------------------------------------------------------------

ID_ALIASES = ("ID", "RDQuota", "id", "rdquota", "QuotaId")
SUBSCRIPTION_ID_ALIASES = ("Subscription ID", "SubscriptionId", "subscription id")
REGION_ALIASES = ("Region", "Location", "region")
REQUEST_TYPE_ALIASES = ("UTC Ticket", "Ticket", "Request Type", "Type")
ZONE_ALIASES = ("Deployment Constraints", "Zone", "Zones")
CORES_ALIASES = ("Event ID", "Cores", "Core Count")
STATUS_ALIASES = ("Reason", "Status", "State")
VM_TYPE_ALIASES = ("SKU", "VM Type", "VmSize")

# Cell values that mark a row as the header row.
IDENTIFIER_NAMES = frozenset({"id", "rdquota", "quotaid"})


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnResolver:
    """Read-only lower-cased header name → zero-based column index map."""

    index_map: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_headers(cls, header_cells: list[str]) -> ColumnResolver:
        # Filled left to right: a repeated header name keeps its last index.
        index_map: dict[str, int] = {}
        for index, header in enumerate(header_cells):
            index_map[header.lower()] = index
        return cls(index_map=index_map)

    def resolve(self, aliases: tuple[str, ...] | list[str]) -> int | None:
        """Index of the first alias present in the header row, or None."""
        for name in aliases:
            index = self.index_map.get(name.lower())
            if index is not None:
                return index
        return None

    def has(self, name: str) -> bool:
        return self.resolve((name,)) is not None


def cell_at(values: list[str], index: int | None) -> str:
    """Trimmed cell at *index*; ``""`` when the column is absent or the row short."""
    if index is None or index >= len(values):
        return ""
    return values[index].strip()
