"""Stateless value cleaners applied to single cells."""

from __future__ import annotations

import re
from typing import Any

# "West US (ABC)" -> "West US"
_REGION_TAG_RE = re.compile(r"\s*\([A-Z]+\)\s*$")
_XIO_RE = re.compile(r"\(XIO\)", re.IGNORECASE)


def clean_region(region: str | None) -> str:
    """Strip a trailing parenthesized uppercase tag and surrounding whitespace."""
    if not region:
        return ""
    return _REGION_TAG_RE.sub("", region).strip()


def clean_vm_type(value: str | None) -> str | None:
    """Remove every ``(XIO)`` marker (any case) from a VM size."""
    if not value:
        return value
    return _XIO_RE.sub("", value).strip()


def clean_value(value: Any) -> Any:
    """Display/export cleaner: ``None`` becomes ``""``, strings are trimmed."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value
