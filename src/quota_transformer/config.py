"""Pipeline configuration."""

from __future__ import annotations

from dataclasses import dataclass

from quota_transformer.headers import HeaderStrategy
from quota_transformer.separator import DEFAULT_SCAN_LIMIT


@dataclass(frozen=True)
class TransformConfig:
    """Options for one :func:`transform_data` call.

    Attributes:
        header_strategy: ``ROBUST`` scans for the identifier row and falls
            back to ``LEGACY`` (row 0) once; ``LEGACY`` only checks row 0.
        strip_banner: Drop a leading project/server/query export banner.
        separator_scan_limit: Lines inspected by separator detection.
    """

    header_strategy: HeaderStrategy = HeaderStrategy.ROBUST
    strip_banner: bool = True
    separator_scan_limit: int = DEFAULT_SCAN_LIMIT

    @classmethod
    def from_dict(cls, data: dict) -> TransformConfig:
        return cls(
            header_strategy=HeaderStrategy(data.get("header_strategy", HeaderStrategy.ROBUST)),
            strip_banner=bool(data.get("strip_banner", True)),
            separator_scan_limit=int(data.get("separator_scan_limit", DEFAULT_SCAN_LIMIT)),
        )
