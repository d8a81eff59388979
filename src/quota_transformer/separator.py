"""Column separator detection for pasted or decoded delimited text."""

from __future__ import annotations

import logging
from enum import Enum

DEFAULT_SCAN_LIMIT = 20

log = logging.getLogger(__name__)


class Separator(Enum):
    """Delimiter applied uniformly to every line of one input."""

    TAB = "\t"
    COMMA = ","
    WHITESPACE = "whitespace"

    def split(self, line: str) -> list[str]:
        if self is Separator.WHITESPACE:
            # Leading and trailing whitespace never forms a cell.
            return line.split()
        return line.split(self.value)


def detect_separator(lines: list[str], *, scan_limit: int = DEFAULT_SCAN_LIMIT) -> Separator:
    """Pick tab, comma or whitespace-run splitting for *lines*.

    Looks at the first *scan_limit* lines and compares the largest number of
    commas on any single line with the largest number of tabs on any single
    line.  Per-line maxima (not totals) keep one free-text line full of commas
    from outvoting a genuinely tab-separated file.

    - no commas and no tabs anywhere: whitespace runs
    - tab maximum strictly greater: tab
    - otherwise: comma (comma wins ties)
    """
    max_commas = 0
    max_tabs = 0
    for line in lines[:scan_limit]:
        max_commas = max(max_commas, line.count(","))
        max_tabs = max(max_tabs, line.count("\t"))

    if max_tabs == 0 and max_commas == 0:
        separator = Separator.WHITESPACE
    elif max_tabs > max_commas:
        separator = Separator.TAB
    else:
        separator = Separator.COMMA

    log.debug(
        "Separator %s (max tabs=%d, max commas=%d over %d lines)",
        separator.name, max_tabs, max_commas, min(len(lines), scan_limit),
    )
    return separator
