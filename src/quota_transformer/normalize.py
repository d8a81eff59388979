"""Centralized input-text normalization.

Applied to raw pasted or decoded file text before separator detection and
header discovery, so every adapter feeds the pipeline the same shape of text.

Unlike cell-level cleaning, nothing here touches tabs or runs of spaces:
they carry the column structure of the input.
"""

from __future__ import annotations

import re

# Invisible characters only. Quotes and dashes stay: status and request-type
# remaps match cell values exactly.
_TRANSLATE = str.maketrans({
    "\u00a0": " ",    # NBSP → space
    "\u200b": None,   # ZWSP → remove
    "\u200c": None,   # ZWNJ → remove
    "\u200d": None,   # ZWJ → remove
    "\ufeff": None,   # BOM → remove
    "\u2060": None,   # Word Joiner → remove
})

_LINE_BREAK_RE = re.compile(r"\r\n?")
_TITLE_PREFIX_RE = re.compile(r"^Title:\s*", re.IGNORECASE)

# Query-export banner: "Project: X  Server: Y  Query: Z" on the first line.
_BANNER_KEYS = ("project", "server", "query")
_BANNER_KEY_RE = {key: re.compile(rf"\b{key}\s*:", re.IGNORECASE) for key in _BANNER_KEYS}


def normalize_characters(text: str) -> str:
    """Map NBSP to a space and drop zero-width characters and the BOM.

    Line endings are unified to ``\\n``.  Idempotent.
    """
    text = text.translate(_TRANSLATE)
    return _LINE_BREAK_RE.sub("\n", text)


def is_banner_line(line: str) -> bool:
    """True if *line* carries the project/server/query export signature."""
    return all(pattern.search(line) for pattern in _BANNER_KEY_RE.values())


def strip_banner(text: str) -> str:
    """Drop the first line when it is a query-export banner."""
    first, sep, rest = text.partition("\n")
    if is_banner_line(first):
        return rest
    return text


def strip_title_prefixes(text: str) -> str:
    """Remove a leading ``Title:`` label from every line."""
    return "\n".join(_TITLE_PREFIX_RE.sub("", line) for line in text.split("\n"))


def prepare_input(text: str, *, strip_export_banner: bool = True) -> str:
    """Full pre-processing applied before the pipeline sees *text*.

    1. Character normalization (see :func:`normalize_characters`)
    2. Query-export banner removal on the first line (optional)
    3. ``Title:`` prefix removal on every line
    """
    if not text:
        return ""
    text = normalize_characters(text)
    if strip_export_banner:
        text = strip_banner(text)
    return strip_title_prefixes(text)
