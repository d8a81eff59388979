"""Split delimited text into rows of cleaned string cells."""

from __future__ import annotations

from quota_transformer.separator import Separator


def non_blank_lines(text: str) -> list[str]:
    """Lines of *text* with blank (whitespace-only) lines removed.

    Kept lines are not trimmed: a leading empty tab cell is a column.
    """
    return [line for line in text.split("\n") if line.strip()]


def tokenize_line(line: str, separator: Separator) -> list[str]:
    """Split one line and clean each cell.

    Cells are trimmed, then every double-quote character is removed, not only
    surrounding ones.
    """
    return [cell.strip().replace('"', "") for cell in separator.split(line)]


def tokenize_lines(lines: list[str], separator: Separator) -> list[list[str]]:
    return [tokenize_line(line, separator) for line in lines]
