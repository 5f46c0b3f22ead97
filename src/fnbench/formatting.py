"""Shared text formatting helpers for fnbench.

Provides aligned text tables and compact number formatting used by the
terminal display and the CLI.
"""

from __future__ import annotations

import math


def format_number(value: float, precision: int = 4) -> str:
    """Format a statistic compactly with *precision* significant digits.

    Returns ``'N/A'`` for NaN.

    Examples: ``'0.0123'``, ``'1.235e+06'``, ``'42'``.
    """
    if math.isnan(value):
        return "N/A"
    return f"{value:.{precision}g}"


def format_table(
    headers: list[str],
    rows: list[list[str]],
    *,
    alignments: list[str] | None = None,
    max_col_width: dict[int, int] | None = None,
    indent: int = 2,
) -> str:
    """Render *rows* under *headers* as a column-aligned text table.

    Column widths fit the widest cell.  A rule of ``─`` separates the
    header from the rows, and trailing whitespace is stripped from every
    line.

    Args:
        headers: Column header strings.
        rows: List of rows, each a list of cell strings.
        alignments: Per-column alignment: ``'l'``, ``'r'``, or ``'c'``.
        max_col_width: Column index to max width mapping.
        indent: Number of leading spaces per line.

    Returns:
        The formatted table as a string.
    """
    if not headers:
        return ""

    ncols = len(headers)
    aligns = list(alignments or [])
    while len(aligns) < ncols:
        aligns.append("l")

    max_widths = max_col_width or {}

    cells_headers = list(headers)
    cells_rows: list[list[str]] = []
    for row in rows:
        padded = list(row) + [""] * (ncols - len(row))
        cells_rows.append(padded[:ncols])

    for ci, max_w in max_widths.items():
        if ci < ncols:
            cells_headers[ci] = truncate(cells_headers[ci], max_w)
            for row in cells_rows:
                row[ci] = truncate(row[ci], max_w)

    widths = [len(h) for h in cells_headers]
    for row in cells_rows:
        for ci, cell in enumerate(row):
            widths[ci] = max(widths[ci], len(cell))

    def _cell(text: str, width: int, align: str) -> str:
        if align == "r":
            return text.rjust(width)
        if align == "c":
            return text.center(width)
        return text.ljust(width)

    prefix = " " * indent
    lines = [prefix + "  ".join(_cell(cells_headers[i], widths[i], aligns[i]) for i in range(ncols))]
    lines.append(prefix + "  ".join("─" * widths[i] for i in range(ncols)))
    for row in cells_rows:
        lines.append(prefix + "  ".join(_cell(row[i], widths[i], aligns[i]) for i in range(ncols)))

    return "\n".join(line.rstrip() for line in lines)


def truncate(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to *max_len*, adding *suffix* if truncated."""
    if len(text) <= max_len:
        return text
    if max_len <= len(suffix):
        return suffix[:max_len]
    return text[: max_len - len(suffix)] + suffix
