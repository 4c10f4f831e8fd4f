"""
ASCII truth-table renderer.

Takes the evaluator's (headers, rows) pair and draws a grid:

    +---+---+-------+
    | p | q | p → q |
    +---+---+-------+
    | F | F | T     |
    ...

rows is flat: every len(headers) values form one table row.
The verdict never depends on this module.
"""

import sys
from typing import List, Optional, Sequence, TextIO


def _format_cell(value: bool) -> str:
    return "T" if value else "F"


def _separator(widths: List[int]) -> str:
    return "+" + "+".join("-" * (w + 2) for w in widths) + "+"


def _line(cells: Sequence[str], widths: List[int]) -> str:
    padded = [f" {cell.ljust(width)} " for cell, width in zip(cells, widths)]
    return "|" + "|".join(padded) + "|"


def render_table(headers: Sequence[str], rows: Sequence[bool]) -> str:
    """
    Render headers and flat boolean rows as a text grid.

    Raises:
        ValueError: If rows cannot be split into len(headers)-sized rows
    """
    if not headers:
        if rows:
            raise ValueError("Rows given without headers")
        return ""
    width = len(headers)
    if len(rows) % width != 0:
        raise ValueError(
            f"Row data length {len(rows)} is not a multiple of {width} headers"
        )

    widths = [max(len(h), 1) for h in headers]
    lines = [_separator(widths), _line(headers, widths), _separator(widths)]

    for start in range(0, len(rows), width):
        cells = [_format_cell(v) for v in rows[start:start + width]]
        lines.append(_line(cells, widths))

    lines.append(_separator(widths))
    return "\n".join(lines)


def print_table(
    headers: Sequence[str],
    rows: Sequence[bool],
    stream: Optional[TextIO] = None,
) -> None:
    """Render the table and write it to stream (stdout by default)."""
    out = stream or sys.stdout
    out.write(render_table(headers, rows) + "\n")


__all__ = ["render_table", "print_table"]
