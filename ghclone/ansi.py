"""Column arithmetic for styled screen rows.

Views paint list rows, clone errors and help lines with escape codes before
the frame is composed. The row must then be cut to the terminal width or
folded onto several rows. Escape codes take no columns, wide characters
(CJK repository descriptions) take two, and a reset at the end of a row is
never dropped.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Columns ``ch`` occupies when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def _pieces(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(piece, is_escape)`` for each escape sequence or character."""
    pos = 0
    while pos < len(text):
        match = ANSI_ESCAPE_RE.match(text, pos) if text[pos] == "\x1b" else None
        if match is not None:
            yield match.group(0), True
            pos = match.end()
        else:
            yield text[pos], False
            pos += 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` to ``max_cols`` columns, keeping every escape sequence.

    A wide character that would straddle the edge is dropped whole, and tabs
    are expanded so the cut lines up with what the terminal draws.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    full = False
    for piece, is_escape in _pieces(text):
        if is_escape:
            out.append(piece)
            continue
        if full:
            continue
        width = char_display_width(piece, col)
        if col + width > max_cols:
            full = True
            continue
        out.append(" " * width if piece == "\t" else piece)
        col += width
    return "".join(out)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Fold ``text`` onto rows of at most ``width`` columns.

    Breaks fall on character boundaries; clone errors from git are often a
    single long token (a URL or path) with nowhere better to break.
    """
    if width <= 0 or not text:
        return [""]

    rows: list[str] = []
    row: list[str] = []
    col = 0
    for piece, is_escape in _pieces(text):
        if is_escape:
            row.append(piece)
            continue
        cells = char_display_width(piece, col)
        if col + cells > width and row:
            rows.append("".join(row))
            row, col = [], 0
            cells = char_display_width(piece, col)
        row.append(" " * cells if piece == "\t" else piece)
        col += cells
    rows.append("".join(row))
    return rows


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "wrap_ansi_line",
]
