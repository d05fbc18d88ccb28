"""Frame composition shared by all views.

Controllers render bare body lines; this module applies the configured
margins and clips everything to the terminal size.
"""

from __future__ import annotations

from .ansi import clip_ansi_line, wrap_ansi_line
from .ui_theme import RenderConfig


def compose_frame(body: list[str], config: RenderConfig, width: int, height: int) -> list[str]:
    """Return exactly ``height`` screen rows with ``body`` inside the margins."""
    inner_width = max(1, width - config.margin_horizontal * 2)
    indent = " " * config.margin_horizontal
    rows = [""] * config.margin_vertical
    for line in body:
        rows.append(indent + clip_ansi_line(line, inner_width))
    rows = rows[: max(0, height - config.margin_vertical)]
    rows.extend([""] * (height - len(rows)))
    return rows


def wrap_text_block(text: str, width: int, style: str = "", reset: str = "") -> list[str]:
    """Wrap multi-line ``text`` to ``width`` columns, styling each row."""
    rows: list[str] = []
    for raw in text.splitlines() or [""]:
        for chunk in wrap_ansi_line(raw, width):
            rows.append(f"{style}{chunk}{reset}" if style and chunk else chunk)
    return rows


__all__ = ["compose_frame", "wrap_text_block"]
