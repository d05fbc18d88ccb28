"""Rendering configuration: ANSI palette, margins, and animation timing.

A ``RenderConfig`` is immutable and handed to every view, so two UIs (for
example in tests) never share styling state.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import codes

DOT_SPINNER_FRAMES: tuple[str, ...] = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
LINE_SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by views."""

    name: str
    reset: str
    reverse: str
    title: str
    item_title: str
    item_description: str
    selected_marker: str
    selected_title: str
    selected_description: str
    dim: str
    error: str
    success: str
    spinner: str
    prompt: str
    help_key: str
    filter_query: str

    def paint(self, style: str, text: str) -> str:
        """Wrap ``text`` in ``style`` and a reset, or return it bare when unstyled."""
        if not style or not text:
            return text
        return f"{style}{text}{self.reset}"


DEFAULT_THEME = UITheme(
    name="default",
    reset=codes["reset"],
    reverse="\033[7m",
    title="\033[1;38;5;230;48;5;62m",
    item_title=codes["white"],
    item_description=codes["faint"],
    selected_marker="\033[38;5;170m",
    selected_title="\033[38;5;170m",
    selected_description="\033[38;5;168m",
    dim=codes["faint"],
    error="\033[38;2;255;0;0m",
    success="\033[38;2;0;255;0m",
    spinner="\033[38;5;205m",
    prompt=codes["bold"],
    help_key="\033[38;5;246m",
    filter_query="\033[38;5;205m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    title="",
    item_title="",
    item_description="",
    selected_marker="",
    selected_title="",
    selected_description="",
    dim="",
    error="",
    success="",
    spinner="",
    prompt="",
    help_key="",
    filter_query="",
)


@dataclass(frozen=True)
class RenderConfig:
    """Everything views need to know about presentation."""

    theme: UITheme = DEFAULT_THEME
    margin_vertical: int = 1
    margin_horizontal: int = 2
    spinner_frames: tuple[str, ...] = DOT_SPINNER_FRAMES
    spinner_interval: float = 0.1
    cursor_blink_interval: float = 0.53
    default_width: int = 80
    default_height: int = 24

    def frame_size(self) -> tuple[int, int]:
        """Return horizontal and vertical space consumed by the margins."""
        return self.margin_horizontal * 2, self.margin_vertical * 2


def resolve_render_config(*, no_color: bool = False) -> RenderConfig:
    """Return the render configuration for the requested color mode."""
    if no_color:
        return RenderConfig(theme=PLAIN_THEME, spinner_frames=LINE_SPINNER_FRAMES)
    return RenderConfig()


__all__ = [
    "UITheme",
    "RenderConfig",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "DOT_SPINNER_FRAMES",
    "LINE_SPINNER_FRAMES",
    "resolve_render_config",
]
