"""Busy indicator animated by tagged timer ticks."""

from __future__ import annotations

from ..commands import ScheduleTick
from ..messages import Ticked
from ..ui_theme import RenderConfig

SPINNER_SOURCE = "spinner"


class Spinner:
    """Frame counter that only advances on ticks carrying its current tag.

    Each accepted tick bumps the tag, so a duplicate or late tick from an
    older chain is ignored instead of speeding up the animation.
    """

    def __init__(self, config: RenderConfig, source: str = SPINNER_SOURCE) -> None:
        self.config = config
        self.source = source
        self.frame = 0
        self.tag = 0

    def tick(self) -> ScheduleTick:
        return ScheduleTick(source=self.source, tag=self.tag, delay=self.config.spinner_interval)

    def update(self, message: Ticked) -> bool:
        """Advance one frame if ``message`` belongs to this spinner's chain."""
        if message.source != self.source or message.tag != self.tag:
            return False
        self.frame = (self.frame + 1) % len(self.config.spinner_frames)
        self.tag += 1
        return True

    def view(self) -> str:
        theme = self.config.theme
        return theme.paint(theme.spinner, self.config.spinner_frames[self.frame])
