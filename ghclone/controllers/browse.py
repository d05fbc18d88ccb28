"""Repository browser screen.

Shows the fetched repositories, starts clones on ``enter``, and overlays
clone progress or the last clone outcome beneath the list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..commands import CloneRepository, Command, Quit, next_command_token
from ..git import directory_name_from_url
from ..messages import CloneFinished, KeyPressed, Message, Resized, Ticked
from ..models import (
    CloneFailure,
    CloneOutcome,
    CloneResult,
    CloneSuccess,
    Cloning,
    Identity,
    Idle,
    Phase,
    RepositoryEntry,
)
from ..render import wrap_text_block
from ..ui_theme import RenderConfig
from ..widgets import HelpBinding, RepoList, Spinner

if TYPE_CHECKING:
    from . import Controller

logger = logging.getLogger(__name__)

OVERLAY_ROWS = 4
CLONE_BINDINGS: tuple[HelpBinding, ...] = (
    HelpBinding("enter", "clone repo", "clone selected repository"),
    HelpBinding("c", "change user", "change GitHub username"),
)


def clone_outcome(message: CloneFinished) -> CloneOutcome:
    """Translate a finished clone into a success or failure outcome."""
    if message.returncode != 0:
        output = message.output.strip()
        return CloneFailure(output or f"git clone exited with status {message.returncode}")
    try:
        return CloneSuccess(directory_name_from_url(message.url))
    except ValueError as exc:
        return CloneFailure(f"cloned, but could not determine the directory: {exc}")


class BrowseController:
    """List of an identity's repositories plus the clone phase machine."""

    def __init__(
        self,
        identity: Identity,
        entries: Iterable[RepositoryEntry],
        config: RenderConfig,
        *,
        fetch_error: str | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        self.identity = identity
        self.entries: tuple[RepositoryEntry, ...] = tuple(entries)
        self.config = config
        self.fetch_error = fetch_error
        self.phase: Phase = Idle()
        self.spinner = Spinner(config)
        self.list = RepoList(
            self.entries if fetch_error is None else (),
            config,
            title=f"{identity.username}'s GitHub Repositories",
            extra_bindings=CLONE_BINDINGS,
            empty_message="No repositories.",
        )
        self.width = config.default_width
        self.height = config.default_height
        self.resize(
            width if width is not None else config.default_width,
            height if height is not None else config.default_height,
        )

    @property
    def cloning(self) -> bool:
        return isinstance(self.phase, Cloning)

    def selection(self) -> int | None:
        """Index into ``entries`` of the highlighted repository."""
        return self.list.selected_index()

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = width, height
        frame_w, frame_h = self.config.frame_size()
        self.list.set_size(width - frame_w, height - frame_h - OVERLAY_ROWS)

    def init(self) -> list[Command]:
        return [self.spinner.tick()]

    def update(self, message: Message) -> tuple[Controller, list[Command]]:
        if isinstance(message, KeyPressed):
            return self._handle_key(message.key)
        if isinstance(message, Resized):
            self.resize(message.width, message.height)
            return self, []
        if isinstance(message, CloneFinished):
            self._handle_clone_finished(message)
            return self, []
        if isinstance(message, Ticked):
            if self.spinner.update(message) and self.cloning:
                return self, [self.spinner.tick()]
            return self, []
        return self, []

    def _handle_key(self, key: str) -> tuple[Controller, list[Command]]:
        if key == "CTRL_C":
            return self, [] if self.cloning else [Quit()]

        if self.list.filtering:
            self.list.handle_key(key)
            return self, []

        if key == "q" and not self.cloning:
            return self, [Quit()]

        if key == "ENTER":
            return self, self._start_clone()

        if key == "c" and not self.cloning:
            from .identity import IdentityController

            identity = IdentityController(
                self.config,
                self.identity.username,
                fallback=self,
                width=self.width,
                height=self.height,
            )
            return identity, identity.init()

        self.list.handle_key(key)
        return self, []

    def _start_clone(self) -> list[Command]:
        if self.cloning:
            return []
        entry = self.list.selected_item()
        if entry is None:
            return []
        token = next_command_token()
        self.phase = Cloning(entry=entry, token=token)
        logger.info("starting clone of %s", entry.clone_url)
        return [self.spinner.tick(), CloneRepository(entry=entry, token=token)]

    def _handle_clone_finished(self, message: CloneFinished) -> None:
        phase = self.phase
        if not isinstance(phase, Cloning) or phase.token != message.token:
            logger.debug("ignoring stale clone result for %s", message.url)
            return
        outcome = clone_outcome(message)
        if isinstance(outcome, CloneFailure):
            logger.warning("clone of %s failed: %s", message.url, outcome.message)
        self.phase = CloneResult(outcome)

    def _overlay_lines(self) -> list[str]:
        theme = self.config.theme
        phase = self.phase
        if isinstance(phase, Cloning):
            return ["", f"{self.spinner.view()} Cloning {phase.entry.name}..."]
        if isinstance(phase, CloneResult):
            outcome = phase.outcome
            if isinstance(outcome, CloneSuccess):
                return ["", theme.paint(theme.success, f"Successfully cloned to {outcome.directory}/")]
            width = max(1, self.list.width)
            rows = wrap_text_block(f"Error cloning: {outcome.message}", width, theme.error, theme.reset)
            return ["", *rows[: OVERLAY_ROWS - 1]]
        return []

    def view(self) -> list[str]:
        theme = self.config.theme
        if self.fetch_error is not None:
            width = max(1, self.list.width)
            return [
                *wrap_text_block(f"Error fetching repos: {self.fetch_error}", width, theme.error, theme.reset),
                "",
                theme.paint(theme.dim, "c change user • q quit"),
            ]
        return [*self.list.view(), *self._overlay_lines()]
