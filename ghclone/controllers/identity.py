"""Username entry screen.

Collects a GitHub username, dispatches the repository fetch, and hands off
to a ``BrowseController`` once the matching result arrives.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..commands import Command, FetchRepositories, Quit, next_command_token
from ..messages import KeyPressed, Message, RepositoriesFetched, Resized, Ticked
from ..models import Identity
from ..ui_theme import RenderConfig
from ..widgets import CURSOR_SOURCE, Spinner, TextInput
from .browse import BrowseController

if TYPE_CHECKING:
    from . import Controller

logger = logging.getLogger(__name__)

USERNAME_CHAR_LIMIT = 64
PROMPT = "What's your GitHub username?"


class IdentityController:
    """Text entry for the account to browse.

    ``username`` is the identity this screen was opened with. When it is
    non-empty, cancelling returns ``fallback`` untouched instead of quitting.
    """

    def __init__(
        self,
        config: RenderConfig,
        username: str = "",
        fallback: BrowseController | None = None,
        *,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        self.config = config
        self.username = username
        self.fallback = fallback
        self.input = TextInput(config, username, char_limit=USERNAME_CHAR_LIMIT)
        self.spinner = Spinner(config)
        self.pending_token: int | None = None
        self.pending_username = ""
        self.width = width if width is not None else config.default_width
        self.height = height if height is not None else config.default_height

    @property
    def loading(self) -> bool:
        return self.pending_token is not None

    def init(self) -> list[Command]:
        return [self.input.blink()]

    def update(self, message: Message) -> tuple[Controller, list[Command]]:
        if isinstance(message, KeyPressed):
            return self._handle_key(message.key)
        if isinstance(message, RepositoriesFetched):
            return self._handle_fetched(message)
        if isinstance(message, Ticked):
            return self, self._handle_tick(message)
        if isinstance(message, Resized):
            self.width, self.height = message.width, message.height
            if self.fallback is not None:
                self.fallback.update(message)
            return self, []
        return self, []

    def _handle_tick(self, message: Ticked) -> list[Command]:
        if message.source == CURSOR_SOURCE:
            next_blink = self.input.update_blink(message)
            return [next_blink] if next_blink is not None else []
        if self.spinner.update(message) and self.loading:
            return [self.spinner.tick()]
        return []

    def _handle_key(self, key: str) -> tuple[Controller, list[Command]]:
        if key == "CTRL_C":
            return self, [Quit()]

        if key == "ESC":
            if self.loading:
                logger.info("abandoned repository fetch for %s", self.pending_username)
                self.pending_token = None
                self.pending_username = ""
                return self, []
            if not self.username or self.fallback is None:
                return self, [Quit()]
            return self.fallback, []

        if self.loading:
            return self, []

        if key == "ENTER":
            username = self.input.value.strip()
            if not username:
                return self, []
            self.pending_token = next_command_token()
            self.pending_username = username
            logger.info("fetching repositories for %s", username)
            return self, [
                FetchRepositories(username=username, token=self.pending_token),
                self.spinner.tick(),
            ]

        self.input.handle_key(key)
        return self, []

    def _handle_fetched(self, message: RepositoriesFetched) -> tuple[Controller, list[Command]]:
        if self.pending_token is None or message.token != self.pending_token:
            logger.debug("ignoring stale fetch result for %s", message.username)
            return self, []
        browse = BrowseController(
            Identity(message.username),
            message.entries,
            self.config,
            fetch_error=message.error,
            width=self.width,
            height=self.height,
        )
        return browse, browse.init()

    def view(self) -> list[str]:
        theme = self.config.theme
        if self.loading:
            return [f"{self.spinner.view()} Fetching repositories for {self.pending_username}..."]
        hint = "(esc to go back)" if self.username and self.fallback is not None else "(esc to quit)"
        return [
            theme.paint(theme.prompt, PROMPT),
            self.input.view(),
            "",
            theme.paint(theme.dim, hint),
        ]
