"""Runtime composition layer for ghclone.

Builds collaborators from configuration, chooses the first screen, and
starts the loop. This is the only module where GitHub, git, the terminal,
and the controllers meet.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from functools import partial

from ..config import AppConfig
from ..controllers import BrowseController, Controller, IdentityController
from ..errors import FetchError
from ..git import clone_repository
from ..github import build_session, fetch_repositories
from ..models import Identity, RepositoryEntry
from ..terminal import TerminalController
from ..ui_theme import RenderConfig
from .loop import RuntimeLoopTiming, run_event_loop
from .runner import CommandRunner

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], list[RepositoryEntry]]


def build_fetcher(config: AppConfig) -> FetchFn:
    """Bind the listing call to one HTTP session and the configured endpoint."""
    session = build_session(config.token)
    return partial(
        fetch_repositories,
        session=session,
        api_url=config.api_url,
        per_page=config.page_size,
        timeout=config.http_timeout,
    )


def initial_controller(
    username: str | None,
    fetch: FetchFn,
    render_config: RenderConfig,
) -> Controller:
    """Return the first screen.

    With a known username the listing is fetched up front so the program
    opens directly on the repository list; otherwise it opens on username
    entry with an empty field.
    """
    username = (username or "").strip()
    if not username:
        return IdentityController(render_config)
    try:
        entries = fetch(username)
    except FetchError as exc:
        logger.warning("initial fetch for %s failed: %s", username, exc)
        return BrowseController(Identity(username), (), render_config, fetch_error=str(exc))
    return BrowseController(Identity(username), entries, render_config)


def run_app(
    username: str | None,
    config: AppConfig,
    render_config: RenderConfig,
    *,
    timing: RuntimeLoopTiming | None = None,
) -> None:
    """Run the interactive program until the user quits.

    Raises ``TerminalError`` when stdin/stdout cannot drive a TUI.
    """
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    fetch = build_fetcher(config)
    if username:
        sys.stderr.write(f"Fetching repositories for {username}...\n")
        sys.stderr.flush()
    controller = initial_controller(username, fetch, render_config)
    runner = CommandRunner(fetch, clone_repository)
    logger.info("starting event loop with %s", type(controller).__name__)
    run_event_loop(controller, terminal, runner, stdin_fd, render_config, timing)
    logger.info("event loop finished")


__all__ = ["build_fetcher", "initial_controller", "run_app"]
