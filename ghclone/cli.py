"""Command-line front door for ghclone.

Parses CLI options, resolves the starting username, and configures logging.
Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
import termios
from pathlib import Path

from . import __version__
from .config import TOKEN_ENV_VAR, load_config
from .errors import TerminalError
from .git import read_configured_username
from .logs import configure_logging
from .runtime import run_app
from .ui_theme import resolve_render_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghclone",
        description="Browse a GitHub account's repositories and clone one into the current directory.",
        epilog=f"Set {TOKEN_ENV_VAR} to list private repositories and raise API rate limits.",
    )
    parser.add_argument(
        "username",
        nargs="?",
        default=None,
        help="GitHub username to browse. Defaults to `git config user.name`.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Write debug logs to the per-user log directory.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_username(explicit: str | None) -> str | None:
    """Prefer an explicit username, falling back to git's configured user name."""
    if explicit is not None and explicit.strip():
        return explicit.strip()
    return read_configured_username()


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the interactive program.

    Exits with status 1 and a diagnostic when the terminal driver cannot
    start or fails while running. Ctrl+C before the interactive session
    takes over the terminal ends the program quietly with status 0.
    """
    args = build_parser().parse_args(argv)
    config = load_config(log_file=args.log_file, verbose=args.verbose)
    try:
        configure_logging(config.log_file)
    except OSError as exc:
        raise SystemExit(f"Cannot open log file {config.log_file}: {exc}") from exc

    username = resolve_username(args.username)
    render_config = resolve_render_config(no_color=args.no_color)
    try:
        run_app(username, config, render_config)
    except KeyboardInterrupt:
        # Ctrl+C before the loop owns the terminal, e.g. during the startup fetch.
        logger.info("interrupted before the interactive session started")
        sys.stderr.write("\n")
        return
    except (TerminalError, OSError, termios.error) as exc:
        logger.error("program failed: %s", exc)
        sys.stderr.write(f"Error running program: {exc}\n")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
