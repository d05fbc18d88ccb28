"""Thin wrappers around the ``git`` executable.

Covers cloning, reading the configured user name, and deriving the local
directory a clone lands in.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from urllib.parse import urlsplit

from .errors import CloneError

logger = logging.getLogger(__name__)

GIT_SUFFIX = ".git"


def clone_repository(url: str, cwd: Path | None = None) -> None:
    """Run ``git clone <url>`` to completion in ``cwd``.

    Raises ``CloneError`` with the combined process output when git exits
    non-zero or cannot be started.
    """
    logger.info("cloning %s", url)
    try:
        proc = subprocess.run(
            ["git", "clone", url],
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        logger.error("could not start git for %s: %s", url, exc)
        raise CloneError(f"failed to run git: {exc}", returncode=127) from exc

    if proc.returncode != 0:
        logger.warning("git clone %s exited with %d", url, proc.returncode)
        raise CloneError(proc.stdout or "", returncode=proc.returncode)
    logger.info("cloned %s", url)


def directory_name_from_url(url: str) -> str:
    """Return the directory ``git clone url`` creates.

    Takes the final path segment, ignoring trailing slashes, and drops one
    ``.git`` suffix. Handles ``https://host/owner/repo(.git)`` and scp-style
    ``git@host:owner/repo(.git)`` URLs. Raises ``ValueError`` when the URL has
    no path separator or the remaining name is empty.
    """
    candidate = url.strip()
    if "://" in candidate:
        path = urlsplit(candidate).path
    else:
        _, sep, rest = candidate.partition(":")
        path = rest if sep else candidate

    path = path.rstrip("/")
    if "/" not in path:
        raise ValueError(f"no path separator in clone URL {url!r}")

    name = path.rsplit("/", 1)[1]
    if name.endswith(GIT_SUFFIX):
        name = name[: -len(GIT_SUFFIX)]
    if not name:
        raise ValueError(f"empty repository name in clone URL {url!r}")
    return name


def read_configured_username() -> str | None:
    """Return ``git config user.name``, or ``None`` when unset or unavailable."""
    try:
        proc = subprocess.run(
            ["git", "config", "user.name"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("git config unavailable: %s", exc)
        return None
    username = (proc.stdout or "").strip()
    if proc.returncode != 0 or not username:
        return None
    return username


__all__ = ["clone_repository", "directory_name_from_url", "read_configured_username"]
