"""Runtime configuration assembled from CLI arguments and environment.

Nothing is read from or written to disk; the config object is immutable and
passed explicitly to the pieces that need it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "ghclone"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_PAGE_SIZE = 100
TOKEN_ENV_VAR = "GITHUB_TOKEN"
API_URL_ENV_VAR = "GHCLONE_API_URL"
HTTP_TIMEOUT_ENV_VAR = "GHCLONE_HTTP_TIMEOUT"
LOG_FILENAME = "ghclone.log"


@dataclass(frozen=True)
class AppConfig:
    """Settings for collaborators and the runtime."""

    api_url: str = DEFAULT_API_URL
    token: str | None = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    log_file: Path | None = None


def _env_float(environ: dict[str, str], key: str, default: float) -> float:
    """Read a positive float from ``environ``, falling back on bad values."""
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def default_log_path() -> Path:
    """Per-user log file location used by ``--verbose``."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def load_config(
    environ: dict[str, str] | None = None,
    *,
    log_file: Path | None = None,
    verbose: bool = False,
) -> AppConfig:
    """Build an ``AppConfig`` from environment variables.

    An empty ``GITHUB_TOKEN`` is treated as unset so requests stay anonymous.
    """
    env = dict(os.environ) if environ is None else environ
    token = env.get(TOKEN_ENV_VAR, "").strip() or None
    api_url = env.get(API_URL_ENV_VAR, "").strip().rstrip("/") or DEFAULT_API_URL
    if log_file is None and verbose:
        log_file = default_log_path()
    return AppConfig(
        api_url=api_url,
        token=token,
        http_timeout=_env_float(env, HTTP_TIMEOUT_ENV_VAR, DEFAULT_HTTP_TIMEOUT_SECONDS),
        log_file=log_file,
    )


__all__ = [
    "APP_NAME",
    "AppConfig",
    "DEFAULT_API_URL",
    "TOKEN_ENV_VAR",
    "default_log_path",
    "load_config",
]
