"""GitHub repository listing over the REST API.

Follows ``Link: rel="next"`` pagination until exhausted. Any failing page
aborts the whole listing; partial results are never returned.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from .config import DEFAULT_API_URL, DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_PAGE_SIZE
from .errors import FetchError
from .models import RepositoryEntry

logger = logging.getLogger(__name__)

USER_AGENT = "ghclone"
REPOSITORY_TYPE = "all"


def build_session(token: str | None = None) -> requests.Session:
    """Return a session with GitHub headers and optional bearer auth."""
    session = requests.Session()
    session.headers.update(
        {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
    )
    if token:
        session.headers["Authorization"] = f"Bearer {token}"
    return session


def _error_detail(response: requests.Response) -> str:
    """Extract GitHub's ``message`` field from an error body when present."""
    try:
        payload = response.json()
    except ValueError:
        return ""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str):
            return message
    return ""


def _entries_from_page(payload: object) -> list[RepositoryEntry]:
    if not isinstance(payload, list):
        raise FetchError("unexpected response from GitHub: expected a list of repositories")
    entries: list[RepositoryEntry] = []
    for raw in payload:
        if not isinstance(raw, dict):
            continue
        name = raw.get("name")
        clone_url = raw.get("clone_url")
        if not isinstance(name, str) or not isinstance(clone_url, str):
            continue
        entries.append(RepositoryEntry(name=name, clone_url=clone_url))
    return entries


def fetch_repositories(
    username: str,
    *,
    token: str | None = None,
    session: requests.Session | None = None,
    api_url: str = DEFAULT_API_URL,
    per_page: int = DEFAULT_PAGE_SIZE,
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
) -> list[RepositoryEntry]:
    """List every repository of ``username`` visible to ``token``.

    Pages are requested in order and concatenated as returned. Raises
    ``FetchError`` on the first failing page.
    """
    if session is None:
        session = build_session(token)
    # The username is one path segment even if it contains `#`, `?` or `/`.
    url: str | None = f"{api_url.rstrip('/')}/users/{quote(username, safe='')}/repos"
    params: dict[str, object] | None = {"type": REPOSITORY_TYPE, "per_page": per_page}

    repositories: list[RepositoryEntry] = []
    page = 0
    while url is not None:
        page += 1
        try:
            response = session.get(url, params=params, timeout=timeout)
        except requests.RequestException as exc:
            logger.warning("listing repositories for %s failed on page %d: %s", username, page, exc)
            raise FetchError(f"failed to list repos: {exc}") from exc

        if not response.ok:
            detail = _error_detail(response)
            message = f"failed to list repos: GET {response.url}: {response.status_code}"
            if detail:
                message += f" {detail}"
            logger.warning("%s", message)
            raise FetchError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"failed to list repos: invalid JSON on page {page}") from exc

        repositories.extend(_entries_from_page(payload))
        next_link = response.links.get("next", {})
        url = next_link.get("url")
        # The next link already carries the query string.
        params = None

    logger.info("listed %d repositories for %s across %d page(s)", len(repositories), username, page)
    return repositories


__all__ = ["build_session", "fetch_repositories", "REPOSITORY_TYPE", "USER_AGENT"]
