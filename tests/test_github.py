"""Tests for paginated repository listing.

Uses a fake ``requests`` session serving canned pages linked by ``next``
relations, so no network access is needed.
"""

from __future__ import annotations

import unittest

import requests

from ghclone.errors import FetchError
from ghclone.github import build_session, fetch_repositories
from ghclone.models import RepositoryEntry


class _FakeResponse:
    def __init__(self, url: str, payload: object, status_code: int = 200, next_url: str | None = None) -> None:
        self.url = url
        self._payload = payload
        self.status_code = status_code
        self.links = {"next": {"url": next_url, "rel": "next"}} if next_url else {}

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    def __init__(self, responses: list[object]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, dict | None]] = []

    def get(self, url: str, params=None, timeout=None):
        self.calls.append((url, params))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _repo(name: str) -> dict[str, object]:
    return {"name": name, "clone_url": f"https://github.com/alice/{name}.git", "private": False}


class FetchRepositoriesTests(unittest.TestCase):
    def test_follows_next_links_and_concatenates_in_page_order(self) -> None:
        session = _FakeSession(
            [
                _FakeResponse("p1", [_repo("a"), _repo("b")], next_url="https://api.example/page2"),
                _FakeResponse("p2", [_repo("c")], next_url="https://api.example/page3"),
                _FakeResponse("p3", [_repo("d"), _repo("e")]),
            ]
        )

        entries = fetch_repositories("alice", session=session, api_url="https://api.example")

        self.assertEqual([entry.name for entry in entries], ["a", "b", "c", "d", "e"])
        self.assertEqual(entries[0], RepositoryEntry("a", "https://github.com/alice/a.git"))
        first_url, first_params = session.calls[0]
        self.assertEqual(first_url, "https://api.example/users/alice/repos")
        self.assertEqual(first_params, {"type": "all", "per_page": 100})
        self.assertEqual(session.calls[1], ("https://api.example/page2", None))
        self.assertEqual(len(session.calls), 3)

    def test_empty_listing_is_not_an_error(self) -> None:
        session = _FakeSession([_FakeResponse("p1", [])])
        self.assertEqual(fetch_repositories("nobody-repos", session=session), [])

    def test_username_is_escaped_as_one_path_segment(self) -> None:
        for username, segment in (("a#b", "a%23b"), ("a?b", "a%3Fb"), ("x/y", "x%2Fy")):
            session = _FakeSession([_FakeResponse("p1", [])])

            fetch_repositories(username, session=session, api_url="https://api.example")

            self.assertEqual(session.calls[0][0], f"https://api.example/users/{segment}/repos")

    def test_failing_later_page_discards_partial_results(self) -> None:
        session = _FakeSession(
            [
                _FakeResponse("p1", [_repo("a")], next_url="https://api.example/page2"),
                _FakeResponse("p2", {"message": "Server Error"}, status_code=502),
            ]
        )

        with self.assertRaises(FetchError) as ctx:
            fetch_repositories("alice", session=session)

        self.assertEqual(ctx.exception.status_code, 502)
        self.assertIn("Server Error", str(ctx.exception))

    def test_not_found_user_reports_api_message(self) -> None:
        session = _FakeSession([_FakeResponse("p1", {"message": "Not Found"}, status_code=404)])

        with self.assertRaises(FetchError) as ctx:
            fetch_repositories("ghost", session=session)

        self.assertIn("404", str(ctx.exception))
        self.assertIn("Not Found", str(ctx.exception))

    def test_network_failure_is_wrapped(self) -> None:
        session = _FakeSession([requests.ConnectionError("connection refused")])

        with self.assertRaises(FetchError) as ctx:
            fetch_repositories("alice", session=session)

        self.assertIn("connection refused", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_invalid_json_is_a_fetch_error(self) -> None:
        session = _FakeSession([_FakeResponse("p1", ValueError("bad json"))])

        with self.assertRaises(FetchError):
            fetch_repositories("alice", session=session)

    def test_non_list_payload_is_a_fetch_error(self) -> None:
        session = _FakeSession([_FakeResponse("p1", {"unexpected": True})])

        with self.assertRaises(FetchError):
            fetch_repositories("alice", session=session)

    def test_entries_missing_fields_are_skipped(self) -> None:
        session = _FakeSession([_FakeResponse("p1", [_repo("a"), {"name": "broken"}, "junk"])])

        entries = fetch_repositories("alice", session=session)

        self.assertEqual([entry.name for entry in entries], ["a"])


class BuildSessionTests(unittest.TestCase):
    def test_token_sets_bearer_authorization(self) -> None:
        session = build_session("secret")
        self.assertEqual(session.headers["Authorization"], "Bearer secret")
        self.assertEqual(session.headers["User-Agent"], "ghclone")

    def test_without_token_requests_are_anonymous(self) -> None:
        session = build_session(None)
        self.assertNotIn("Authorization", session.headers)


if __name__ == "__main__":
    unittest.main()
