"""Data-only command descriptors returned by controllers.

Controllers never perform I/O. They describe the work they want done and
the runtime's ``CommandRunner`` interprets the description, delivering the
result back as a message.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from .models import RepositoryEntry

_TOKENS = itertools.count(1)


def next_command_token() -> int:
    """Allocate a fresh correlation id for an asynchronous command."""
    return next(_TOKENS)


@dataclass(frozen=True)
class Quit:
    """Stop the event loop."""


@dataclass(frozen=True)
class ScheduleTick:
    """Deliver ``Ticked(source, tag)`` after ``delay`` seconds."""

    source: str
    tag: int
    delay: float


@dataclass(frozen=True)
class FetchRepositories:
    username: str
    token: int


@dataclass(frozen=True)
class CloneRepository:
    entry: RepositoryEntry
    token: int


Command = Quit | ScheduleTick | FetchRepositories | CloneRepository


__all__ = [
    "Quit",
    "ScheduleTick",
    "FetchRepositories",
    "CloneRepository",
    "Command",
    "next_command_token",
]
