"""Value types shared by controllers, commands, and collaborators.

Everything here is immutable: controllers replace values instead of
mutating them, which keeps stale command results easy to recognize.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """GitHub account whose repositories are being browsed."""

    username: str


@dataclass(frozen=True)
class RepositoryEntry:
    """One repository as returned by the listing API."""

    name: str
    clone_url: str

    @property
    def title(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return self.clone_url

    @property
    def filter_value(self) -> str:
        return self.name


@dataclass(frozen=True)
class CloneSuccess:
    directory: str


@dataclass(frozen=True)
class CloneFailure:
    message: str


CloneOutcome = CloneSuccess | CloneFailure


@dataclass(frozen=True)
class Idle:
    """No clone has been started yet."""


@dataclass(frozen=True)
class Cloning:
    """A clone command for ``entry`` is in flight, correlated by ``token``."""

    entry: RepositoryEntry
    token: int


@dataclass(frozen=True)
class CloneResult:
    """Outcome of the most recent clone, shown until another clone starts."""

    outcome: CloneOutcome


Phase = Idle | Cloning | CloneResult


__all__ = [
    "Identity",
    "RepositoryEntry",
    "CloneSuccess",
    "CloneFailure",
    "CloneOutcome",
    "Idle",
    "Cloning",
    "CloneResult",
    "Phase",
]
