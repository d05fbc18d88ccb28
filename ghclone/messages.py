"""Messages fed into the event loop.

Every input the controllers react to is one of the frozen dataclasses below.
``Message`` is the closed union that controller ``update`` methods dispatch
on; new kinds of input get a new class here.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import RepositoryEntry


@dataclass(frozen=True)
class KeyPressed:
    """Decoded key token, e.g. ``"ENTER"``, ``"CTRL_C"``, ``"UP"`` or ``"a"``."""

    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class Ticked:
    """Timer tick for an animation ``source`` (``"spinner"`` or ``"cursor"``)."""

    source: str
    tag: int


@dataclass(frozen=True)
class RepositoriesFetched:
    """Completion of a ``FetchRepositories`` command.

    Exactly one of ``entries`` (possibly empty) or ``error`` is meaningful:
    ``error`` is ``None`` on success.
    """

    token: int
    username: str
    entries: tuple[RepositoryEntry, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class CloneFinished:
    """Completion of a ``CloneRepository`` command.

    ``returncode`` is the git exit status; ``output`` holds combined
    stdout/stderr of the process.
    """

    token: int
    url: str
    returncode: int
    output: str = ""


Message = KeyPressed | Resized | Ticked | RepositoriesFetched | CloneFinished


__all__ = [
    "KeyPressed",
    "Resized",
    "Ticked",
    "RepositoriesFetched",
    "CloneFinished",
    "Message",
]
