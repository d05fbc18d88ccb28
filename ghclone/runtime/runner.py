"""Command execution off the UI thread.

``CommandRunner`` interprets the data-only command descriptors returned by
controllers. I/O-bound work runs on daemon worker threads and reports back
through a queue; timers for animation ticks are kept here too. The event loop
collects everything that is ready with ``drain()``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from queue import Empty, Queue

from ..commands import CloneRepository, Command, FetchRepositories, Quit, ScheduleTick
from ..errors import CloneError, FetchError
from ..messages import CloneFinished, Message, RepositoriesFetched, Ticked
from ..models import RepositoryEntry

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], Iterable[RepositoryEntry]]
CloneFn = Callable[[str], None]


def _spawn_thread(name: str, target: Callable[[], None]) -> None:
    worker = threading.Thread(target=target, name=name, daemon=True)
    worker.start()


class CommandRunner:
    """Execute commands and queue their completion messages.

    ``spawn`` starts a unit of work; tests pass a function that runs it
    inline. ``clock`` supplies monotonic time for tick scheduling.
    """

    def __init__(
        self,
        fetch: FetchFn,
        clone: CloneFn,
        *,
        spawn: Callable[[str, Callable[[], None]], None] = _spawn_thread,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._clone = clone
        self._spawn = spawn
        self._clock = clock
        self._results: Queue[Message] = Queue()
        self._timers: dict[str, tuple[float, Ticked]] = {}

    def schedule(self, command: Command) -> None:
        """Start ``command``. ``Quit`` is the loop's business and is rejected."""
        if isinstance(command, ScheduleTick):
            # One pending tick per source: a newer request replaces the older.
            due = self._clock() + command.delay
            self._timers[command.source] = (due, Ticked(source=command.source, tag=command.tag))
        elif isinstance(command, FetchRepositories):
            self._spawn("ghclone-fetch", lambda: self._run_fetch(command))
        elif isinstance(command, CloneRepository):
            self._spawn("ghclone-clone", lambda: self._run_clone(command))
        elif isinstance(command, Quit):
            raise ValueError("Quit must be handled by the event loop")
        else:
            raise TypeError(f"unknown command: {command!r}")

    def _run_fetch(self, command: FetchRepositories) -> None:
        try:
            entries = tuple(self._fetch(command.username))
        except FetchError as exc:
            result = RepositoriesFetched(token=command.token, username=command.username, error=str(exc))
        except Exception as exc:
            logger.exception("unexpected failure fetching repositories for %s", command.username)
            result = RepositoriesFetched(token=command.token, username=command.username, error=str(exc) or repr(exc))
        else:
            result = RepositoriesFetched(token=command.token, username=command.username, entries=entries)
        self._results.put(result)

    def _run_clone(self, command: CloneRepository) -> None:
        url = command.entry.clone_url
        try:
            self._clone(url)
        except CloneError as exc:
            result = CloneFinished(token=command.token, url=url, returncode=exc.returncode, output=exc.output)
        except Exception as exc:
            logger.exception("unexpected failure cloning %s", url)
            result = CloneFinished(token=command.token, url=url, returncode=1, output=str(exc) or repr(exc))
        else:
            result = CloneFinished(token=command.token, url=url, returncode=0)
        self._results.put(result)

    def next_timer_in(self) -> float | None:
        """Seconds until the earliest pending tick, or ``None`` without timers."""
        if not self._timers:
            return None
        earliest = min(due for due, _ in self._timers.values())
        return max(0.0, earliest - self._clock())

    def drain(self) -> list[Message]:
        """Return due ticks and all completed command results."""
        now = self._clock()
        due = sorted(
            (entry for entry in self._timers.items() if entry[1][0] <= now),
            key=lambda entry: entry[1][0],
        )
        out: list[Message] = []
        for source, (_, tick) in due:
            del self._timers[source]
            out.append(tick)
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["CommandRunner"]
