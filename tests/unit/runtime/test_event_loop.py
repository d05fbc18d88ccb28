from __future__ import annotations

from contextlib import contextmanager
import unittest
from unittest import mock

from ghclone.controllers import BrowseController, IdentityController
from ghclone.models import Identity, RepositoryEntry
from ghclone.runtime import RuntimeLoopTiming, run_event_loop
from ghclone.runtime.runner import CommandRunner
from ghclone.ui_theme import PLAIN_THEME, RenderConfig


class _FakeTerminal:
    def __init__(self, sizes: list[tuple[int, int]] | None = None) -> None:
        self.sizes = list(sizes or [(80, 24)])
        self.frames: list[list[str]] = []
        self.raw_entered = 0
        self.raw_exited = 0

    @contextmanager
    def raw_mode(self):
        self.raw_entered += 1
        try:
            yield
        finally:
            self.raw_exited += 1

    def size(self) -> tuple[int, int]:
        if len(self.sizes) > 1:
            return self.sizes.pop(0)
        return self.sizes[0]

    def write_frame(self, lines: list[str]) -> None:
        self.frames.append(list(lines))


class _Keys:
    """Scripted ``read_key`` replacement; returns ``""`` once exhausted."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)

    def __call__(self, _fd, timeout_ms=None) -> str:
        if not self.keys:
            raise AssertionError("event loop did not quit after scripted keys")
        return self.keys.pop(0)


def _config() -> RenderConfig:
    return RenderConfig(theme=PLAIN_THEME)


def _runner(fetch=None, clone=None) -> CommandRunner:
    return CommandRunner(
        fetch or (lambda username: []),
        clone or (lambda url: None),
        spawn=lambda _name, target: target(),
        clock=lambda: 0.0,
    )


def _run(controller, keys: list[str], terminal: _FakeTerminal | None = None, runner: CommandRunner | None = None):
    terminal = terminal or _FakeTerminal()
    with mock.patch("ghclone.runtime.loop.read_key", _Keys(keys)):
        final = run_event_loop(
            controller,
            terminal,
            runner or _runner(),
            stdin_fd=0,
            render_config=_config(),
            timing=RuntimeLoopTiming(key_poll_ms=1),
        )
    return final, terminal


ENTRIES = (
    RepositoryEntry("alpha", "https://github.com/alice/alpha.git"),
    RepositoryEntry("beta", "https://github.com/alice/beta.git"),
)


class EventLoopTests(unittest.TestCase):
    def test_quit_key_ends_loop_and_restores_terminal(self) -> None:
        browse = BrowseController(Identity("alice"), ENTRIES, _config())
        final, terminal = _run(browse, ["q"])

        self.assertIs(final, browse)
        self.assertEqual((terminal.raw_entered, terminal.raw_exited), (1, 1))
        self.assertEqual(len(terminal.frames), 1)
        self.assertEqual(len(terminal.frames[0]), 24)

    def test_ctrl_c_interrupt_is_delivered_as_key(self) -> None:
        def interrupt(_fd, timeout_ms=None):
            raise KeyboardInterrupt

        browse = BrowseController(Identity("alice"), ENTRIES, _config())
        with mock.patch("ghclone.runtime.loop.read_key", interrupt):
            final = run_event_loop(browse, _FakeTerminal(), _runner(), 0, _config())
        self.assertIs(final, browse)

    def test_crlf_pair_counts_as_one_confirm(self) -> None:
        cloned: list[str] = []
        browse = BrowseController(Identity("alice"), ENTRIES, _config())

        _run(browse, ["ENTER_CR", "ENTER_LF", "", "q"], runner=_runner(clone=cloned.append))

        self.assertEqual(cloned, ["https://github.com/alice/alpha.git"])

    def test_bare_lf_confirms(self) -> None:
        cloned: list[str] = []
        browse = BrowseController(Identity("alice"), ENTRIES, _config())

        _run(browse, ["ENTER_LF", "", "q"], runner=_runner(clone=cloned.append))

        self.assertEqual(cloned, ["https://github.com/alice/alpha.git"])

    def test_identity_handoff_runs_fetch_and_lands_in_browse(self) -> None:
        identity = IdentityController(_config())
        fetched: list[str] = []

        def fetch(username):
            fetched.append(username)
            return ENTRIES

        final, terminal = _run(identity, ["a", "l", "i", "c", "e", "ENTER_CR", "", "q"], runner=_runner(fetch=fetch))

        self.assertEqual(fetched, ["alice"])
        self.assertIsInstance(final, BrowseController)
        self.assertEqual(final.identity, Identity("alice"))
        self.assertTrue(any("alice's GitHub Repositories" in line for line in terminal.frames[-1]))

    def test_terminal_resize_reaches_controller(self) -> None:
        browse = BrowseController(Identity("alice"), ENTRIES, _config())
        terminal = _FakeTerminal(sizes=[(80, 24), (80, 24), (120, 40)])

        _run(browse, ["", "", "q"], terminal=terminal)

        self.assertEqual((browse.width, browse.height), (120, 40))
        self.assertEqual(len(terminal.frames[-1]), 40)


if __name__ == "__main__":
    unittest.main()
