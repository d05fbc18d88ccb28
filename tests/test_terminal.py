"""Tests for terminal mode control sequences and startup checks."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from ghclone.errors import TerminalError
from ghclone.terminal import TerminalController


def _controller() -> TerminalController:
    with mock.patch("ghclone.terminal.os.isatty", return_value=True), mock.patch(
        "ghclone.terminal.termios.tcgetattr", return_value=[0]
    ):
        return TerminalController(stdin_fd=0, stdout_fd=1)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("ghclone.terminal.os.isatty", return_value=True), mock.patch(
            "ghclone.terminal.termios.tcgetattr", return_value=saved_state
        ), mock.patch("ghclone.terminal.tty.setraw") as setraw_mock, mock.patch(
            "ghclone.terminal.os.write"
        ) as write_mock, mock.patch("ghclone.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = _controller()

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_non_tty_stdin_is_rejected(self) -> None:
        with mock.patch("ghclone.terminal.os.isatty", return_value=False):
            with self.assertRaises(TerminalError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_unreadable_tty_attributes_are_rejected(self) -> None:
        with mock.patch("ghclone.terminal.os.isatty", return_value=True), mock.patch(
            "ghclone.terminal.termios.tcgetattr", side_effect=termios.error(25, "Inappropriate ioctl")
        ):
            with self.assertRaises(TerminalError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_write_frame_clears_and_joins_rows(self) -> None:
        controller = _controller()
        with mock.patch("ghclone.terminal.os.write") as write_mock:
            controller.write_frame(["one", "two"])

        write_mock.assert_called_once_with(1, b"\x1b[H\x1b[Jone\r\ntwo\x1b[0m")


if __name__ == "__main__":
    unittest.main()
