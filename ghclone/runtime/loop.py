"""Main interactive event loop.

Renders the active controller, turns terminal input, resizes, and command
results into messages, and feeds them one at a time through the active
controller's ``update``. The loop is the only owner of controller state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..commands import Command, Quit
from ..controllers import Controller
from ..input import read_key
from ..messages import KeyPressed, Message, Resized
from ..render import compose_frame
from ..terminal import TerminalController
from ..ui_theme import RenderConfig
from .runner import CommandRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 50


def schedule_commands(runner: CommandRunner, commands: Iterable[Command]) -> bool:
    """Hand ``commands`` to ``runner``; return ``True`` if one of them is ``Quit``."""
    should_quit = False
    for command in commands:
        if isinstance(command, Quit):
            should_quit = True
            continue
        runner.schedule(command)
    return should_quit


def dispatch(controller: Controller, message: Message, runner: CommandRunner) -> tuple[Controller, bool]:
    """Run one state transition and schedule its follow-up commands."""
    next_controller, commands = controller.update(message)
    if next_controller is not controller:
        logger.debug("handoff %s -> %s", type(controller).__name__, type(next_controller).__name__)
    return next_controller, schedule_commands(runner, commands)


def run_event_loop(
    controller: Controller,
    terminal: TerminalController,
    runner: CommandRunner,
    stdin_fd: int,
    render_config: RenderConfig,
    timing: RuntimeLoopTiming | None = None,
) -> Controller:
    """Run the TUI until a controller emits ``Quit``; return the final controller."""
    timing = timing or RuntimeLoopTiming()
    width, height = terminal.size()
    should_quit = schedule_commands(runner, controller.init())
    if not should_quit:
        controller, should_quit = dispatch(controller, Resized(width, height), runner)
    dirty = True
    skip_next_lf = False

    with terminal.raw_mode():
        while not should_quit:
            if dirty:
                terminal.write_frame(compose_frame(controller.view(), render_config, width, height))
                dirty = False

            messages: list[Message] = []
            columns, lines = terminal.size()
            if (columns, lines) != (width, height):
                width, height = columns, lines
                messages.append(Resized(width, height))

            timeout_ms = timing.key_poll_ms
            next_timer = runner.next_timer_in()
            if next_timer is not None:
                timeout_ms = min(timeout_ms, int(next_timer * 1000))
            try:
                key = read_key(stdin_fd, timeout_ms=timeout_ms)
            except KeyboardInterrupt:
                key = "CTRL_C"

            messages.extend(runner.drain())

            if skip_next_lf and key == "ENTER_LF":
                key = ""
            skip_next_lf = key == "ENTER_CR"
            if key in {"ENTER_CR", "ENTER_LF"}:
                key = "ENTER"
            if key:
                messages.append(KeyPressed(key))

            for message in messages:
                controller, should_quit = dispatch(controller, message, runner)
                dirty = True
                if should_quit:
                    break

    return controller


__all__ = ["RuntimeLoopTiming", "dispatch", "run_event_loop", "schedule_commands"]
