"""Public runtime orchestration entry points.

Groups the program bootstrap (`run_app`), the event loop, and the command
runner used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopTiming
    from .runner import CommandRunner


def run_app(*args, **kwargs):
    """Lazily import the app entrypoint to keep package imports light."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_event_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_event_loop as _run_event_loop

    return _run_event_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopTiming":
        from . import loop as _loop

        return _loop.RuntimeLoopTiming
    if name == "CommandRunner":
        from . import runner as _runner

        return _runner.CommandRunner
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "CommandRunner",
    "RuntimeLoopTiming",
    "run_app",
    "run_event_loop",
]
