"""Exception types raised by ghclone collaborators."""

from __future__ import annotations


class GhcloneError(Exception):
    """Base class for errors surfaced to the user."""


class FetchError(GhcloneError):
    """Listing repositories failed (network, auth, or API error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CloneError(GhcloneError):
    """``git clone`` exited non-zero or could not be started.

    ``output`` carries the combined stdout/stderr of the process, or the
    spawn failure text when git never ran.
    """

    def __init__(self, output: str, returncode: int) -> None:
        super().__init__(output.strip() or f"git clone exited with status {returncode}")
        self.output = output
        self.returncode = returncode


class TerminalError(GhcloneError):
    """The interactive terminal driver could not be started."""


__all__ = ["GhcloneError", "FetchError", "CloneError", "TerminalError"]
