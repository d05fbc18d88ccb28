"""Screen controllers driven by the event loop.

Each controller exposes ``init() -> list[Command]``,
``update(message) -> (controller, list[Command])`` and ``view() -> list[str]``.
``update`` may return a different controller to hand off control.
"""

from __future__ import annotations

from .browse import BrowseController, clone_outcome
from .identity import IdentityController

Controller = IdentityController | BrowseController

__all__ = ["BrowseController", "Controller", "IdentityController", "clone_outcome"]
