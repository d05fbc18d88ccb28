"""Single-line text entry with a blinking cursor."""

from __future__ import annotations

from ..commands import ScheduleTick
from ..messages import Ticked
from ..ui_theme import RenderConfig

CURSOR_SOURCE = "cursor"
DEFAULT_CHAR_LIMIT = 64


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is literal text rather than a named key token."""
    return len(key) == 1 and key.isprintable()


class TextInput:
    """Editable buffer owning its own cursor position and blink state."""

    def __init__(
        self,
        config: RenderConfig,
        value: str = "",
        *,
        prompt: str = "> ",
        char_limit: int = DEFAULT_CHAR_LIMIT,
    ) -> None:
        self.config = config
        self.prompt = prompt
        self.char_limit = char_limit
        self.value = ""
        self.cursor = 0
        self.cursor_visible = True
        self.blink_tag = 0
        self.set_value(value)

    def set_value(self, value: str) -> None:
        self.value = value[: self.char_limit] if self.char_limit > 0 else value
        self.cursor = len(self.value)

    def blink(self) -> ScheduleTick:
        return ScheduleTick(source=CURSOR_SOURCE, tag=self.blink_tag, delay=self.config.cursor_blink_interval)

    def update_blink(self, message: Ticked) -> ScheduleTick | None:
        """Toggle cursor visibility and return the next blink, or ``None`` if stale."""
        if message.source != CURSOR_SOURCE or message.tag != self.blink_tag:
            return None
        self.cursor_visible = not self.cursor_visible
        self.blink_tag += 1
        return self.blink()

    def _insert(self, text: str) -> bool:
        if self.char_limit > 0 and len(self.value) + len(text) > self.char_limit:
            return False
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)
        return True

    def _word_start_before(self) -> int:
        head = self.value[: self.cursor].rstrip()
        return head.rfind(" ") + 1

    def _word_end_after(self) -> int:
        pos = self.cursor
        while pos < len(self.value) and self.value[pos] == " ":
            pos += 1
        end = self.value.find(" ", pos)
        return len(self.value) if end < 0 else end

    def _delete_word_backward(self) -> bool:
        if self.cursor == 0:
            return False
        cut = self._word_start_before()
        self.value = self.value[:cut] + self.value[self.cursor :]
        self.cursor = cut
        return True

    def handle_key(self, key: str) -> bool:
        """Apply one editing key; return whether the buffer or cursor changed."""
        self.cursor_visible = True
        if is_printable_key(key):
            return self._insert(key)
        if key == "BACKSPACE":
            if self.cursor == 0:
                return False
            self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
            self.cursor -= 1
            return True
        if key == "DELETE" or key == "CTRL_D":
            if self.cursor >= len(self.value):
                return False
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
            return True
        if key == "LEFT" or key == "CTRL_B":
            moved = self.cursor > 0
            self.cursor = max(0, self.cursor - 1)
            return moved
        if key == "RIGHT" or key == "CTRL_F":
            moved = self.cursor < len(self.value)
            self.cursor = min(len(self.value), self.cursor + 1)
            return moved
        if key in {"HOME", "CTRL_A"}:
            self.cursor = 0
            return True
        if key in {"END", "CTRL_E"}:
            self.cursor = len(self.value)
            return True
        if key == "CTRL_U":
            changed = self.cursor > 0
            self.value = self.value[self.cursor :]
            self.cursor = 0
            return changed
        if key == "CTRL_K":
            changed = self.cursor < len(self.value)
            self.value = self.value[: self.cursor]
            return changed
        if key == "ALT_LEFT":
            target = self._word_start_before()
            moved = target != self.cursor
            self.cursor = target
            return moved
        if key == "ALT_RIGHT":
            target = self._word_end_after()
            moved = target != self.cursor
            self.cursor = target
            return moved
        if key in {"CTRL_W", "ALT_BACKSPACE"}:
            return self._delete_word_backward()
        return False

    def view(self) -> str:
        theme = self.config.theme
        before = self.value[: self.cursor]
        at = self.value[self.cursor : self.cursor + 1] or " "
        after = self.value[self.cursor + 1 :]
        if self.cursor_visible:
            if theme.reverse:
                at = f"{theme.reverse}{at}{theme.reset}"
            elif at == " ":
                at = "_"
        return f"{self.prompt}{before}{at}{after}"
