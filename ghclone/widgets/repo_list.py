"""Paginated, filterable list of repositories.

The widget owns navigation and filter state. Its selection is an index into
the currently visible (possibly filtered) items, and resolves to ``None``
when nothing is visible.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import clip_ansi_line
from ..fuzzy import fuzzy_match_labels
from ..models import RepositoryEntry
from ..ui_theme import RenderConfig
from .text_input import is_printable_key

ITEM_HEIGHT = 2
ITEM_SPACING = 1
HEADER_ROWS = 4
FOOTER_ROWS = 3

FILTER_UNFILTERED = "unfiltered"
FILTER_EDITING = "filtering"
FILTER_APPLIED = "applied"


@dataclass(frozen=True)
class HelpBinding:
    keys: str
    short_help: str
    full_help: str


DEFAULT_BINDINGS: tuple[HelpBinding, ...] = (
    HelpBinding("↑/k", "up", "move up"),
    HelpBinding("↓/j", "down", "move down"),
    HelpBinding("/", "filter", "filter repositories"),
    HelpBinding("q", "quit", "quit"),
)
FULL_HELP_ONLY_BINDINGS: tuple[HelpBinding, ...] = (
    HelpBinding("←/h/pgup", "prev page", "previous page"),
    HelpBinding("→/l/pgdn", "next page", "next page"),
    HelpBinding("g/home", "start", "go to start"),
    HelpBinding("G/end", "end", "go to end"),
    HelpBinding("esc", "clear", "clear filter"),
)


class RepoList:
    """Selectable list widget over ``RepositoryEntry`` items."""

    def __init__(
        self,
        items: tuple[RepositoryEntry, ...],
        config: RenderConfig,
        *,
        title: str = "",
        extra_bindings: tuple[HelpBinding, ...] = (),
        empty_message: str = "No items.",
    ) -> None:
        self.items = items
        self.config = config
        self.title = title
        self.extra_bindings = extra_bindings
        self.empty_message = empty_message
        self.width = config.default_width
        self.height = config.default_height
        self.cursor = 0
        self.filter_state = FILTER_UNFILTERED
        self.filter_query = ""
        self.show_full_help = False
        self._visible: list[int] = list(range(len(items)))

    # -- selection -----------------------------------------------------

    @property
    def filtering(self) -> bool:
        """True while the user is typing a filter query."""
        return self.filter_state == FILTER_EDITING

    def visible_indices(self) -> list[int]:
        return list(self._visible)

    def selected_index(self) -> int | None:
        """Index into ``items`` of the highlighted entry, if any."""
        if not self._visible:
            return None
        return self._visible[max(0, min(self.cursor, len(self._visible) - 1))]

    def selected_item(self) -> RepositoryEntry | None:
        idx = self.selected_index()
        return None if idx is None else self.items[idx]

    # -- layout --------------------------------------------------------

    def set_size(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)

    def per_page(self) -> int:
        help_rows = self._help_row_count()
        rows = self.height - HEADER_ROWS - FOOTER_ROWS - help_rows
        return max(1, (rows + ITEM_SPACING) // (ITEM_HEIGHT + ITEM_SPACING))

    def page_count(self) -> int:
        per_page = self.per_page()
        return max(1, (len(self._visible) + per_page - 1) // per_page)

    def page(self) -> int:
        return self.cursor // self.per_page()

    # -- input ---------------------------------------------------------

    def _move(self, delta: int) -> bool:
        if not self._visible:
            return False
        target = max(0, min(len(self._visible) - 1, self.cursor + delta))
        moved = target != self.cursor
        self.cursor = target
        return moved

    def _jump(self, target: int) -> bool:
        if not self._visible:
            return False
        target = max(0, min(len(self._visible) - 1, target))
        moved = target != self.cursor
        self.cursor = target
        return moved

    def _apply_filter(self) -> None:
        labels = [item.filter_value for item in self.items]
        self._visible = fuzzy_match_labels(self.filter_query, labels)
        self.cursor = 0

    def reset_filter(self) -> None:
        self.filter_query = ""
        self.filter_state = FILTER_UNFILTERED
        self._visible = list(range(len(self.items)))
        self.cursor = 0

    def _handle_filter_key(self, key: str) -> bool:
        if key == "ESC":
            self.reset_filter()
            return True
        if key in {"ENTER", "TAB", "UP", "DOWN"}:
            if not self.filter_query:
                self.reset_filter()
            else:
                self.filter_state = FILTER_APPLIED
            return True
        if key == "BACKSPACE":
            if self.filter_query:
                self.filter_query = self.filter_query[:-1]
                self._apply_filter()
            else:
                self.reset_filter()
            return True
        if key == "CTRL_U":
            self.filter_query = ""
            self._apply_filter()
            return True
        if is_printable_key(key):
            self.filter_query += key
            self._apply_filter()
            return True
        return False

    def handle_key(self, key: str) -> bool:
        """Apply a navigation/filter key; return whether anything changed."""
        if self.filtering:
            return self._handle_filter_key(key)
        if key in {"UP", "k", "CTRL_P"}:
            return self._move(-1)
        if key in {"DOWN", "j", "CTRL_N"}:
            return self._move(1)
        if key in {"LEFT", "h", "PGUP", "b", "u"}:
            return self._jump((self.page() - 1) * self.per_page())
        if key in {"RIGHT", "l", "PGDN", "f", "d"}:
            if self.page() + 1 >= self.page_count():
                return False
            return self._jump((self.page() + 1) * self.per_page())
        if key in {"HOME", "g"}:
            return self._jump(0)
        if key in {"END", "G"}:
            return self._jump(len(self._visible) - 1)
        if key == "/" and self.items:
            self.filter_state = FILTER_EDITING
            self._apply_filter()
            return True
        if key == "ESC" and self.filter_state == FILTER_APPLIED:
            self.reset_filter()
            return True
        if key == "?":
            self.show_full_help = not self.show_full_help
            return True
        return False

    # -- rendering -----------------------------------------------------

    def _help_bindings(self) -> list[HelpBinding]:
        bindings = [*DEFAULT_BINDINGS[:2], *self.extra_bindings, *DEFAULT_BINDINGS[2:]]
        if self.show_full_help:
            bindings.extend(FULL_HELP_ONLY_BINDINGS)
        return bindings

    def _help_row_count(self) -> int:
        return len(self._help_lines())

    def _help_lines(self) -> list[str]:
        theme = self.config.theme
        if self.show_full_help:
            return [
                f"{theme.paint(theme.help_key, binding.keys)} {theme.paint(theme.dim, binding.full_help)}"
                for binding in self._help_bindings()
            ] + [f"{theme.paint(theme.help_key, '?')} {theme.paint(theme.dim, 'close help')}"]
        parts = [
            f"{theme.paint(theme.help_key, binding.keys)} {theme.paint(theme.dim, binding.short_help)}"
            for binding in self._help_bindings()
        ]
        parts.append(f"{theme.paint(theme.help_key, '?')} {theme.paint(theme.dim, 'more')}")
        return [theme.paint(theme.dim, " • ").join(parts)]

    def _status_line(self) -> str:
        theme = self.config.theme
        if self.filter_state == FILTER_APPLIED:
            return theme.paint(theme.dim, f'"{self.filter_query}" {len(self._visible)} of {len(self.items)} items')
        noun = "item" if len(self.items) == 1 else "items"
        return theme.paint(theme.dim, f"{len(self.items)} {noun}") if self.items else ""

    def _title_line(self) -> str:
        theme = self.config.theme
        if self.filtering:
            cursor = f"{theme.reverse} {theme.reset}" if theme.reverse else "_"
            return f"Filter: {theme.paint(theme.filter_query, self.filter_query)}{cursor}"
        return theme.paint(theme.title, f" {self.title} ") if self.title else ""

    def _item_lines(self, position: int) -> list[str]:
        theme = self.config.theme
        item = self.items[self._visible[position]]
        selected = position == self.cursor and not self.filtering
        if selected:
            marker = theme.paint(theme.selected_marker, "│ ") if theme.selected_marker else "> "
            return [
                marker + theme.paint(theme.selected_title, item.title),
                marker + theme.paint(theme.selected_description, item.description),
            ]
        return [
            "  " + theme.paint(theme.item_title, item.title),
            "  " + theme.paint(theme.item_description, item.description),
        ]

    def view(self) -> list[str]:
        """Render the widget into at most ``height`` lines clipped to ``width``."""
        lines = [self._title_line(), "", self._status_line(), ""]
        per_page = self.per_page()
        if not self._visible:
            lines.append(self.config.theme.paint(self.config.theme.dim, self.empty_message if not self.items else "No matches."))
        else:
            first = self.page() * per_page
            for position in range(first, min(first + per_page, len(self._visible))):
                if position > first:
                    lines.append("")
                lines.extend(self._item_lines(position))

        body_rows = max(0, self.height - FOOTER_ROWS - self._help_row_count())
        lines = lines[:body_rows]
        lines.extend([""] * (body_rows - len(lines)))
        pages = self.page_count()
        lines.append("")
        lines.append(self.config.theme.paint(self.config.theme.dim, f"{self.page() + 1}/{pages}") if pages > 1 else "")
        lines.append("")
        lines.extend(self._help_lines())
        return [clip_ansi_line(line, self.width) for line in lines[: self.height]]
