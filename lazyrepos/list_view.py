"""Scrollable, filterable list primitive backing each dashboard column.

A ``ListView`` is the single owner of its cursor and scroll offset. Callers
read the selection through ``cursor()``/``selected()`` and move it through
``select()``; nothing else keeps a copy of the index.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, Protocol, TypeVar

from .ansi import fit_ansi_line, sanitize_terminal_text
from .fuzzy import fuzzy_filter
from .input import KeyComboBinding, KeyComboRegistry
from .ui_theme import UITheme

HEADER_ROWS = 3
FOOTER_ROWS = 1
ROWS_PER_ITEM = 3
DEFAULT_EMPTY_TEXT = "No items."
NO_MATCHES_TEXT = "No matches."


class ListItem(Protocol):
    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...


T = TypeVar("T", bound=ListItem)


def page_size_for_height(height: int) -> int:
    """Return how many items fit in a column of ``height`` rows."""
    return max(1, (height - HEADER_ROWS - FOOTER_ROWS) // ROWS_PER_ITEM)


class ListView(Generic[T]):
    """Cursor-tracking list with paging and an incremental fuzzy filter.

    The cursor indexes the visible (filtered) items. Replacing the items
    resets cursor, scroll offset and filter.
    """

    def __init__(self, title: str, items: Sequence[T] = (), empty_text: str = DEFAULT_EMPTY_TEXT) -> None:
        self.title = title
        self.empty_text = empty_text
        self._items: tuple[T, ...] = ()
        self._visible: tuple[T, ...] = ()
        self._cursor = 0
        self._start = 0
        self._page_size = 1
        self._filter_query = ""
        self._filter_editing = False
        self._keys = KeyComboRegistry(
            KeyComboBinding(("k", "UP"), lambda: self.move_cursor(-1)),
            KeyComboBinding(("j", "DOWN"), lambda: self.move_cursor(1)),
            KeyComboBinding((" ", "f", "PAGE_DOWN"), lambda: self.move_cursor(self._page_size)),
            KeyComboBinding(("b", "PAGE_UP"), lambda: self.move_cursor(-self._page_size)),
            KeyComboBinding(("g", "HOME"), lambda: self.select(0)),
            KeyComboBinding(("G", "END"), lambda: self.select(len(self._visible) - 1)),
            KeyComboBinding(("/",), self.start_filter),
            KeyComboBinding(("ESC",), self.clear_filter),
        )
        self.set_items(items)

    def items(self) -> tuple[T, ...]:
        """Return the backing items, unfiltered, as passed to ``set_items``."""
        return self._items

    def visible_items(self) -> tuple[T, ...]:
        return self._visible

    def cursor(self) -> int:
        return self._cursor

    def scroll_start(self) -> int:
        return self._start

    def page_size(self) -> int:
        return self._page_size

    def selected(self) -> T | None:
        if not self._visible:
            return None
        return self._visible[self._cursor]

    @property
    def filter_query(self) -> str:
        return self._filter_query

    @property
    def filter_editing(self) -> bool:
        return self._filter_editing

    @property
    def is_filtered(self) -> bool:
        return bool(self._filter_query)

    def set_items(self, items: Sequence[T]) -> None:
        """Replace backing items, resetting cursor, scroll and filter."""
        self._items = items if isinstance(items, tuple) else tuple(items)
        self._visible = self._items
        self._filter_query = ""
        self._filter_editing = False
        self._cursor = 0
        self._start = 0

    def select(self, index: int) -> bool:
        """Move the cursor to ``index``; out-of-range indices are ignored."""
        if not 0 <= index < len(self._visible):
            return False
        self._cursor = index
        self._scroll_to_cursor()
        return True

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by ``delta``, clamping at the list ends."""
        if not self._visible:
            return False
        target = max(0, min(len(self._visible) - 1, self._cursor + delta))
        if target == self._cursor:
            return False
        return self.select(target)

    def resize(self, height: int) -> None:
        self._page_size = page_size_for_height(height)
        self._scroll_to_cursor()

    def _scroll_to_cursor(self) -> None:
        if self._cursor < self._start:
            self._start = self._cursor
        elif self._cursor >= self._start + self._page_size:
            self._start = self._cursor - self._page_size + 1
        max_start = max(0, len(self._visible) - self._page_size)
        self._start = max(0, min(self._start, max_start))

    def start_filter(self) -> bool:
        self._filter_editing = True
        return True

    def clear_filter(self) -> bool:
        if not self._filter_query and not self._filter_editing:
            return False
        self._filter_editing = False
        self._apply_filter("")
        return True

    def _accept_filter(self) -> bool:
        self._filter_editing = False
        return True

    def _apply_filter(self, query: str) -> None:
        previous = self.selected()
        self._filter_query = query
        self._visible = fuzzy_filter(query, self._items, lambda item: item.title)
        self._cursor = 0
        self._start = 0
        if previous is not None:
            for idx, item in enumerate(self._visible):
                if item is previous:
                    self._cursor = idx
                    break
        self._scroll_to_cursor()

    def claims(self, key: str) -> bool:
        """Return whether ``key`` belongs to this view's filter prompt.

        While the prompt is being edited, printable characters and the prompt's
        editing keys must not be interpreted as navigation shortcuts.
        """
        if not self._filter_editing:
            return False
        if key in {"ENTER", "ESC", "BACKSPACE", "CTRL_U"}:
            return True
        return len(key) == 1 and key.isprintable()

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return whether the view consumed it."""
        if self._filter_editing and self.claims(key):
            return self._handle_filter_key(key)
        return self._keys.dispatch(key)

    def _handle_filter_key(self, key: str) -> bool:
        if key == "ENTER":
            return self._accept_filter()
        if key == "ESC":
            return self.clear_filter()
        if key == "BACKSPACE":
            self._apply_filter(self._filter_query[:-1])
        elif key == "CTRL_U":
            self._apply_filter("")
        else:
            self._apply_filter(self._filter_query + key)
        return True

    def render(self, width: int, height: int, theme: UITheme) -> list[str]:
        """Render exactly ``height`` rows of ``width`` display columns."""
        if width <= 0 or height <= 0:
            return []
        reset = theme.reset
        rows: list[str] = [f"{theme.column_title} {self.title} {reset}"]
        if self._filter_editing:
            rows.append(f"{theme.filter_prompt}Filter: {reset}{theme.filter_query}{self._filter_query}▏{reset}")
        elif self._filter_query:
            rows.append(f"{theme.filter_prompt}Filtered: {reset}{theme.filter_query}{self._filter_query}{reset}")
        else:
            rows.append("")
        rows.append("")

        if not self._visible:
            text = NO_MATCHES_TEXT if self._filter_query else self.empty_text
            rows.append(f"{theme.empty_text}  {text}{reset}")
        else:
            for offset, item in enumerate(self._visible[self._start : self._start + self._page_size]):
                idx = self._start + offset
                title = sanitize_terminal_text(item.title)
                description = sanitize_terminal_text(item.description)
                if idx == self._cursor:
                    marker = f"{theme.selected_marker}│ {reset}"
                    rows.append(f"{marker}{theme.selected_title}{title}{reset}")
                    rows.append(f"{marker}{theme.selected_description}{description}{reset}")
                else:
                    rows.append(f"  {theme.item_title}{title}{reset}")
                    rows.append(f"  {theme.item_description}{description}{reset}")
                rows.append("")

        body_rows = max(0, height - FOOTER_ROWS)
        rows = rows[:body_rows]
        rows.extend([""] * (body_rows - len(rows)))
        if height > body_rows:
            position = f"{self._cursor + 1}/{len(self._visible)}" if self._visible else "0/0"
            rows.append(f"{theme.item_description}  {position}{reset}")
        return [fit_ansi_line(row, width) + reset for row in rows]
