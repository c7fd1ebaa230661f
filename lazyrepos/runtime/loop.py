"""Main interactive event loop.

One key is read, handled to completion by the navigator, and the frame is
redrawn before the next key is accepted.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable

from ..input import read_key
from ..navigator import CascadingNavigator
from ..render import column_geometry, render_dashboard
from ..ui_theme import UITheme
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 200

TerminalSize = Callable[[], os.terminal_size]


def _default_terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


def resize_views(navigator: CascadingNavigator, width: int, height: int) -> None:
    """Propagate the per-column content height to every list view."""
    geometry = column_geometry(width, height)
    for view in navigator.views:
        view.resize(geometry.inner_height)


def run_main_loop(
    navigator: CascadingNavigator,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    terminal_size: TerminalSize = _default_terminal_size,
) -> None:
    """Run the dashboard until a quit key is pressed.

    The terminal size is polled between keys so resizes re-layout without a
    signal handler.
    """
    last_size: tuple[int, int] | None = None
    dirty = True
    while True:
        term = terminal_size()
        size = (term.columns, term.lines)
        if size != last_size:
            last_size = size
            resize_views(navigator, term.columns, term.lines)
            terminal.clear()
            dirty = True

        if dirty:
            terminal.draw(render_dashboard(navigator, term.columns, term.lines, theme))
            dirty = False

        key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
        if not key:
            continue
        if not navigator.handle_key(key):
            return
        dirty = True

