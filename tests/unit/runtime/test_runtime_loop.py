"""Tests for the interactive loop with a recording terminal and scripted keys."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from lazyrepos.navigator import CascadingNavigator, Column
from lazyrepos.runtime import run_main_loop
from lazyrepos.ui_theme import PLAIN_THEME
from tests.factories import scenario_repositories


class _RecordingTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []
        self.clears = 0

    def draw(self, frame: str) -> None:
        self.frames.append(frame)

    def clear(self) -> None:
        self.clears += 1


def _run(navigator: CascadingNavigator, keys: list[str], sizes: list[tuple[int, int]] | None = None) -> _RecordingTerminal:
    terminal = _RecordingTerminal()
    size_iter = iter(sizes or [])
    last = [os.terminal_size((80, 24))]

    def terminal_size() -> os.terminal_size:
        nxt = next(size_iter, None)
        if nxt is not None:
            last[0] = os.terminal_size(nxt)
        return last[0]

    with mock.patch("lazyrepos.runtime.loop.read_key", side_effect=keys):
        run_main_loop(navigator, terminal, 0, PLAIN_THEME, terminal_size=terminal_size)
    return terminal


class MainLoopTests(unittest.TestCase):
    def test_quit_key_ends_loop_after_first_frame(self) -> None:
        terminal = _run(CascadingNavigator(scenario_repositories()), ["q"])

        self.assertEqual(len(terminal.frames), 1)
        self.assertEqual(terminal.clears, 1)

    def test_each_handled_key_redraws(self) -> None:
        navigator = CascadingNavigator(scenario_repositories())

        terminal = _run(navigator, ["RIGHT", "DOWN", "CTRL_C"])

        self.assertEqual(len(terminal.frames), 3)
        self.assertEqual(navigator.focus, Column.BRANCH)
        self.assertEqual(navigator.selected_branch().name, "feature")

    def test_poll_timeouts_do_not_redraw(self) -> None:
        terminal = _run(CascadingNavigator(scenario_repositories()), ["", "", "q"])
        self.assertEqual(len(terminal.frames), 1)

    def test_resize_relayouts_views(self) -> None:
        navigator = CascadingNavigator(scenario_repositories())

        terminal = _run(navigator, ["", "q"], sizes=[(80, 24), (100, 40)])

        self.assertEqual(terminal.clears, 2)
        self.assertEqual(len(terminal.frames), 2)
        self.assertEqual(navigator.commit_view.page_size(), (40 - 3 - 4) // 3)


if __name__ == "__main__":
    unittest.main()
