"""Tests for hierarchy loading, the ``--print`` snapshot and session bootstrap."""

from __future__ import annotations

import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyrepos.runtime import DashboardOptions, load_hierarchy, render_snapshot, run_dashboard
from lazyrepos.ui_theme import PLAIN_THEME
from tests.factories import make_commits, scenario_repositories
from tests.fakes import REPO_MARKER, FakeReader


class LoadHierarchyTests(unittest.TestCase):
    def test_reports_scan_and_per_repository_progress(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("zeta", "Alpha"):
                (root / name).mkdir()
                (root / name / REPO_MARKER).write_text("", encoding="utf-8")
            reader = FakeReader(
                branches={root / "zeta": ["main"], root / "Alpha": []},
                commits={(root / "zeta", "refs/heads/main"): list(make_commits("z", 4))},
            )
            messages: list[str] = []

            repositories = load_hierarchy(
                DashboardOptions(directory=root, commit_limit=2),
                report=messages.append,
                reader=reader,
            )

        self.assertEqual([repo.title for repo in repositories], ["Alpha", "zeta"])
        self.assertEqual(len(repositories[1].branches[0].commits), 2)
        self.assertTrue(messages[0].startswith("Scanning "))
        self.assertIn("Loading Alpha (1/2)...", messages)
        self.assertIn("Loading zeta (2/2)...", messages)
        self.assertIn("Loading zeta (2/2) main...", messages)
        self.assertLess(messages.index("Loading zeta (2/2)..."), messages.index("Loading zeta (2/2) main..."))


class RenderSnapshotTests(unittest.TestCase):
    def test_snapshot_lines_are_right_trimmed(self) -> None:
        output = render_snapshot(scenario_repositories(), 80, 24, PLAIN_THEME)
        lines = output.splitlines()

        self.assertEqual(len(lines), 23)
        self.assertTrue(all(line == line.rstrip() for line in lines))
        self.assertIn("Repository", output)
        self.assertIn("main commit 3", output)


class RunDashboardTests(unittest.TestCase):
    def _run(self, load_side_effect) -> tuple[mock.Mock, mock.Mock]:
        fake_stdio = mock.Mock()
        fake_stdio.fileno.return_value = 0
        with (
            mock.patch.object(sys, "stdin", fake_stdio),
            mock.patch.object(sys, "stdout", fake_stdio),
            mock.patch("lazyrepos.runtime.app.TerminalController") as controller_cls,
            mock.patch("lazyrepos.runtime.app.load_hierarchy", side_effect=load_side_effect),
            mock.patch("lazyrepos.runtime.app.run_main_loop") as run_loop,
        ):
            run_dashboard(DashboardOptions(directory=Path("/repos")), PLAIN_THEME)
        return controller_cls.return_value, run_loop

    def test_loaded_hierarchy_enters_raw_mode_and_runs_loop(self) -> None:
        terminal, run_loop = self._run(lambda options, report: scenario_repositories())

        terminal.session.assert_called_once()
        terminal.enable_raw_input.assert_called_once()
        run_loop.assert_called_once()
        navigator = run_loop.call_args.args[0]
        self.assertEqual(navigator.selected_repository().title, "A")

    def test_interrupt_while_loading_skips_main_loop(self) -> None:
        terminal, run_loop = self._run(KeyboardInterrupt)

        terminal.enable_raw_input.assert_not_called()
        run_loop.assert_not_called()


if __name__ == "__main__":
    unittest.main()
