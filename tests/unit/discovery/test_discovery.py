"""Tests for repository discovery rules with a marker-file fake reader."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazyrepos.discovery import discover
from lazyrepos.errors import EmptyRootError, NotFoundError
from tests.fakes import REPO_MARKER, FakeReader


def _make_repo(path: Path) -> Path:
    path.mkdir(parents=True)
    (path / REPO_MARKER).write_text("", encoding="utf-8")
    return path


class DiscoveryTests(unittest.TestCase):
    def test_registers_top_level_repositories_by_directory_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_repo(root / "alpha")
            _make_repo(root / "beta")
            (root / "notes.txt").write_text("x", encoding="utf-8")
            (root / "plain").mkdir()

            found = discover(root, reader=FakeReader())

            self.assertEqual(list(found), ["alpha", "beta"])
            self.assertEqual(found["alpha"].path, root / "alpha")

    def test_non_recursive_scan_skips_nested_repositories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_repo(root / "group" / "nested")

            self.assertEqual(discover(root, recursive=False, reader=FakeReader()), {})

    def test_recursive_scan_finds_nested_repositories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_repo(root / "group" / "nested")
            _make_repo(root / "group" / "deeper" / "leaf")
            _make_repo(root / "top")

            found = discover(root, recursive=True, reader=FakeReader())

            self.assertEqual(set(found), {"nested", "leaf", "top"})
            self.assertEqual(found["leaf"].path, root / "group" / "deeper" / "leaf")

    def test_never_descends_into_a_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            outer = _make_repo(root / "outer")
            _make_repo(outer / "vendored")
            reader = FakeReader()

            found = discover(root, recursive=True, reader=reader)

            self.assertEqual(list(found), ["outer"])
            self.assertNotIn(outer / "vendored", reader.opened)

    def test_duplicate_basenames_keep_last_in_traversal_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_repo(root / "a-group" / "tool")
            _make_repo(root / "b-group" / "tool")

            found = discover(root, recursive=True, reader=FakeReader())

            self.assertEqual(list(found), ["tool"])
            self.assertEqual(found["tool"].path, root / "b-group" / "tool")

    @unittest.skipIf(not hasattr(os, "symlink"), "symlinks are required")
    def test_symlinked_containers_are_not_followed_when_recursing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "loop").symlink_to(root, target_is_directory=True)
            _make_repo(root / "real")

            found = discover(root, recursive=True, reader=FakeReader())

            self.assertEqual(list(found), ["real"])

    def test_missing_root_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(NotFoundError) as ctx:
                discover(missing, reader=FakeReader())
            self.assertEqual(ctx.exception.root, missing)

    def test_file_root_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(NotFoundError):
                discover(target, reader=FakeReader())

    def test_empty_root_is_a_distinct_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(EmptyRootError) as ctx:
                discover(Path(tmp), reader=FakeReader())
            self.assertIn("There's no files under", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
