"""Tests for fuzzy scoring and order-preserving filtering."""

from __future__ import annotations

import unittest

from lazyrepos.fuzzy import fuzzy_filter, fuzzy_score


class FuzzyScoreTests(unittest.TestCase):
    def test_subsequence_matches_case_insensitively(self) -> None:
        self.assertIsNotNone(fuzzy_score("FTR", "feature"))
        self.assertIsNone(fuzzy_score("xyz", "feature"))
        self.assertEqual(fuzzy_score("", "anything"), 0)

    def test_contiguous_boundary_match_beats_scattered_match(self) -> None:
        contiguous = fuzzy_score("log", "feature-login")
        scattered = fuzzy_score("log", "legacy-config")
        self.assertGreater(contiguous, scattered)

    def test_filter_keeps_source_order(self) -> None:
        names = ["release", "feature-search", "main", "feature-login"]

        self.assertEqual(fuzzy_filter("fe", names, str), ("feature-search", "feature-login"))
        self.assertEqual(fuzzy_filter("", names, str), tuple(names))


if __name__ == "__main__":
    unittest.main()
