"""Fuzzy matching used by list-view filters."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

_WORD_BOUNDARIES = "/_- .:"


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` against ``query`` as a case-folded subsequence.

    Returns ``None`` when ``query`` is not a subsequence. Consecutive runs
    and word-boundary hits score higher; gaps and long candidates lower.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in _WORD_BOUNDARIES:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def fuzzy_filter(query: str, items: Sequence[T], label: Callable[[T], str]) -> tuple[T, ...]:
    """Return items whose label matches ``query``, keeping source order."""
    if not query:
        return tuple(items)
    return tuple(item for item in items if fuzzy_score(query, label(item)) is not None)
