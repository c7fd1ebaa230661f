"""Domain datatypes for the repository -> branch -> commit hierarchy.

All entities are frozen and own their children as tuples, so a built
hierarchy can be shared by the list views without defensive copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

EMPTY_MESSAGE_PLACEHOLDER = "(no message)"
SHORT_HASH_LENGTH = 6
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Commit:
    """One commit as read from the log walk."""

    hash: str
    message: str
    timestamp: datetime

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]

    @property
    def title(self) -> str:
        return self.message or EMPTY_MESSAGE_PLACEHOLDER

    @property
    def description(self) -> str:
        return self.short_hash


@dataclass(frozen=True)
class Branch:
    """Named line of history with commits ordered newest first."""

    name: str
    ref: str
    commits: tuple[Commit, ...] = ()

    @property
    def latest_commit(self) -> Commit | None:
        return self.commits[0] if self.commits else None

    @property
    def title(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        latest = self.latest_commit
        if latest is None:
            return "no commits"
        return f"latest at {latest.timestamp.strftime(TIMESTAMP_FORMAT)}"


@dataclass(frozen=True)
class Repository:
    """Discovered repository root and the branches loaded from it."""

    title: str
    path: Path
    branches: tuple[Branch, ...] = ()

    @property
    def description(self) -> str:
        return f"{len(self.branches)} branch(es)"


def is_newest_first(commits: tuple[Commit, ...]) -> bool:
    """Return whether ``commits`` is non-increasing in timestamp."""
    return all(newer.timestamp >= older.timestamp for newer, older in zip(commits, commits[1:]))


__all__ = [
    "Commit",
    "Branch",
    "Repository",
    "EMPTY_MESSAGE_PLACEHOLDER",
    "is_newest_first",
]
