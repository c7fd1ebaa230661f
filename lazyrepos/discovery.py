"""Repository discovery under a scan root.

Each directory entry is either a repository root (registered, never entered)
or a container (skipped, or scanned with the same rule when recursing).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import EmptyRootError, NotFoundError
from .vcs import GitReader, RepositoryHandle

logger = logging.getLogger(__name__)


def _sorted_entries(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: (entry.name.casefold(), entry.name))


def _is_directory(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _is_symlink(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_symlink()
    except OSError:
        return False


def _scan(
    directory: Path,
    entries: list[os.DirEntry[str]],
    recursive: bool,
    reader: GitReader,
    found: dict[str, RepositoryHandle],
) -> None:
    for entry in entries:
        if not _is_directory(entry):
            continue
        child = Path(entry.path)
        handle = reader.open_repository(child)
        if handle is not None:
            previous = found.get(entry.name)
            if previous is not None:
                logger.debug("repository %s at %s replaces %s", entry.name, child, previous.path)
            found[entry.name] = handle
            continue
        if not recursive or _is_symlink(entry):
            continue
        try:
            child_entries = _sorted_entries(child)
        except OSError as exc:
            logger.debug("skipping unreadable directory %s: %s", child, exc)
            continue
        _scan(child, child_entries, recursive, reader, found)


def discover(root: Path, recursive: bool = False, reader: GitReader | None = None) -> dict[str, RepositoryHandle]:
    """Find repositories under ``root`` keyed by directory basename.

    Entries are visited in case-folded name order. When recursing, a deeper or
    later repository with the same basename replaces the earlier one.

    Raises ``NotFoundError`` when ``root`` cannot be listed and
    ``EmptyRootError`` when it has no entries at all.
    """
    if reader is None:
        reader = GitReader()
    try:
        entries = _sorted_entries(root)
    except OSError as exc:
        raise NotFoundError(root, f"cannot read {root}: {exc.strerror or exc}") from exc
    if not entries:
        raise EmptyRootError(root, f"There's no files under {root}")

    found: dict[str, RepositoryHandle] = {}
    _scan(root, entries, recursive, reader, found)
    logger.info("discovered %d repositories under %s", len(found), root)
    return found
