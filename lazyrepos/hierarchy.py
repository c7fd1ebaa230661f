"""Hierarchy builder: repository handles -> ordered ``Repository`` tree.

Runs once, synchronously, before the dashboard starts. Any git failure is
fatal unless ``skip_broken`` is set, in which case the repository is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from .errors import HierarchyBuildError, VcsError
from .model import Branch, Repository, is_newest_first
from .vcs import BranchRef, GitReader, RepositoryHandle

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_LIMIT = 20

ProgressCallback = Callable[[str, int, int], None]
BranchCallback = Callable[[str, str], None]


def repository_sort_key(repository: Repository) -> tuple[str, str]:
    return repository.title.casefold(), repository.title


def _list_branches(
    reader: GitReader,
    handle: RepositoryHandle,
    remote: bool,
    branch_limit: int,
) -> list[BranchRef]:
    if not remote:
        return reader.local_branches(handle)
    return reader.remote_branches(handle)[:branch_limit]


def build_repository(
    title: str,
    handle: RepositoryHandle,
    reader: GitReader,
    branch_limit: int = DEFAULT_BRANCH_LIMIT,
    commit_limit: int | None = None,
    remote: bool = False,
    on_branch: BranchCallback | None = None,
) -> Repository:
    """Load every branch of one repository with a bounded commit window.

    ``on_branch(title, branch_name)`` fires before each branch log is read.
    """
    try:
        branch_refs = _list_branches(reader, handle, remote, branch_limit)
    except VcsError as exc:
        raise HierarchyBuildError(title, exc) from exc

    branches: list[Branch] = []
    seen: set[str] = set()
    for branch_ref in branch_refs:
        if branch_ref.name in seen:
            continue
        seen.add(branch_ref.name)
        if on_branch is not None:
            on_branch(title, branch_ref.name)
        try:
            commits = reader.commits(handle, branch_ref.ref, commit_limit)
        except VcsError as exc:
            raise HierarchyBuildError(title, exc, branch=branch_ref.name) from exc
        window = tuple(commits)
        if not is_newest_first(window):
            window = tuple(sorted(window, key=lambda commit: commit.timestamp, reverse=True))
        branches.append(Branch(name=branch_ref.name, ref=branch_ref.ref, commits=window))
    logger.debug("loaded %s: %d branches", title, len(branches))
    return Repository(title=title, path=handle.path, branches=tuple(branches))


def build(
    repositories: Mapping[str, RepositoryHandle],
    branch_limit: int = DEFAULT_BRANCH_LIMIT,
    commit_limit: int | None = None,
    remote: bool = False,
    skip_broken: bool = False,
    reader: GitReader | None = None,
    on_progress: ProgressCallback | None = None,
    on_branch: BranchCallback | None = None,
) -> list[Repository]:
    """Build the repository list, sorted by title.

    ``commit_limit=None`` loads full histories. ``branch_limit`` only applies
    to remote-tracking branches. ``on_progress(title, index, total)`` fires
    before each repository is read. ``on_branch`` is passed to
    ``build_repository``.
    """
    if reader is None:
        reader = GitReader()
    total = len(repositories)
    built: list[Repository] = []
    for index, (title, handle) in enumerate(repositories.items()):
        if on_progress is not None:
            on_progress(title, index, total)
        try:
            built.append(
                build_repository(
                    title,
                    handle,
                    reader,
                    branch_limit=branch_limit,
                    commit_limit=commit_limit,
                    remote=remote,
                    on_branch=on_branch,
                )
            )
        except HierarchyBuildError as exc:
            if not skip_broken:
                raise
            logger.warning("skipping %s: %s", title, exc)
    built.sort(key=repository_sort_key)
    return built
