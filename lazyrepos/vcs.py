"""Git-backed VCS reader.

Answers the three questions the hierarchy needs: is this directory a
repository root, which branches does it have, and what is a branch's history.
Everything goes through the ``git`` executable; failures raise ``VcsError``.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .errors import VcsError
from .model import Commit

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"
LOCAL_BRANCH_PREFIX = "refs/heads/"
REMOTE_BRANCH_PREFIX = "refs/remotes/"
DEFAULT_REMOTE_NAME = "origin"
_FIELD_SEP = "\x1f"
_LOG_FORMAT = f"--format=%H{_FIELD_SEP}%cI{_FIELD_SEP}%s"


@dataclass(frozen=True)
class RepositoryHandle:
    """Opened repository root."""

    path: Path
    bare: bool = False


@dataclass(frozen=True)
class BranchRef:
    """Branch as listed by the reader: display name plus full ref."""

    name: str
    ref: str


def _run_git(repo_path: Path, args: list[str]) -> subprocess.CompletedProcess[str]:
    command = [GIT_EXECUTABLE, "-C", str(repo_path), *args]
    logger.debug("running %s", " ".join(command))
    try:
        return subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise VcsError(command, None, str(exc)) from exc


def _checked_git(repo_path: Path, args: list[str]) -> str:
    proc = _run_git(repo_path, args)
    if proc.returncode != 0:
        raise VcsError(proc.args, proc.returncode, proc.stderr)
    return proc.stdout


def parse_log_output(output: str) -> list[Commit]:
    """Parse ``git log`` output produced with ``_LOG_FORMAT``."""
    commits: list[Commit] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(_FIELD_SEP, 2)
        if len(parts) != 3:
            logger.warning("skipping malformed log line: %r", line)
            continue
        commit_hash, iso_time, subject = parts
        commits.append(
            Commit(
                hash=commit_hash.strip(),
                message=subject.strip(),
                timestamp=datetime.fromisoformat(iso_time.strip()),
            )
        )
    return commits


def _head_first(branches: list[BranchRef], head_ref: str | None) -> list[BranchRef]:
    """Move the branch whose ref is ``head_ref`` to the front, keeping the rest in order."""
    if head_ref is None:
        return branches
    head = [branch for branch in branches if branch.ref == head_ref]
    rest = [branch for branch in branches if branch.ref != head_ref]
    return head + rest


class GitReader:
    """VCS reader implemented on top of the ``git`` command line."""

    def is_repository_root(self, path: Path) -> bool:
        """Return whether ``path`` itself is a work-tree or bare repository root.

        Subdirectories of a work tree are not roots even though git would
        happily resolve them to the enclosing repository.
        """
        if not path.is_dir():
            return False
        has_dot_git = (path / ".git").exists()
        if not has_dot_git and not (path / "HEAD").is_file():
            return False

        proc = _run_git(path, ["rev-parse", "--is-bare-repository", "--absolute-git-dir"])
        if proc.returncode != 0:
            return False
        lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
        if len(lines) < 2:
            return False
        if lines[0] == "true":
            return Path(lines[1]).resolve() == path.resolve()
        if not has_dot_git:
            return False
        # An empty or broken .git makes git resolve the enclosing work tree.
        toplevel = _run_git(path, ["rev-parse", "--show-toplevel"])
        if toplevel.returncode != 0 or not toplevel.stdout.strip():
            return False
        return Path(toplevel.stdout.strip()).resolve() == path.resolve()

    def open_repository(self, path: Path) -> RepositoryHandle | None:
        """Open ``path`` as a repository root, or return ``None``."""
        if not self.is_repository_root(path):
            return None
        return RepositoryHandle(path=path, bare=not (path / ".git").exists())

    def local_branches(self, handle: RepositoryHandle) -> list[BranchRef]:
        """List local branches, the checked-out one first, the rest by ref name."""
        output = _checked_git(handle.path, ["for-each-ref", "--format=%(refname)", LOCAL_BRANCH_PREFIX])
        branches = [
            BranchRef(name=ref[len(LOCAL_BRANCH_PREFIX):], ref=ref)
            for ref in self._iter_refs(output)
        ]
        return _head_first(branches, self._head_ref(handle))

    def _head_ref(self, handle: RepositoryHandle) -> str | None:
        proc = _run_git(handle.path, ["symbolic-ref", "-q", "HEAD"])
        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or None

    def default_remote(self, handle: RepositoryHandle) -> str | None:
        """Return ``origin`` when configured, else the first remote, else ``None``."""
        remotes = [name.strip() for name in _checked_git(handle.path, ["remote"]).splitlines() if name.strip()]
        if not remotes:
            return None
        if DEFAULT_REMOTE_NAME in remotes:
            return DEFAULT_REMOTE_NAME
        return remotes[0]

    def remote_branches(self, handle: RepositoryHandle, remote: str | None = None) -> list[BranchRef]:
        """List remote-tracking branches of ``remote`` (default remote when omitted).

        The symbolic ``<remote>/HEAD`` pointer is excluded; the branch it points
        to is listed first.
        """
        if remote is None:
            remote = self.default_remote(handle)
        if remote is None:
            return []
        prefix = f"{REMOTE_BRANCH_PREFIX}{remote}/"
        output = _checked_git(
            handle.path,
            ["for-each-ref", f"--format=%(refname){_FIELD_SEP}%(symref)", prefix],
        )
        branches: list[BranchRef] = []
        head_target: str | None = None
        for line in output.splitlines():
            ref, _sep, symref = line.partition(_FIELD_SEP)
            ref = ref.strip()
            if not ref.startswith(prefix):
                continue
            if symref.strip():
                head_target = symref.strip()
                continue
            name = ref[len(prefix):]
            if name == "HEAD":
                continue
            branches.append(BranchRef(name=name, ref=ref))
        return _head_first(branches, head_target)

    def commits(self, handle: RepositoryHandle, ref: str, limit: int | None = None) -> list[Commit]:
        """Return commits reachable from ``ref`` in ``git log --date-order`` order.

        Children still come before parents, so a commit with a skewed clock can
        appear out of timestamp order; the hierarchy builder re-sorts.
        """
        args = ["log", "--date-order", _LOG_FORMAT]
        if limit is not None:
            args.append(f"--max-count={limit}")
        args.extend([ref, "--"])
        return parse_log_output(_checked_git(handle.path, args))

    @staticmethod
    def _iter_refs(output: str) -> Iterator[str]:
        for line in output.splitlines():
            ref = line.strip()
            if ref:
                yield ref
