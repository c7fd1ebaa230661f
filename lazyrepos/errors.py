"""Exception types raised while discovering and loading repositories.

Everything here is fatal to the session; the CLI front door maps these to
exit codes. Navigation code never raises.
"""

from __future__ import annotations

from pathlib import Path


class LazyReposError(Exception):
    """Base class for all lazyrepos failures."""

    exit_code = 1


class UsageError(LazyReposError):
    """Invalid command-line input not already rejected by argparse."""

    exit_code = 2


class DiscoveryError(LazyReposError):
    """Scan root could not be used for discovery."""

    def __init__(self, root: Path, message: str) -> None:
        super().__init__(message)
        self.root = root


class NotFoundError(DiscoveryError):
    """Scan root is missing, not a directory, or cannot be listed."""


class EmptyRootError(DiscoveryError):
    """Scan root is readable but contains no entries."""


class VcsError(LazyReposError):
    """A git invocation failed."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str) -> None:
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(f"{' '.join(command)} failed ({returncode}): {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class HierarchyBuildError(LazyReposError):
    """Loading branches or commits for one repository failed."""

    def __init__(self, repository: str, cause: Exception, branch: str | None = None) -> None:
        where = repository if branch is None else f"{repository}@{branch}"
        super().__init__(f"cannot load {where}: {cause}")
        self.repository = repository
        self.branch = branch
