"""Session orchestration: load the hierarchy, then hand over to the loop.

Loading happens once, synchronously, on the main thread. While it runs the
terminal shows a spinner driven by the builder's progress callback and only
Ctrl+C is honoured.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..discovery import discover
from ..hierarchy import DEFAULT_BRANCH_LIMIT, build
from ..model import Repository
from ..navigator import CascadingNavigator
from ..render import render_columns, render_loading
from ..ui_theme import UITheme
from ..vcs import GitReader
from .loop import resize_views, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)

LoadingReporter = Callable[[str], None]


@dataclass(frozen=True)
class DashboardOptions:
    """Resolved options for one dashboard session."""

    directory: Path
    recursive: bool = False
    commit_limit: int | None = None
    branch_limit: int = DEFAULT_BRANCH_LIMIT
    remote: bool = False
    skip_broken: bool = False


def load_hierarchy(
    options: DashboardOptions,
    report: LoadingReporter | None = None,
    reader: GitReader | None = None,
) -> list[Repository]:
    """Discover repositories under the root and build the sorted hierarchy."""
    if reader is None:
        reader = GitReader()
    if report is not None:
        report(f"Scanning {options.directory}...")
    handles = discover(options.directory, options.recursive, reader=reader)

    position = ""

    def on_progress(title: str, index: int, total: int) -> None:
        nonlocal position
        position = f"{index + 1}/{total}"
        if report is not None:
            report(f"Loading {title} ({position})...")

    def on_branch(title: str, branch: str) -> None:
        if report is not None:
            report(f"Loading {title} ({position}) {branch}...")

    return build(
        handles,
        branch_limit=options.branch_limit,
        commit_limit=options.commit_limit,
        remote=options.remote,
        skip_broken=options.skip_broken,
        reader=reader,
        on_progress=on_progress,
        on_branch=on_branch,
    )


def render_snapshot(repositories: list[Repository], width: int, height: int, theme: UITheme) -> str:
    """Render the initial three-column view as plain text lines."""
    navigator = CascadingNavigator(repositories)
    resize_views(navigator, width, height)
    rows = render_columns(navigator, width, height, theme)
    return "".join(f"{row.rstrip()}\n" for row in rows)


def run_dashboard(options: DashboardOptions, theme: UITheme) -> None:
    """Run an interactive session on the controlling terminal.

    Discovery and build errors propagate after the terminal is restored, so
    the caller can report them on the normal screen.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    frame = 0

    def report(message: str) -> None:
        nonlocal frame
        logger.debug(message)
        terminal.draw(render_loading(frame, f"{message} press ctrl+c to quit", theme))
        frame += 1

    with terminal.session():
        try:
            repositories = load_hierarchy(options, report=report)
        except KeyboardInterrupt:
            logger.info("interrupted while loading")
            return
        navigator = CascadingNavigator(repositories)
        terminal.enable_raw_input()
        run_main_loop(navigator, terminal, stdin_fd, theme)


def stdio_is_interactive() -> bool:
    try:
        return os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())
    except (OSError, ValueError):
        return False
