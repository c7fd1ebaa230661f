"""Cascading selection across the repository, branch and commit columns.

The branch column always shows the branches of the selected repository and
the commit column always shows the commits of the selected branch. Moving the
selection in an outer column replaces the items of the columns it owns.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

from .input import KeyComboBinding, KeyComboRegistry
from .list_view import ListView
from .model import Branch, Commit, Repository

UP = -1
DOWN = 1
QUIT_KEYS = frozenset({"q", "CTRL_C"})
EMPTY_COMMITS: tuple[Commit, ...] = ()


def _same_items(shown: tuple, expected: tuple) -> bool:
    return shown is expected or (not shown and not expected)


class Column(IntEnum):
    REPOSITORY = 0
    BRANCH = 1
    COMMIT = 2

    def next(self) -> Column:
        return Column((self + 1) % len(Column))

    def previous(self) -> Column:
        return Column((self - 1) % len(Column))


class CascadingNavigator:
    """Focus pointer plus three strongly-typed list views.

    Every cursor lives in its ``ListView``; the navigator only reads and
    moves it through the view's accessors.
    """

    def __init__(self, repositories: Sequence[Repository] = ()) -> None:
        self.focus = Column.REPOSITORY
        self.repository_view: ListView[Repository] = ListView("Repository")
        self.branch_view: ListView[Branch] = ListView("Branch")
        self.commit_view: ListView[Commit] = ListView("Commit")
        self._keys = KeyComboRegistry(
            KeyComboBinding(("LEFT", "h"), self.focus_previous),
            KeyComboBinding(("RIGHT", "l"), self.focus_next),
            KeyComboBinding(("UP",), lambda: self.move_selection(UP)),
            KeyComboBinding(("DOWN",), lambda: self.move_selection(DOWN)),
        )
        self.populate(repositories)

    def populate(self, repositories: Sequence[Repository]) -> None:
        """Load a freshly built hierarchy and select the first repository."""
        self.focus = Column.REPOSITORY
        self.repository_view.set_items(tuple(repositories))
        self._show_branches_of(self.repository_view.selected())

    @property
    def views(self) -> tuple[ListView[Repository], ListView[Branch], ListView[Commit]]:
        return self.repository_view, self.branch_view, self.commit_view

    @property
    def focused_view(self) -> ListView[Repository] | ListView[Branch] | ListView[Commit]:
        return self.views[self.focus]

    def selected_repository(self) -> Repository | None:
        return self.repository_view.selected()

    def selected_branch(self) -> Branch | None:
        return self.branch_view.selected()

    def selected_commit(self) -> Commit | None:
        return self.commit_view.selected()

    def commits_are_placeholder(self) -> bool:
        return self.commit_view.items() == EMPTY_COMMITS

    def focus_next(self) -> bool:
        self.focus = self.focus.next()
        return True

    def focus_previous(self) -> bool:
        self.focus = self.focus.previous()
        return True

    def move_selection(self, direction: int) -> bool:
        """Move the focused column's cursor one step up (-1) or down (+1).

        Out-of-range moves leave every column untouched. Repository and
        branch moves cascade into the columns below them.
        """
        view = self.focused_view
        if not view.select(view.cursor() + direction):
            return False
        if self.focus == Column.REPOSITORY:
            self._show_branches_of(self.repository_view.selected())
        elif self.focus == Column.BRANCH:
            self._show_commits_of(self.branch_view.selected())
        return True

    def _show_branches_of(self, repository: Repository | None) -> None:
        self.branch_view.set_items(repository.branches if repository is not None else ())
        self._show_commits_of(self.branch_view.selected())

    def _show_commits_of(self, branch: Branch | None) -> None:
        self.commit_view.set_items(branch.commits if branch is not None else EMPTY_COMMITS)

    def _resync_cascade(self) -> None:
        """Re-apply the cascade if a delegated key changed an outer selection."""
        repository = self.repository_view.selected()
        expected_branches = repository.branches if repository is not None else ()
        if not _same_items(self.branch_view.items(), expected_branches):
            self._show_branches_of(repository)
            return
        branch = self.branch_view.selected()
        expected_commits = branch.commits if branch is not None else EMPTY_COMMITS
        if not _same_items(self.commit_view.items(), expected_commits):
            self._show_commits_of(branch)

    def handle_key(self, key: str) -> bool:
        """Process one key token; return ``False`` when the session should end.

        Navigation keys are interpreted here unless the focused view's filter
        prompt claims them; everything else goes to the focused view only.
        """
        view = self.focused_view
        if key == "CTRL_C":
            return False
        if view.claims(key):
            view.handle_key(key)
            self._resync_cascade()
            return True
        if key in QUIT_KEYS:
            return False
        if key in self._keys:
            self._keys.dispatch(key)
            return True
        if view.handle_key(key):
            self._resync_cascade()
        return True
