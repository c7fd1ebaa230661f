"""Frame rendering for the three-column dashboard and the loading screen.

Everything here is presentation-only: functions read navigator and view
state and return text, they never move cursors or resize views.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..navigator import CascadingNavigator, Column
from ..ui_theme import UITheme
from ..ansi import fit_ansi_line, sanitize_terminal_text
from .help import footer_line

COLUMN_DIVISOR = 4
FOOTER_ROWS = 1
BORDER_COLS = 2
PADDING_COLS = 2
BORDER_ROWS = 2
MIN_INNER_WIDTH = 1
SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")


@dataclass(frozen=True)
class ColumnGeometry:
    """Outer column widths plus the inner content size shared by all columns."""

    widths: tuple[int, int, int]
    inner_height: int

    def inner_width(self, column: Column) -> int:
        return max(MIN_INNER_WIDTH, self.widths[column] - BORDER_COLS - PADDING_COLS)


def column_geometry(width: int, height: int) -> ColumnGeometry:
    """Split the screen: a quarter each for repositories and branches, the rest for commits."""
    side = max(BORDER_COLS + PADDING_COLS + MIN_INNER_WIDTH, width // COLUMN_DIVISOR)
    commit = max(BORDER_COLS + PADDING_COLS + MIN_INNER_WIDTH, width - 2 * side)
    inner_height = max(1, height - FOOTER_ROWS - BORDER_ROWS)
    return ColumnGeometry(widths=(side, side, commit), inner_height=inner_height)


def _frame_column(lines: list[str], inner_width: int, focused: bool, theme: UITheme) -> list[str]:
    """Wrap content lines in a rounded border (focused) or equivalent padding."""
    if focused:
        edge = theme.focused_border
        top = f"{edge}╭{'─' * (inner_width + PADDING_COLS)}╮{theme.reset}"
        bottom = f"{edge}╰{'─' * (inner_width + PADDING_COLS)}╯{theme.reset}"
        side = f"{edge}│{theme.reset}"
        body = [f"{side} {line} {side}" for line in lines]
        return [top, *body, bottom]
    blank = " " * (inner_width + BORDER_COLS + PADDING_COLS)
    return [blank, *[f"  {line}  " for line in lines], blank]


def render_columns(navigator: CascadingNavigator, width: int, height: int, theme: UITheme) -> list[str]:
    """Return the joined rows of all three columns (without footer)."""
    geometry = column_geometry(width, height)
    framed: list[list[str]] = []
    for column, view in zip(Column, navigator.views):
        inner_width = geometry.inner_width(column)
        lines = view.render(inner_width, geometry.inner_height, theme)
        framed.append(_frame_column(lines, inner_width, navigator.focus == column, theme))
    rows = max(len(column_rows) for column_rows in framed)
    return ["".join(column_rows[row] for column_rows in framed) for row in range(rows)]


def render_dashboard(navigator: CascadingNavigator, width: int, height: int, theme: UITheme) -> str:
    """Render one full frame as a string ready to write after a cursor-home."""
    rows = render_columns(navigator, width, height, theme)
    rows.append(footer_line(theme, filter_editing=navigator.focused_view.filter_editing))
    return "\r\n".join(fit_ansi_line(row, width) + theme.reset for row in rows[:height])


def render_loading(frame: int, message: str, theme: UITheme) -> str:
    spinner = SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]
    return f"\n\n   {theme.spinner}{spinner}{theme.reset} {sanitize_terminal_text(message)}\n\n"


__all__ = [
    "ColumnGeometry",
    "column_geometry",
    "render_columns",
    "render_dashboard",
    "render_loading",
]
