"""Key-hint footer content."""

from __future__ import annotations

from ..ui_theme import UITheme

FOOTER_HINTS: tuple[tuple[str, str], ...] = (
    ("←/h →/l", "column"),
    ("↑/↓", "select"),
    ("j/k", "move"),
    ("space/b", "page"),
    ("g/G", "first/last"),
    ("/", "filter"),
    ("esc", "clear filter"),
    ("q", "quit"),
)

FILTER_FOOTER_HINTS: tuple[tuple[str, str], ...] = (
    ("type", "filter"),
    ("enter", "accept"),
    ("esc", "clear"),
    ("↑/↓", "select"),
    ("ctrl+c", "quit"),
)


def footer_line(theme: UITheme, filter_editing: bool = False) -> str:
    """Return the styled one-line key-hint footer."""
    hints = FILTER_FOOTER_HINTS if filter_editing else FOOTER_HINTS
    return "  ".join(
        f"{theme.footer_key}{keys}{theme.reset} {theme.footer_dim}{label}{theme.reset}"
        for keys, label in hints
    )
