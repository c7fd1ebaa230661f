"""UI theme definitions and selection helpers.

Themes are ANSI palettes for column chrome, list rows, the loading screen
and the key-hint footer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    focused_border: str
    column_title: str
    item_title: str
    item_description: str
    selected_marker: str
    selected_title: str
    selected_description: str
    filter_prompt: str
    filter_query: str
    empty_text: str
    spinner: str
    footer_key: str
    footer_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    focused_border="\033[38;5;62m",
    column_title="\033[1;38;5;230;48;5;62m",
    item_title="\033[38;5;252m",
    item_description="\033[38;5;243m",
    selected_marker="\033[38;5;170m",
    selected_title="\033[38;5;170m",
    selected_description="\033[38;5;168m",
    filter_prompt="\033[38;5;205m",
    filter_query="\033[1;38;5;81m",
    empty_text="\033[2;38;5;250m",
    spinner="\033[38;5;205m",
    footer_key="\033[38;5;229m",
    footer_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    focused_border="\033[38;5;39m",
    column_title="\033[1;38;5;231;48;5;31m",
    item_title="\033[38;5;252m",
    item_description="\033[38;5;73m",
    selected_marker="\033[38;5;45m",
    selected_title="\033[1;38;5;45m",
    selected_description="\033[38;5;117m",
    filter_prompt="\033[38;5;39m",
    filter_query="\033[1;38;5;45m",
    empty_text="\033[2;38;5;110m",
    spinner="\033[38;5;45m",
    footer_key="\033[38;5;153m",
    footer_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    focused_border="",
    column_title="",
    item_title="",
    item_description="",
    selected_marker="",
    selected_title="",
    selected_description="",
    filter_prompt="",
    filter_query="",
    empty_text="",
    spinner="",
    footer_key="",
    footer_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
