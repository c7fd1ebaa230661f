"""Read-only JSON config with user defaults for CLI options.

All access is defensive: a missing or malformed file, or a value of the wrong
type, falls back to the built-in default. The program never writes the file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .hierarchy import DEFAULT_BRANCH_LIMIT

APP_NAME = "lazyrepos"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class UserDefaults:
    """Option defaults resolved from config before CLI flags are applied."""

    commit_limit: int | None = None
    branch_limit: int = DEFAULT_BRANCH_LIMIT
    recursive: bool = False
    theme: str | None = None


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _positive_int_or_none(value: object) -> int | None:
    """Accept strictly positive ints; booleans and everything else are invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_user_defaults() -> UserDefaults:
    data = load_config()
    branch_limit = _positive_int_or_none(data.get("branch_limit"))
    recursive = data.get("recursive")
    theme = data.get("theme")
    return UserDefaults(
        commit_limit=_positive_int_or_none(data.get("commit_limit")),
        branch_limit=branch_limit if branch_limit is not None else DEFAULT_BRANCH_LIMIT,
        recursive=recursive if isinstance(recursive, bool) else False,
        theme=theme.strip() if isinstance(theme, str) and theme.strip() else None,
    )
