"""ANSI-aware text measurement and line shaping utilities.

Clipping and padding preserve escape sequences so colored rows stay aligned
inside fixed-width columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return rendered width of ``text`` ignoring ANSI escapes."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    # Keep trailing escapes (usually a reset) that follow the clipped text.
    while i < n and text[i] == "\x1b":
        match = ANSI_ESCAPE_RE.match(text, i)
        if not match:
            break
        out.append(match.group(0))
        i = match.end()

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes in repository-derived text before it is drawn.

    Commit subjects, branch names and directory names may carry escape
    sequences; they are shown as ``\\xNN`` so they neither act on the terminal
    nor shift column widths. Tabs are kept for ``clip_ansi_line`` to expand.
    """
    if _CONTROL_RE.search(text) is None:
        return text
    out: list[str] = []
    for ch in text:
        code = ord(ch)
        # C0 controls (except tab), DEL and C1 controls.
        if ch != "\t" and (code < 32 or code == 127 or 0x80 <= code <= 0x9F):
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)
