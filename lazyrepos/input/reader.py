"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing for arrows, paging and home/end keys.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}
_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}
_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    lead = first[0]
    if lead >= 0xF0:
        remaining = 3
    elif lead >= 0xE0:
        remaining = 2
    elif lead >= 0xC0:
        remaining = 1
    else:
        remaining = 0
    data = first
    for _ in range(remaining):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; return ``""`` on timeout or EOF."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    introducer = seq
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    final = _CSI_FINAL_KEYS.get(seq)
    if final is not None:
        return final
    if introducer == b"[" and seq in _CSI_TILDE_KEYS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _CSI_TILDE_KEYS[seq]
    return "ESC"
