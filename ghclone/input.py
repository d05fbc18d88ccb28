"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, modifier and alt combos, and multi-byte UTF-8
text.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []
# Escape sequences that map to no key. Callers treat it like a timeout.
UNKNOWN_KEY = ""

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x01": "CTRL_A",
    b"\x02": "CTRL_B",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x05": "CTRL_E",
    b"\x06": "CTRL_F",
    b"\x0b": "CTRL_K",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "SHIFT_TAB",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"3": "DELETE",
    b"5": "PGUP",
    b"6": "PGDN",
}

_ALT_WORD_KEYS: dict[bytes, str] = {
    b"b": "ALT_LEFT",
    b"B": "ALT_LEFT",
    b"f": "ALT_RIGHT",
    b"F": "ALT_RIGHT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_text(fd: int, first: bytes) -> str:
    """Decode one character, pulling UTF-8 continuation bytes as needed."""
    data = first
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Decode the rest of an ``ESC [`` sequence.

    Modifier parameters (``1;5C`` for ctrl+right) do not change the base key.
    Sequences with no meaning here (function keys, mouse reports) decode to
    ``UNKNOWN_KEY`` after their bytes are consumed.
    """
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        if 0x40 <= part[0] <= 0x7E:
            break
        params += part
    if part == b"~":
        return _CSI_TILDE_KEYS.get(params.split(b";")[0], UNKNOWN_KEY)
    return _CSI_FINAL_KEYS.get(part, UNKNOWN_KEY)


def _read_alt(fd: int, seq: bytes) -> str:
    """Decode ``ESC`` followed by one more key as an alt/meta combination."""
    if seq in _ALT_WORD_KEYS:
        return _ALT_WORD_KEYS[seq]
    if seq in {b"\x7f", b"\x08"}:
        return "ALT_BACKSPACE"
    if seq[0] < 0x20:
        return UNKNOWN_KEY
    return f"ALT_{_read_text(fd, seq)}"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses first.

    ``"ESC"`` is only returned for an escape press on its own. Escape
    sequences that decode to no known key return ``UNKNOWN_KEY``.
    """
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

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _read_text(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ALT_O"
        return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
    if seq == b"\x1b":
        # Two escape presses in a row.
        _PENDING_BYTES.append(seq)
        return "ESC"
    return _read_alt(fd, seq)


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "UNKNOWN_KEY", "read_key"]
