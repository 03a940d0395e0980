"""Single-keypress reader for the terminal frontends.

Arrow keys and WASD move the card cursor; Space/Enter flip.  Works on
macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "l": "scores",
    " ": "flip",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

# msvcrt reports arrows as a 0xE0 / 0x00 prefix plus a scan code.
_WIN_ARROW_MAP: dict[str, str] = {
    "H": "up",
    "P": "down",
    "M": "right",
    "K": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- platform readers ----------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WIN_ARROW_MAP.get(msvcrt.getwch(), "")
    if ch == "\x1b":
        return "quit"
    return _resolve(ch)


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def _pending(wait: float | None) -> bool:
        ready, _, _ = select.select([fd], [], [], wait)
        return bool(ready)

    def _byte() -> str:
        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        if not _pending(timeout):
            return None
        ch = _byte()
        if ch != "\x1b":
            return _resolve(ch)
        if not _pending(0.05) or _byte() != "[":
            return "quit"  # bare Escape
        if not _pending(0.05):
            return ""
        return _ARROW_MAP.get(_byte(), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Possible return values:
        "up", "down", "left", "right"  — cursor movement
        "flip"                         — Space
        "enter"                        — Enter / Return
        "quit"                         — q / Ctrl-C / Escape
        "restart"                      — r
        "scores"                       — l
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    key = _read(None)
    assert key is not None
    return key


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but return ``None`` after *timeout* seconds."""
    return _read(timeout)


def read_line(prompt: str) -> str:
    """Read a whole line in cooked mode (used for name entry)."""
    try:
        return input(prompt)
    except EOFError:
        return ""
