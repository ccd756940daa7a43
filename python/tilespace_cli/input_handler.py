"""Raw keypress reading for the interactive commands.

Keys are turned into action names (``"undo"``, ``"toggle"``, ...) so the
loops in :mod:`tilespace_cli.app` never see terminal escape codes.
"""

from __future__ import annotations

import os
import sys
from typing import Callable


# -- key tables -----------------------------------------------------------------

_BINDINGS: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "r": "restart",
    "u": "undo",
    "z": "undo",
    "y": "redo",
    "n": "hint",
    "v": "solve",
}

KEY_MAP: dict[str, str] = {
    **_BINDINGS,
    **{key.upper(): action for key, action in _BINDINGS.items()},
    " ": "toggle",
    ".": "forward",
    ">": "forward",
    ",": "back",
    "<": "back",
    "\r": "enter",
    "\n": "enter",
    "\x03": "quit",
}

# Final byte of the ``ESC [ x`` cursor sequences.
_ARROW_MAP: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def resolve(ch: str) -> str:
    """Action for a single character; unmapped printables pass through."""
    return KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an escape sequence after ``ESC`` was read.

    *read_next* returns the next character, or ``None`` when nothing
    follows. A lone ``ESC`` quits.
    """
    ch = read_next()
    if ch != "[":
        return "quit"
    final = read_next()
    return _ARROW_MAP.get(final, "") if final else ""


# -- blocking read ----------------------------------------------------------------


def _read_char() -> str:
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]

        return msvcrt.getch().decode("utf-8", errors="ignore")

    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def get_key() -> str:
    """Block until a key is pressed and return its action name."""
    ch = _read_char()
    if ch == "\x1b":
        return _decode_escape(_read_char)
    return resolve(ch)


# -- polling read -----------------------------------------------------------------


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but ``None`` if nothing arrives within *timeout*."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def read_within(seconds: float) -> str | None:
        # os.read bypasses sys.stdin's buffer, which select() cannot see.
        ready, _, _ = select.select([fd], [], [], seconds)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = read_within(timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: read_within(0.1))
        return resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
