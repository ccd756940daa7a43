"""Key-to-action mapping for the interactive commands."""

from __future__ import annotations

import pytest

from tilespace_cli.input_handler import _decode_escape, resolve


@pytest.mark.parametrize(
    "ch, action",
    [
        ("w", "up"),
        ("D", "right"),
        ("z", "undo"),
        ("Y", "redo"),
        (" ", "toggle"),
        ("<", "back"),
        ("\r", "enter"),
        ("\x03", "quit"),
        ("k", "k"),
        ("\x07", ""),
    ],
    ids=["w", "shift-d", "z", "shift-y", "space", "lt", "return", "ctrl-c", "unmapped", "bell"],
)
def test_resolve(ch: str, action: str) -> None:
    assert resolve(ch) == action, f"{ch!r} should map to {action!r}"


@pytest.mark.parametrize(
    "tail, action",
    [("[A", "up"), ("[B", "down"), ("[C", "right"), ("[D", "left"), ("[Z", ""), ("[", ""), ("", "quit"), ("x", "quit")],
    ids=["up", "down", "right", "left", "unknown", "truncated", "bare-esc", "alt-x"],
)
def test_escape_sequences(tail: str, action: str) -> None:
    chars = iter(tail)
    assert _decode_escape(lambda: next(chars, None)) == action
