"""Reversible move commands and the bounded undo/redo history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tilespace.models.state import Direction, PuzzleState

if TYPE_CHECKING:
    from tilespace.engine.session.puzzle import Puzzle

DEFAULT_HISTORY_LIMIT = 1000


@dataclass(frozen=True)
class MoveCommand:
    """One blank move, holding both endpoints so it can be replayed or undone."""

    direction: Direction
    before: PuzzleState
    after: PuzzleState

    def execute(self, puzzle: Puzzle) -> None:
        puzzle._apply(self.after)

    def undo(self, puzzle: Puzzle) -> None:
        puzzle._apply(self.before)


class CommandHistory:
    """Two stacks of :class:`MoveCommand`.

    A new command clears the redo stack. The undo stack keeps at most
    *limit* commands; the oldest ones fall off first.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self._undo: deque[MoveCommand] = deque(maxlen=limit)
        self._redo: deque[MoveCommand] = deque(maxlen=limit)

    @property
    def has_undo(self) -> bool:
        return bool(self._undo)

    @property
    def has_redo(self) -> bool:
        return bool(self._redo)

    def execute(self, command: MoveCommand, puzzle: Puzzle) -> None:
        self._undo.append(command)
        self._redo.clear()
        command.execute(puzzle)

    def undo(self, puzzle: Puzzle) -> MoveCommand | None:
        if not self._undo:
            return None
        command = self._undo.pop()
        command.undo(puzzle)
        self._redo.append(command)
        return command

    def redo(self, puzzle: Puzzle) -> MoveCommand | None:
        if not self._redo:
            return None
        command = self._redo.pop()
        command.execute(puzzle)
        self._undo.append(command)
        return command

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def visited_states(self) -> list[PuzzleState]:
        """States left behind by the commands on the undo stack, oldest first."""
        return [command.before for command in self._undo]

    def __len__(self) -> int:
        return len(self._undo)
