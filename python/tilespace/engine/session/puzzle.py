"""Mutable puzzle session with reversible, command-driven moves."""

from __future__ import annotations

import logging
from typing import Callable

from tilespace.engine.session.history import (
    DEFAULT_HISTORY_LIMIT,
    CommandHistory,
    MoveCommand,
)
from tilespace.models.events import Subject
from tilespace.models.state import Direction, GridPosition, PuzzleState

logger = logging.getLogger(__name__)


class Puzzle:
    """Holds the current :class:`PuzzleState` and its undo/redo history.

    The state can only change through :meth:`try_move`, :meth:`undo`,
    :meth:`redo` or :meth:`set_state`; every change is pushed to
    subscribers.
    """

    def __init__(
        self, state: PuzzleState, history_limit: int = DEFAULT_HISTORY_LIMIT
    ) -> None:
        self._state = state
        self._history = CommandHistory(history_limit)
        self._changed: Subject[PuzzleState] = Subject()

    # -- state ----------------------------------------------------------------

    @property
    def state(self) -> PuzzleState:
        return self._state

    @property
    def size(self) -> int:
        return self._state.size

    @property
    def empty_position(self) -> GridPosition:
        return self._state.empty_position

    def __getitem__(self, position: tuple[int, int]) -> int:
        return self._state[position]

    def subscribe(self, callback: Callable[[PuzzleState], None]) -> Callable[[], None]:
        """Call *callback* with the new state after every change."""
        return self._changed.subscribe(callback)

    def set_state(self, state: PuzzleState) -> None:
        """Jump to *state* directly; history is cleared since it no longer applies."""
        self._history.clear()
        self._apply(state)

    def _apply(self, state: PuzzleState) -> None:
        self._state = state
        self._changed.emit(state)

    # -- movement (direction = where the *blank* moves) -----------------------

    def try_move(self, direction: Direction) -> bool:
        """Slide the blank one cell in *direction*.

        Returns True if the move was legal and applied. An illegal move
        leaves both state and history untouched.
        """
        after = self._state.moved(direction)
        if after is None:
            return False
        self._history.execute(MoveCommand(direction, self._state, after), self)
        return True

    def move_tile(self, row: int, col: int) -> bool:
        """Move the tile at (row, col) into the adjacent blank."""
        direction = Direction.from_vector(GridPosition(row, col) - self.empty_position)
        if direction is None:
            return False
        return self.try_move(direction)

    # -- history --------------------------------------------------------------

    @property
    def has_undo(self) -> bool:
        return self._history.has_undo

    @property
    def has_redo(self) -> bool:
        return self._history.has_redo

    def undo(self) -> bool:
        """Revert the last move. Returns False when there is nothing to undo."""
        if self._history.undo(self) is None:
            logger.debug("Nothing to undo")
            return False
        return True

    def redo(self) -> bool:
        """Re-apply the last undone move. Returns False when there is nothing to redo."""
        if self._history.redo(self) is None:
            logger.debug("Nothing to redo")
            return False
        return True

    def visited_route(self) -> list[PuzzleState]:
        """States reached through the undo history, ending at the current one."""
        return self._history.visited_states() + [self._state]

    # -- helpers --------------------------------------------------------------

    def clone(self) -> Puzzle:
        """Independent session at the current state, with empty history."""
        return Puzzle(self._state, self._history.limit)

    def __repr__(self) -> str:
        return f"Puzzle({self._state!r}, undo={len(self._history)})"
