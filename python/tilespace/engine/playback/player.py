"""Forward/back/reset playback of solutions and stepwise searches."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from enum import StrEnum
from typing import Callable, Iterable

from tilespace.engine.search.stepwise import SearchStepResult, StepwiseSearchBase
from tilespace.engine.session.puzzle import Puzzle
from tilespace.errors import InvalidOperationError
from tilespace.models.events import Subject
from tilespace.models.state import Direction, PuzzleState

logger = logging.getLogger(__name__)


class PlayerState(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


class PlayerBase(ABC):
    """Idle/Playing/Paused/Completed machine around three hooks.

    Subclasses say whether they can move forward or back and what a step
    in each direction does; the transitions themselves live here.
    """

    def __init__(self) -> None:
        self._player_state = PlayerState.IDLE
        self._state_changed: Subject[PlayerState] = Subject()

    @property
    def current_state(self) -> PlayerState:
        return self._player_state

    def subscribe(self, callback: Callable[[PlayerState], None]) -> Callable[[], None]:
        """Notify *callback* on every player-state transition."""
        return self._state_changed.subscribe(callback)

    def _set_state(self, state: PlayerState) -> None:
        if state is self._player_state:
            return
        logger.debug("%s: %s -> %s", type(self).__name__, self._player_state, state)
        self._player_state = state
        self._state_changed.emit(state)

    @property
    @abstractmethod
    def can_step_forward(self) -> bool: ...

    @property
    @abstractmethod
    def can_step_back(self) -> bool: ...

    @abstractmethod
    def _advance(self) -> None: ...

    @abstractmethod
    def _retreat(self) -> None: ...

    @abstractmethod
    def _reset(self) -> None: ...

    # -- transitions ----------------------------------------------------------

    def play(self) -> None:
        if self._player_state is PlayerState.PAUSED:
            self._set_state(PlayerState.PLAYING)

    def pause(self) -> None:
        if self._player_state is PlayerState.PLAYING:
            self._set_state(PlayerState.PAUSED)

    def step_forward(self) -> None:
        if not self.can_step_forward:
            return
        self._advance()
        if not self.can_step_forward:
            self._set_state(PlayerState.COMPLETED)

    def step_back(self) -> None:
        if not self.can_step_back:
            return
        self._retreat()
        if self._player_state is PlayerState.COMPLETED:
            self._set_state(PlayerState.PAUSED)

    def reset(self) -> None:
        self._reset()
        self._set_state(PlayerState.IDLE)


class SolutionPlayer(PlayerBase):
    """Replays a move list through a :class:`Puzzle`.

    Moves not played yet wait in a queue; played ones live in the puzzle's
    undo history, so stepping back and forth again replays redo entries
    before taking anything new from the queue.
    """

    def __init__(self, initial_state: PuzzleState) -> None:
        super().__init__()
        self._initial_state = initial_state
        self._puzzle = Puzzle(initial_state)
        self._pending: deque[Direction] = deque()

    @property
    def state(self) -> PuzzleState:
        return self._puzzle.state

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def remaining_moves(self) -> int:
        return len(self._pending)

    def subscribe_state(self, callback: Callable[[PuzzleState], None]) -> Callable[[], None]:
        """Notify *callback* whenever the replayed puzzle state changes."""
        return self._puzzle.subscribe(callback)

    def set_solution(self, moves: Iterable[Direction]) -> None:
        """Queue *moves* for playback and start playing."""
        self._pending = deque(moves)
        self._set_state(PlayerState.PLAYING)

    @property
    def can_step_forward(self) -> bool:
        return self._puzzle.has_redo or bool(self._pending)

    @property
    def can_step_back(self) -> bool:
        return self._puzzle.has_undo

    def _advance(self) -> None:
        if self._puzzle.has_redo:
            self._puzzle.redo()
            return
        direction = self._pending.popleft()
        if not self._puzzle.try_move(direction):
            raise InvalidOperationError(
                f"Solution move {direction.value} is illegal from\n{self._puzzle.state}"
            )

    def _retreat(self) -> None:
        self._puzzle.undo()

    def _reset(self) -> None:
        self._puzzle.set_state(self._initial_state)
        self._pending.clear()


class SearchProcessPlayer(PlayerBase):
    """Drives a stepwise search one expansion per forward step.

    Stepping back is not supported: undoing an expansion would need a
    snapshot of the whole frontier per step.
    """

    def __init__(
        self,
        algorithm: StepwiseSearchBase,
        start: PuzzleState | Puzzle,
        goal: PuzzleState | None = None,
    ) -> None:
        super().__init__()
        self._algorithm = algorithm
        self._start = start
        self._goal = goal
        self._algorithm.initialize(start, goal)
        self._set_state(PlayerState.PLAYING)

    @property
    def algorithm(self) -> StepwiseSearchBase:
        return self._algorithm

    def subscribe_steps(self, callback: Callable[[SearchStepResult], None]) -> Callable[[], None]:
        return self._algorithm.subscribe(callback)

    @property
    def can_step_forward(self) -> bool:
        return not self._algorithm.is_completed

    @property
    def can_step_back(self) -> bool:
        return False

    def _advance(self) -> None:
        self._algorithm.step()

    def _retreat(self) -> None:
        raise InvalidOperationError("A search expansion cannot be stepped back.")

    def _reset(self) -> None:
        self._algorithm.reset()
        self._algorithm.initialize(self._start, self._goal)
