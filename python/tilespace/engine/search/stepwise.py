"""Search that expands one state per call, for incremental visualization."""

from __future__ import annotations

import logging
from abc import ABC
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, ClassVar

from tilespace.engine.search.frontier import FifoFrontier, Frontier, LifoFrontier
from tilespace.engine.search.graph import as_state, create_root_node, discover
from tilespace.engine.session.puzzle import Puzzle
from tilespace.errors import InvalidOperationError
from tilespace.models.events import Subject
from tilespace.models.node import ExplorationGraph, NodeData
from tilespace.models.state import Direction, PuzzleState

logger = logging.getLogger(__name__)


class StepwiseState(StrEnum):
    NOT_INITIALIZED = "not_initialized"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SearchStepResult:
    """The state expanded by one :meth:`StepwiseSearchBase.step` call."""

    expanded_state: PuzzleState
    node_data: NodeData


class StepwiseSearchBase(ABC):
    """Resumable search: ``initialize`` once, then ``step`` until completed.

    Discovery follows the same rules as the bulk searches (first
    discoverer keeps parentage, edges recorded on both ends), but the
    goal only ends the run when it is popped, not when it is discovered.
    """

    name: ClassVar[str]
    frontier_type: ClassVar[type[Frontier]]
    expansion_order: ClassVar[tuple[Direction, ...]]

    def __init__(self) -> None:
        self._graph: ExplorationGraph = {}
        self._frontier: Frontier = self.frontier_type()
        self._goal: PuzzleState | None = None
        self._state = StepwiseState.NOT_INITIALIZED
        self._steps: Subject[SearchStepResult] = Subject()

    # -- queries --------------------------------------------------------------

    @property
    def state(self) -> StepwiseState:
        return self._state

    @property
    def is_completed(self) -> bool:
        return self._state is StepwiseState.COMPLETED

    @property
    def goal(self) -> PuzzleState | None:
        return self._goal

    @property
    def pending(self) -> int:
        """Number of states waiting in the frontier."""
        return len(self._frontier)

    def get_result(self) -> ExplorationGraph:
        return self._graph

    def subscribe(self, callback: Callable[[SearchStepResult], None]) -> Callable[[], None]:
        """Push every step result to *callback*."""
        return self._steps.subscribe(callback)

    # -- protocol -------------------------------------------------------------

    def initialize(
        self, start: PuzzleState | Puzzle, goal: PuzzleState | None = None
    ) -> None:
        """Seed the frontier with *start*.

        A goal of another grid size is never popped, so the run sweeps the
        start's whole class like any other unreachable goal.
        """
        start = as_state(start)
        self._graph = {}
        self._frontier.clear()
        self._goal = goal
        self._state = StepwiseState.RUNNING

        root = create_root_node(start)
        self._graph[start] = root
        self._frontier.push(start, root)
        logger.debug("%s initialized", self.name)

    def step(self) -> SearchStepResult:
        """Pop and expand exactly one state.

        Raises ``InvalidOperationError`` unless the search is running.
        """
        if self._state is not StepwiseState.RUNNING:
            raise InvalidOperationError(
                f"Cannot step a {self.name} search that is {self._state.value}."
            )

        current = self._frontier.pop()
        node = self._graph[current]

        if self._goal is not None and current == self._goal:
            self._state = StepwiseState.COMPLETED
            logger.info("%s reached the goal at depth %d", self.name, node.depth)
        else:
            for direction in self.expansion_order:
                neighbour = current.moved(direction)
                if neighbour is None:
                    continue
                child = discover(self._graph, current, neighbour)
                if child is not None:
                    self._frontier.push(neighbour, child)
            if not self._frontier:
                self._state = StepwiseState.COMPLETED
                logger.info("%s exhausted after %d states", self.name, len(self._graph))

        result = SearchStepResult(current, node)
        self._steps.emit(result)
        return result

    def reset(self) -> None:
        """Back to the uninitialized state; :meth:`initialize` is required again."""
        self._graph = {}
        self._frontier.clear()
        self._goal = None
        self._state = StepwiseState.NOT_INITIALIZED


class StepwiseBFS(StepwiseSearchBase):
    name = "bfs"
    frontier_type = FifoFrontier
    expansion_order = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)


class StepwiseDFS(StepwiseSearchBase):
    # Pushed in reverse so they pop as right, up, left, down.
    name = "dfs"
    frontier_type = LifoFrontier
    expansion_order = (Direction.DOWN, Direction.LEFT, Direction.UP, Direction.RIGHT)
