"""Bulk search over the puzzle's state space."""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC
from enum import StrEnum
from typing import ClassVar

from tilespace.engine.search.frontier import Frontier
from tilespace.engine.search.graph import (
    Heuristic,
    as_state,
    create_root_node,
    discover,
)
from tilespace.engine.session.puzzle import Puzzle
from tilespace.models.node import ExplorationGraph
from tilespace.models.progress import SearchProgress
from tilespace.models.state import Direction, PuzzleState

logger = logging.getLogger(__name__)


class SearchOutcome(StrEnum):
    COMPLETED = "completed"
    NO_PATH = "no_path"
    CANCELLED = "cancelled"


class SearchAlgorithmBase(ABC):
    """Builds an exploration graph from a start state.

    Subclasses choose only the frontier discipline (``frontier_type``) and
    the fixed order in which the four blank moves are tried
    (``expansion_order``). That order decides which state becomes the
    parent when several could discover the same node, so it is part of the
    algorithm's contract.

    With a goal, the run stops as soon as the goal is discovered or popped;
    if it is never found the graph is emptied. Without a goal the whole
    reachability class of the start state is explored.
    """

    name: ClassVar[str]
    frontier_type: ClassVar[type[Frontier]]
    expansion_order: ClassVar[tuple[Direction, ...]]

    def __init__(self) -> None:
        self._graph: ExplorationGraph = {}

    def get_result(self) -> ExplorationGraph:
        """The graph from the most recent finished run."""
        return self._graph

    def _heuristic(self, goal: PuzzleState) -> Heuristic | None:
        return None

    # -- entry points ---------------------------------------------------------

    def search(
        self, start: PuzzleState | Puzzle, goal: PuzzleState | None = None
    ) -> SearchOutcome:
        self._graph = {}
        self._graph, outcome = self._run(as_state(start), goal)
        return outcome

    async def search_async(
        self,
        start: PuzzleState | Puzzle,
        goal: PuzzleState | None = None,
        progress: SearchProgress | None = None,
        cancel_event: threading.Event | None = None,
    ) -> SearchOutcome:
        """Run :meth:`search` on a worker thread.

        The graph is only published on this object once the worker has
        finished. *progress* is incremented once per popped state, from
        the worker thread. Setting *cancel_event* (or cancelling the
        awaiting task) stops the run at the next pop and discards the
        partial graph.
        """
        cancel_event = cancel_event or threading.Event()
        self._graph = {}
        state = as_state(start)
        try:
            graph, outcome = await asyncio.to_thread(
                self._run, state, goal, progress, cancel_event
            )
        except asyncio.CancelledError:
            cancel_event.set()
            raise
        self._graph = graph
        return outcome

    # -- main loop ------------------------------------------------------------

    def _run(
        self,
        start: PuzzleState,
        goal: PuzzleState | None,
        progress: SearchProgress | None = None,
        cancel_event: threading.Event | None = None,
    ) -> tuple[ExplorationGraph, SearchOutcome]:
        logger.info(
            "%s search started (goal=%s)",
            self.name,
            "none" if goal is None else list(goal.values),
        )
        if goal is not None and goal.size != start.size:
            logger.info(
                "%s search: goal is %dx%d but start is %dx%d, no path",
                self.name, goal.size, goal.size, start.size, start.size,
            )
            return {}, SearchOutcome.NO_PATH
        heuristic = self._heuristic(goal) if goal is not None else None
        graph: ExplorationGraph = {}
        frontier = self.frontier_type()

        root = create_root_node(start, heuristic)
        graph[start] = root
        frontier.push(start, root)

        found = False
        while frontier:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("%s search cancelled after %d states", self.name, len(graph))
                return {}, SearchOutcome.CANCELLED

            current = frontier.pop()
            if progress is not None:
                progress.increment()

            if goal is not None and current == goal:
                found = True
                break
            if self._expand(graph, frontier, current, goal, heuristic):
                found = True
                break

        if goal is not None and not found:
            logger.info(
                "%s search exhausted %d states without reaching the goal",
                self.name,
                len(graph),
            )
            return {}, SearchOutcome.NO_PATH

        logger.info("%s search finished: %d states", self.name, len(graph))
        return graph, SearchOutcome.COMPLETED

    def _expand(
        self,
        graph: ExplorationGraph,
        frontier: Frontier,
        current: PuzzleState,
        goal: PuzzleState | None,
        heuristic: Heuristic | None,
    ) -> bool:
        """Try every move from *current*; True if the goal was just discovered."""
        for direction in self.expansion_order:
            neighbour = current.moved(direction)
            if neighbour is None:
                continue
            node = discover(graph, current, neighbour, heuristic)
            if node is None:
                continue
            if goal is not None and neighbour == goal:
                return True
            frontier.push(neighbour, node)
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(states={len(self._graph)})"
