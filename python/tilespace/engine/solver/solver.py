"""Sliding puzzle solver built on the exploration engine."""

from __future__ import annotations

import logging

from tilespace.engine.generator.generator import StateGenerator
from tilespace.engine.search.astar import AStarSearch
from tilespace.engine.search.base import SearchAlgorithmBase, SearchOutcome
from tilespace.engine.search.bfs import BreadthFirstSearch
from tilespace.engine.search.dfs import DepthFirstSearch
from tilespace.engine.search.path import reconstruct_path
from tilespace.engine.search.stepwise import StepwiseBFS, StepwiseDFS, StepwiseSearchBase
from tilespace.models.state import Direction, PuzzleState

logger = logging.getLogger(__name__)

ALGORITHMS: dict[str, type[SearchAlgorithmBase]] = {
    AStarSearch.name: AStarSearch,
    BreadthFirstSearch.name: BreadthFirstSearch,
    DepthFirstSearch.name: DepthFirstSearch,
}

STEPWISE_ALGORITHMS: dict[str, type[StepwiseSearchBase]] = {
    StepwiseBFS.name: StepwiseBFS,
    StepwiseDFS.name: StepwiseDFS,
}


def create_algorithm(name: str) -> SearchAlgorithmBase:
    """Instantiate a bulk search by its registry name (``astar``, ``bfs``, ``dfs``)."""
    try:
        return ALGORITHMS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown algorithm {name!r}; choose from {', '.join(ALGORITHMS)}."
        ) from None


def create_stepwise_algorithm(name: str) -> StepwiseSearchBase:
    try:
        return STEPWISE_ALGORITHMS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown stepwise algorithm {name!r}; "
            f"choose from {', '.join(STEPWISE_ALGORITHMS)}."
        ) from None


class Solver:
    """Static entry points for solving, hinting and solvability checks."""

    @staticmethod
    def solve(
        start: PuzzleState,
        goal: PuzzleState | None = None,
        algorithm: str = "astar",
    ) -> list[Direction]:
        """Return a move sequence from *start* to *goal*, or ``[]`` if unsolvable.

        *goal* defaults to the classic solved layout for the start's size.
        Only ``"bfs"`` guarantees the shortest sequence; the default
        ``"astar"`` trades that for speed (see :class:`AStarSearch`).
        """
        goal = goal or StateGenerator.solved(start.size)
        if start == goal:
            return []

        if not Solver.is_solvable(start, goal):
            logger.info("Start and goal are in different reachability classes")
            return []

        search = create_algorithm(algorithm)
        if search.search(start, goal) is not SearchOutcome.COMPLETED:
            return []
        return reconstruct_path(search.get_result(), goal).moves

    @staticmethod
    def hint(
        start: PuzzleState,
        goal: PuzzleState | None = None,
        algorithm: str = "astar",
    ) -> Direction | None:
        """Return the single next move, or ``None`` if solved / unsolvable."""
        moves = Solver.solve(start, goal, algorithm)
        return moves[0] if moves else None

    @staticmethod
    def is_solvable(start: PuzzleState, goal: PuzzleState | None = None) -> bool:
        """Return True if *start* can reach *goal* by legal moves."""
        goal = goal or StateGenerator.solved(start.size)
        if start.size != goal.size:
            return False
        return start.reachability_class == goal.reachability_class
