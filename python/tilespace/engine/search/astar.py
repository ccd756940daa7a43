"""A* (best-first) search with the Manhattan-distance heuristic."""

from __future__ import annotations

from tilespace.engine.search.base import SearchAlgorithmBase
from tilespace.engine.search.frontier import PriorityFrontier
from tilespace.engine.search.graph import Heuristic
from tilespace.engine.search.heuristics import manhattan_heuristic
from tilespace.models.state import Direction, PuzzleState


class AStarSearch(SearchAlgorithmBase):
    """Pops the lowest ``depth + h_cost`` first.

    Without a goal every ``h_cost`` is 0 and the run degrades to a
    uniform-cost sweep of the whole reachability class.

    The run stops as soon as the goal is discovered, and a state keeps the
    depth it was first reached at, so the path is valid but not always
    the shortest. Use :class:`BreadthFirstSearch` when length matters.
    """

    name = "astar"
    frontier_type = PriorityFrontier
    expansion_order = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)

    def _heuristic(self, goal: PuzzleState) -> Heuristic | None:
        return manhattan_heuristic(goal)
