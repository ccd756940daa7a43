"""Depth-first search."""

from __future__ import annotations

from tilespace.engine.search.base import SearchAlgorithmBase
from tilespace.engine.search.frontier import LifoFrontier
from tilespace.models.state import Direction


class DepthFirstSearch(SearchAlgorithmBase):
    """LIFO frontier. Depth is the length of the probe path, not the shortest one.

    Moves are pushed in reverse of the breadth-first order so they pop as
    right, up, left, down.
    """

    name = "dfs"
    frontier_type = LifoFrontier
    expansion_order = (Direction.DOWN, Direction.LEFT, Direction.UP, Direction.RIGHT)
