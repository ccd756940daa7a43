"""Breadth-first search."""

from __future__ import annotations

from tilespace.engine.search.base import SearchAlgorithmBase
from tilespace.engine.search.frontier import FifoFrontier
from tilespace.models.state import Direction


class BreadthFirstSearch(SearchAlgorithmBase):
    """FIFO frontier; every node's depth is its shortest distance from the root."""

    name = "bfs"
    frontier_type = FifoFrontier
    expansion_order = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)
