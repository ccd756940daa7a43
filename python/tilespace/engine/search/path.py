"""Turn an exploration graph into a root-to-goal move list."""

from __future__ import annotations

from dataclasses import dataclass, field

from tilespace.errors import NoPathFoundError
from tilespace.models.node import ExplorationGraph
from tilespace.models.state import Direction, PuzzleState


@dataclass
class SolutionPath:
    """``moves[i]`` leads from ``states[i]`` to ``states[i + 1]``."""

    moves: list[Direction] = field(default_factory=list)
    states: list[PuzzleState] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.moves)


def reconstruct_path(graph: ExplorationGraph, goal: PuzzleState) -> SolutionPath:
    """Follow parent links from *goal* back to the root.

    Raises ``NoPathFoundError`` if *goal* was never discovered.
    """
    if goal not in graph:
        raise NoPathFoundError("Goal state is not part of the exploration graph.")

    moves: list[Direction] = []
    states = [goal]
    current = goal
    parent = graph[current].parent
    while parent is not None:
        moves.append(parent.move_direction_to(current))
        states.append(parent)
        current = parent
        parent = graph[current].parent

    moves.reverse()
    states.reverse()
    return SolutionPath(moves=moves, states=states)
