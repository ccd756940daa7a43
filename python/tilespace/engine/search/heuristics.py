"""Distance estimates used by best-first search."""

from __future__ import annotations

from typing import Callable

from tilespace.models.state import EMPTY, PuzzleState


def manhattan_distance(state: PuzzleState, goal: PuzzleState) -> int:
    """Sum over non-blank tiles of the grid distance to their goal cell."""
    return manhattan_heuristic(goal)(state)


def manhattan_heuristic(goal: PuzzleState) -> Callable[[PuzzleState], int]:
    """Return a Manhattan-distance function with *goal*'s tile positions cached.

    Never overestimates: each move shifts exactly one tile by one cell.
    """
    n = goal.size
    goal_rc: dict[int, tuple[int, int]] = {
        v: divmod(i, n) for i, v in enumerate(goal.values)
    }

    def heuristic(state: PuzzleState) -> int:
        distance = 0
        for index, value in enumerate(state.values):
            if value == EMPTY:
                continue
            row, col = divmod(index, n)
            goal_row, goal_col = goal_rc[value]
            distance += abs(row - goal_row) + abs(col - goal_col)
        return distance

    return heuristic
