"""Solver test suite: parametric scrambles replayed through a real session.

Boards are scrambled from the solved layout with fixed seeds. Every test
is hard-killed by ``pytest-timeout`` (configured in ``pyproject.toml``).
If the solver returns in time, the move list is replayed through
``Puzzle`` to verify it reaches the goal.
"""

from __future__ import annotations

import random

import pytest

from tilespace.engine.generator import GoalStateHolder, StateGenerator
from tilespace.engine.session import Puzzle
from tilespace.engine.solver import (
    ALGORITHMS,
    STEPWISE_ALGORITHMS,
    Solver,
    create_algorithm,
    create_stepwise_algorithm,
)
from tilespace.models.state import Direction, PuzzleState


# -- fixture builders ---------------------------------------------------------


def _cases(size: int, count: int, moves: int) -> list[dict]:
    solved = StateGenerator.solved(size)
    cases = []
    for seed in range(count):
        state = StateGenerator.scramble(solved, moves, random.Random(seed))
        cases.append({"id": f"{size}x{size}-{seed:02d}", "size": size, "tiles": list(state.values)})
    return cases


def _ids(case: dict) -> str:
    return case["id"]


_CASES_2x2 = _cases(2, 5, 30)
_CASES_3x3 = _cases(3, 10, 60)
_CASES_4x4 = _cases(4, 3, 12)


# -- helpers ------------------------------------------------------------------


def _assert_solve(case: dict, algorithm: str = "astar") -> None:
    """Solve the board and verify the returned moves reach the goal state."""
    start = PuzzleState.create(case["tiles"], case["size"])
    goal = StateGenerator.solved(case["size"])

    moves = Solver.solve(start, goal, algorithm)

    # ---- move-list sanity ---------------------------------------------------
    assert isinstance(moves, list), "solve() must return a list of Direction"
    if start != goal:
        assert len(moves) > 0, f"Solvable board returned 0 moves ({case['id']})"
    assert all(isinstance(m, Direction) for m in moves), "Every element must be a Direction"

    # ---- apply moves via the session and check the goal ---------------------
    puzzle = Puzzle(start, history_limit=max(1, len(moves)))
    for i, direction in enumerate(moves):
        ok = puzzle.try_move(direction)
        assert ok, (
            f"Move {i} ({direction.value}) was invalid at blank "
            f"{puzzle.empty_position}  ({case['id']})"
        )

    assert puzzle.state == goal, f"Board not solved after {len(moves)} moves ({case['id']})"


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("case", _CASES_2x2, ids=_ids)
@pytest.mark.parametrize("algorithm", sorted(ALGORITHMS))
def test_solve_2x2(case: dict, algorithm: str) -> None:
    _assert_solve(case, algorithm)


@pytest.mark.parametrize("case", _CASES_3x3, ids=_ids)
def test_solve_3x3(case: dict) -> None:
    _assert_solve(case)


@pytest.mark.parametrize("case", _CASES_3x3[:3], ids=_ids)
def test_solve_3x3_bfs(case: dict) -> None:
    _assert_solve(case, "bfs")


@pytest.mark.parametrize("case", _CASES_4x4, ids=_ids)
def test_solve_4x4(case: dict) -> None:
    _assert_solve(case)


@pytest.mark.parametrize("case", _CASES_3x3[:3], ids=_ids)
def test_astar_is_never_shorter_than_bfs(case: dict) -> None:
    start = PuzzleState.create(case["tiles"], case["size"])

    shortest = Solver.solve(start, algorithm="bfs")
    fast = Solver.solve(start)

    assert len(fast) >= len(shortest), f"BFS must give the shortest route ({case['id']})"
    _assert_solve(case, "astar")


def test_solve_solved_board_is_empty() -> None:
    assert Solver.solve(StateGenerator.solved(3)) == []


def test_unsolvable_board_returns_no_moves() -> None:
    start = PuzzleState.create([2, 1, 3, 4, 5, 6, 7, 8, 0])

    assert not Solver.is_solvable(start)
    assert Solver.solve(start) == []
    assert Solver.hint(start) is None


def test_custom_goal_in_odd_class() -> None:
    odd_goal = PuzzleState.create([2, 1, 3, 4, 5, 6, 7, 8, 0])
    start = odd_goal.moved(Direction.UP).moved(Direction.LEFT)

    assert Solver.is_solvable(start, odd_goal)
    assert Solver.solve(start, odd_goal) == [Direction.RIGHT, Direction.DOWN]


def test_hint_is_first_move() -> None:
    start = PuzzleState.create([1, 2, 3, 4, 5, 6, 0, 7, 8])
    assert Solver.hint(start) is Direction.RIGHT


def test_different_sizes_are_not_solvable() -> None:
    assert not Solver.is_solvable(StateGenerator.solved(2), StateGenerator.solved(3))


def test_registries() -> None:
    assert set(ALGORITHMS) == {"astar", "bfs", "dfs"}
    assert set(STEPWISE_ALGORITHMS) == {"bfs", "dfs"}
    assert create_algorithm("BFS").name == "bfs"
    assert create_stepwise_algorithm("dfs").name == "dfs"
    with pytest.raises(ValueError):
        create_algorithm("greedy")
    with pytest.raises(ValueError):
        create_stepwise_algorithm("astar")


# -- generator and goal selection ---------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_generate_is_solvable_and_scrambled(size: int) -> None:
    state = StateGenerator.generate(size, random.Random(size))

    assert state != StateGenerator.solved(size)
    assert Solver.is_solvable(state)


def test_scramble_is_reproducible() -> None:
    solved = StateGenerator.solved(3)
    a = StateGenerator.scramble(solved, 50, random.Random(1))
    b = StateGenerator.scramble(solved, 50, random.Random(1))
    assert a == b


def test_goal_holder_picks_goal_by_class() -> None:
    even = StateGenerator.solved(3)
    odd = PuzzleState.create([2, 1, 3, 4, 5, 6, 7, 8, 0])
    holder = GoalStateHolder(even, odd)

    holder.update_parity(PuzzleState.create([1, 2, 3, 4, 5, 6, 7, 0, 8]))
    assert holder.goal_state == even

    holder.update_parity(odd.moved(Direction.UP))
    assert holder.goal_state == odd


def test_goal_holder_set_state_files_by_class() -> None:
    holder = GoalStateHolder()
    odd = PuzzleState.create([2, 1, 3, 4, 5, 6, 7, 8, 0])

    holder.set_state(odd)

    assert holder.odd_goal == odd
    assert holder.even_goal is None
    assert holder.goal_state is None, "Start parity still defaults to even"
