"""Playback state machine tests for solution replay and stepwise search."""

from __future__ import annotations

import random

import pytest

from tilespace.engine.generator import StateGenerator
from tilespace.engine.playback import PlayerState, SearchProcessPlayer, SolutionPlayer
from tilespace.engine.search import StepwiseBFS, StepwiseState
from tilespace.engine.solver import Solver
from tilespace.errors import InvalidOperationError
from tilespace.models.state import Direction, PuzzleState

SOLVED_3 = StateGenerator.solved(3)
SOLVED_2 = StateGenerator.solved(2)
ONE_AWAY = PuzzleState.create([1, 2, 3, 4, 5, 6, 7, 0, 8])
TWO_AWAY = PuzzleState.create([1, 2, 3, 4, 5, 6, 0, 7, 8])


def _solution_player(start: PuzzleState = TWO_AWAY) -> SolutionPlayer:
    player = SolutionPlayer(start)
    player.set_solution([Direction.RIGHT, Direction.RIGHT])
    return player


# -- solution playback --------------------------------------------------------


def test_new_player_is_idle() -> None:
    player = SolutionPlayer(ONE_AWAY)
    assert player.current_state is PlayerState.IDLE
    assert not player.can_step_forward
    assert not player.can_step_back


def test_set_solution_starts_playing() -> None:
    player = _solution_player()
    assert player.current_state is PlayerState.PLAYING
    assert player.remaining_moves == 2


def test_stepping_forward_to_the_end_completes() -> None:
    player = _solution_player()

    player.step_forward()
    assert player.state == ONE_AWAY
    assert player.current_state is PlayerState.PLAYING

    player.step_forward()
    assert player.state == SOLVED_3
    assert player.current_state is PlayerState.COMPLETED
    assert not player.can_step_forward

    player.step_forward()
    assert player.state == SOLVED_3, "Extra forward steps are ignored"


def test_step_back_from_completed_pauses() -> None:
    player = _solution_player()
    player.step_forward()
    player.step_forward()

    player.step_back()

    assert player.state == ONE_AWAY
    assert player.current_state is PlayerState.PAUSED
    assert player.can_step_forward


def test_forward_after_back_replays_history_first() -> None:
    player = _solution_player()
    player.step_forward()
    player.step_back()
    assert player.state == TWO_AWAY
    assert player.remaining_moves == 1

    player.step_forward()
    assert player.state == ONE_AWAY
    assert player.remaining_moves == 1, "Redo must be used before the queue"
    player.step_forward()
    assert player.state == SOLVED_3


def test_play_and_pause_transitions() -> None:
    player = _solution_player()

    player.play()
    assert player.current_state is PlayerState.PLAYING, "Play only resumes from paused"

    player.pause()
    assert player.current_state is PlayerState.PAUSED
    player.pause()
    assert player.current_state is PlayerState.PAUSED

    player.play()
    assert player.current_state is PlayerState.PLAYING


def test_play_does_nothing_when_idle() -> None:
    player = SolutionPlayer(ONE_AWAY)
    player.play()
    assert player.current_state is PlayerState.IDLE


def test_reset_restores_the_start() -> None:
    player = _solution_player()
    player.step_forward()

    player.reset()

    assert player.current_state is PlayerState.IDLE
    assert player.state == TWO_AWAY
    assert player.remaining_moves == 0
    assert not player.can_step_back


def test_illegal_solution_move_raises() -> None:
    player = SolutionPlayer(SOLVED_3)
    player.set_solution([Direction.DOWN])

    with pytest.raises(InvalidOperationError):
        player.step_forward()


def test_state_and_player_notifications() -> None:
    player = SolutionPlayer(TWO_AWAY)
    states: list[PuzzleState] = []
    transitions: list[PlayerState] = []
    player.subscribe_state(states.append)
    player.subscribe(transitions.append)

    player.set_solution([Direction.RIGHT, Direction.RIGHT])
    player.step_forward()
    player.step_forward()

    assert states == [ONE_AWAY, SOLVED_3]
    assert transitions == [PlayerState.PLAYING, PlayerState.COMPLETED]


def test_replaying_a_solver_path_reaches_the_goal() -> None:
    start = StateGenerator.generate(3, random.Random(11))
    moves = Solver.solve(start, SOLVED_3)
    player = SolutionPlayer(start)
    player.set_solution(moves)

    while player.can_step_forward:
        player.step_forward()

    assert player.state == SOLVED_3
    assert player.current_state is PlayerState.COMPLETED


# -- search process playback --------------------------------------------------


def test_search_player_starts_playing() -> None:
    player = SearchProcessPlayer(StepwiseBFS(), SOLVED_2)

    assert player.current_state is PlayerState.PLAYING
    assert player.algorithm.state is StepwiseState.RUNNING
    assert player.can_step_forward
    assert not player.can_step_back


def test_search_player_runs_to_completion() -> None:
    player = SearchProcessPlayer(StepwiseBFS(), SOLVED_2)
    expanded = []
    player.subscribe_steps(lambda result: expanded.append(result.expanded_state))

    while player.can_step_forward:
        player.step_forward()

    assert len(expanded) == 12
    assert player.current_state is PlayerState.COMPLETED
    assert player.algorithm.is_completed


def test_search_player_cannot_step_back() -> None:
    player = SearchProcessPlayer(StepwiseBFS(), SOLVED_2)
    player.step_forward()
    discovered = len(player.algorithm.get_result())

    player.step_back()

    assert len(player.algorithm.get_result()) == discovered
    assert player.current_state is PlayerState.PLAYING


def test_search_player_stops_at_goal() -> None:
    player = SearchProcessPlayer(StepwiseBFS(), ONE_AWAY, SOLVED_3)

    player.step_forward()
    player.step_forward()

    assert player.current_state is PlayerState.COMPLETED
    assert SOLVED_3 in player.algorithm.get_result()


def test_search_player_reset_reinitializes() -> None:
    player = SearchProcessPlayer(StepwiseBFS(), SOLVED_2)
    for _ in range(5):
        player.step_forward()

    player.reset()

    assert player.current_state is PlayerState.IDLE
    assert player.algorithm.state is StepwiseState.RUNNING
    assert list(player.algorithm.get_result()) == [SOLVED_2]
