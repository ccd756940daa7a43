"""Command-line smoke tests through Typer's runner."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tilespace.models.state import PuzzleState
from tilespace_cli.cli import app, parse_layout

runner = CliRunner()


def _invoke(tmp_path: Path, *args: str):
    return runner.invoke(app, ["--settings", str(tmp_path / "settings.json"), *args])


def test_parse_layout_accepts_commas_and_spaces() -> None:
    assert parse_layout("1, 2,3 0") == PuzzleState.create([1, 2, 3, 0])
    assert parse_layout(None) is None


def test_solve_prints_moves(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "solve", "--start", "1,2,3,4,5,6,7,0,8")

    assert result.exit_code == 0, result.output
    assert "1 moves: right" in result.output


def test_solve_with_explicit_goal(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path, "solve", "-a", "bfs",
        "--start", "1,2,3,0", "--goal", "1,0,3,2",
    )

    assert result.exit_code == 0, result.output
    assert "1 moves: up" in result.output


def test_solve_without_goal_for_class_fails(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "solve", "--start", "2,1,3,4,5,6,7,8,0")
    assert result.exit_code == 1


@pytest.mark.parametrize("layout", ["1,1,2,0", "1,2,3", "a,b,c,d"])
def test_invalid_layout_is_a_usage_error(tmp_path: Path, layout: str) -> None:
    result = _invoke(tmp_path, "solve", "--start", layout)
    assert result.exit_code == 2


def test_step_prints_expansions(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "step", "--start", "1,2,3,0", "-n", "3")

    assert result.exit_code == 0, result.output
    assert "bfs expansions" in result.output


def test_explore_small_grid(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "explore", "--start", "1,2,3,0")

    assert result.exit_code == 0, result.output
    assert "12 states" in result.output
    assert "Deepest state: 6 moves" in result.output


def test_explore_unreachable_goal_fails(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "explore", "--start", "1,2,3,0", "--goal", "2,1,3,0")
    assert result.exit_code == 1


def test_settings_save_writes_file(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "settings", "--save")

    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "settings.json").read_text())
    assert data["algorithm"] == "astar"


def test_settings_start_is_used(tmp_path: Path) -> None:
    (tmp_path / "settings.json").write_text(
        json.dumps({"start": [1, 2, 3, 4, 5, 6, 0, 7, 8]})
    )

    result = _invoke(tmp_path, "solve")

    assert result.exit_code == 0, result.output
    assert "2 moves: right right" in result.output
