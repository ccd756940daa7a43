"""Settings persistence tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tilespace.models.settings import Settings, SettingsManager
from tilespace.models.state import PuzzleState


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    manager = SettingsManager(tmp_path / "settings.json")

    assert manager.settings == Settings()
    assert manager.settings.start_state() is None
    even, odd = manager.settings.goal_states()
    assert even == PuzzleState.create([1, 2, 3, 4, 5, 6, 7, 8, 0])
    assert odd is None


def test_save_and_reload(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    manager = SettingsManager(path)
    manager.settings.algorithm = "bfs"
    manager.settings.start = [1, 2, 3, 4, 5, 6, 7, 0, 8]
    manager.settings.goal_odd = [2, 1, 3, 4, 5, 6, 7, 8, 0]
    manager.save()

    reloaded = SettingsManager(path).settings

    assert reloaded.algorithm == "bfs"
    assert reloaded.start_state() == PuzzleState.create([1, 2, 3, 4, 5, 6, 7, 0, 8])
    assert reloaded.goal_states()[1] == PuzzleState.create([2, 1, 3, 4, 5, 6, 7, 8, 0])


def test_corrupt_file_falls_back(tmp_path: Path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json")

    with caplog.at_level(logging.WARNING):
        manager = SettingsManager(path)

    assert manager.settings == Settings()
    assert "Failed to load settings" in caplog.text


def test_invalid_layout_falls_back(tmp_path: Path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"algorithm": "dfs", "start": [1, 1, 2, 3, 4, 5, 6, 7, 0]}))

    with caplog.at_level(logging.WARNING):
        manager = SettingsManager(path)

    assert manager.settings == Settings()
    assert "Invalid layout" in caplog.text


def test_unknown_keys_are_ignored(tmp_path: Path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"grid_size": 4, "goal_even": None, "theme": "dark"}))

    with caplog.at_level(logging.WARNING):
        manager = SettingsManager(path)

    assert manager.settings.grid_size == 4
    assert "theme" in caplog.text


def test_non_object_json_falls_back(tmp_path: Path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")

    with caplog.at_level(logging.WARNING):
        manager = SettingsManager(path)

    assert manager.settings == Settings()
    assert "must be a JSON object" in caplog.text


def test_grid_size_alone_uses_solved_goal_of_that_size(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"grid_size": 4, "algorithm": "bfs"}))

    settings = SettingsManager(path).settings

    assert settings.grid_size == 4
    assert settings.algorithm == "bfs"
    even, odd = settings.goal_states()
    assert even == PuzzleState.create(list(range(1, 16)) + [0])
    assert odd is None
