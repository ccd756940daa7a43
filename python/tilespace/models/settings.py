"""Persisted defaults: grid size, algorithm, start and goal layouts."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from tilespace.errors import InvalidLayoutError
from tilespace.models.state import DEFAULT_SIZE, PuzzleState

logger = logging.getLogger(__name__)



@dataclass
class Settings:
    grid_size: int = DEFAULT_SIZE
    algorithm: str = "astar"
    start: list[int] | None = None
    goal_even: list[int] | None = None
    goal_odd: list[int] | None = None
    history_limit: int = 1000
    step_interval: float = 0.05
    log_level: str = "INFO"

    # -- conversions ----------------------------------------------------------

    def start_state(self) -> PuzzleState | None:
        """Validated start layout, or ``None`` when not configured."""
        if self.start is None:
            return None
        return PuzzleState.create(self.start, self.grid_size)

    def goal_states(self) -> tuple[PuzzleState | None, PuzzleState | None]:
        """``(even, odd)`` goal layouts, each validated or ``None``.

        An unset even goal is the solved layout for ``grid_size``.
        """
        if self.goal_even is None:
            size = self.grid_size
            even = PuzzleState.create(list(range(1, size * size)) + [0], size)
        else:
            even = PuzzleState.create(self.goal_even, self.grid_size)
        odd = None if self.goal_odd is None else PuzzleState.create(self.goal_odd, self.grid_size)
        return even, odd


class SettingsManager:
    """Loads and saves :class:`Settings` as a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self.settings = Settings()
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            logger.debug("Settings file %s not found, using defaults", self.filepath)
            return
        try:
            data = json.loads(self.filepath.read_text())
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to load settings from %s: %s", self.filepath, exc)
            return
        if not isinstance(data, dict):
            logger.warning(
                "Settings in %s must be a JSON object, got %s; using defaults",
                self.filepath,
                type(data).__name__,
            )
            return

        known ={f.name for f in fields(Settings)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
        candidate = Settings(**{k: v for k, v in data.items() if k in known})

        # Stored layouts are opaque until they pass PuzzleState validation.
        try:
            candidate.start_state()
            candidate.goal_states()
        except (InvalidLayoutError, TypeError) as exc:
            logger.warning("Invalid layout in %s: %s; using defaults", self.filepath, exc)
            return
        self.settings = candidate
        logger.debug("Settings loaded: %s", self.settings)

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(json.dumps(asdict(self.settings), indent=2) + "\n")
        logger.debug("Settings saved to %s", self.filepath)
