from tilespace.models.events import Subject
from tilespace.models.node import ExplorationGraph, NodeData, PositionMap
from tilespace.models.progress import (
    TOTAL_REACHABLE_STATES,
    SearchProgress,
    reachable_states,
)
from tilespace.models.settings import Settings, SettingsManager
from tilespace.models.state import (
    DEFAULT_SIZE,
    EMPTY,
    Direction,
    GridPosition,
    PuzzleState,
)

__all__ = [
    "DEFAULT_SIZE",
    "EMPTY",
    "Direction",
    "ExplorationGraph",
    "GridPosition",
    "NodeData",
    "PositionMap",
    "PuzzleState",
    "SearchProgress",
    "Settings",
    "SettingsManager",
    "Subject",
    "TOTAL_REACHABLE_STATES",
    "reachable_states",
]
