from tilespace.engine.session.history import CommandHistory, MoveCommand
from tilespace.engine.session.puzzle import Puzzle

__all__ = ["CommandHistory", "MoveCommand", "Puzzle"]
