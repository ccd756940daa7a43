from tilespace.engine.playback.player import (
    PlayerBase,
    PlayerState,
    SearchProcessPlayer,
    SolutionPlayer,
)

__all__ = ["PlayerBase", "PlayerState", "SearchProcessPlayer", "SolutionPlayer"]
