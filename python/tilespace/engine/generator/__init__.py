from tilespace.engine.generator.generator import StateGenerator
from tilespace.engine.generator.goal import GoalStateHolder

__all__ = ["GoalStateHolder", "StateGenerator"]
