from tilespace.engine.search.astar import AStarSearch
from tilespace.engine.search.base import SearchAlgorithmBase, SearchOutcome
from tilespace.engine.search.bfs import BreadthFirstSearch
from tilespace.engine.search.dfs import DepthFirstSearch
from tilespace.engine.search.heuristics import manhattan_distance
from tilespace.engine.search.path import SolutionPath, reconstruct_path
from tilespace.engine.search.stats import GraphSummary, depth_histogram, summarize
from tilespace.engine.search.stepwise import (
    SearchStepResult,
    StepwiseBFS,
    StepwiseDFS,
    StepwiseSearchBase,
    StepwiseState,
)

__all__ = [
    "AStarSearch",
    "BreadthFirstSearch",
    "DepthFirstSearch",
    "GraphSummary",
    "SearchAlgorithmBase",
    "SearchOutcome",
    "SearchStepResult",
    "SolutionPath",
    "StepwiseBFS",
    "StepwiseDFS",
    "StepwiseSearchBase",
    "StepwiseState",
    "depth_histogram",
    "manhattan_distance",
    "reconstruct_path",
    "summarize",
]
