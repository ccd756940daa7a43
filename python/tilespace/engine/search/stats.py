"""Summary numbers for a finished exploration graph."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from tilespace.models.node import ExplorationGraph

logger = logging.getLogger(__name__)


@dataclass
class GraphSummary:
    states: int
    edges: int
    max_depth: int
    depth_counts: dict[int, int]


def depth_histogram(graph: ExplorationGraph) -> dict[int, int]:
    """Number of states per depth, ordered by depth."""
    counts = Counter(node.depth for node in graph.values())
    return dict(sorted(counts.items()))


def summarize(graph: ExplorationGraph) -> GraphSummary:
    histogram = depth_histogram(graph)
    # Each edge is stored on both endpoints.
    edges = sum(len(node.adjacent_states) for node in graph.values()) // 2
    summary = GraphSummary(
        states=len(graph),
        edges=edges,
        max_depth=max(histogram, default=0),
        depth_counts=histogram,
    )
    for depth, count in histogram.items():
        logger.debug("Depth %d: %d states", depth, count)
    return summary
