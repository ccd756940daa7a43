"""Shared bookkeeping for building an exploration graph."""

from __future__ import annotations

from typing import Callable

from tilespace.engine.session.puzzle import Puzzle
from tilespace.models.node import ExplorationGraph, NodeData
from tilespace.models.state import PuzzleState

Heuristic = Callable[[PuzzleState], int]


def as_state(start: PuzzleState | Puzzle) -> PuzzleState:
    """Accept either a bare state or a session and return the state."""
    return start.state if isinstance(start, Puzzle) else start


def create_root_node(state: PuzzleState, heuristic: Heuristic | None = None) -> NodeData:
    return NodeData(h_cost=heuristic(state) if heuristic else 0)


def create_child_node(graph: ExplorationGraph, parent: PuzzleState) -> NodeData:
    """New node one level below *parent*, pointing back at it."""
    return NodeData(parent=parent, depth=graph[parent].depth + 1)


def add_bidirectional_adjacency(
    graph: ExplorationGraph, first: PuzzleState, second: PuzzleState
) -> None:
    """Record the edge on both endpoints, skipping ones already present."""
    first_node = graph[first]
    second_node = graph[second]
    if second not in first_node.adjacent_states:
        first_node.add_adjacent_state(second)
    if first not in second_node.adjacent_states:
        second_node.add_adjacent_state(first)


def discover(
    graph: ExplorationGraph,
    current: PuzzleState,
    neighbour: PuzzleState,
    heuristic: Heuristic | None = None,
) -> NodeData | None:
    """Link *neighbour* into the graph as seen from *current*.

    Returns the new node when *neighbour* was not known yet. A state that
    was already discovered only gains the edge; its parent and depth stay
    as the first discoverer set them.
    """
    if neighbour in graph:
        add_bidirectional_adjacency(graph, current, neighbour)
        return None

    node = create_child_node(graph, current)
    if heuristic is not None:
        node.h_cost = heuristic(neighbour)
    graph[neighbour] = node
    add_bidirectional_adjacency(graph, current, neighbour)
    return node
