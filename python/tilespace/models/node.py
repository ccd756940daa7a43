"""Per-state metadata recorded while exploring the state space."""

from __future__ import annotations

from dataclasses import dataclass, field

from tilespace.models.state import PuzzleState


@dataclass
class NodeData:
    """Search bookkeeping for one discovered state.

    ``parent`` is ``None`` only for the root. ``adjacent_states`` is filled
    in from both endpoints as edges are discovered and never holds the same
    neighbour twice.
    """

    parent: PuzzleState | None = None
    depth: int = 0
    h_cost: int = 0
    adjacent_states: list[PuzzleState] = field(default_factory=list)

    @property
    def f_cost(self) -> int:
        return self.depth + self.h_cost

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def add_adjacent_state(self, state: PuzzleState) -> None:
        self.adjacent_states.append(state)


ExplorationGraph = dict[PuzzleState, NodeData]

# Filled by an external layout strategy; the engine never reads it.
PositionMap = dict[PuzzleState, tuple[float, ...]]
