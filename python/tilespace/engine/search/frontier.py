"""Pending-work collections that give each search its visiting order."""

from __future__ import annotations

import heapq
import itertools
from abc import ABC, abstractmethod
from collections import deque

from tilespace.models.node import NodeData
from tilespace.models.state import PuzzleState


class Frontier(ABC):
    @abstractmethod
    def push(self, state: PuzzleState, node: NodeData) -> None: ...

    @abstractmethod
    def pop(self) -> PuzzleState: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def __len__(self) -> int: ...


class FifoFrontier(Frontier):
    """Queue: oldest entry first."""

    def __init__(self) -> None:
        self._items: deque[PuzzleState] = deque()

    def push(self, state: PuzzleState, node: NodeData) -> None:
        self._items.append(state)

    def pop(self) -> PuzzleState:
        return self._items.popleft()

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class LifoFrontier(Frontier):
    """Stack: newest entry first."""

    def __init__(self) -> None:
        self._items: list[PuzzleState] = []

    def push(self, state: PuzzleState, node: NodeData) -> None:
        self._items.append(state)

    def pop(self) -> PuzzleState:
        return self._items.pop()

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class PriorityFrontier(Frontier):
    """Lowest ``f_cost`` first; equal costs come out in insertion order."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, PuzzleState]] = []
        self._counter = itertools.count()

    def push(self, state: PuzzleState, node: NodeData) -> None:
        heapq.heappush(self._heap, (node.f_cost, next(self._counter), state))

    def pop(self) -> PuzzleState:
        return heapq.heappop(self._heap)[2]

    def clear(self) -> None:
        self._heap.clear()
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)
