"""Parity-aware goal selection."""

from __future__ import annotations

from tilespace.models.state import PuzzleState


class GoalStateHolder:
    """Keeps one goal per reachability class and serves the one matching the start.

    A start state can only ever reach goals of its own class, so callers
    pick the goal through :meth:`update_parity` instead of choosing by hand.
    """

    def __init__(
        self,
        even_goal: PuzzleState | None = None,
        odd_goal: PuzzleState | None = None,
    ) -> None:
        self._even_goal = even_goal
        self._odd_goal = odd_goal
        self._is_even = True

    @property
    def goal_state(self) -> PuzzleState | None:
        return self._even_goal if self._is_even else self._odd_goal

    @property
    def even_goal(self) -> PuzzleState | None:
        return self._even_goal

    @property
    def odd_goal(self) -> PuzzleState | None:
        return self._odd_goal

    def update_parity(self, start: PuzzleState) -> None:
        """Point :attr:`goal_state` at the goal reachable from *start*."""
        self._is_even = start.reachability_class == 0

    def set_state(self, state: PuzzleState) -> None:
        """Store *state* as the goal for its own class."""
        if state.reachability_class == 0:
            self._even_goal = state
        else:
            self._odd_goal = state
