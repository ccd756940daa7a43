"""Generates start and goal states."""

from __future__ import annotations

import random

from tilespace.models.state import DEFAULT_SIZE, Direction, PuzzleState


class StateGenerator:
    """Factory helpers for solved, random and scrambled states."""

    @staticmethod
    def solved(size: int = DEFAULT_SIZE) -> PuzzleState:
        """Return the classic goal layout (tiles in order, blank bottom-right)."""
        return PuzzleState.create(list(range(1, size * size)) + [0], size)

    @staticmethod
    def random(size: int = DEFAULT_SIZE, rng: random.Random | None = None) -> PuzzleState:
        """Uniformly random permutation; may land in either parity class."""
        return PuzzleState.create_random(size, rng)

    @staticmethod
    def scramble(
        state: PuzzleState,
        num_moves: int | None = None,
        rng: random.Random | None = None,
    ) -> PuzzleState:
        """Random walk of legal blank moves from *state*.

        The result stays in the same reachability class as *state*. The
        walk never immediately undoes its previous step unless it has no
        other choice.
        """
        rng = rng or random.Random()
        if num_moves is None:
            num_moves = state.total_cells * 100
        previous: Direction | None = None

        for _ in range(num_moves):
            options = [d for d in Direction if state.moved(d) is not None]
            if previous is not None and previous.opposite in options and len(options) > 1:
                options.remove(previous.opposite)
            direction = rng.choice(options)
            state = state.moved(direction)  # type: ignore[assignment]
            previous = direction
        return state

    @staticmethod
    def generate(
        size: int = DEFAULT_SIZE, rng: random.Random | None = None
    ) -> PuzzleState:
        """Return a scrambled state reachable from :meth:`solved`."""
        solved = StateGenerator.solved(size)
        state = StateGenerator.scramble(solved, rng=rng)

        # Ensure the board is not already solved
        while state == solved:
            state = StateGenerator.scramble(solved, rng=rng)
        return state
