"""Progress counter for long-running exploration."""

from __future__ import annotations

import math
from typing import Callable

from tilespace.models.state import DEFAULT_SIZE


def reachable_states(size: int = DEFAULT_SIZE) -> int:
    """Number of states in one reachability class: ``(size²)! / 2``."""
    return math.factorial(size * size) // 2


TOTAL_REACHABLE_STATES = reachable_states(DEFAULT_SIZE)  # 181440


class SearchProgress:
    """Monotonic explored-state counter against a known maximum.

    ``on_report`` is invoked after every change, on whichever thread made
    it.
    """

    def __init__(
        self,
        on_report: Callable[[SearchProgress], None] | None = None,
        max_estimate: int = TOTAL_REACHABLE_STATES,
    ) -> None:
        self._on_report = on_report
        self.max_estimate = max_estimate
        self.explored_count = 0

    @property
    def rate(self) -> float:
        if self.max_estimate <= 0:
            return 0.0
        return self.explored_count / self.max_estimate

    def increment(self, amount: int = 1) -> None:
        self.explored_count += amount
        self._report()

    def complete(self) -> None:
        """Report the run as 100 % done."""
        self.explored_count = self.max_estimate
        self._report()

    def _report(self) -> None:
        if self._on_report is not None:
            self._on_report(self)

    def __repr__(self) -> str:
        return (
            f"SearchProgress({self.explored_count}/{self.max_estimate}, "
            f"{self.rate:.1%})"
        )
