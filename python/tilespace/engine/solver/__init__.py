from tilespace.engine.solver.solver import (
    ALGORITHMS,
    STEPWISE_ALGORITHMS,
    Solver,
    create_algorithm,
    create_stepwise_algorithm,
)

__all__ = [
    "ALGORITHMS",
    "STEPWISE_ALGORITHMS",
    "Solver",
    "create_algorithm",
    "create_stepwise_algorithm",
]
