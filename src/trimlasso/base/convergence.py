from dataclasses import dataclass


@dataclass
class ConvergenceState:
    """Bookkeeping of an outer heuristic loop.

    Created at the start of a solve and discarded at termination.
    """

    iteration: int = 0
    prev_objective: float = 0.0
    prev_residual_norm: float = 0.0
    converged: bool = False
