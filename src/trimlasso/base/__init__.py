from .backend import Solution, SolverBackend
from .convergence import ConvergenceState
from .heuristic_method import HeuristicMethod

__all__ = [
    "ConvergenceState",
    "HeuristicMethod",
    "Solution",
    "SolverBackend",
]
