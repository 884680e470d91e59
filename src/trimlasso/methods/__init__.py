from .admm import ADMM
from .alternating_minimization import AlternatingMinimization
from .factory import get_heuristic_method

__all__ = [
    "get_heuristic_method",
    "AlternatingMinimization",
    "ADMM",
]
