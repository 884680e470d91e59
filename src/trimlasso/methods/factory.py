import copy

from ..base import HeuristicMethod
from .admm import ADMM
from .alternating_minimization import AlternatingMinimization


class HeuristicMethodFactory:
    def __init__(self):
        pass

    @staticmethod
    def from_string(method: str):
        if method == "altmin":
            return AlternatingMinimization()
        elif method == "admm":
            return ADMM()
        else:
            raise ValueError(
                "Did not recognize method. Please provide ['altmin', 'admm']."
            )


def get_heuristic_method(method: HeuristicMethod | str):
    if isinstance(method, str):
        out = HeuristicMethodFactory().from_string(method=method)
    elif isinstance(method, HeuristicMethod):
        # Each estimator keeps its own copy, the method stores its iteration count.
        out = copy.copy(method)
    else:
        raise ValueError("Method not recognized")
    return out
