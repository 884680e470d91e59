from abc import ABC, abstractmethod

import numpy as np

from ..utils import RandomState


class HeuristicMethod(ABC):
    def __init__(self):
        self.n_iter_: int = 0

    @abstractmethod
    def solve(
        self,
        X: np.ndarray,
        y: np.ndarray,
        k: int,
        mu: float,
        lambda_: float,
        random_state: RandomState = None,
    ) -> np.ndarray:
        """Solve the trimmed Lasso problem heuristically and return the estimate."""
