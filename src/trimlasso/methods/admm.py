import numpy as np

from ..admm import admm_solve
from ..base import HeuristicMethod
from ..utils import RandomState


class ADMM(HeuristicMethod):
    """
    Alternating direction method of multipliers for the trimmed Lasso.

    Splits $\\beta = \\gamma$, handles the Lasso penalty in the $\\beta$-block and the
    trim penalty in the $\\gamma$-block, see `trimlasso.admm_solve`. The estimate is the
    sparsity-enforcing $\\gamma$ iterate.
    """

    def __init__(
        self,
        max_iterations: int = 2000,
        rel_tolerance: float = 1e-6,
        sigma: float = 1.0,
        inner_max_iterations: int = 10000,
        inner_tolerance: float = 1e-3,
        verbose: int = 0,
        print_every: int = 200,
    ):
        """
        Initializes the ADMM method with the specified parameters.

        Args:
            max_iterations (int): Maximum number of ADMM iterations. Default is 2000.
            rel_tolerance (float): Relative tolerance of the stopping rule. Default is 1e-6.
            sigma (float): Augmented Lagrangian penalty. Default is 1.0.
            inner_max_iterations (int): Iteration budget of the beta-update. Default is 10000.
            inner_tolerance (float): Tolerance of the beta-update. Default is 1e-3.
            verbose (int): Verbosity level. Default is 0.
            print_every (int): Print progress every `print_every` iterations. Default is 200.
        """
        super().__init__()
        self.max_iterations = max_iterations
        self.rel_tolerance = rel_tolerance
        self.sigma = sigma
        self.inner_max_iterations = inner_max_iterations
        self.inner_tolerance = inner_tolerance
        self.verbose = verbose
        self.print_every = print_every

    def solve(
        self,
        X: np.ndarray,
        y: np.ndarray,
        k: int,
        mu: float,
        lambda_: float,
        random_state: RandomState = None,
    ) -> np.ndarray:
        gamma, self.n_iter_ = admm_solve(
            X=X,
            y=y,
            p=X.shape[1],
            k=k,
            mu=mu,
            lambda_=lambda_,
            max_iter=self.max_iterations,
            rel_tol=self.rel_tolerance,
            sigma=self.sigma,
            random_state=random_state,
            verbose=self.verbose,
            print_every=self.print_every,
            inner_max_iter=self.inner_max_iterations,
            inner_tol=self.inner_tolerance,
            return_n_iter=True,
        )
        return gamma
