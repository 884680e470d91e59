import numpy as np

from ..alternating import LassoSolver, alternating_minimize
from ..base import HeuristicMethod
from ..proximal import proximal_lasso_solve
from ..utils import RandomState


class AlternatingMinimization(HeuristicMethod):
    """
    Difference-of-convex alternating minimization for the trimmed Lasso.

    Alternates between an extreme point of the subdifferential of the trim penalty and
    a Lasso problem in $\\beta$, see `trimlasso.alternating_minimize`. The Lasso
    subproblem is solved by proximal gradient unless a different `lasso_solver`
    is passed. The start value is drawn at random, hence pass a `random_state` for
    reproducible results.
    """

    def __init__(
        self,
        max_iterations: int = 10000,
        rel_tolerance: float = 1e-6,
        lasso_solver: LassoSolver = proximal_lasso_solve,
        verbose: int = 0,
        print_every: int = 200,
    ):
        """
        Initializes the alternating minimization method with the specified parameters.

        Args:
            max_iterations (int): Maximum number of alternating iterations. Default is 10000.
            rel_tolerance (float): Relative objective tolerance. Default is 1e-6.
            lasso_solver (Callable): Solver for the Lasso subproblem. Default is `proximal_lasso_solve`.
            verbose (int): Verbosity level. Default is 0.
            print_every (int): Print progress every `print_every` iterations. Default is 200.
        """
        super().__init__()
        self.max_iterations = max_iterations
        self.rel_tolerance = rel_tolerance
        self.lasso_solver = lasso_solver
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
        beta, self.n_iter_ = alternating_minimize(
            X=X,
            y=y,
            p=X.shape[1],
            k=k,
            mu=mu,
            lambda_=lambda_,
            lasso_solver=self.lasso_solver,
            max_iter=self.max_iterations,
            rel_tol=self.rel_tolerance,
            random_state=random_state,
            verbose=self.verbose,
            print_every=self.print_every,
            return_n_iter=True,
        )
        return beta
