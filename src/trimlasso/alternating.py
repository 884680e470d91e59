import warnings
from typing import Callable, Tuple, Union

import numpy as np

from .base.convergence import ConvergenceState
from .extreme_point import select_extreme_point
from .gram import init_gram, init_y_gram
from .objective import trimmed_lasso_objective
from .proximal import proximal_lasso_solve
from .utils import RandomState, as_generator, print_message, relative_change
from .validation import as_float_arrays, check_penalties, check_problem
from .warnings import MaxIterationsWarning

LassoSolver = Callable[[np.ndarray, np.ndarray, float, np.ndarray], np.ndarray]


def alternating_minimize(
    X: np.ndarray,
    y: np.ndarray,
    p: int,
    k: int,
    mu: float,
    lambda_: float,
    lasso_solver: LassoSolver = proximal_lasso_solve,
    max_iter: int = 10000,
    rel_tol: float = 1e-6,
    random_state: RandomState = None,
    verbose: int = 0,
    print_every: int = 200,
    return_n_iter: bool = False,
) -> Union[np.ndarray, Tuple[np.ndarray, int]]:
    """Heuristic solution of the trimmed Lasso by alternating minimization.

    Writes the trim penalty as a difference of convex functions and alternates between
    an extreme point $\\gamma$ of the subdifferential of $\\lambda T_k$ at the current
    $\\beta$ and the Lasso problem
    $$\\min_\\beta \\frac{1}{2}\\|y - X\\beta\\|_2^2 + (\\mu + \\lambda)\\|\\beta\\|_1 - \\gamma^T\\beta.$$

    The loop stops once the relative change of the objective,
    $|f_t - f_{t-1}| / (f_{t-1} + 0.01)$, falls below `rel_tol` or after `max_iter`
    iterations. The objective is expected to be non-increasing, but this is not enforced.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector.
        p (int): Number of features. Must match the columns of `X`.
        k (int): Sparsity target, 0 < k <= p.
        mu (float): Weight of the Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        lasso_solver (Callable, optional): Solver for the Lasso subproblem, called as
            `lasso_solver(A, c, w, beta_init)` with `A = X^T X`, `c = -X^T y - gamma` and
            `w = mu + lambda_`. Defaults to `proximal_lasso_solve`.
        max_iter (int, optional): Maximum number of alternating iterations. Defaults to 10000.
        rel_tol (float, optional): Relative objective tolerance. Defaults to 1e-6.
        random_state (int | np.random.Generator | None, optional): Seed or generator for the
            random start value and the tie-breaking. Defaults to None.
        verbose (int, optional): Verbosity level. 0 = silent, 1 = convergence, 2 = progress. Defaults to 0.
        print_every (int, optional): Print progress every `print_every` iterations if `verbose >= 2`. Defaults to 200.
        return_n_iter (bool, optional): Also return the number of iterations. Defaults to False.

    Raises:
        ConfigurationError: If the dimensions or penalties are invalid.

    Returns:
        np.ndarray | Tuple[np.ndarray, int]: The estimate $\\beta$ and optionally the iteration count.
    """
    X, y = as_float_arrays(X, y)
    check_problem(X, y, p, k)
    check_penalties(mu, lambda_)
    rng = as_generator(random_state)

    beta = rng.standard_normal(p)
    gamma = np.zeros(p)

    x_gram = init_gram(X)
    y_gram = init_y_gram(X, y)
    state = ConvergenceState()

    for iteration in range(1, max_iter + 1):
        state.iteration = iteration
        gamma = select_extreme_point(
            beta=beta,
            X=X,
            y=y,
            k=k,
            mu=mu,
            lambda_=lambda_,
            rng=rng,
        )
        beta = lasso_solver(x_gram, -y_gram - gamma, mu + lambda_, beta)

        objective = trimmed_lasso_objective(beta, X, y, mu, lambda_, k)
        if verbose >= 2 and iteration % print_every == 0:
            print_message(
                "alternating_minimize",
                f"Iteration {iteration}: objective {objective:.6f}",
                level=2,
                verbose=verbose,
            )
        if relative_change(objective, state.prev_objective) < rel_tol:
            state.converged = True
            break
        state.prev_objective = objective

    if state.converged:
        print_message(
            "alternating_minimize",
            f"Converged after {state.iteration} iterations.",
            level=1,
            verbose=verbose,
        )
    else:
        warnings.warn(
            f"Alternating minimization did not converge within {max_iter} iterations.",
            MaxIterationsWarning,
            stacklevel=2,
        )

    if return_n_iter:
        return np.copy(beta), state.iteration
    return np.copy(beta)
