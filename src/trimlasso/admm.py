import warnings
from typing import Tuple, Union

import numpy as np

from .base.convergence import ConvergenceState
from .extreme_point import admm_gamma_update
from .gram import augment_gram, init_gram, init_y_gram
from .objective import trimmed_lasso_objective
from .proximal import proximal_lasso_solve
from .utils import RandomState, as_generator, print_message, relative_change
from .validation import as_float_arrays, check_penalties, check_problem, check_sigma
from .warnings import MaxIterationsWarning


def admm_solve(
    X: np.ndarray,
    y: np.ndarray,
    p: int,
    k: int,
    mu: float,
    lambda_: float,
    max_iter: int = 2000,
    rel_tol: float = 1e-6,
    sigma: float = 1.0,
    random_state: RandomState = None,
    verbose: int = 0,
    print_every: int = 200,
    inner_max_iter: int = 10000,
    inner_tol: float = 1e-3,
    return_beta: bool = False,
    return_n_iter: bool = False,
) -> Union[np.ndarray, Tuple]:
    """Heuristic solution of the trimmed Lasso by ADMM.

    Splits the problem into
    $$\\min_{\\beta = \\gamma} \\frac{1}{2}\\|y - X\\beta\\|_2^2 + \\mu\\|\\beta\\|_1 + \\lambda T_k(\\gamma)$$
    and runs the alternating direction method of multipliers on the augmented Lagrangian
    with penalty $\\sigma$. Every iteration consists of

    1. the $\\beta$-update, a Lasso problem with quadratic term $X^TX + \\sigma I$,
       linear term $q - X^Ty - \\sigma\\gamma$ and L1 weight $\\mu$ only,
    2. the $\\gamma$-update, see `admm_gamma_update`,
    3. the dual update $q \\leftarrow q + \\sigma(\\beta - \\gamma)$.

    The loop stops once the sum of the relative changes of $\\|\\beta - \\gamma\\|_2$ and of
    the objective falls below `rel_tol` or after `max_iter` iterations.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector.
        p (int): Number of features. Must match the columns of `X`.
        k (int): Sparsity target, 0 < k <= p.
        mu (float): Weight of the Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        max_iter (int, optional): Maximum number of ADMM iterations. Defaults to 2000.
        rel_tol (float, optional): Relative tolerance. Defaults to 1e-6.
        sigma (float, optional): Augmented Lagrangian penalty. Defaults to 1.0.
        random_state (int | np.random.Generator | None, optional): Seed or generator for
            ordering coordinates with equal trimming cost. Defaults to None.
        verbose (int, optional): Verbosity level. 0 = silent, 1 = convergence, 2 = progress. Defaults to 0.
        print_every (int, optional): Print progress every `print_every` iterations if `verbose >= 2`. Defaults to 200.
        inner_max_iter (int, optional): Iteration budget of the $\\beta$-update. Defaults to 10000.
        inner_tol (float, optional): Tolerance of the $\\beta$-update. Defaults to 1e-3.
        return_beta (bool, optional): Also return the last $\\beta$ iterate. Defaults to False.
        return_n_iter (bool, optional): Also return the number of iterations. Defaults to False.

    Raises:
        ConfigurationError: If the dimensions, penalties or `sigma` are invalid.

    Returns:
        np.ndarray | Tuple: The sparsity-enforcing iterate $\\gamma$, optionally followed by
            the last $\\beta$ iterate and the iteration count.
    """
    X, y = as_float_arrays(X, y)
    check_problem(X, y, p, k)
    check_penalties(mu, lambda_)
    check_sigma(sigma)
    rng = as_generator(random_state)

    beta = np.zeros(p)
    gamma = np.zeros(p)
    q = np.zeros(p)

    x_gram = init_gram(X)
    y_gram = init_y_gram(X, y)
    augmented_gram = augment_gram(x_gram, sigma)
    state = ConvergenceState()

    for iteration in range(1, max_iter + 1):
        state.iteration = iteration
        beta = proximal_lasso_solve(
            A=augmented_gram,
            c=q - y_gram - sigma * gamma,
            w=mu,
            beta_init=beta,
            max_iter=inner_max_iter,
            tol=inner_tol,
        )
        gamma = admm_gamma_update(
            beta=beta, q=q, k=k, lambda_=lambda_, sigma=sigma, rng=rng
        )
        q = q + sigma * (beta - gamma)

        residual_norm = np.linalg.norm(beta - gamma)
        objective = trimmed_lasso_objective(beta, X, y, mu, lambda_, k)
        if verbose >= 2 and iteration % print_every == 0:
            print_message(
                "admm_solve",
                f"Iteration {iteration}: objective {objective:.6f}, "
                f"primal residual {residual_norm:.3e}",
                level=2,
                verbose=verbose,
            )

        change = relative_change(
            residual_norm, state.prev_residual_norm
        ) + relative_change(objective, state.prev_objective)
        if change < rel_tol:
            state.converged = True
            break

        state.prev_residual_norm = residual_norm
        state.prev_objective = objective

    if state.converged:
        print_message(
            "admm_solve",
            f"Converged after {state.iteration} iterations.",
            level=1,
            verbose=verbose,
        )
    else:
        warnings.warn(
            f"ADMM did not converge within {max_iter} iterations.",
            MaxIterationsWarning,
            stacklevel=2,
        )

    out = (np.copy(gamma),)
    if return_beta:
        out += (np.copy(beta),)
    if return_n_iter:
        out += (state.iteration,)
    return out if len(out) > 1 else out[0]
