import numba as nb
import numpy as np


@nb.njit()
def trim_penalty(beta: np.ndarray, k: int) -> float:
    """The trim penalty $T_k(\\beta)$.

    The sum of the $p - k$ smallest absolute entries of $\\beta$, i.e.
    $$T_k(\\beta) = \\sum_{i > k} |\\beta_{(i)}| = \\|\\beta\\|_1 - \\sum_{i \\leq k} |\\beta_{(i)}|$$
    where $|\\beta_{(1)}| \\geq \\dots \\geq |\\beta_{(p)}|$.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        beta (np.ndarray): Coefficient vector.
        k (int): Number of entries which are not penalized.

    Returns:
        float: The trim penalty.
    """
    p = beta.shape[0]
    return np.sum(np.sort(np.abs(beta))[: p - k])


@nb.njit()
def trimmed_lasso_objective(
    beta: np.ndarray,
    X: np.ndarray,
    y: np.ndarray,
    mu: float,
    lambda_: float,
    k: int,
) -> float:
    """Objective value of the trimmed Lasso problem.

    $$\\frac{1}{2}\\|y - X\\beta\\|_2^2 + \\mu \\|\\beta\\|_1 + \\lambda T_k(\\beta)$$

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        beta (np.ndarray): Coefficient vector.
        X (np.ndarray): Design matrix $X$.
        y (np.ndarray): Response vector $y$.
        mu (float): Weight of the usual Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        k (int): Sparsity target.

    Returns:
        float: The objective value.
    """
    residual = y - X @ beta
    return (
        0.5 * np.sum(residual**2)
        + mu * np.sum(np.abs(beta))
        + lambda_ * trim_penalty(beta, k)
    )
