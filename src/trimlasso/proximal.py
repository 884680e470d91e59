from typing import Tuple, Union

import numba as nb
import numpy as np

from .gram import spectral_norm


@nb.njit()
def soft_threshold(value: np.ndarray, threshold: float):
    """The soft thresholding function.

    For value \\(x\\) and threshold \\(\\lambda\\), the soft thresholding function \\(S(x, \\lambda)\\) is
    defined as:

    $$S(x, \\lambda) = sign(x) \\max(|x| - \\lambda, 0)$$

    Args:
        value (np.ndarray): The value
        threshold (float): The threshold

    Returns:
        out (np.ndarray): The thresholded value
    """
    return np.sign(value) * np.maximum(np.abs(value) - threshold, 0)


@nb.njit()
def proximal_gradient(
    A: np.ndarray,
    c: np.ndarray,
    weight: float,
    beta: np.ndarray,
    step: float,
    tolerance: float = 1e-3,
    max_iterations: int = 10000,
) -> Tuple[np.ndarray, int]:
    """The iteration of the proximal gradient method (ISTA) with a fixed step size.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        A (np.ndarray): Quadratic term, symmetric PSD matrix.
        c (np.ndarray): Linear term.
        weight (float): Weight of the L1 penalty.
        beta (np.ndarray): Start value.
        step (float): Step size.
        tolerance (float, optional): Break if the L2 change of the iterate is at most `tolerance`. Defaults to 1e-3.
        max_iterations (int, optional): Maximum iterations. Defaults to 10000.

    Returns:
        Tuple[np.ndarray, int]: The last iterate and the number of iterations.
    """
    beta_now = np.copy(beta)
    beta_prev = beta_now - 1.0
    i = 0
    while (i < max_iterations) and (
        np.sqrt(np.sum((beta_now - beta_prev) ** 2)) > tolerance
    ):
        beta_prev = beta_now
        gradient_step = beta_now - step * (A @ beta_now + c)
        beta_now = soft_threshold(gradient_step, step * weight)
        i += 1
    return beta_now, i


def proximal_lasso_solve(
    A: np.ndarray,
    c: np.ndarray,
    w: float,
    beta_init: np.ndarray,
    max_iter: int = 10000,
    tol: float = 1e-3,
    return_n_iter: bool = False,
) -> Union[np.ndarray, Tuple[np.ndarray, int]]:
    """Solve the weighted L1-regularized quadratic problem by proximal gradient.

    Approximately solves
    $$\\min_\\beta \\frac{1}{2}\\beta^T A \\beta + c^T \\beta + w \\|\\beta\\|_1$$
    with the fixed step size $t = 1 / \\|A\\|_2$. This is a fixed-budget subsolver,
    the last iterate is returned whether or not the tolerance was reached.

    Args:
        A (np.ndarray): Symmetric PSD matrix, e.g. $X^TX$ or $X^TX + \\sigma I$.
        c (np.ndarray): Linear term.
        w (float): L1 weight.
        beta_init (np.ndarray): Warm start.
        max_iter (int, optional): Maximum number of iterations. Defaults to 10000.
        tol (float, optional): Tolerance on the L2 change between iterates. Defaults to 1e-3.
        return_n_iter (bool, optional): Also return the number of iterations. Defaults to False.

    Returns:
        np.ndarray | Tuple[np.ndarray, int]: The solution and optionally the iteration count.
    """
    A = np.ascontiguousarray(A, dtype=np.float64)
    c = np.ascontiguousarray(c, dtype=np.float64)
    beta_init = np.ascontiguousarray(beta_init, dtype=np.float64)

    norm = spectral_norm(A)
    # A vanishing quadratic term leaves nothing to scale the step by
    step = 1.0 / norm if norm > 0 else 1.0

    beta, n_iter = proximal_gradient(
        A=A,
        c=c,
        weight=float(w),
        beta=beta_init,
        step=step,
        tolerance=tol,
        max_iterations=max_iter,
    )
    if return_n_iter:
        return beta, n_iter
    return beta
