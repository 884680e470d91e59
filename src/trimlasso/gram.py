import numba as nb
import numpy as np
import scipy.linalg


@nb.njit()
def init_gram(X: np.ndarray) -> np.ndarray:
    """Initialise the Gramian Matrix.

    The Gramian Matrix is defined as
    $$
    G = X^T X
    $$
    where $X$ is the design matrix.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        X (np.ndarray): Design matrix $X$

    Returns:
        np.ndarray: Gramian Matrix.
    """
    return X.T @ X


@nb.njit()
def init_y_gram(X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Initialise the y-Gramian vector $H = X^T y$.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        X (np.ndarray): Design matrix $X$
        y (np.ndarray): Response variable $Y$

    Returns:
        np.ndarray: y-Gramian vector of length p.
    """
    return X.T @ y


def augment_gram(gram: np.ndarray, sigma: float) -> np.ndarray:
    """Add the augmented Lagrangian penalty to the diagonal, $G + \\sigma I$."""
    return gram + sigma * np.eye(gram.shape[0])


def spectral_norm(gram: np.ndarray) -> float:
    """Operator 2-norm of a symmetric positive semi-definite matrix.

    For a symmetric PSD matrix the operator norm is its largest eigenvalue.

    Args:
        gram (np.ndarray): Symmetric PSD matrix.

    Returns:
        float: The spectral norm.
    """
    p = gram.shape[0]
    largest = scipy.linalg.eigvalsh(gram, subset_by_index=[p - 1, p - 1])
    return float(max(largest[0], 0.0))
