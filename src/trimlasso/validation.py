import numpy as np

from .error import ConfigurationError


def check_problem(X: np.ndarray, y: np.ndarray, p: int, k: int) -> None:
    """Validate the data and the declared dimensions of a trimmed Lasso problem.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector of length n.
        p (int): Declared number of features.
        k (int): Sparsity target.

    Raises:
        ConfigurationError: If the shapes do not match or `k` is outside of (0, p].
    """
    if X.ndim != 2:
        raise ConfigurationError(f"X must be a 2-d array. Got {X.ndim} dimensions.")
    if y.ndim != 1:
        raise ConfigurationError(f"y must be a 1-d array. Got {y.ndim} dimensions.")
    if p != X.shape[1]:
        raise ConfigurationError(
            f"Specified p={p} is not equal to the column dimension of X ({X.shape[1]})."
        )
    if y.shape[0] != X.shape[0]:
        raise ConfigurationError(
            f"X has {X.shape[0]} rows, but y has {y.shape[0]} entries."
        )
    if X.shape[0] < 1:
        raise ConfigurationError("At least one observation is required.")
    if not (0 < k <= p):
        raise ConfigurationError(f"k must satisfy 0 < k <= p={p}. Got k={k}.")


def check_penalties(mu: float, lambda_: float) -> None:
    if not (np.isfinite(mu) and mu >= 0):
        raise ConfigurationError(f"mu must be finite and non-negative. Got {mu}.")
    if not (np.isfinite(lambda_) and lambda_ >= 0):
        raise ConfigurationError(
            f"lambda_ must be finite and non-negative. Got {lambda_}."
        )


def check_sigma(sigma: float) -> None:
    if not (np.isfinite(sigma) and sigma > 0):
        raise ConfigurationError(f"sigma must be finite and positive. Got {sigma}.")


def check_big_m(big_m: float) -> None:
    if not (big_m >= 0 and big_m < np.inf):
        raise ConfigurationError(
            f"Invalid big-M value supplied. Must be finite and non-negative. Got {big_m}."
        )


def as_float_arrays(X, y):
    return (
        np.ascontiguousarray(X, dtype=np.float64),
        np.ascontiguousarray(y, dtype=np.float64),
    )
