from typing import Tuple

import numpy as np

from .utils import RandomState, as_generator


def make_sparse_regression(
    n: int,
    p: int,
    k: int,
    snr: float = 10.0,
    random_state: RandomState = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Create a synthetic sparse regression instance.

    The design matrix has i.i.d. standard normal entries. The true coefficients are
    one on `k` evenly spaced coordinates and zero elsewhere. Gaussian noise is added
    such that the signal-to-noise ratio $\\text{Var}(X\\beta) / \\text{Var}(\\varepsilon)$
    equals `snr`.

    Args:
        n (int): Number of observations.
        p (int): Number of features.
        k (int): Number of non-zero coefficients.
        snr (float, optional): Signal-to-noise ratio. Defaults to 10.0.
        random_state (int | np.random.Generator | None, optional): Seed or generator. Defaults to None.

    Returns:
        Tuple[np.ndarray, np.ndarray, np.ndarray]: The design matrix, the response and the true coefficients.
    """
    if not (0 < k <= p):
        raise ValueError(f"k must satisfy 0 < k <= p={p}. Got k={k}.")
    if not snr > 0:
        raise ValueError(f"snr must be positive. Got {snr}.")
    rng = as_generator(random_state)

    X = rng.standard_normal((n, p))
    beta_true = np.zeros(p)
    beta_true[np.round(np.linspace(0, p - 1, k)).astype(int)] = 1.0

    signal = X @ beta_true
    noise_scale = np.sqrt(np.var(signal) / snr) if n > 1 else 0.0
    y = signal + noise_scale * rng.standard_normal(n)
    return X, y, beta_true
