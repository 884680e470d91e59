import numpy as np

from .error import ExtremePointError


def _fill_with_random_signs(
    gamma: np.ndarray,
    candidates: np.ndarray,
    n_needed: int,
    lambda_: float,
    rng: np.random.Generator,
) -> int:
    chosen = candidates[: max(n_needed, 0)]
    gamma[chosen] = lambda_ * rng.choice([-1.0, 1.0], size=chosen.shape[0])
    return chosen.shape[0]


def select_extreme_point(
    beta: np.ndarray,
    X: np.ndarray,
    y: np.ndarray,
    k: int,
    mu: float,
    lambda_: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Select an extreme point of the subdifferential of $\\lambda T_k$ at $\\beta$.

    The returned $\\gamma$ has exactly $k$ entries in $\\{-\\lambda, +\\lambda\\}$ and
    $p - k$ zeros. Entries strictly larger in magnitude than the $k$-th largest
    $|\\beta_i|$ take $\\lambda \\text{sign}(\\beta_i)$, strictly smaller ones are zero.
    Entries tied with the $k$-th largest magnitude are resolved as follows:

    - A single tied entry with non-zero magnitude takes $\\lambda \\text{sign}(\\beta_j)$.
    - For several tied non-zero entries, one entry $j$ is drawn. If
      $\\langle X_j, X\\beta - y\\rangle + (\\mu + \\lambda)\\text{sign}(\\beta_j) \\neq 0$ it is
      set to zero, otherwise it takes $\\lambda \\text{sign}(\\beta_j)$. The remaining slots
      are filled with random signs among the other tied entries, using $j$ last.
    - If the tied magnitude is zero, the tied entries are scanned in random order for
      a directional derivative $|\\langle X_i, X\\beta - y\\rangle| > \\mu$. The first such
      entry takes $-\\lambda$ times the sign of the derivative, the remaining slots are
      filled with random signs.

    Which of several equally valid extreme points is returned depends on `rng`.

    Args:
        beta (np.ndarray): Current estimate.
        X (np.ndarray): Design matrix.
        y (np.ndarray): Response vector.
        k (int): Sparsity target.
        mu (float): Weight of the Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        rng (np.random.Generator): Tie-breaker.

    Raises:
        ExtremePointError: If the number of selected entries differs from `k`.

    Returns:
        np.ndarray: The extreme point $\\gamma$.
    """
    p = beta.shape[0]
    abs_beta = np.abs(beta)
    bk = np.sort(abs_beta)[p - k]

    gamma = np.zeros(p)
    above = abs_beta > bk
    gamma[above] = lambda_ * np.sign(beta[above])
    n_selected = int(np.sum(above))
    undecided = np.flatnonzero(abs_beta == bk)

    residual = X @ beta - y

    if bk > 0:
        if undecided.shape[0] == 1:
            j = undecided[0]
            gamma[j] = lambda_ * np.sign(beta[j])
            n_selected += 1
        else:
            j = rng.choice(undecided)
            others = rng.permutation(undecided[undecided != j])
            if X[:, j] @ residual + (mu + lambda_) * np.sign(beta[j]) != 0:
                gamma[j] = 0
                candidates = np.append(others, j)
            else:
                gamma[j] = lambda_ * np.sign(beta[j])
                n_selected += 1
                candidates = others
            n_selected += _fill_with_random_signs(
                gamma, candidates, k - n_selected, lambda_, rng
            )
    else:
        order = rng.permutation(undecided)
        derivatives = X[:, order].T @ residual
        hits = np.flatnonzero(np.abs(derivatives) > mu)
        if hits.shape[0] > 0:
            j = order[hits[0]]
            gamma[j] = -lambda_ * np.sign(derivatives[hits[0]])
            n_selected += 1
            candidates = order[order != j]
        else:
            # Any extreme point will do
            candidates = order
        n_selected += _fill_with_random_signs(
            gamma, candidates, k - n_selected, lambda_, rng
        )

    if n_selected != k:
        raise ExtremePointError(
            f"Extreme point not found. Selected {n_selected} entries, expected k={k}."
        )
    return gamma


def admm_gamma_update(
    beta: np.ndarray,
    q: np.ndarray,
    k: int,
    lambda_: float,
    sigma: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Minimize the augmented Lagrangian with respect to $\\gamma$.

    For each coordinate we evaluate three candidates with $v_i = \\beta_i + q_i / \\sigma$:

    | Candidate | Cost | Value |
    |-----------|------|-------|
    | 1 | $\\frac{\\sigma}{2}\\beta_i^2 + q_i\\beta_i + \\frac{q_i^2}{2\\sigma}$ | $0$ |
    | 2 | $\\frac{\\lambda^2}{2\\sigma} + \\lambda|v_i + \\lambda / \\sigma|$ | $v_i + \\lambda / \\sigma$ |
    | 3 | $\\frac{\\lambda^2}{2\\sigma} + \\lambda|v_i - \\lambda / \\sigma|$ | $v_i - \\lambda / \\sigma$ |

    The trimming cost of a coordinate is the smallest of its three candidate costs.
    The $p - k$ coordinates with the smallest trimming cost take the value of their
    cheapest candidate, the remaining $k$ coordinates are left free, $\\gamma_i = v_i$.
    Equal trimming costs are ordered by `rng`.

    Args:
        beta (np.ndarray): Current $\\beta$ iterate.
        q (np.ndarray): Current multiplier.
        k (int): Sparsity target.
        lambda_ (float): Weight of the trim penalty.
        sigma (float): Augmented Lagrangian penalty.
        rng (np.random.Generator): Tie-breaker.

    Returns:
        np.ndarray: The new $\\gamma$.
    """
    p = beta.shape[0]
    v = beta + q / sigma
    shift = lambda_ / sigma
    constant = lambda_**2 / (2 * sigma)

    costs = np.stack(
        (
            sigma / 2 * beta**2 + q * beta + q**2 / (2 * sigma),
            constant + lambda_ * np.abs(v + shift),
            constant + lambda_ * np.abs(v - shift),
        )
    )
    values = np.stack((np.zeros(p), v + shift, v - shift))

    cheapest = np.argmin(costs, axis=0)
    trimming_cost = costs[cheapest, np.arange(p)]
    order = np.lexsort((rng.random(p), trimming_cost))
    trimmed = order[: p - k]

    gamma = np.copy(v)
    gamma[trimmed] = values[cheapest[trimmed], trimmed]
    return gamma
