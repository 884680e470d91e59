import numpy as np
import pytest

from trimlasso.objective import trim_penalty, trimmed_lasso_objective

P = [1, 5, 20]
SEEDS = [1, 2, 3]


@pytest.mark.parametrize("p", P, ids=lambda x: f"p_{x}")
@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_trim_penalty_sum_of_smallest(p, seed):
    rng = np.random.default_rng(seed)
    beta = rng.standard_normal(p)
    for k in range(1, p + 1):
        largest = np.sort(np.abs(beta))[::-1][:k]
        expected = np.sum(np.abs(beta)) - np.sum(largest)
        assert np.isclose(trim_penalty(beta, k), expected)


@pytest.mark.parametrize("p", P, ids=lambda x: f"p_{x}")
def test_trim_penalty_vanishes_for_k_sparse(p):
    beta = np.zeros(p)
    beta[0] = 3.0
    for k in range(1, p + 1):
        assert trim_penalty(beta, k) == 0.0
    assert trim_penalty(np.ones(p), p) == 0.0


def test_trim_penalty_with_ties():
    beta = np.array([2.0, -1.0, 1.0, -1.0, 0.5])
    assert np.isclose(trim_penalty(beta, 2), 2.5)
    assert np.isclose(trim_penalty(beta, 4), 0.5)


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_trimmed_lasso_objective(seed):
    rng = np.random.default_rng(seed)
    X = rng.standard_normal((30, 6))
    y = rng.standard_normal(30)
    beta = rng.standard_normal(6)
    mu, lambda_, k = 0.5, 2.0, 3

    expected = (
        0.5 * np.sum((y - X @ beta) ** 2)
        + mu * np.sum(np.abs(beta))
        + lambda_ * np.sum(np.sort(np.abs(beta))[:3])
    )
    assert np.isclose(trimmed_lasso_objective(beta, X, y, mu, lambda_, k), expected)


def test_objective_without_penalties_is_least_squares():
    rng = np.random.default_rng(0)
    X = rng.standard_normal((30, 6))
    y = rng.standard_normal(30)
    beta = rng.standard_normal(6)
    assert np.isclose(
        trimmed_lasso_objective(beta, X, y, 0.0, 0.0, 2),
        0.5 * np.sum((y - X @ beta) ** 2),
    )
