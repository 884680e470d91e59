import numpy as np
import pytest

import trimlasso.extreme_point
from trimlasso.error import ExtremePointError
from trimlasso.extreme_point import admm_gamma_update, select_extreme_point

SEEDS = [1, 2, 3, 4, 5]
K = [1, 3, 5]
LAMBDA = 0.7


def make_problem(seed, n=20, p=8):
    rng = np.random.default_rng(seed)
    X = rng.standard_normal((n, p))
    y = rng.standard_normal(n)
    return X, y


def assert_extreme_point(gamma, k, lambda_):
    assert np.sum(gamma != 0) == k
    assert np.allclose(np.abs(gamma[gamma != 0]), lambda_)


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
@pytest.mark.parametrize("k", K, ids=lambda x: f"k_{x}")
def test_distinct_magnitudes_select_largest(seed, k):
    X, y = make_problem(seed)
    rng = np.random.default_rng(seed)
    beta = rng.standard_normal(8)
    gamma = select_extreme_point(beta, X, y, k, 0.1, LAMBDA, rng)

    assert_extreme_point(gamma, k, LAMBDA)
    largest = np.argsort(np.abs(beta))[::-1][:k]
    assert np.all(gamma[largest] == LAMBDA * np.sign(beta[largest]))


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
@pytest.mark.parametrize("k", K, ids=lambda x: f"k_{x}")
def test_ties_at_nonzero_magnitude(seed, k):
    X, y = make_problem(seed)
    rng = np.random.default_rng(seed)
    beta = np.array([5.0, -2.0, 2.0, 2.0, -2.0, 2.0, 1.0, 0.0])
    gamma = select_extreme_point(beta, X, y, k, 0.1, LAMBDA, rng)

    assert_extreme_point(gamma, k, LAMBDA)
    assert gamma[0] == LAMBDA
    assert gamma[6] == 0 and gamma[7] == 0


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
@pytest.mark.parametrize("k", K, ids=lambda x: f"k_{x}")
def test_ties_at_zero(seed, k):
    X, y = make_problem(seed)
    rng = np.random.default_rng(seed)
    gamma = select_extreme_point(np.zeros(8), X, y, k, 0.1, LAMBDA, rng)
    assert_extreme_point(gamma, k, LAMBDA)


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_stationary_tie_is_kept(seed):
    # <X_j, X beta - y> + (mu + lambda) sign(beta_j) = -1 + 1 = 0 for every j
    X = np.eye(3)
    y = np.full(3, 2.0)
    beta = np.ones(3)
    gamma = select_extreme_point(
        beta, X, y, 2, 0.5, 0.5, np.random.default_rng(seed)
    )
    drawn = np.random.default_rng(seed).choice(np.arange(3))

    assert_extreme_point(gamma, 2, 0.5)
    assert gamma[drawn] == 0.5


def test_single_tie_takes_sign():
    X, y = make_problem(0)
    beta = np.array([3.0, -2.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0])
    gamma = select_extreme_point(
        beta, X, y, 2, 0.1, LAMBDA, np.random.default_rng(0)
    )
    assert np.all(gamma == np.array([LAMBDA, -LAMBDA, 0, 0, 0, 0, 0, 0]))


def test_zero_tie_follows_directional_derivative():
    # Only the last coordinate has a derivative above mu
    p = 5
    X = np.eye(p)
    y = np.array([0.0, 0.0, 0.0, 0.0, 5.0])
    beta = np.array([1.0, 0.0, 0.0, 0.0, 0.0])
    for seed in SEEDS:
        gamma = select_extreme_point(
            beta, X, y, 2, 0.1, LAMBDA, np.random.default_rng(seed)
        )
        assert np.all(gamma == np.array([LAMBDA, 0, 0, 0, LAMBDA]))


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_selection_is_reproducible(seed):
    X, y = make_problem(seed)
    beta = np.zeros(8)
    first = select_extreme_point(
        beta, X, y, 3, 100.0, LAMBDA, np.random.default_rng(seed)
    )
    second = select_extreme_point(
        beta, X, y, 3, 100.0, LAMBDA, np.random.default_rng(seed)
    )
    assert np.all(first == second)


def test_wrong_count_raises(monkeypatch):
    monkeypatch.setattr(
        trimlasso.extreme_point, "_fill_with_random_signs", lambda *args: 0
    )
    X = np.zeros((4, 4))
    y = np.zeros(4)
    with pytest.raises(ExtremePointError):
        select_extreme_point(
            np.zeros(4), X, y, 2, 0.1, LAMBDA, np.random.default_rng(0)
        )


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
@pytest.mark.parametrize("k", K, ids=lambda x: f"k_{x}")
def test_admm_gamma_update_large_lambda_is_sparse(seed, k):
    rng = np.random.default_rng(seed)
    beta = rng.standard_normal(8)
    q = rng.standard_normal(8)
    sigma = 1.0
    gamma = admm_gamma_update(beta, q, k, 1000.0, sigma, rng)

    v = beta + q / sigma
    largest = np.argsort(np.abs(v))[::-1][:k]
    assert np.sum(gamma != 0) <= k
    assert np.allclose(gamma[largest], v[largest])


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_admm_gamma_update_without_trim_penalty(seed):
    rng = np.random.default_rng(seed)
    beta = rng.standard_normal(8)
    q = rng.standard_normal(8)
    gamma = admm_gamma_update(beta, q, 2, 0.0, 2.0, rng)
    assert np.allclose(gamma, beta + q / 2.0)


def test_admm_gamma_update_ties_are_reproducible():
    beta = np.ones(6)
    q = np.zeros(6)
    first = admm_gamma_update(beta, q, 2, 0.5, 1.0, np.random.default_rng(7))
    second = admm_gamma_update(beta, q, 2, 0.5, 1.0, np.random.default_rng(7))
    assert np.all(first == second)
    assert first.shape == (6,)
