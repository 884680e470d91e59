import numpy as np
import pytest
from sklearn.datasets import load_diabetes
from sklearn.linear_model import Lasso

from trimlasso.proximal import proximal_lasso_solve, soft_threshold

SEEDS = [1, 2, 3]


def test_soft_threshold():
    value = np.array([-3.0, -0.5, 0.0, 0.5, 3.0])
    expected = np.array([-2.0, 0.0, 0.0, 0.0, 2.0])
    assert np.allclose(soft_threshold(value, 1.0), expected)
    assert np.allclose(soft_threshold(value, 0.0), value)


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_identity_with_unit_weight_shrinks_to_zero(seed):
    beta_init = np.random.default_rng(seed).standard_normal(10)
    beta = proximal_lasso_solve(
        A=np.eye(10), c=np.zeros(10), w=1.0, beta_init=beta_init
    )
    assert np.all(beta == 0)


@pytest.mark.parametrize("seed", SEEDS, ids=lambda x: f"seed_{x}")
def test_vanishing_problem_keeps_start_value(seed):
    beta_init = np.random.default_rng(seed).standard_normal(10)
    beta = proximal_lasso_solve(
        A=np.zeros((10, 10)), c=np.zeros(10), w=0.0, beta_init=beta_init
    )
    assert np.allclose(beta, beta_init)


def test_warm_start_is_not_modified():
    beta_init = np.ones(5)
    _ = proximal_lasso_solve(A=np.eye(5), c=np.zeros(5), w=1.0, beta_init=beta_init)
    assert np.all(beta_init == 1.0)


@pytest.mark.parametrize("max_iter", [1, 5, 50], ids=lambda x: f"max_iter_{x}")
def test_iteration_budget(max_iter):
    X, y = load_diabetes(return_X_y=True)
    _, n_iter = proximal_lasso_solve(
        A=X.T @ X,
        c=-X.T @ y,
        w=1.0,
        beta_init=np.zeros(X.shape[1]),
        max_iter=max_iter,
        tol=0.0,
        return_n_iter=True,
    )
    assert n_iter == max_iter


@pytest.mark.parametrize("alpha", [0.1, 1.0, 10.0], ids=lambda x: f"alpha_{x}")
def test_proximal_lasso_against_sklearn(alpha):
    # sklearn scales the squared error by 1 / n
    X, y = load_diabetes(return_X_y=True)
    X /= X.std(axis=0)
    y = y - y.mean()
    N, J = X.shape

    beta = proximal_lasso_solve(
        A=X.T @ X,
        c=-X.T @ y,
        w=alpha * N,
        beta_init=np.zeros(J),
        max_iter=100000,
        tol=1e-10,
    )
    lasso = Lasso(alpha=alpha, fit_intercept=False, tol=1e-10, max_iter=100000)
    lasso.fit(X, y)

    assert np.allclose(beta, lasso.coef_, atol=1e-4)
