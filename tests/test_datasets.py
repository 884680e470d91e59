import numpy as np
import pytest

from trimlasso import make_sparse_regression
from trimlasso.utils import as_generator, print_message, relative_change


@pytest.mark.parametrize("k", [1, 4, 10], ids=lambda x: f"k_{x}")
def test_make_sparse_regression(k):
    X, y, beta_true = make_sparse_regression(n=50, p=10, k=k, random_state=0)
    assert X.shape == (50, 10)
    assert y.shape == (50,)
    assert np.sum(beta_true != 0) == k
    assert np.all(beta_true[beta_true != 0] == 1.0)


def test_make_sparse_regression_snr():
    X, y, beta_true = make_sparse_regression(
        n=10000, p=10, k=5, snr=4.0, random_state=0
    )
    signal = X @ beta_true
    assert np.isclose(np.var(signal) / np.var(y - signal), 4.0, rtol=0.1)


@pytest.mark.parametrize(
    "k, snr", [(0, 10.0), (11, 10.0), (2, 0.0)], ids=["k_zero", "k_large", "snr_zero"]
)
def test_make_sparse_regression_invalid(k, snr):
    with pytest.raises(ValueError):
        make_sparse_regression(n=50, p=10, k=k, snr=snr)


def test_as_generator():
    rng = np.random.default_rng(0)
    assert as_generator(rng) is rng
    assert as_generator(1).random() == np.random.default_rng(1).random()
    with pytest.raises(TypeError):
        as_generator(np.random.RandomState(0))


@pytest.mark.parametrize("verbose", [0, 1, 2], ids=lambda x: f"verbose_{x}")
def test_print_message(capsys, verbose):
    print_message("solver", "done", level=1, verbose=verbose)
    out = capsys.readouterr().out
    assert (out == "[solver] done\n") == (verbose >= 1)


def test_relative_change():
    assert relative_change(1.0, 1.0) == 0.0
    assert np.isclose(relative_change(1.5, 0.99), 0.51)
    assert np.isclose(relative_change(0.02, 0.0), 2.0)
