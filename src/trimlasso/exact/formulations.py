import warnings

import numpy as np

from ..base import SolverBackend
from ..error import BigMBindingError
from ..validation import as_float_arrays, check_big_m, check_penalties, check_problem
from ..warnings import BigMBindingWarning
from .model import MixedIntegerModel

BINDING_TOLERANCE = 1e-3


def _add_absolute_value(model: MixedIntegerModel, p: int) -> None:
    # gamma >= |beta|
    identity = np.eye(p)
    model.add_constraint({"gamma": identity, "beta": -identity}, ">=", 0.0)
    model.add_constraint({"gamma": identity, "beta": identity}, ">=", 0.0)


def _least_squares(X: np.ndarray, y: np.ndarray):
    return {"beta": (X, y)}


def build_sos1_model(
    X: np.ndarray, y: np.ndarray, p: int, k: int, mu: float, lambda_: float
) -> MixedIntegerModel:
    """The SOS1 formulation of the trimmed Lasso.

    $$
    \\begin{aligned}
    \\min_{\\beta, \\gamma, z, \\pi} \\quad & \\frac{1}{2}\\|y - X\\beta\\|_2^2 + (\\mu + \\lambda) \\sum_i \\gamma_i - \\lambda \\sum_i \\pi_i \\\\
    \\text{s.t.} \\quad & \\gamma \\geq |\\beta|, \\; 0 \\leq \\pi \\leq \\gamma, \\; \\sum_i z_i = p - k, \\\\
    & z \\in \\{0, 1\\}^p, \\; \\text{SOS1}(z_i, \\pi_i) \\; \\forall i.
    \\end{aligned}
    $$
    """
    model = MixedIntegerModel(name="trimmed_lasso_sos1")
    model.add_variable("beta", p)
    model.add_variable("gamma", p, lower_bound=0.0)
    model.add_variable("z", p, binary=True)
    model.add_variable("pi", p, lower_bound=0.0)

    _add_absolute_value(model, p)
    model.add_constraint({"z": np.ones((1, p))}, "==", p - k)
    model.add_constraint({"pi": np.eye(p), "gamma": -np.eye(p)}, "<=", 0.0)
    for i in range(p):
        model.add_sos1([("z", i), ("pi", i)])

    model.set_objective(
        least_squares=_least_squares(X, y),
        linear={"gamma": mu + lambda_, "pi": -lambda_},
    )
    return model


def build_bigm_model(
    X: np.ndarray,
    y: np.ndarray,
    p: int,
    k: int,
    mu: float,
    lambda_: float,
    big_m: float,
) -> MixedIntegerModel:
    """The big-M formulation of the trimmed Lasso.

    $$
    \\begin{aligned}
    \\min_{\\beta, \\gamma, a, z} \\quad & \\frac{1}{2}\\|y - X\\beta\\|_2^2 + \\mu \\sum_i \\gamma_i + \\lambda \\sum_i a_i \\\\
    \\text{s.t.} \\quad & \\gamma \\geq |\\beta|, \\; a_i \\geq M z_i + \\gamma_i - M, \\; a \\geq 0, \\\\
    & |\\beta_i| \\leq M, \\; \\sum_i z_i = p - k, \\; z \\in \\{0, 1\\}^p.
    \\end{aligned}
    $$
    """
    model = MixedIntegerModel(name="trimmed_lasso_bigm")
    model.add_variable("beta", p, lower_bound=-big_m, upper_bound=big_m)
    model.add_variable("gamma", p, lower_bound=0.0)
    model.add_variable("a", p, lower_bound=0.0)
    model.add_variable("z", p, binary=True)

    _add_absolute_value(model, p)
    model.add_constraint(
        {"a": np.eye(p), "z": -big_m * np.eye(p), "gamma": -np.eye(p)}, ">=", -big_m
    )
    model.add_constraint({"z": np.ones((1, p))}, "==", p - k)

    model.set_objective(
        least_squares=_least_squares(X, y),
        linear={"gamma": mu, "a": lambda_},
    )
    return model


def build_envelope_model(
    X: np.ndarray, y: np.ndarray, p: int, k: int, mu: float, lambda_: float
) -> MixedIntegerModel:
    """The convex envelope relaxation of the trimmed Lasso.

    $$
    \\begin{aligned}
    \\min_{\\beta, \\gamma, e} \\quad & \\frac{1}{2}\\|y - X\\beta\\|_2^2 + \\mu \\sum_i \\gamma_i + e \\\\
    \\text{s.t.} \\quad & \\gamma \\geq |\\beta|, \\; e \\geq 0, \\; e \\geq \\lambda \\sum_i \\gamma_i - \\lambda k.
    \\end{aligned}
    $$
    """
    model = MixedIntegerModel(name="trimmed_lasso_envelope")
    model.add_variable("beta", p)
    model.add_variable("gamma", p, lower_bound=0.0)
    model.add_variable("envelope", 1, lower_bound=0.0)

    _add_absolute_value(model, p)
    model.add_constraint(
        {"envelope": np.ones((1, 1)), "gamma": -lambda_ * np.ones((1, p))},
        ">=",
        -lambda_ * k,
    )
    model.set_objective(
        least_squares=_least_squares(X, y),
        linear={"gamma": mu, "envelope": 1.0},
    )
    return model


def exact_solve_sos1(
    X: np.ndarray,
    y: np.ndarray,
    p: int,
    k: int,
    mu: float,
    lambda_: float,
    backend: SolverBackend,
) -> np.ndarray:
    """Solve the trimmed Lasso to optimality using SOS1 constraints.

    The backend needs to support binary variables and SOS1 constraints, otherwise
    an `UnsupportedCapabilityError` is raised.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector.
        p (int): Number of features. Must match the columns of `X`.
        k (int): Sparsity target.
        mu (float): Weight of the Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        backend (SolverBackend): The solver backend.

    Raises:
        ConfigurationError: If the dimensions or penalties are invalid.
        SolverError: If the backend fails.

    Returns:
        np.ndarray: The optimal $\\beta$.
    """
    X, y = as_float_arrays(X, y)
    check_problem(X, y, p, k)
    check_penalties(mu, lambda_)
    model = build_sos1_model(X, y, p, k, mu, lambda_)
    solution = backend.solve(model)
    return solution["beta"]


def exact_solve_bigm(
    X: np.ndarray,
    y: np.ndarray,
    p: int,
    k: int,
    mu: float,
    lambda_: float,
    backend: SolverBackend,
    big_m: float,
    throw_on_binding: bool = True,
) -> np.ndarray:
    """Solve the trimmed Lasso to optimality using big-M constraints.

    The performance of big-M formulations depends heavily on how tight `big_m` bounds
    the largest coefficient. If $|\\beta_i| \\geq M - 10^{-3}$ for any $i$ at the optimum,
    the bound may have cut off the true optimum. In this case a `BigMBindingError` is
    raised, unless `throw_on_binding=False`, which returns the solution and emits a
    `BigMBindingWarning`.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector.
        p (int): Number of features. Must match the columns of `X`.
        k (int): Sparsity target.
        mu (float): Weight of the Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        backend (SolverBackend): The solver backend, needs binary variables.
        big_m (float): Upper bound on the largest absolute coefficient.
        throw_on_binding (bool, optional): Raise if the big-M bound is binding. Defaults to True.

    Raises:
        ConfigurationError: If the dimensions, penalties or `big_m` are invalid.
        BigMBindingError: If the big-M bound is binding and `throw_on_binding`.
        SolverError: If the backend fails.

    Returns:
        np.ndarray: The optimal $\\beta$.
    """
    X, y = as_float_arrays(X, y)
    check_problem(X, y, p, k)
    check_penalties(mu, lambda_)
    check_big_m(big_m)
    model = build_bigm_model(X, y, p, k, mu, lambda_, big_m)
    beta = backend.solve(model)["beta"]

    if np.any(np.abs(beta) >= big_m - BINDING_TOLERANCE):
        if throw_on_binding:
            raise BigMBindingError(beta=beta)
        warnings.warn(
            "The big-M constraint is binding. The solution may not be optimal.",
            BigMBindingWarning,
            stacklevel=2,
        )
    return beta


def envelope_solve(
    X: np.ndarray,
    y: np.ndarray,
    p: int,
    k: int,
    mu: float,
    lambda_: float,
    backend: SolverBackend,
) -> np.ndarray:
    """Solve the convex envelope relaxation of the trimmed Lasso.

    A convex problem, any backend solving convex quadratic programs will do.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector.
        p (int): Number of features. Must match the columns of `X`.
        k (int): Sparsity target.
        mu (float): Weight of the Lasso penalty.
        lambda_ (float): Weight of the trim penalty.
        backend (SolverBackend): The solver backend.

    Returns:
        np.ndarray: The relaxed solution $\\beta$.
    """
    X, y = as_float_arrays(X, y)
    check_problem(X, y, p, k)
    check_penalties(mu, lambda_)
    model = build_envelope_model(X, y, p, k, mu, lambda_)
    return backend.solve(model)["beta"]
