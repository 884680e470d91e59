import numbers
from typing import Literal

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin, _fit_context
from sklearn.utils._param_validation import Interval, StrOptions
from sklearn.utils.validation import check_is_fitted, validate_data

from ..base import HeuristicMethod
from ..methods import get_heuristic_method
from ..objective import trimmed_lasso_objective


class TrimmedLasso(RegressorMixin, BaseEstimator):
    "Linear regression with the trimmed Lasso penalty."

    _parameter_constraints = {
        "k": [Interval(numbers.Integral, 1, None, closed="left")],
        "mu": [Interval(numbers.Real, 0.0, None, closed="left")],
        "lmbd": [Interval(numbers.Real, 0.0, None, closed="left")],
        "method": [HeuristicMethod, StrOptions({"altmin", "admm"})],
        "fit_intercept": [bool],
        "random_state": [Interval(numbers.Integral, 0, None, closed="left"), None],
    }

    def __init__(
        self,
        k: int = 1,
        mu: float = 0.01,
        lmbd: float = 0.01,
        method: HeuristicMethod | Literal["altmin", "admm"] = "altmin",
        fit_intercept: bool = True,
        random_state: int | None = None,
    ):
        """The trimmed Lasso estimator.

        Minimizes
        $$\\frac{1}{2}\\|y - X\\beta\\|_2^2 + \\mu \\|\\beta\\|_1 + \\lambda T_k(\\beta)$$
        where $T_k(\\beta)$ is the sum of the $p - k$ smallest absolute coefficients. For
        sufficiently large $\\lambda$ the solution has at most $k$ non-zero coefficients.
        The problem is non-convex and is solved heuristically.

        Args:
            k (int, optional): Number of coefficients excluded from the trim penalty. Defaults to 1.
            mu (float, optional): Weight of the usual Lasso penalty. Defaults to 0.01.
            lmbd (float, optional): Weight of the trim penalty $\\lambda$. Defaults to 0.01.
            method (HeuristicMethod | Literal["altmin", "admm"], optional): The heuristic. Can be a
                string or `HeuristicMethod` instance. Defaults to "altmin".
            fit_intercept (bool, optional): Whether to fit an unpenalized intercept by centering
                $X$ and $y$. Defaults to True.
            random_state (int | None, optional): Seed of the random start value and the
                tie-breaking. Defaults to None.
        """
        self.k = k
        self.mu = mu
        self.lmbd = lmbd
        self.method = method
        self.fit_intercept = fit_intercept
        self.random_state = random_state

    @property
    def beta(self):
        check_is_fitted(self)
        return self.coef_

    def __sklearn_tags__(self):
        tags = super().__sklearn_tags__()
        tags.regressor_tags.poor_score = True
        return tags

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X: np.ndarray, y: np.ndarray) -> "TrimmedLasso":
        """Fit the trimmed Lasso.

        Args:
            X (np.ndarray): The design matrix $X$.
            y (np.ndarray): The response vector $y$.

        Raises:
            ValueError: If `k` exceeds the number of features.
        """
        X, y = validate_data(
            self, X=X, y=y, reset=True, dtype=[np.float64], y_numeric=True
        )
        if self.k > X.shape[1]:
            raise ValueError(
                f"k={self.k} exceeds the number of features n_features={X.shape[1]}."
            )
        self._method = get_heuristic_method(self.method)

        if self.fit_intercept:
            X_offset = X.mean(axis=0)
            y_offset = y.mean()
        else:
            X_offset = np.zeros(X.shape[1])
            y_offset = 0.0
        X_centered = X - X_offset
        y_centered = y - y_offset

        self.coef_ = self._method.solve(
            X_centered,
            y_centered,
            k=self.k,
            mu=self.mu,
            lambda_=self.lmbd,
            random_state=self.random_state,
        )
        self.intercept_ = float(y_offset - X_offset @ self.coef_)
        self.n_iter_ = self._method.n_iter_
        self.objective_ = trimmed_lasso_objective(
            self.coef_, X_centered, y_centered, self.mu, self.lmbd, self.k
        )
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict using the fitted coefficients.

        Args:
            X (np.ndarray): The design matrix $X$.

        Returns:
            np.ndarray: The predictions.
        """
        check_is_fitted(self)
        X = validate_data(self, X=X, reset=False, dtype=[np.float64])
        return X @ self.coef_ + self.intercept_
