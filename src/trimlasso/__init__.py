from importlib.metadata import version

from .admm import admm_solve
from .alternating import alternating_minimize
from .datasets import make_sparse_regression
from .error import (
    BigMBindingError,
    ConfigurationError,
    ExtremePointError,
    SolverError,
    UnsupportedCapabilityError,
)
from .estimators import TrimmedLasso
from .exact import (
    CvxpyBackend,
    EnumerationBackend,
    MixedIntegerModel,
    envelope_solve,
    exact_solve_bigm,
    exact_solve_sos1,
)
from .extreme_point import admm_gamma_update, select_extreme_point
from .gram import init_gram, init_y_gram, spectral_norm
from .methods import ADMM, AlternatingMinimization, get_heuristic_method
from .objective import trim_penalty, trimmed_lasso_objective
from .proximal import proximal_lasso_solve, soft_threshold
from .warnings import BigMBindingWarning, MaxIterationsWarning

try:
    __version__ = version("trimlasso")
except Exception:
    __version__ = "dev"

__all__ = [
    "TrimmedLasso",
    "AlternatingMinimization",
    "ADMM",
    "get_heuristic_method",
    "alternating_minimize",
    "admm_solve",
    "proximal_lasso_solve",
    "soft_threshold",
    "select_extreme_point",
    "admm_gamma_update",
    "trim_penalty",
    "trimmed_lasso_objective",
    "init_gram",
    "init_y_gram",
    "spectral_norm",
    "make_sparse_regression",
    "MixedIntegerModel",
    "CvxpyBackend",
    "EnumerationBackend",
    "exact_solve_sos1",
    "exact_solve_bigm",
    "envelope_solve",
    "ConfigurationError",
    "ExtremePointError",
    "SolverError",
    "UnsupportedCapabilityError",
    "BigMBindingError",
    "BigMBindingWarning",
    "MaxIterationsWarning",
]
