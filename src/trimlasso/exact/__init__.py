from .backends import CvxpyBackend, EnumerationBackend
from .formulations import (
    build_bigm_model,
    build_envelope_model,
    build_sos1_model,
    envelope_solve,
    exact_solve_bigm,
    exact_solve_sos1,
)
from .model import MixedIntegerModel

__all__ = [
    "CvxpyBackend",
    "EnumerationBackend",
    "MixedIntegerModel",
    "build_bigm_model",
    "build_envelope_model",
    "build_sos1_model",
    "envelope_solve",
    "exact_solve_bigm",
    "exact_solve_sos1",
]
