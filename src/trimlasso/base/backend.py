from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np


@dataclass
class Solution:
    """Optimal variable values as returned by a solver backend."""

    values: Dict[str, np.ndarray]
    objective_value: float
    status: str = "optimal"
    info: Dict = field(default_factory=dict)

    def __getitem__(self, name: str) -> np.ndarray:
        return self.values[name]


class SolverBackend(ABC):
    """Capability interface of a mathematical optimization solver.

    A backend accepts a `MixedIntegerModel` and either returns a `Solution` or
    raises a `SolverError`. Backends declare their capabilities, models needing
    a capability the backend lacks raise `UnsupportedCapabilityError` before solving.
    """

    supports_integer: bool = False
    supports_sos1: bool = False

    def __init__(self, time_limit: Optional[float] = None):
        if time_limit is not None and not time_limit > 0:
            raise ValueError(f"time_limit must be positive. Got {time_limit}.")
        self.time_limit = time_limit

    @abstractmethod
    def solve(self, model) -> Solution:
        pass
