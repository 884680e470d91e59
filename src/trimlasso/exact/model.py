from dataclasses import dataclass, field
from typing import Dict, List, Literal, Tuple

import numpy as np

Sense = Literal["<=", ">=", "=="]


@dataclass
class Variable:
    """A block of decision variables."""

    name: str
    size: int
    lower_bound: float = -np.inf
    upper_bound: float = np.inf
    binary: bool = False


@dataclass
class LinearConstraint:
    """The constraint $\\sum_v A_v x_v \\; (\\leq, \\geq, =) \\; b$.

    `coefficients` maps variable names to matrices of shape m x size.
    """

    coefficients: Dict[str, np.ndarray]
    sense: Sense
    rhs: np.ndarray


@dataclass
class SOS1Constraint:
    """At most one of the member entries may be non-zero."""

    members: List[Tuple[str, int]]


@dataclass
class QuadraticObjective:
    """The convex objective $\\sum_v \\frac{1}{2}\\|F_v x_v - g_v\\|_2^2 + \\sum_v c_v^T x_v + \\text{const}$."""

    least_squares: Dict[str, Tuple[np.ndarray, np.ndarray]] = field(
        default_factory=dict
    )
    linear: Dict[str, np.ndarray] = field(default_factory=dict)
    constant: float = 0.0


class MixedIntegerModel:
    """Backend-neutral description of a convex mixed-integer quadratic program.

    The model only holds data. Solving is delegated to a `SolverBackend`, which
    translates the description into the API of a concrete solver.
    """

    def __init__(self, name: str = "model"):
        self.name = name
        self.variables: Dict[str, Variable] = {}
        self.constraints: List[LinearConstraint] = []
        self.sos1: List[SOS1Constraint] = []
        self.objective = QuadraticObjective()

    @property
    def has_binaries(self) -> bool:
        return any(v.binary for v in self.variables.values())

    @property
    def n_binaries(self) -> int:
        return sum(v.size for v in self.variables.values() if v.binary)

    def add_variable(
        self,
        name: str,
        size: int,
        lower_bound: float = -np.inf,
        upper_bound: float = np.inf,
        binary: bool = False,
    ) -> Variable:
        if name in self.variables:
            raise ValueError(f"Variable {name} already exists in model {self.name}.")
        if binary:
            lower_bound, upper_bound = 0.0, 1.0
        variable = Variable(
            name=name,
            size=size,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            binary=binary,
        )
        self.variables[name] = variable
        return variable

    def add_constraint(
        self, coefficients: Dict[str, np.ndarray], sense: Sense, rhs
    ) -> LinearConstraint:
        if sense not in ("<=", ">=", "=="):
            raise ValueError(f"Sense {sense} not recognized.")
        rows = None
        checked = {}
        for name, matrix in coefficients.items():
            if name not in self.variables:
                raise ValueError(f"Unknown variable {name}.")
            matrix = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
            if matrix.shape[1] != self.variables[name].size:
                raise ValueError(f"Shape does not match for variable {name}.")
            if rows is not None and matrix.shape[0] != rows:
                raise ValueError("All coefficient matrices need the same number of rows.")
            rows = matrix.shape[0]
            checked[name] = matrix
        rhs = np.broadcast_to(np.asarray(rhs, dtype=np.float64), (rows,)).copy()
        constraint = LinearConstraint(coefficients=checked, sense=sense, rhs=rhs)
        self.constraints.append(constraint)
        return constraint

    def add_sos1(self, members: List[Tuple[str, int]]) -> SOS1Constraint:
        for name, index in members:
            if name not in self.variables:
                raise ValueError(f"Unknown variable {name}.")
            if not 0 <= index < self.variables[name].size:
                raise ValueError(f"Index {index} out of range for variable {name}.")
        constraint = SOS1Constraint(members=list(members))
        self.sos1.append(constraint)
        return constraint

    def set_objective(
        self,
        least_squares: Dict[str, Tuple[np.ndarray, np.ndarray]] | None = None,
        linear: Dict[str, np.ndarray] | None = None,
        constant: float = 0.0,
    ) -> None:
        for name in list(least_squares or {}) + list(linear or {}):
            if name not in self.variables:
                raise ValueError(f"Unknown variable {name}.")
        self.objective = QuadraticObjective(
            least_squares={
                name: (np.asarray(F, dtype=np.float64), np.asarray(g, dtype=np.float64))
                for name, (F, g) in (least_squares or {}).items()
            },
            linear={
                name: np.broadcast_to(
                    np.asarray(c, dtype=np.float64), (self.variables[name].size,)
                ).copy()
                for name, c in (linear or {}).items()
            },
            constant=constant,
        )

    def evaluate_objective(self, values: Dict[str, np.ndarray]) -> float:
        out = self.objective.constant
        for name, (F, g) in self.objective.least_squares.items():
            out += 0.5 * np.sum((F @ values[name] - g) ** 2)
        for name, c in self.objective.linear.items():
            out += c @ values[name]
        return float(out)
