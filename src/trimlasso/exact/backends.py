import itertools
import time
import warnings
from typing import Dict, Iterator, List, Optional, Tuple

import cvxpy as cp
import numpy as np

from ..base import Solution, SolverBackend
from ..error import SolverError, UnsupportedCapabilityError
from .model import MixedIntegerModel

# Maps cvxpy solver names to the solver specific time limit option
_TIME_LIMIT_OPTIONS = {
    "CLARABEL": lambda t: {"time_limit": t},
    "GUROBI": lambda t: {"TimeLimit": t},
    "HIGHS": lambda t: {"time_limit": t},
    "MOSEK": lambda t: {"mosek_params": {"MSK_DPAR_OPTIMIZER_MAX_TIME": t}},
    "SCIP": lambda t: {"scip_params": {"limits/time": t}},
}

_ACCEPTED_STATUS = (cp.OPTIMAL, cp.OPTIMAL_INACCURATE)
_INFEASIBLE_STATUS = (cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE)


def _relation(lhs, sense: str, rhs: np.ndarray):
    if sense == "<=":
        return lhs <= rhs
    elif sense == ">=":
        return lhs >= rhs
    else:
        return lhs == rhs


class CvxpyBackend(SolverBackend):
    """Solve models with `cvxpy`.

    Continuous convex quadratic programs are solved with any installed `cvxpy`
    solver, e.g. the default `CLARABEL` or `OSQP`. Binary variables require a
    mixed-integer capable solver such as `SCIP` or `GUROBI`. SOS1 constraints are not
    supported, use a backend with native SOS1 support or the `EnumerationBackend`.
    """

    supports_integer = True
    supports_sos1 = False

    def __init__(
        self,
        solver: Optional[str] = None,
        time_limit: Optional[float] = None,
        verbose: bool = False,
        **solver_options,
    ):
        """
        Args:
            solver (Optional[str], optional): Name of the `cvxpy` solver, e.g. "SCIP". `None` lets `cvxpy` choose. Defaults to None.
            time_limit (Optional[float], optional): Time limit in seconds. Defaults to None.
            verbose (bool, optional): Forward solver output. Defaults to False.
            **solver_options: Passed through to `cvxpy.Problem.solve`.
        """
        super().__init__(time_limit=time_limit)
        self.solver = solver
        self.verbose = verbose
        self.solver_options = solver_options

    def _check_capabilities(self, model: MixedIntegerModel) -> None:
        if model.sos1 and not self.supports_sos1:
            raise UnsupportedCapabilityError(
                f"[{self.__class__.__name__}] SOS1 constraints are not supported."
            )
        if model.has_binaries and not self.supports_integer:
            raise UnsupportedCapabilityError(
                f"[{self.__class__.__name__}] Binary variables are not supported."
            )

    def _solve_options(self, time_limit: Optional[float]) -> Dict:
        options = dict(self.solver_options)
        if time_limit is not None:
            if self.solver in _TIME_LIMIT_OPTIONS:
                options.update(_TIME_LIMIT_OPTIONS[self.solver](time_limit))
            else:
                warnings.warn(
                    f"[{self.__class__.__name__}] Cannot pass a time limit to solver {self.solver}. "
                    "The time limit is not enforced.",
                    UserWarning,
                    stacklevel=3,
                )
        return options

    def _build(
        self,
        model: MixedIntegerModel,
        fixed: Optional[Dict[str, np.ndarray]] = None,
        zeros: Optional[List[Tuple[str, int]]] = None,
    ) -> Tuple[cp.Problem, Dict]:
        fixed = fixed or {}
        expressions = {}
        constraints = []

        for name, variable in model.variables.items():
            if name in fixed:
                expressions[name] = fixed[name]
                continue
            x = cp.Variable(variable.size, name=name, boolean=variable.binary)
            expressions[name] = x
            if variable.binary:
                continue
            if np.isfinite(variable.lower_bound):
                constraints.append(x >= variable.lower_bound)
            if np.isfinite(variable.upper_bound):
                constraints.append(x <= variable.upper_bound)

        for name, index in zeros or []:
            constraints.append(expressions[name][index] == 0)

        for constraint in model.constraints:
            lhs = sum(
                A @ expressions[name] for name, A in constraint.coefficients.items()
            )
            if not isinstance(lhs, cp.Expression):
                # Only fixed variables involved, checked before building
                continue
            constraints.append(_relation(lhs, constraint.sense, constraint.rhs))

        objective = model.objective.constant
        for name, (F, g) in model.objective.least_squares.items():
            objective = objective + 0.5 * cp.sum_squares(F @ expressions[name] - g)
        for name, c in model.objective.linear.items():
            objective = objective + c @ expressions[name]

        problem = cp.Problem(cp.Minimize(objective), constraints)
        return problem, expressions

    def _solve_problem(
        self,
        problem: cp.Problem,
        expressions: Dict,
        time_limit: Optional[float],
    ) -> Solution:
        try:
            problem.solve(
                solver=self.solver,
                verbose=self.verbose,
                **self._solve_options(time_limit),
            )
        except cp.SolverError as e:
            raise SolverError(
                f"[{self.__class__.__name__}] The solver failed: {e}", status="error"
            ) from e

        if problem.status not in _ACCEPTED_STATUS:
            raise SolverError(
                f"[{self.__class__.__name__}] No optimal solution found. Status: {problem.status}.",
                status=problem.status,
            )

        values = {}
        for name, expression in expressions.items():
            if isinstance(expression, cp.Variable):
                values[name] = np.asarray(expression.value, dtype=np.float64).ravel()
            else:
                values[name] = np.asarray(expression, dtype=np.float64)
        return Solution(
            values=values,
            objective_value=float(problem.value),
            status=problem.status,
        )

    def solve(self, model: MixedIntegerModel) -> Solution:
        self._check_capabilities(model)
        problem, expressions = self._build(model)
        return self._solve_problem(problem, expressions, self.time_limit)


class EnumerationBackend(CvxpyBackend):
    """Exact reference backend for small mixed-integer models.

    Enumerates all assignments of the binary variables, skipping those that violate
    constraints on binary variables only. SOS1 sets are resolved against the fixed
    binaries: a non-zero binary member forces all other members to zero, sets without
    a non-zero binary member are branched over. Every remaining subproblem is a convex
    program solved by `cvxpy`, the best feasible one is returned.

    The number of subproblems grows exponentially, `max_binaries` guards against
    accidental use on large models. The time limit is checked between subproblems.
    """

    supports_integer = True
    supports_sos1 = True

    def __init__(
        self,
        solver: Optional[str] = None,
        time_limit: Optional[float] = None,
        max_binaries: int = 20,
        verbose: bool = False,
        **solver_options,
    ):
        """
        Args:
            solver (Optional[str], optional): Name of the continuous `cvxpy` solver. Defaults to None.
            time_limit (Optional[float], optional): Time limit in seconds for the whole enumeration. Defaults to None.
            max_binaries (int, optional): Maximum number of binary entries. Defaults to 20.
            verbose (bool, optional): Forward solver output. Defaults to False.
            **solver_options: Passed through to `cvxpy.Problem.solve`.
        """
        super().__init__(
            solver=solver, time_limit=time_limit, verbose=verbose, **solver_options
        )
        self.max_binaries = max_binaries

    @staticmethod
    def _split_assignment(
        model: MixedIntegerModel, assignment: Tuple[float, ...]
    ) -> Dict[str, np.ndarray]:
        fixed = {}
        position = 0
        for name, variable in model.variables.items():
            if variable.binary:
                fixed[name] = np.asarray(
                    assignment[position : position + variable.size], dtype=np.float64
                )
                position += variable.size
        return fixed

    @staticmethod
    def _fixed_constraints_hold(
        model: MixedIntegerModel, fixed: Dict[str, np.ndarray], tol: float = 1e-9
    ) -> bool:
        for constraint in model.constraints:
            if not all(name in fixed for name in constraint.coefficients):
                continue
            lhs = sum(A @ fixed[name] for name, A in constraint.coefficients.items())
            if constraint.sense == "<=" and np.any(lhs > constraint.rhs + tol):
                return False
            if constraint.sense == ">=" and np.any(lhs < constraint.rhs - tol):
                return False
            if constraint.sense == "==" and np.any(np.abs(lhs - constraint.rhs) > tol):
                return False
        return True

    @staticmethod
    def _sos1_branches(
        model: MixedIntegerModel, fixed: Dict[str, np.ndarray]
    ) -> Iterator[List[Tuple[str, int]]]:
        forced = []
        options = []
        for sos in model.sos1:
            active = [m for m in sos.members if m[0] in fixed and fixed[m[0]][m[1]] != 0]
            free = [m for m in sos.members if m[0] not in fixed]
            if len(active) > 1:
                return
            if len(active) == 1:
                forced.extend(free)
            elif len(free) > 1:
                options.append(
                    [[m for m in free if m != keep] for keep in free]
                )
        for choice in itertools.product(*options):
            yield forced + [m for zeros in choice for m in zeros]

    def solve(self, model: MixedIntegerModel) -> Solution:
        if model.n_binaries > self.max_binaries:
            raise UnsupportedCapabilityError(
                f"[{self.__class__.__name__}] The model has {model.n_binaries} binary entries, "
                f"the enumeration is limited to max_binaries={self.max_binaries}."
            )
        start = time.monotonic()
        best = None
        n_subproblems = 0

        for assignment in itertools.product((0.0, 1.0), repeat=model.n_binaries):
            fixed = self._split_assignment(model, assignment)
            if not self._fixed_constraints_hold(model, fixed):
                continue
            for zeros in self._sos1_branches(model, fixed):
                elapsed = time.monotonic() - start
                if self.time_limit is not None and elapsed >= self.time_limit:
                    raise SolverError(
                        f"[{self.__class__.__name__}] Time limit of {self.time_limit}s reached "
                        f"after {n_subproblems} subproblems.",
                        status="time_limit",
                    )
                problem, expressions = self._build(model, fixed=fixed, zeros=zeros)
                n_subproblems += 1
                try:
                    solution = self._solve_problem(problem, expressions, None)
                except SolverError as e:
                    if e.status in _INFEASIBLE_STATUS:
                        continue
                    raise
                if best is None or solution.objective_value < best.objective_value:
                    best = solution

        if best is None:
            raise SolverError(
                f"[{self.__class__.__name__}] The model is infeasible.",
                status=cp.INFEASIBLE,
            )
        best.info["n_subproblems"] = n_subproblems
        return best
