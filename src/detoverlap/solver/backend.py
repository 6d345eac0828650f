"""
Linear solver backends.

Matching only talks to the LinearSolverBackend interface. The default
backend solves mixed-integer programs with scipy.optimize.milp (HiGHS).
"""

from abc import ABC, abstractmethod

import numpy as np
from scipy import optimize, sparse

from detoverlap.errors import SolverError, UsageError
from detoverlap.solver.linear import Relation, Sense, Solution, VariableType
from detoverlap.tracer import get_tracer


class LinearSolverBackend(ABC):
    """Abstract interface for linear program solvers."""

    @abstractmethod
    def solve(self, objective, constraints, parameters):
        """
        Solve a linear program.

        Args:
            objective: LinearObjective, its sense decides min or max
            constraints: LinearConstraints
            parameters: LinearSolverParameters with the variable domain

        Returns:
            Solution with one value per objective variable

        Raises SolverError if no optimal solution was found.
        """
        pass


class MilpSolver(LinearSolverBackend):
    """
    Backend based on scipy.optimize.milp.

    Binary and integer variables are rounded in the returned solution.
    num_threads is not exposed by scipy's HiGHS wrapper and is ignored.
    """

    INTEGRALITY_TOLERANCE = 1e-6

    def __init__(self, mip_rel_gap=0.0, presolve=True, tracer=None):
        self.mip_rel_gap = mip_rel_gap
        self.presolve = presolve
        self.tracer = tracer

    def solve(self, objective, constraints, parameters):
        tracer = self.tracer or get_tracer()
        size = objective.size

        if size == 0:
            return Solution([], value=objective.constant, message="empty problem")

        c = np.asarray(objective.coefficients, dtype=float)
        if objective.sense == Sense.MAXIMIZE:
            c = -c

        integral = parameters.variable_type in (VariableType.BINARY, VariableType.INTEGER)
        integrality = np.ones(size) if integral else np.zeros(size)
        upper = 1.0 if parameters.variable_type == VariableType.BINARY else np.inf
        bounds = optimize.Bounds(np.zeros(size), np.full(size, upper))

        options = {
            "disp": False,
            "presolve": self.presolve,
            "mip_rel_gap": self.mip_rel_gap,
        }
        options.update(parameters.options)

        if parameters.num_threads:
            tracer.event(
                f"num_threads={parameters.num_threads} ignored by milp backend",
                level="DEBUG",
            )

        result = optimize.milp(
            c,
            integrality=integrality,
            bounds=bounds,
            constraints=_constraint_matrix(constraints, size),
            options=options,
        )

        if result.status != 0 or result.x is None:
            raise SolverError(f"linear solver failed (status {result.status}): {result.message}")

        values = result.x
        if integral:
            rounded = np.round(values)
            if np.max(np.abs(rounded - values), initial=0.0) > self.INTEGRALITY_TOLERANCE:
                raise SolverError("linear solver returned a non-integral solution")
            values = rounded

        tracer.event(
            f"solved {size} variables, {len(constraints)} constraints",
            level="DEBUG",
        )

        return Solution(
            values.tolist(),
            value=objective.evaluate(values),
            message=str(result.message),
        )


def _constraint_matrix(constraints, size):
    """Build a scipy LinearConstraint from our constraint list, or None."""
    if len(constraints) == 0:
        return None

    rows, cols, data = [], [], []
    lower = np.full(len(constraints), -np.inf)
    upper = np.full(len(constraints), np.inf)

    for row, constraint in enumerate(constraints):
        for var_num, coefficient in constraint.coefficients.items():
            rows.append(row)
            cols.append(var_num)
            data.append(coefficient)

        if constraint.relation in (Relation.LESS_EQUAL, Relation.EQUAL):
            upper[row] = constraint.value
        if constraint.relation in (Relation.GREATER_EQUAL, Relation.EQUAL):
            lower[row] = constraint.value

    matrix = sparse.csr_matrix((data, (rows, cols)), shape=(len(constraints), size))
    return optimize.LinearConstraint(matrix, lower, upper)


BACKENDS = {
    "milp": MilpSolver,
}


def get_solver(solver_config=None, tracer=None):
    """Create the backend named in a SolverConfig (milp by default)."""
    if solver_config is None:
        return MilpSolver(tracer=tracer)

    backend_cls = BACKENDS.get(solver_config.backend)
    if backend_cls is None:
        raise UsageError(
            f"unknown solver backend {solver_config.backend!r}, "
            f"available: {', '.join(sorted(BACKENDS))}"
        )

    return backend_cls(
        mip_rel_gap=solver_config.mip_rel_gap,
        presolve=solver_config.presolve,
        tracer=tracer,
    )
