"""
Linear program description handed to a solver backend.

Variables are addressed by index 0..size-1. Constraints store only their
non-zero coefficients.
"""

from enum import Enum


class Relation(str, Enum):
    LESS_EQUAL = "<="
    EQUAL = "=="
    GREATER_EQUAL = ">="


class Sense(str, Enum):
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


class VariableType(str, Enum):
    CONTINUOUS = "continuous"
    INTEGER = "integer"
    BINARY = "binary"


class LinearConstraint:
    """sum(coefficient_i * x_i) <relation> value"""

    def __init__(self, coefficients=None, relation=Relation.LESS_EQUAL, value=0.0):
        self.coefficients = dict(coefficients or {})
        self.relation = Relation(relation)
        self.value = float(value)

    def set_coefficient(self, var_num, coefficient):
        self.coefficients[var_num] = float(coefficient)

    def set_relation(self, relation):
        self.relation = Relation(relation)

    def set_value(self, value):
        self.value = float(value)

    def is_satisfied(self, values, tolerance=1e-9):
        total = sum(c * values[i] for i, c in self.coefficients.items())
        if self.relation == Relation.LESS_EQUAL:
            return total <= self.value + tolerance
        if self.relation == Relation.GREATER_EQUAL:
            return total >= self.value - tolerance
        return abs(total - self.value) <= tolerance

    def __repr__(self):
        terms = " + ".join(f"{c:g}*x{i}" for i, c in sorted(self.coefficients.items()))
        return f"LinearConstraint({terms or '0'} {self.relation.value} {self.value:g})"


class LinearConstraints:
    """Ordered collection of constraints."""

    def __init__(self, constraints=None):
        self._constraints = list(constraints or [])

    def add(self, constraint):
        self._constraints.append(constraint)

    def __iter__(self):
        return iter(self._constraints)

    def __len__(self):
        return len(self._constraints)

    def __getitem__(self, index):
        return self._constraints[index]


class LinearObjective:
    """Dense linear objective over `size` variables."""

    def __init__(self, size=0, sense=Sense.MINIMIZE):
        self.size = size
        self.coefficients = [0.0] * size
        self.constant = 0.0
        self.sense = Sense(sense)

    def set_coefficient(self, var_num, coefficient):
        if not 0 <= var_num < self.size:
            raise IndexError(f"variable {var_num} out of range for objective of size {self.size}")
        self.coefficients[var_num] = float(coefficient)

    def evaluate(self, values):
        return self.constant + sum(c * v for c, v in zip(self.coefficients, values))


class LinearSolverParameters:
    """
    Solver settings that do not belong to the problem itself.

    num_threads is a hint; backends that cannot honour it ignore it.
    """

    def __init__(self, variable_type=VariableType.CONTINUOUS, num_threads=0, options=None):
        self.variable_type = VariableType(variable_type)
        self.num_threads = num_threads
        self.options = dict(options or {})


class Solution:
    """Solved variable values, indexed like the objective."""

    def __init__(self, values, value=None, message=""):
        self.values = list(values)
        self.value = value
        self.message = message

    def __len__(self):
        return len(self.values)

    def __getitem__(self, var_num):
        return self.values[var_num]
