"""
One-to-one assignment of ground truth to reconstruction regions as a
binary linear program.

Each candidate pair becomes a 0/1 variable. Every label, on either side,
gets a constraint that at most one of its pairs is selected. The objective
sums the pair scores and is minimized, so the solver prefers more matches
first and closer centroids second.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from detoverlap.solver.linear import (
    LinearConstraint,
    LinearConstraints,
    LinearObjective,
    LinearSolverParameters,
    Relation,
    Sense,
    VariableType,
)


@dataclass
class AssignmentProblem:
    """A built assignment problem and its pair <-> variable mapping."""
    objective: LinearObjective
    constraints: LinearConstraints
    parameters: LinearSolverParameters
    pair_to_variable: Dict[Tuple[int, int], int] = field(default_factory=dict)
    variable_to_pair: Dict[int, Tuple[int, int]] = field(default_factory=dict)

    @property
    def num_variables(self):
        return self.objective.size


def build_assignment_problem(pairs, scores, gt_labels, rec_labels, gt_to_rec, rec_to_gt,
                             num_threads=0):
    """
    Encode candidate pairs as a binary program with degree constraints.

    Args:
        pairs: sorted list of candidate (gt_label, rec_label) pairs
        scores: pair -> score
        gt_labels: all ground truth labels
        rec_labels: all reconstruction labels
        gt_to_rec: gt label -> overlapping rec labels
        rec_to_gt: rec label -> overlapping gt labels
        num_threads: solver thread hint, passed through untouched

    Labels without candidates still get a (vacuous) constraint.
    """
    pair_to_variable = {}
    variable_to_pair = {}
    for var_num, pair in enumerate(pairs):
        pair_to_variable[pair] = var_num
        variable_to_pair[var_num] = pair

    constraints = LinearConstraints()

    # every rec region maps to at most one gt region
    for rec_label in rec_labels:
        constraint = LinearConstraint()
        for gt_label in sorted(rec_to_gt.get(rec_label, ())):
            constraint.set_coefficient(pair_to_variable[(gt_label, rec_label)], 1.0)
        constraint.set_relation(Relation.LESS_EQUAL)
        constraint.set_value(1.0)
        constraints.add(constraint)

    # and vice versa
    for gt_label in gt_labels:
        constraint = LinearConstraint()
        for rec_label in sorted(gt_to_rec.get(gt_label, ())):
            constraint.set_coefficient(pair_to_variable[(gt_label, rec_label)], 1.0)
        constraint.set_relation(Relation.LESS_EQUAL)
        constraint.set_value(1.0)
        constraints.add(constraint)

    objective = LinearObjective(len(pairs), sense=Sense.MINIMIZE)
    for pair, var_num in pair_to_variable.items():
        objective.set_coefficient(var_num, scores[pair])

    parameters = LinearSolverParameters(variable_type=VariableType.BINARY, num_threads=num_threads)

    return AssignmentProblem(
        objective=objective,
        constraints=constraints,
        parameters=parameters,
        pair_to_variable=pair_to_variable,
        variable_to_pair=variable_to_pair,
    )
