"""
Reading matches back out of a solved assignment problem.
"""

from detoverlap.errors import SolverError


def interpret_solution(solution, problem, gt_labels, rec_labels, tracer=None):
    """
    Turn solver values into matches and unmatched labels.

    Returns (matches, false_negatives, false_positives): the selected pairs
    in variable order, gt labels without a match and rec labels without a
    match, both in the order of the given label lists.

    Raises SolverError if the solution does not fit the problem or breaks
    the one-to-one constraint.
    """
    if len(solution) != problem.num_variables:
        raise SolverError(
            f"solution has {len(solution)} values for {problem.num_variables} variables"
        )

    log_all = tracer is not None and tracer.enabled_for("ALL")

    matches = []
    gt_matched = set()
    rec_matched = set()

    for var_num in range(problem.num_variables):
        pair = problem.variable_to_pair[var_num]
        value = solution[var_num]

        if log_all:
            tracer.event(f"ILP solution for pair {pair[0]}, {pair[1]} = {value}", level="ALL")

        if value not in (0, 1):
            raise SolverError(f"variable {var_num} has non-binary value {value}")

        if value == 1:
            gt_label, rec_label = pair
            if gt_label in gt_matched or rec_label in rec_matched:
                raise SolverError(f"solution matches a label twice at pair {pair}")
            gt_matched.add(gt_label)
            rec_matched.add(rec_label)
            matches.append(pair)

    false_negatives = [label for label in gt_labels if label not in gt_matched]
    false_positives = [label for label in rec_labels if label not in rec_matched]

    return matches, false_negatives, false_positives
