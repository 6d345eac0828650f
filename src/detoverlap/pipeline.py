"""
Detection overlap between a ground truth and a reconstruction label map.

Runs the matching stages in order:
regions -> overlaps -> scores -> assignment problem -> solver ->
matches -> overlap measures.
"""

from detoverlap.config import DetectionOverlapConfig
from detoverlap.errors import UsageError
from detoverlap.label_map import as_single_label_map
from detoverlap.matching.assignment import build_assignment_problem
from detoverlap.matching.interpret import interpret_solution
from detoverlap.matching.measures import compute_overlap_measures
from detoverlap.matching.overlaps import extract_overlaps
from detoverlap.matching.regions import summarize_regions
from detoverlap.matching.scoring import score_candidates
from detoverlap.models import DetectionOverlapReport
from detoverlap.solver.backend import get_solver
from detoverlap.solver.linear import Solution
from detoverlap.tracer import Tracer, get_tracer


def detection_overlap(ground_truth, reconstruction, config=None, solver=None, tracer=None):
    """
    Match ground truth regions to reconstruction regions one-to-one.

    Args:
        ground_truth: LabelMap, 2D array or single-slice 3D array
        reconstruction: same, with the same width and height
        config: DetectionOverlapConfig (defaults if omitted)
        solver: LinearSolverBackend (the configured backend if omitted)
        tracer: Tracer for this call (a fresh Tracer on the global
            tracer settings if omitted)

    Returns:
        DetectionOverlapReport

    Raises UsageError for invalid inputs and SolverError if the solver
    fails. No report is returned in either case.
    """
    config = config or DetectionOverlapConfig()
    # own span stack per call, global settings
    tracer = tracer or Tracer(get_tracer().config)

    with tracer.span("detection_overlap", module="pipeline"):
        gt_map = as_single_label_map(ground_truth, "ground truth")
        rec_map = as_single_label_map(reconstruction, "reconstruction")

        if gt_map.shape != rec_map.shape:
            raise UsageError(
                f"ground truth and reconstruction differ in size: "
                f"{gt_map.width}x{gt_map.height} vs {rec_map.width}x{rec_map.height}"
            )

        with tracer.span("regions", module="pipeline"):
            gt_regions = summarize_regions(gt_map)
            rec_regions = summarize_regions(rec_map)

        tracer.event(f"there are {len(gt_regions)} ground truth regions", level="DEBUG")
        tracer.event(f"there are {len(rec_regions)} reconstruction regions", level="DEBUG")

        with tracer.span("overlaps", module="pipeline"):
            overlaps = extract_overlaps(gt_map, rec_map)

        tracer.event(
            f"ground truth contains {len(overlaps.gt_to_rec)} regions "
            f"with overlapping reconstruction regions",
            level="DEBUG",
        )
        tracer.event(
            f"reconstruction contains {len(overlaps.rec_to_gt)} regions "
            f"with overlapping ground truth regions",
            level="DEBUG",
        )
        tracer.event(f"found {len(overlaps)} possible matches by overlap", level="DEBUG")

        scores, max_cost = score_candidates(
            overlaps.pairs,
            gt_regions.centers,
            rec_regions.centers,
            distance_floor=config.matching.distance_floor,
            score_margin=config.matching.score_margin,
        )
        tracer.event(f"largest centroid distance {max_cost:.3f}", level="DEBUG")

        problem = build_assignment_problem(
            overlaps.pairs,
            scores,
            gt_regions.labels,
            rec_regions.labels,
            overlaps.gt_to_rec,
            overlaps.rec_to_gt,
            num_threads=config.solver.num_threads,
        )

        if problem.num_variables == 0:
            solution = Solution([])
        else:
            solver = solver or get_solver(config.solver, tracer=tracer)
            with tracer.span("solve", module="pipeline",
                             variables=problem.num_variables,
                             constraints=len(problem.constraints)):
                solution = solver.solve(problem.objective, problem.constraints, problem.parameters)

        matches, false_negatives, false_positives = interpret_solution(
            solution, problem, gt_regions.labels, rec_regions.labels, tracer=tracer,
        )

        tracer.event(
            f"found {len(matches)} matches between ground truth and reconstruction",
            level="DEBUG",
        )

        report = DetectionOverlapReport()
        log_all = tracer.enabled_for("ALL")

        for gt_label in false_negatives:
            report.add_false_negative(gt_label)
        for rec_label in false_positives:
            report.add_false_positive(rec_label)

        for pair in matches:
            m1, m2, dice = compute_overlap_measures(
                overlaps.areas[pair],
                gt_regions.sizes[pair[0]],
                rec_regions.sizes[pair[1]],
            )
            if log_all:
                tracer.event(f"adding match {pair} with M1 = {m1:.2f}, M2 = {m2:.2f}", level="ALL")
            report.add_match(pair, m1, m2, dice)

    return report
