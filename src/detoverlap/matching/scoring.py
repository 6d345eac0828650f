"""
Matching scores for candidate pairs.

Costs are centroid distances. Scores are costs shifted below zero by a bit
more than the largest cost. Minimizing the summed score of the selected
pairs therefore takes as many matches as it can and, among equally many,
the ones with the closest centroids.
"""

import math

DISTANCE_FLOOR = 0.5
SCORE_MARGIN = 1.1


def centroid_distance(a, b):
    return math.hypot(a[0] - b[0], a[1] - b[1])


def score_candidates(pairs, gt_centers, rec_centers,
                     distance_floor=DISTANCE_FLOOR, score_margin=SCORE_MARGIN):
    """
    Score every candidate pair.

    Args:
        pairs: iterable of (gt_label, rec_label)
        gt_centers: gt label -> (x, y)
        rec_centers: rec label -> (x, y)
        distance_floor: minimum cost, keeps every cost strictly positive
        score_margin: multiple of the largest cost subtracted from each cost

    Returns:
        (scores, max_cost) where scores maps pair -> negative score
    """
    if distance_floor <= 0:
        raise ValueError("distance_floor must be positive")
    if score_margin <= 1:
        raise ValueError("score_margin must be greater than 1")

    costs = {}
    max_cost = 0.0
    for pair in pairs:
        gt_label, rec_label = pair
        cost = max(distance_floor, centroid_distance(gt_centers[gt_label], rec_centers[rec_label]))
        costs[pair] = cost
        max_cost = max(max_cost, cost)

    offset = max_cost * score_margin
    scores = {pair: cost - offset for pair, cost in costs.items()}

    return scores, max_cost
