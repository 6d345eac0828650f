"""
Per-region statistics of a single label map.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np


@dataclass
class RegionSummary:
    """Pixel counts and centroids, keyed by label. Background is excluded."""
    labels: List[int] = field(default_factory=list)
    sizes: Dict[int, int] = field(default_factory=dict)
    centers: Dict[int, Tuple[float, float]] = field(default_factory=dict)

    def __len__(self):
        return len(self.labels)


def summarize_regions(label_map):
    """
    Compute pixel count and center of mass for every non-zero label.

    Centers are (x, y) with x the column index. A map without foreground
    gives an empty summary.
    """
    array = label_map.array

    ys, xs = np.nonzero(array)
    if len(xs) == 0:
        return RegionSummary()

    labels, inverse, counts = np.unique(array[ys, xs], return_inverse=True, return_counts=True)
    sum_x = np.bincount(inverse, weights=xs, minlength=len(labels))
    sum_y = np.bincount(inverse, weights=ys, minlength=len(labels))

    summary = RegionSummary()
    for i, label in enumerate(labels.tolist()):
        count = int(counts[i])
        summary.labels.append(label)
        summary.sizes[label] = count
        summary.centers[label] = (float(sum_x[i] / count), float(sum_y[i] / count))

    return summary
