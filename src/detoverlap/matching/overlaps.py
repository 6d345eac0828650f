"""
Co-occurrence of ground truth and reconstruction labels.

Two maps are scanned together; every pixel that is foreground in both
contributes one unit of area to its (gt, rec) pair.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

import numpy as np

from detoverlap.errors import UsageError


@dataclass
class OverlapTable:
    """
    Candidate pairs with their overlap areas and adjacency in both directions.

    pairs is sorted by (gt label, rec label).
    """
    pairs: List[Tuple[int, int]] = field(default_factory=list)
    areas: Dict[Tuple[int, int], int] = field(default_factory=dict)
    gt_to_rec: Dict[int, Set[int]] = field(default_factory=dict)
    rec_to_gt: Dict[int, Set[int]] = field(default_factory=dict)

    def __len__(self):
        return len(self.pairs)


def extract_overlaps(gt_map, rec_map):
    """
    Find all label pairs that share at least one pixel.

    Both maps must have the same dimensions.
    """
    if gt_map.shape != rec_map.shape:
        raise UsageError(
            f"ground truth and reconstruction differ in size: "
            f"{gt_map.width}x{gt_map.height} vs {rec_map.width}x{rec_map.height}"
        )

    gt = gt_map.array
    rec = rec_map.array

    both = (gt != 0) & (rec != 0)

    table = OverlapTable()
    if not both.any():
        return table

    stacked = np.stack([gt[both], rec[both]], axis=1)
    pairs, areas = np.unique(stacked, axis=0, return_counts=True)

    for (gt_label, rec_label), area in zip(pairs.tolist(), areas.tolist()):
        pair = (gt_label, rec_label)
        table.pairs.append(pair)
        table.areas[pair] = area
        table.gt_to_rec.setdefault(gt_label, set()).add(rec_label)
        table.rec_to_gt.setdefault(rec_label, set()).add(gt_label)

    return table
