"""
Pydantic data models for detection-overlap results.

The match report is the only externally visible output of a matching run.
It is filled in incrementally while the assignment is interpreted and
handed to the caller once the run is complete.
"""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Match(BaseModel):
    """An accepted (ground truth, reconstruction) correspondence."""
    gt_label: int = Field(..., ge=1)
    rec_label: int = Field(..., ge=1)
    m1: float = Field(..., ge=0.0, le=100.0)  # 100 * |A ∩ B| / |A ∪ B|
    m2: float = Field(..., ge=0.0, le=100.0)  # 100 * |A ∩ B| / |A|
    dice: float = Field(..., ge=0.0, le=1.0)  # 2 * |A ∩ B| / (|A| + |B|)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def pair(self):
        return (self.gt_label, self.rec_label)


class DetectionOverlapReport(BaseModel):
    """Matches, false negatives and false positives of one matching run."""
    matches: List[Match] = Field(default_factory=list)
    false_negatives: List[int] = Field(default_factory=list)
    false_positives: List[int] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def add_match(self, pair: Tuple[int, int], m1: float, m2: float, dice: float):
        gt_label, rec_label = pair
        self.matches.append(Match(gt_label=gt_label, rec_label=rec_label, m1=m1, m2=m2, dice=dice))

    def add_false_negative(self, gt_label: int):
        self.false_negatives.append(gt_label)

    def add_false_positive(self, rec_label: int):
        self.false_positives.append(rec_label)

    @property
    def num_matches(self):
        return len(self.matches)

    @property
    def num_false_negatives(self):
        return len(self.false_negatives)

    @property
    def num_false_positives(self):
        return len(self.false_positives)

    @property
    def mean_m1(self):
        return _mean([m.m1 for m in self.matches])

    @property
    def mean_m2(self):
        return _mean([m.m2 for m in self.matches])

    @property
    def mean_dice(self):
        return _mean([m.dice for m in self.matches])

    @property
    def precision(self):
        """Fraction of reconstruction regions that were matched."""
        detected = self.num_matches + self.num_false_positives
        return self.num_matches / detected if detected else 0.0

    @property
    def recall(self):
        """Fraction of ground truth regions that were matched."""
        expected = self.num_matches + self.num_false_negatives
        return self.num_matches / expected if expected else 0.0

    @property
    def f1(self):
        p, r = self.precision, self.recall
        return 2 * p * r / (p + r) if (p + r) > 0 else 0.0

    def matched_pairs(self):
        return [m.pair for m in self.matches]

    def summary(self):
        """Aggregate numbers for a results table."""
        return {
            "num_matches": self.num_matches,
            "num_false_negatives": self.num_false_negatives,
            "num_false_positives": self.num_false_positives,
            "mean_m1": self.mean_m1,
            "mean_m2": self.mean_m2,
            "mean_dice": self.mean_dice,
            "precision": self.precision,
            "recall": self.recall,
            "f1": self.f1,
        }


def _mean(values):
    if not values:
        return 0.0
    return sum(values) / len(values)
