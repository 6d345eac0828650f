"""Pytest fixtures for detection-overlap tests."""

import tempfile

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def single_square():
    """A 20x20 map with one 6x6 region labelled 3."""
    labels = np.zeros((20, 20), dtype=np.uint32)
    labels[4:10, 4:10] = 3
    return labels


@pytest.fixture
def disjoint_square():
    """A 20x20 map with one 6x6 region that does not touch single_square."""
    labels = np.zeros((20, 20), dtype=np.uint32)
    labels[12:18, 12:18] = 7
    return labels


@pytest.fixture
def split_pair():
    """
    One ground truth region overlapped by two reconstruction regions.

    The left reconstruction region covers most of the ground truth region,
    the right one only a sliver plus a lot of background.
    """
    gt = np.zeros((20, 30), dtype=np.uint32)
    gt[5:15, 5:15] = 1

    rec = np.zeros((20, 30), dtype=np.uint32)
    rec[5:15, 5:13] = 10
    rec[5:15, 13:25] = 20

    return gt, rec


@pytest.fixture
def three_by_three():
    """
    Ground truth and reconstruction with a mix of matches, a split and
    unmatched regions on both sides.
    """
    gt = np.zeros((30, 40), dtype=np.uint32)
    gt[2:8, 2:8] = 1      # matched exactly by rec 5
    gt[10:20, 2:12] = 2   # split into rec 6 and rec 7
    gt[25:29, 30:38] = 4  # no reconstruction at all

    rec = np.zeros((30, 40), dtype=np.uint32)
    rec[2:8, 2:8] = 5
    rec[10:20, 2:9] = 6
    rec[10:20, 9:12] = 7
    rec[2:6, 30:36] = 9   # nothing in ground truth

    return gt, rec


@pytest.fixture
def default_config():
    """Create default configuration."""
    from detoverlap.config import DetectionOverlapConfig
    return DetectionOverlapConfig()


class RecordingSolver:
    """Solver double that returns canned values and records its inputs."""

    def __init__(self, values=None, error=None):
        self.values = values
        self.error = error
        self.calls = []

    def solve(self, objective, constraints, parameters):
        from detoverlap.solver.linear import Solution

        self.calls.append((objective, constraints, parameters))
        if self.error is not None:
            raise self.error
        values = self.values if self.values is not None else [0] * objective.size
        return Solution(values)


@pytest.fixture
def recording_solver():
    return RecordingSolver
