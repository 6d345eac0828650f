"""Tests for region statistics and overlap extraction."""

import numpy as np
import pytest

from detoverlap.label_map import LabelMap


class TestSummarizeRegions:
    """Tests for pixel counts and centroids."""

    def test_single_region(self, single_square):
        from detoverlap.matching.regions import summarize_regions

        summary = summarize_regions(LabelMap(single_square))

        assert summary.labels == [3]
        assert summary.sizes == {3: 36}
        assert summary.centers[3] == pytest.approx((6.5, 6.5))

    def test_centroid_uses_column_as_x(self):
        from detoverlap.matching.regions import summarize_regions

        labels = np.zeros((10, 10), dtype=np.uint32)
        labels[2, 5:8] = 1  # row 2, columns 5..7

        summary = summarize_regions(LabelMap(labels))

        assert summary.centers[1] == pytest.approx((6.0, 2.0))

    def test_background_ignored(self):
        from detoverlap.matching.regions import summarize_regions

        labels = np.array([[0, 2, 2], [0, 0, 5]], dtype=np.uint32)
        summary = summarize_regions(LabelMap(labels))

        assert summary.labels == [2, 5]
        assert 0 not in summary.sizes
        assert summary.sizes[2] == 2
        assert summary.sizes[5] == 1

    def test_non_contiguous_region(self):
        """A label may cover disconnected pixels; they form one region."""
        from detoverlap.matching.regions import summarize_regions

        labels = np.zeros((5, 5), dtype=np.uint32)
        labels[0, 0] = 4
        labels[4, 4] = 4

        summary = summarize_regions(LabelMap(labels))

        assert summary.sizes == {4: 2}
        assert summary.centers[4] == pytest.approx((2.0, 2.0))

    def test_empty_map(self):
        from detoverlap.matching.regions import summarize_regions

        summary = summarize_regions(LabelMap(np.zeros((8, 8), dtype=np.uint32)))

        assert summary.labels == []
        assert summary.sizes == {}
        assert summary.centers == {}
        assert len(summary) == 0


class TestExtractOverlaps:
    """Tests for candidate pair extraction."""

    def test_identical_maps(self, single_square):
        from detoverlap.matching.overlaps import extract_overlaps

        table = extract_overlaps(LabelMap(single_square), LabelMap(single_square))

        assert table.pairs == [(3, 3)]
        assert table.areas == {(3, 3): 36}
        assert table.gt_to_rec == {3: {3}}
        assert table.rec_to_gt == {3: {3}}

    def test_disjoint_maps(self, single_square, disjoint_square):
        from detoverlap.matching.overlaps import extract_overlaps

        table = extract_overlaps(LabelMap(single_square), LabelMap(disjoint_square))

        assert len(table) == 0
        assert table.areas == {}
        assert table.gt_to_rec == {}

    def test_split_adjacency(self, split_pair):
        from detoverlap.matching.overlaps import extract_overlaps

        gt, rec = split_pair
        table = extract_overlaps(LabelMap(gt), LabelMap(rec))

        assert table.pairs == [(1, 10), (1, 20)]
        assert table.areas[(1, 10)] == 80
        assert table.areas[(1, 20)] == 20
        assert table.gt_to_rec == {1: {10, 20}}
        assert table.rec_to_gt == {10: {1}, 20: {1}}

    def test_pairs_sorted(self, three_by_three):
        from detoverlap.matching.overlaps import extract_overlaps

        gt, rec = three_by_three
        table = extract_overlaps(LabelMap(gt), LabelMap(rec))

        assert table.pairs == sorted(table.pairs)
        assert table.pairs == [(1, 5), (2, 6), (2, 7)]

    def test_area_bounded_by_region_sizes(self, three_by_three):
        from detoverlap.matching.overlaps import extract_overlaps
        from detoverlap.matching.regions import summarize_regions

        gt, rec = (LabelMap(a) for a in three_by_three)
        table = extract_overlaps(gt, rec)
        gt_sizes = summarize_regions(gt).sizes
        rec_sizes = summarize_regions(rec).sizes

        for (gt_label, rec_label), area in table.areas.items():
            assert 1 <= area <= min(gt_sizes[gt_label], rec_sizes[rec_label])

    def test_mismatched_dimensions_rejected(self):
        from detoverlap.errors import UsageError
        from detoverlap.matching.overlaps import extract_overlaps

        a = LabelMap(np.ones((10, 10), dtype=np.uint32))
        b = LabelMap(np.ones((10, 12), dtype=np.uint32))

        with pytest.raises(UsageError):
            extract_overlaps(a, b)
