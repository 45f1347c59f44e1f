"""Tests for Hausdorff distance."""

import numpy as np
import pytest

from segmetrics.hausdorff import directed_hausdorff_distance, hausdorff_distance


def brute_force_directed(a, b):
    return max(min(np.hypot(*(p - q)) for q in b) for p in a)


class TestHausdorff:
    """Test directed and symmetric Hausdorff distance."""

    def test_identical_sets(self):
        points = np.array([[1, 2], [3, 4], [5, 6]])

        assert hausdorff_distance(points, points) == 0.0

    def test_single_points(self):
        assert hausdorff_distance([[0, 0]], [[3, 4]]) == pytest.approx(5.0)

    def test_directed_is_asymmetric(self):
        a = np.array([[0, 0], [10, 0]])
        b = np.array([[0, 0]])

        assert directed_hausdorff_distance(a, b) == pytest.approx(10.0)
        assert directed_hausdorff_distance(b, a) == 0.0
        assert hausdorff_distance(a, b) == pytest.approx(10.0)

    def test_empty_set_is_zero(self):
        points = np.array([[1, 1], [4, 5]])
        empty = np.empty((0, 2), dtype=np.int64)

        assert hausdorff_distance(points, empty) == 0.0
        assert hausdorff_distance(empty, points) == 0.0
        assert hausdorff_distance([], []) == 0.0

    def test_symmetric_and_matches_pairwise_scan(self):
        rng = np.random.default_rng(21)
        for _ in range(10):
            a = rng.integers(0, 40, size=(rng.integers(1, 30), 2))
            b = rng.integers(0, 40, size=(rng.integers(1, 30), 2))

            forward = hausdorff_distance(a, b)
            expected = max(brute_force_directed(a, b), brute_force_directed(b, a))

            assert forward == pytest.approx(hausdorff_distance(b, a))
            assert forward == pytest.approx(expected)
            assert forward >= 0.0

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            hausdorff_distance(np.zeros((3, 3)), np.zeros((2, 2)))
