"""Tests for Sobel boundary accuracy and perimeter extraction."""

import numpy as np
import pytest

from segmetrics.pixel_buffer import PixelBuffer
from segmetrics.boundary import (
    compute_gradient_magnitude,
    detect_edge_pixels,
    evaluate_boundary_preservation,
    compute_boundary_accuracy,
    extract_boundary_points,
)
from conftest import make_square_mask


def manual_sobel(image):
    """Explicit 3x3 Sobel over interior pixels."""
    img = image.astype(np.float64)
    h, w = img.shape
    magnitude = np.zeros((h, w))
    for y in range(1, h - 1):
        for x in range(1, w - 1):
            v = img[y - 1:y + 2, x - 1:x + 2].ravel()
            gx = -v[0] - 2 * v[3] - v[6] + v[2] + 2 * v[5] + v[8]
            gy = -v[0] - 2 * v[1] - v[2] + v[6] + 2 * v[7] + v[8]
            magnitude[y, x] = np.sqrt(gx * gx + gy * gy)
    return magnitude


class TestGradient:
    """Test Sobel gradient computation."""

    def test_matches_explicit_kernels(self):
        rng = np.random.default_rng(5)
        image = rng.integers(0, 256, size=(9, 11)).astype(np.uint8)

        result = compute_gradient_magnitude(PixelBuffer.from_array(image))

        assert result == pytest.approx(manual_sobel(image))

    def test_border_is_zero(self, step_image):
        result = compute_gradient_magnitude(PixelBuffer.from_array(step_image))

        assert np.all(result[0, :] == 0)
        assert np.all(result[-1, :] == 0)
        assert np.all(result[:, 0] == 0)
        assert np.all(result[:, -1] == 0)

    def test_step_edge_location(self, step_image):
        edges = detect_edge_pixels(PixelBuffer.from_array(step_image), 30.0)

        expected = np.zeros((5, 5), dtype=bool)
        expected[1:4, 1:3] = True
        assert np.array_equal(edges, expected)

    def test_tiny_image_has_no_interior(self):
        image = PixelBuffer.from_array(np.array([[0, 255], [255, 0]], dtype=np.uint8))

        assert not detect_edge_pixels(image).any()


class TestBoundaryAccuracy:
    """Test edge preservation scoring."""

    def test_matching_segmentation_preserves_all_edges(self, step_image):
        candidate = np.where(step_image > 0, 255, 0).astype(np.uint8)

        accuracy = compute_boundary_accuracy(PixelBuffer.from_array(step_image),
                                             PixelBuffer.from_array(candidate))

        assert accuracy == 1.0

    def test_empty_segmentation_preserves_nothing(self, step_image):
        candidate = np.zeros_like(step_image)

        accuracy = compute_boundary_accuracy(PixelBuffer.from_array(step_image),
                                             PixelBuffer.from_array(candidate))

        assert accuracy == 0.0

    def test_no_edges_is_perfect(self):
        original = PixelBuffer.from_array(np.full((6, 6), 80, dtype=np.uint8))
        candidate = PixelBuffer.from_array(np.zeros((6, 6), dtype=np.uint8))

        assert compute_boundary_accuracy(original, candidate) == 1.0

    def test_threshold_override(self, step_image):
        original = PixelBuffer.from_array(step_image)
        candidate = PixelBuffer.from_array(np.zeros_like(step_image))

        # Step magnitude is 800; nothing qualifies above 1000
        assert compute_boundary_accuracy(original, candidate, edge_threshold=1000.0) == 1.0

    def test_partial_preservation_counts(self, step_image):
        candidate = np.zeros_like(step_image)
        candidate[1, 2:] = 255  # label change only around row 1

        result = evaluate_boundary_preservation(PixelBuffer.from_array(step_image),
                                                PixelBuffer.from_array(candidate))

        assert result["edge_count"] == 6
        # Rows 0-2 touch the foreground strip; edge pixels live on rows 1-3
        assert result["preserved_count"] == 4
        assert result["boundary_accuracy"] == pytest.approx(4 / 6)
        assert np.all(result["preserved_map"] <= result["edge_map"])


class TestBoundaryExtraction:
    """Test perimeter extraction."""

    def test_square_perimeter(self):
        mask = make_square_mask((5, 5), (1, 1), 3)

        points = extract_boundary_points(PixelBuffer.from_array(mask))

        assert points.shape == (8, 2)
        assert (2, 2) not in {tuple(p) for p in points}

    def test_points_are_xy(self):
        mask = np.zeros((6, 8), dtype=np.uint8)
        mask[2, 5] = 255

        points = extract_boundary_points(PixelBuffer.from_array(mask))

        assert points.tolist() == [[5, 2]]

    def test_full_foreground_has_no_perimeter(self):
        mask = np.full((6, 6), 255, dtype=np.uint8)

        points = extract_boundary_points(PixelBuffer.from_array(mask))

        assert points.shape == (0, 2)

    def test_border_pixels_skipped(self):
        mask = np.zeros((5, 5), dtype=np.uint8)
        mask[0, :] = 255

        points = extract_boundary_points(PixelBuffer.from_array(mask))

        assert len(points) == 0
