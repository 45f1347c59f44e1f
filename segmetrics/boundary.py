"""
Boundary preservation scoring using Sobel gradient filtering.

Edges are located in the original image with a 3x3 Sobel pass; a
segmentation preserves an edge when its own label changes somewhere in the
3x3 neighbourhood of that edge pixel. The same neighbourhood test gives the
perimeter of a binary mask, which feeds the Hausdorff scorer.

Only interior pixels (1 <= x <= width-2, 1 <= y <= height-2) are examined,
so every 3x3 window lies fully inside the image.

Functions:
- compute_gradient_magnitude: Sobel gradient magnitude of the original
- detect_edge_pixels: Interior pixels whose gradient exceeds a threshold
- evaluate_boundary_preservation: Edge and preserved-edge maps with counts
- compute_boundary_accuracy: Fraction of edge pixels the candidate preserves
- extract_boundary_points: Foreground pixels with a background 8-neighbour
"""

import logging
from typing import Dict, Any

import cv2
import numpy as np

from .pixel_buffer import PixelBuffer
from .thresholding import foreground_labels
from .metrics_constants import DEFAULT_EDGE_THRESHOLD, SOBEL_KERNEL_SIZE

logger = logging.getLogger(__name__)

# 3x3 structuring element covering the full 8-neighbourhood
NEIGHBOURHOOD_KERNEL = np.ones((3, 3), dtype=np.uint8)


# =============================================================================
# Helper Functions
# =============================================================================

def _interior_mask(shape) -> np.ndarray:
    """Boolean mask selecting pixels whose 3x3 window lies inside the image."""
    interior = np.zeros(shape, dtype=bool)
    if shape[0] >= 3 and shape[1] >= 3:
        interior[1:-1, 1:-1] = True
    return interior


def _label_transitions(labels: np.ndarray) -> np.ndarray:
    """
    Mark interior pixels having at least one 8-neighbour with the opposite label.

    A foreground pixel qualifies when the 3x3 minimum is background; a
    background pixel qualifies when the 3x3 maximum is foreground.
    """
    binary = labels.astype(np.uint8)
    window_min = cv2.erode(binary, NEIGHBOURHOOD_KERNEL)
    window_max = cv2.dilate(binary, NEIGHBOURHOOD_KERNEL)

    transitions = np.where(labels, window_min == 0, window_max == 1)
    return transitions & _interior_mask(labels.shape)


# =============================================================================
# Main Functions
# =============================================================================

def compute_gradient_magnitude(original: PixelBuffer) -> np.ndarray:
    """
    Compute the 3x3 Sobel gradient magnitude of the original image.

    gx responds positively to intensity rising toward +x and gy to
    intensity rising toward +y; magnitude = sqrt(gx^2 + gy^2).

    Args:
        original: Grayscale original image

    Returns:
        float64 (height, width) magnitude array, zero on border pixels
    """
    interior = _interior_mask(original.shape)
    if not interior.any():
        return np.zeros(original.shape, dtype=np.float64)

    grad_x = cv2.Sobel(original.data, cv2.CV_64F, 1, 0, ksize=SOBEL_KERNEL_SIZE)
    grad_y = cv2.Sobel(original.data, cv2.CV_64F, 0, 1, ksize=SOBEL_KERNEL_SIZE)

    magnitude = np.sqrt(grad_x**2 + grad_y**2)
    magnitude[~interior] = 0.0
    return magnitude


def detect_edge_pixels(original: PixelBuffer,
                       threshold: float = DEFAULT_EDGE_THRESHOLD) -> np.ndarray:
    """
    Find interior pixels whose Sobel magnitude is strictly above threshold.

    Args:
        original: Grayscale original image
        threshold: Minimum gradient magnitude for an edge pixel

    Returns:
        Boolean (height, width) edge map
    """
    magnitude = compute_gradient_magnitude(original)
    return (magnitude > threshold) & _interior_mask(original.shape)


def evaluate_boundary_preservation(
    original: PixelBuffer,
    candidate: PixelBuffer,
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
) -> Dict[str, Any]:
    """
    Check which edges of the original the candidate mask reproduces.

    Args:
        original: Grayscale original image
        candidate: Candidate binary mask, same dimensions
        edge_threshold: Minimum gradient magnitude for an edge pixel

    Returns:
        Dictionary containing:
        - edge_map: Boolean map of edge pixels in the original
        - preserved_map: Boolean map of edge pixels with a label transition
        - edge_count: Number of edge pixels
        - preserved_count: Number of preserved edge pixels
        - boundary_accuracy: preserved_count / edge_count (1.0 if no edges)
    """
    edge_map = detect_edge_pixels(original, edge_threshold)
    transitions = _label_transitions(foreground_labels(candidate))
    preserved_map = edge_map & transitions

    edge_count = int(np.count_nonzero(edge_map))
    preserved_count = int(np.count_nonzero(preserved_map))

    if edge_count > 0:
        accuracy = preserved_count / edge_count
    else:
        accuracy = 1.0  # No edges to preserve

    logger.debug(f"Boundary preservation: {preserved_count}/{edge_count} edge pixels "
                 f"(threshold={edge_threshold})")

    return {
        "edge_map": edge_map,
        "preserved_map": preserved_map,
        "edge_count": edge_count,
        "preserved_count": preserved_count,
        "boundary_accuracy": accuracy,
    }


def compute_boundary_accuracy(original: PixelBuffer, candidate: PixelBuffer,
                              edge_threshold: float = DEFAULT_EDGE_THRESHOLD) -> float:
    """Fraction of the original's edge pixels preserved by the candidate."""
    result = evaluate_boundary_preservation(original, candidate, edge_threshold)
    return result["boundary_accuracy"]


def extract_boundary_points(mask: PixelBuffer) -> np.ndarray:
    """
    Extract the perimeter of a binary mask.

    A boundary point is an interior foreground pixel (> 127) with at least
    one background 8-neighbour.

    Args:
        mask: Binary mask

    Returns:
        int64 array of shape (N, 2) holding (x, y) coordinates
    """
    labels = foreground_labels(mask)
    perimeter = labels & _label_transitions(labels)

    # argwhere yields (row, col); flip to (x, y)
    points = np.argwhere(perimeter)[:, ::-1].astype(np.int64)
    logger.debug(f"Extracted {len(points)} boundary points")
    return np.ascontiguousarray(points)
