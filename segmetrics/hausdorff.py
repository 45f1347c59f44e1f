"""
Hausdorff distance between two boundary point sets.

The directed distance h(A, B) is the largest distance from a point of A to
its nearest neighbour in B. Nearest neighbours are found with a k-d tree
over B, so the cost is O(|A| log |B|) instead of the O(|A| * |B|) pairwise
scan; the result is the same Euclidean maximum.
"""

import logging

import numpy as np
from scipy.spatial import cKDTree

logger = logging.getLogger(__name__)


def _as_points(points) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Point set must have shape (N, 2), got {arr.shape}")
    return arr


def directed_hausdorff_distance(source, target) -> float:
    """
    Directed Hausdorff distance h(source, target).

    Args:
        source: (N, 2) array of (x, y) points
        target: (M, 2) array of (x, y) points

    Returns:
        max over source of the distance to the nearest target point;
        0.0 if either set is empty
    """
    a = _as_points(source)
    b = _as_points(target)
    if len(a) == 0 or len(b) == 0:
        return 0.0

    distances, _ = cKDTree(b).query(a, k=1)
    return float(np.max(distances))


def hausdorff_distance(first, second) -> float:
    """
    Symmetric Hausdorff distance max(h(A, B), h(B, A)).

    An empty point set on either side yields 0.0 by convention.

    Args:
        first: (N, 2) array of (x, y) points
        second: (M, 2) array of (x, y) points

    Returns:
        Distance in pixels
    """
    a = _as_points(first)
    b = _as_points(second)
    if len(a) == 0 or len(b) == 0:
        logger.debug("Empty boundary set, Hausdorff distance defined as 0")
        return 0.0

    forward = directed_hausdorff_distance(a, b)
    backward = directed_hausdorff_distance(b, a)
    logger.debug(f"Directed Hausdorff: forward={forward:.3f}, backward={backward:.3f}")
    return max(forward, backward)
