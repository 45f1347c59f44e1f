"""
Histogram-based global thresholding.

This module handles:
- Intensity histogram construction (256 bins)
- Otsu threshold selection (maximum between-class variance)
- Adaptive reference mask generation from the original image
- Binarization of masks at the fixed label threshold

Functions:
- build_histogram: Tally intensity frequencies of a buffer
- select_otsu_threshold: Pick the threshold maximizing between-class variance
- generate_reference_mask: Binarize the original image at its Otsu threshold
- foreground_labels: Boolean foreground labels of a mask (value > 127)
"""

import logging
from typing import Optional

import cv2
import numpy as np

from .pixel_buffer import PixelBuffer
from .metrics_constants import (
    HISTOGRAM_BINS,
    BINARY_LABEL_THRESHOLD,
    FOREGROUND_VALUE,
)

logger = logging.getLogger(__name__)


def build_histogram(buffer: PixelBuffer) -> np.ndarray:
    """
    Count how many pixels take each intensity value.

    Args:
        buffer: Input pixel buffer

    Returns:
        int64 array of length 256 whose sum equals width * height
    """
    return np.bincount(buffer.data.ravel(), minlength=HISTOGRAM_BINS).astype(np.int64)


def select_otsu_threshold(histogram: np.ndarray, total: Optional[int] = None) -> int:
    """
    Select the global threshold maximizing between-class variance.

    For each candidate t, the background class is every intensity <= t and
    the foreground class everything above. The score is

        V(t) = wB * wF * (meanB - meanF)^2

    Thresholds where either class is empty are skipped. The scan runs in
    ascending order and only replaces the best threshold on a strictly
    larger variance, so ties resolve to the lowest t.

    Args:
        histogram: 256-bin intensity counts
        total: Pixel count N (defaults to histogram.sum())

    Returns:
        Threshold in [0, 255]; 0 when no split has positive variance
        (e.g. a uniform image)
    """
    counts = np.asarray(histogram, dtype=np.float64)
    if counts.shape != (HISTOGRAM_BINS,):
        raise ValueError(f"Histogram must have {HISTOGRAM_BINS} bins, got shape {counts.shape}")

    if total is None:
        total = counts.sum()
    total = float(total)

    intensities = np.arange(HISTOGRAM_BINS, dtype=np.float64)
    weight_bg = np.cumsum(counts)
    sum_bg = np.cumsum(intensities * counts)
    sum_all = sum_bg[-1]
    weight_fg = total - weight_bg

    valid = (weight_bg > 0) & (weight_fg > 0)
    variance = np.zeros(HISTOGRAM_BINS, dtype=np.float64)

    wb = weight_bg[valid]
    wf = weight_fg[valid]
    mean_bg = sum_bg[valid] / wb
    mean_fg = (sum_all - sum_bg[valid]) / wf
    variance[valid] = wb * wf * (mean_bg - mean_fg) ** 2

    # argmax returns the first index of the maximum
    best = int(np.argmax(variance))
    if variance[best] <= 0.0:
        return 0
    return best


def generate_reference_mask(original: PixelBuffer) -> PixelBuffer:
    """
    Synthesize a binary reference mask from the original image.

    Used when no external ground truth exists. The Otsu threshold of the
    original is applied directly: pixel > t* becomes 255, everything else 0.

    Args:
        original: Grayscale original image

    Returns:
        Binary mask with values in {0, 255}
    """
    histogram = build_histogram(original)
    threshold = select_otsu_threshold(histogram, original.pixel_count)
    logger.debug(f"Otsu reference threshold: {threshold}")

    _, mask = cv2.threshold(original.data, threshold, FOREGROUND_VALUE, cv2.THRESH_BINARY)
    return PixelBuffer(mask)


def foreground_labels(mask: PixelBuffer) -> np.ndarray:
    """Boolean (height, width) array, True where the mask value exceeds 127."""
    return mask.data > BINARY_LABEL_THRESHOLD
