"""
Region uniformity scoring.

Splits the original intensities by the candidate's binary label and
measures how homogeneous each side is. A good segmentation puts similar
intensities together, so the pixel-weighted within-region variance is low.
"""

import logging

import numpy as np

from .pixel_buffer import PixelBuffer
from .thresholding import foreground_labels
from .metrics_constants import UNIFORMITY_VARIANCE_SCALE

logger = logging.getLogger(__name__)


def _sample_variance(values: np.ndarray) -> float:
    """
    Bessel-corrected variance, (sum(x^2) - n*mean^2) / (n - 1).

    Groups with at most one pixel have variance 0.
    """
    n = values.size
    if n <= 1:
        return 0.0

    x = values.astype(np.float64)
    total = x.sum()
    mean = total / n
    variance = (np.dot(x, x) - n * mean * mean) / (n - 1)
    # Cancellation can leave a tiny negative residue for constant groups
    return max(float(variance), 0.0)


def compute_region_uniformity(original: PixelBuffer, candidate: PixelBuffer) -> float:
    """
    Score intra-region homogeneity of the original under the candidate's labels.

    uniformity = 1 / (1 + weighted_variance / 255), where weighted_variance
    is the pixel-count-weighted mean of the foreground and background
    sample variances.

    Args:
        original: Grayscale original image
        candidate: Candidate binary mask, same dimensions

    Returns:
        Uniformity score in (0, 1]; 1.0 means both regions are constant
    """
    labels = foreground_labels(candidate)
    pixels = original.data

    foreground = pixels[labels]
    background = pixels[~labels]

    fg_var = _sample_variance(foreground)
    bg_var = _sample_variance(background)

    total = foreground.size + background.size
    weighted_variance = (foreground.size * fg_var + background.size * bg_var) / total

    logger.debug(f"Region variance: fg={fg_var:.2f} (n={foreground.size}), "
                 f"bg={bg_var:.2f} (n={background.size}), weighted={weighted_variance:.2f}")

    return 1.0 / (1.0 + weighted_variance / UNIFORMITY_VARIANCE_SCALE)
