"""
Image fidelity metrics.

Pixel-level comparisons of a processed image against its original,
complementary to the segmentation scores:
- PSNR from the mean squared error of absolute differences
- A simplified structural similarity: the absolute Pearson correlation
"""

import logging

import cv2
import numpy as np

from .errors import DimensionMismatchError, NullInputError
from .pixel_buffer import PixelBuffer
from .metrics_constants import MAX_PIXEL_VALUE

logger = logging.getLogger(__name__)


def _validate_pair(original, processed):
    if original is None:
        raise NullInputError("original")
    if processed is None:
        raise NullInputError("processed")

    original = PixelBuffer.from_array(original)
    processed = PixelBuffer.from_array(processed)
    if not original.same_size(processed):
        raise DimensionMismatchError("original", original.shape, "processed", processed.shape)
    return original, processed


def compute_psnr(original, processed) -> float:
    """
    Peak signal-to-noise ratio in dB.

    Args:
        original: Grayscale original image
        processed: Grayscale processed image, same dimensions

    Returns:
        20 * log10(255 / sqrt(MSE)); inf for identical images
    """
    original, processed = _validate_pair(original, processed)

    diff = cv2.absdiff(original.data, processed.data).astype(np.float64)
    mse = float(np.mean(diff * diff))
    if mse == 0.0:
        return float("inf")

    psnr = 20.0 * np.log10(MAX_PIXEL_VALUE / np.sqrt(mse))
    logger.debug(f"PSNR: mse={mse:.3f}, psnr={psnr:.2f}dB")
    return float(psnr)


def compute_correlation_similarity(original, processed) -> float:
    """
    Simplified structural similarity: |Pearson correlation| of intensities.

    Args:
        original: Grayscale original image
        processed: Grayscale processed image, same dimensions

    Returns:
        Similarity in [0, 1]; 0.0 when either image has zero variance
    """
    original, processed = _validate_pair(original, processed)

    x = original.data.astype(np.float64).ravel()
    y = processed.data.astype(np.float64).ravel()
    n = x.size

    mean_x = x.mean()
    mean_y = y.mean()
    covariance = np.dot(x, y) - n * mean_x * mean_y
    var_x = np.dot(x, x) - n * mean_x * mean_x
    var_y = np.dot(y, y) - n * mean_y * mean_y

    if var_x <= 0 or var_y <= 0:
        return 0.0

    correlation = covariance / np.sqrt(var_x * var_y)
    return float(min(abs(correlation), 1.0))
