"""
Confusion-matrix overlap metrics.

Both masks are binarized at the label threshold (value > 127) and compared
pixel by pixel. The reference plays the role of ground truth: a pixel that
is foreground in the candidate but background in the reference is a false
positive.

Functions:
- accumulate_confusion: Tally TP/FP/FN/TN over two equal-size masks
- compute_iou: TP / (TP + FP + FN)
- compute_dice: 2TP / (2TP + FP + FN)
- compute_misclassification_error: (FP + FN) / total
- compute_similarity: All three scores at once
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .pixel_buffer import PixelBuffer
from .thresholding import foreground_labels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfusionCounts:
    """Pixel classification counts of a candidate mask against a reference."""

    true_positive: int
    false_positive: int
    false_negative: int
    true_negative: int

    def __post_init__(self):
        for name in ("true_positive", "false_positive", "false_negative", "true_negative"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

    @property
    def total(self) -> int:
        return self.true_positive + self.false_positive + self.false_negative + self.true_negative


def accumulate_confusion(reference: PixelBuffer, candidate: PixelBuffer) -> ConfusionCounts:
    """
    Classify every pixel of the candidate against the reference.

    Caller guarantees both masks have the same dimensions.

    Args:
        reference: Reference (ground truth) mask
        candidate: Candidate segmentation mask

    Returns:
        ConfusionCounts summing to width * height
    """
    ref = foreground_labels(reference)
    seg = foreground_labels(candidate)

    tp = int(np.count_nonzero(ref & seg))
    fp = int(np.count_nonzero(~ref & seg))
    fn = int(np.count_nonzero(ref & ~seg))
    tn = ref.size - tp - fp - fn

    logger.debug(f"Confusion counts: TP={tp}, FP={fp}, FN={fn}, TN={tn}")
    return ConfusionCounts(tp, fp, fn, tn)


def compute_iou(counts: ConfusionCounts) -> float:
    """Intersection over union; 1.0 when both masks are empty."""
    union = counts.true_positive + counts.false_positive + counts.false_negative
    if union == 0:
        return 1.0
    return counts.true_positive / union


def compute_dice(counts: ConfusionCounts) -> float:
    """Dice coefficient; 1.0 when both masks are empty."""
    denominator = 2 * counts.true_positive + counts.false_positive + counts.false_negative
    if denominator == 0:
        return 1.0
    return 2.0 * counts.true_positive / denominator


def compute_misclassification_error(counts: ConfusionCounts) -> float:
    """Fraction of pixels on which the two masks disagree."""
    if counts.total == 0:
        return 0.0
    return (counts.false_positive + counts.false_negative) / counts.total


def compute_similarity(counts: ConfusionCounts) -> Tuple[float, float, float]:
    """
    Derive the overlap scores from confusion counts.

    Args:
        counts: Output from accumulate_confusion()

    Returns:
        Tuple of (iou, dice, misclassification_error)
    """
    return (
        compute_iou(counts),
        compute_dice(counts),
        compute_misclassification_error(counts),
    )
