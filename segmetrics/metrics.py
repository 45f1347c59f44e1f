"""
Segmentation quality metrics facade.

Combines the individual scorers into a single SegmentationMetrics record:

1. Adaptive reference: Otsu-binarized original (no external ground truth
   needed)
2. Overlap: IoU, Dice and misclassification error of candidate vs reference
3. Region uniformity of the original under the candidate's labels
4. Boundary accuracy: Sobel edges of the original preserved by the candidate
5. Hausdorff distance between candidate and ground-truth perimeters, only
   when a real ground truth is supplied

All inputs are validated before any scorer runs. A call either returns a
fully populated record or raises a MetricsError.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from .boundary import compute_boundary_accuracy, extract_boundary_points
from .errors import DimensionMismatchError, NullInputError
from .hausdorff import hausdorff_distance
from .overlap import accumulate_confusion, compute_similarity
from .pixel_buffer import PixelBuffer
from .region import compute_region_uniformity
from .thresholding import generate_reference_mask
from .metrics_constants import DEFAULT_EDGE_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricsConfig:
    """Per-call tunables for the metrics engine."""

    # Minimum Sobel magnitude for an edge pixel in the original
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD

    def __post_init__(self):
        if self.edge_threshold < 0:
            raise ValueError(f"edge_threshold must be non-negative, got {self.edge_threshold}")


@dataclass(frozen=True)
class SegmentationMetrics:
    """Quality evaluation metrics for a thresholding result."""

    iou: float
    dice_coefficient: float
    misclassification_error: float
    region_uniformity: float
    boundary_accuracy: float
    hausdorff_distance: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {key: float(value) for key, value in asdict(self).items()}

    def describe(self) -> Dict[str, str]:
        """
        Human-readable description of each metric.

        Returns:
            Dictionary mapping metric name to a formatted line
        """
        return {
            "iou": f"Intersection over Union: {self.iou:.4f} (higher is better, 1.0 = perfect)",
            "dice_coefficient": f"Dice Similarity: {self.dice_coefficient:.4f} (higher is better, 1.0 = perfect)",
            "misclassification_error": f"Misclassification Error: {self.misclassification_error:.4f} (lower is better, 0.0 = perfect)",
            "region_uniformity": f"Region Uniformity: {self.region_uniformity:.4f} (higher is better, 1.0 = perfect)",
            "boundary_accuracy": f"Boundary Accuracy: {self.boundary_accuracy:.4f} (higher is better, 1.0 = perfect)",
            "hausdorff_distance": f"Hausdorff Distance: {self.hausdorff_distance:.2f} pixels (lower is better, 0.0 = perfect)",
        }


def _coerce_buffer(image, name: str) -> PixelBuffer:
    if image is None:
        raise NullInputError(name)
    return PixelBuffer.from_array(image)


def compute_segmentation_metrics(
    original,
    candidate,
    ground_truth=None,
    config: Optional[MetricsConfig] = None,
) -> SegmentationMetrics:
    """
    Score a binarized thresholding result.

    Args:
        original: Grayscale image before thresholding (PixelBuffer or 2-D array)
        candidate: Binarized output of the algorithm under evaluation
        ground_truth: Optional externally supplied binary ground truth; when
            given, the Hausdorff distance between its perimeter and the
            candidate's is computed
        config: Tunables (defaults to MetricsConfig())

    Returns:
        SegmentationMetrics record

    Raises:
        NullInputError: If original or candidate is None
        DimensionMismatchError: If original/candidate or candidate/ground_truth
            differ in width or height
        InvalidBufferError: If an input is not a single-channel 8-bit image
    """
    if config is None:
        config = MetricsConfig()

    original = _coerce_buffer(original, "original")
    candidate = _coerce_buffer(candidate, "candidate")
    if not original.same_size(candidate):
        raise DimensionMismatchError("original", original.shape, "candidate", candidate.shape)

    if ground_truth is not None:
        ground_truth = PixelBuffer.from_array(ground_truth)
        if not ground_truth.same_size(candidate):
            raise DimensionMismatchError("candidate", candidate.shape,
                                         "ground truth", ground_truth.shape)

    logger.debug(f"Computing segmentation metrics for {original.width}x{original.height} image "
                 f"(ground truth: {'yes' if ground_truth is not None else 'no'})")

    reference = generate_reference_mask(original)
    counts = accumulate_confusion(reference, candidate)
    iou, dice, misclassification = compute_similarity(counts)

    uniformity = compute_region_uniformity(original, candidate)
    boundary_accuracy = compute_boundary_accuracy(original, candidate, config.edge_threshold)

    hausdorff = 0.0
    if ground_truth is not None:
        candidate_boundary = extract_boundary_points(candidate)
        truth_boundary = extract_boundary_points(ground_truth)
        hausdorff = hausdorff_distance(candidate_boundary, truth_boundary)

    metrics = SegmentationMetrics(
        iou=float(iou),
        dice_coefficient=float(dice),
        misclassification_error=float(misclassification),
        region_uniformity=float(uniformity),
        boundary_accuracy=float(boundary_accuracy),
        hausdorff_distance=float(hausdorff),
    )
    logger.debug(f"Metrics: {metrics.to_dict()}")
    return metrics
