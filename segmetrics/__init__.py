"""
Segmentation quality metrics for binarized thresholding results.
"""

from .errors import MetricsError, NullInputError, DimensionMismatchError, InvalidBufferError
from .pixel_buffer import PixelBuffer
from .thresholding import build_histogram, select_otsu_threshold, generate_reference_mask
from .overlap import ConfusionCounts, accumulate_confusion, compute_similarity
from .region import compute_region_uniformity
from .boundary import compute_boundary_accuracy, extract_boundary_points
from .hausdorff import hausdorff_distance, directed_hausdorff_distance
from .fidelity import compute_psnr, compute_correlation_similarity
from .metrics import MetricsConfig, SegmentationMetrics, compute_segmentation_metrics

__all__ = [
    "MetricsError",
    "NullInputError",
    "DimensionMismatchError",
    "InvalidBufferError",
    "PixelBuffer",
    "build_histogram",
    "select_otsu_threshold",
    "generate_reference_mask",
    "ConfusionCounts",
    "accumulate_confusion",
    "compute_similarity",
    "compute_region_uniformity",
    "compute_boundary_accuracy",
    "extract_boundary_points",
    "hausdorff_distance",
    "directed_hausdorff_distance",
    "compute_psnr",
    "compute_correlation_similarity",
    "MetricsConfig",
    "SegmentationMetrics",
    "compute_segmentation_metrics",
]
