"""
Constants for the segmentation quality metrics engine.

This module contains all fixed parameters and thresholds used by the
scorers so they are easy to find and tune in one place.
"""

# =============================================================================
# Pixel Value Constants
# =============================================================================

# Number of intensity bins for an 8-bit single-channel image
HISTOGRAM_BINS = 256

# Largest representable intensity
MAX_PIXEL_VALUE = 255

# A mask pixel is foreground when its value is strictly above this
BINARY_LABEL_THRESHOLD = 127

# Value written into foreground pixels of generated binary masks
FOREGROUND_VALUE = 255


# =============================================================================
# Boundary Accuracy Constants
# =============================================================================

# Minimum Sobel gradient magnitude for an edge pixel in the original image
DEFAULT_EDGE_THRESHOLD = 30.0

# Sobel kernel size (3x3 window, interior pixels only)
SOBEL_KERNEL_SIZE = 3


# =============================================================================
# Region Uniformity Constants
# =============================================================================

# Divisor applied to the weighted variance before mapping into (0, 1]
UNIFORMITY_VARIANCE_SCALE = 255.0


# =============================================================================
# Input Validation Constants
# =============================================================================

# Image formats accepted by the command-line evaluator
SUPPORTED_IMAGE_SUFFIXES = [".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"]
