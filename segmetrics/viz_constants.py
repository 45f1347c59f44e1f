"""
Shared visualization constants for debug output.

Colors, sizes and fonts used when the command-line evaluator saves
intermediate stages of a metrics run.

Example usage:
    from segmetrics.viz_constants import Color

    overlay[edge_map] = Color.EDGE_MISSED
"""

import cv2

# ============================================================================
# FONT SETTINGS
# ============================================================================

FONT_FACE = cv2.FONT_HERSHEY_SIMPLEX


class FontScale:
    """Font scales for stage captions. Debug images are usually small."""
    LABEL = 0.5


class FontThickness:
    LABEL = 1
    LABEL_OUTLINE = 3


# ============================================================================
# COLORS (BGR format for OpenCV)
# ============================================================================

class Color:
    """
    Standard colors used across debug visualizations.

    All colors in BGR format (Blue, Green, Red) as required by OpenCV.
    """
    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    RED = (0, 0, 255)
    GREEN = (0, 255, 0)
    CYAN = (255, 255, 0)
    MAGENTA = (255, 0, 255)

    # Edge preservation
    EDGE_PRESERVED = GREEN      # Edge reproduced by the candidate
    EDGE_MISSED = RED           # Edge with no label transition nearby

    # Perimeters
    CANDIDATE_BOUNDARY = MAGENTA
    TRUTH_BOUNDARY = CYAN

    TEXT_PRIMARY = WHITE


# ============================================================================
# DRAWING SIZES
# ============================================================================

class Size:
    """Size constants for drawing, in pixels."""
    UPSCALE_MIN_DIM = 256       # Small images are enlarged to at least this


class Layout:
    TEXT_OFFSET_X = 4
    TEXT_OFFSET_Y = 14
