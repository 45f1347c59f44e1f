"""
Debug visualization observer for the metrics evaluator.

This module provides a non-intrusive way to capture intermediate stages of
a metrics run (reference mask, edge maps, perimeters) without putting any
I/O into the scoring functions themselves. The scorers stay pure; callers
that want debug output hand their results to a DebugObserver.

It also contains the drawing functions used for those stages.
"""

from pathlib import Path
from typing import Callable, Optional

import cv2
import numpy as np

from .viz_constants import (
    FONT_FACE, FontScale, FontThickness, Color, Size, Layout
)


class DebugObserver:
    """
    Observer for capturing and saving intermediate processing stages.
    """

    def __init__(self, debug_dir: str):
        """
        Initialize debug observer.

        Args:
            debug_dir: Directory where debug images will be saved
        """
        self.debug_dir = Path(debug_dir)
        self.debug_dir.mkdir(parents=True, exist_ok=True)
        self._stage_counter = {}

    def save_stage(self, name: str, image: np.ndarray) -> Optional[Path]:
        """
        Save an intermediate processing stage image.

        Args:
            name: Stage name (used as filename prefix)
            image: Image to save

        Returns:
            Path written, or None if the image was empty
        """
        if image is None or image.size == 0:
            return None

        # Add counter for stages with multiple saves
        if name in self._stage_counter:
            self._stage_counter[name] += 1
            filename = f"{name}_{self._stage_counter[name]}.png"
        else:
            self._stage_counter[name] = 0
            filename = f"{name}.png"

        return self._save_upscaled(image, filename)

    def draw_and_save(self, name: str, image: np.ndarray,
                      draw_func: Callable, *args, **kwargs) -> Optional[Path]:
        """
        Apply a drawing function to an image and save the result.

        Args:
            name: Stage name for the output file
            image: Base image to draw on
            draw_func: Function taking (image, *args, **kwargs) and returning the annotated image
        """
        if image is None or image.size == 0:
            return None

        annotated = draw_func(image, *args, **kwargs)
        return self.save_stage(name, annotated)

    def _save_upscaled(self, image: np.ndarray, filename: str) -> Path:
        """
        Save image, enlarging small ones with nearest-neighbour sampling.

        Masks and edge maps are usually inspected pixel by pixel, so
        interpolation would blur exactly what the stage is meant to show.
        """
        output_path = self.debug_dir / filename

        h, w = image.shape[:2]
        if max(h, w) < Size.UPSCALE_MIN_DIM:
            factor = int(np.ceil(Size.UPSCALE_MIN_DIM / max(h, w)))
            image = cv2.resize(image, (w * factor, h * factor),
                               interpolation=cv2.INTER_NEAREST)

        cv2.imwrite(str(output_path), image)
        return output_path


# =============================================================================
# Drawing Functions for Debug Visualization
# =============================================================================

def _to_bgr(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image.copy()


def bool_to_image(mask: np.ndarray) -> np.ndarray:
    """Convert a boolean map into a 0/255 uint8 image."""
    return mask.astype(np.uint8) * 255


def draw_edge_preservation(image: np.ndarray, edge_map: np.ndarray,
                           preserved_map: np.ndarray) -> np.ndarray:
    """
    Colour edge pixels by whether the candidate preserves them.

    Args:
        image: Grayscale original
        edge_map: Boolean edge pixels of the original
        preserved_map: Boolean subset of edge_map reproduced by the candidate

    Returns:
        BGR overlay: preserved edges green, missed edges red
    """
    overlay = _to_bgr(image)
    overlay[edge_map & ~preserved_map] = Color.EDGE_MISSED
    overlay[preserved_map] = Color.EDGE_PRESERVED
    return overlay


def draw_boundary_points(image: np.ndarray, points: np.ndarray,
                         color=Color.CANDIDATE_BOUNDARY) -> np.ndarray:
    """
    Mark perimeter points on an image.

    Args:
        image: Grayscale or BGR base image
        points: (N, 2) array of (x, y) coordinates
        color: BGR marker colour

    Returns:
        BGR image with points coloured
    """
    overlay = _to_bgr(image)
    if len(points) > 0:
        overlay[points[:, 1], points[:, 0]] = color
    return overlay


def draw_caption(image: np.ndarray, text: str) -> np.ndarray:
    """Draw a single outlined caption line in the top-left corner."""
    overlay = _to_bgr(image)
    position = (Layout.TEXT_OFFSET_X, Layout.TEXT_OFFSET_Y)

    # Black outline
    cv2.putText(overlay, text, position, FONT_FACE, FontScale.LABEL,
                Color.BLACK, FontThickness.LABEL_OUTLINE, cv2.LINE_AA)
    # White text
    cv2.putText(overlay, text, position, FONT_FACE, FontScale.LABEL,
                Color.TEXT_PRIMARY, FontThickness.LABEL, cv2.LINE_AA)
    return overlay
