"""Shared fixtures for the metrics engine tests."""

import numpy as np
import pytest


def make_checkerboard(size: int = 4, low: int = 0, high: int = 255) -> np.ndarray:
    """Alternating low/high intensities, (0, 0) is low."""
    yy, xx = np.indices((size, size))
    return np.where((yy + xx) % 2 == 0, low, high).astype(np.uint8)


def make_square_mask(shape, top_left, size) -> np.ndarray:
    """Binary mask with a filled size x size square at (x, y) = top_left."""
    mask = np.zeros(shape, dtype=np.uint8)
    x, y = top_left
    mask[y:y + size, x:x + size] = 255
    return mask


@pytest.fixture
def bimodal_image():
    """Dark background with a brighter noisy square in the middle."""
    rng = np.random.default_rng(7)
    image = rng.integers(20, 60, size=(32, 32)).astype(np.uint8)
    image[8:24, 8:24] = rng.integers(170, 230, size=(16, 16)).astype(np.uint8)
    return image


@pytest.fixture
def step_image():
    """5x5 image with a vertical step: columns 0-1 at 0, columns 2-4 at 200."""
    image = np.zeros((5, 5), dtype=np.uint8)
    image[:, 2:] = 200
    return image
