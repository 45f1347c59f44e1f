"""
Read-only single-channel pixel buffer.

PixelBuffer wraps a 2-D uint8 numpy array together with its width and
height. The wrapped array is a private, non-writeable copy so scorers can
borrow it freely without any risk of the caller mutating it mid-pass.
"""

import logging
from typing import Tuple, Union

import numpy as np

from .errors import InvalidBufferError
from .metrics_constants import MAX_PIXEL_VALUE, FOREGROUND_VALUE

logger = logging.getLogger(__name__)


class PixelBuffer:
    """
    Immutable width x height grid of unsigned 8-bit intensities.

    Use PixelBuffer.from_array() to build one from any array-like input.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray):
        """
        Initialize pixel buffer.

        Args:
            data: 2-D uint8 array of shape (height, width)
        """
        if not isinstance(data, np.ndarray) or data.dtype != np.uint8:
            raise InvalidBufferError("PixelBuffer requires a uint8 numpy array; use from_array()")
        if data.ndim != 2:
            raise InvalidBufferError(f"PixelBuffer requires a 2-D array, got shape {data.shape}")
        if data.size == 0:
            raise InvalidBufferError("PixelBuffer cannot be empty")

        buffer = np.array(data, dtype=np.uint8, copy=True, order="C")
        buffer.setflags(write=False)
        self._data = buffer

    @classmethod
    def from_array(cls, array: Union[np.ndarray, "PixelBuffer", list]) -> "PixelBuffer":
        """
        Build a PixelBuffer from array-like data.

        Accepts uint8 arrays directly, boolean masks (True -> 255), other
        integer or float arrays whose values are whole numbers in [0, 255],
        and (H, W, 1) arrays with a singleton channel axis.

        Args:
            array: Input data

        Returns:
            New PixelBuffer (or the same instance if already a PixelBuffer)
        """
        if isinstance(array, PixelBuffer):
            return array

        arr = np.asarray(array)

        if arr.ndim == 3 and arr.shape[2] == 1:
            arr = arr[:, :, 0]
        if arr.ndim != 2:
            raise InvalidBufferError(
                f"Expected a single-channel 2-D image, got shape {arr.shape}"
            )
        if arr.size == 0:
            raise InvalidBufferError("Image has no pixels")

        if arr.dtype == np.uint8:
            return cls(arr)

        if arr.dtype == np.bool_:
            return cls(arr.astype(np.uint8) * FOREGROUND_VALUE)

        if not np.issubdtype(arr.dtype, np.number):
            raise InvalidBufferError(f"Unsupported pixel dtype: {arr.dtype}")

        if np.issubdtype(arr.dtype, np.floating):
            if not np.all(np.isfinite(arr)) or not np.all(arr == np.floor(arr)):
                raise InvalidBufferError("Float image must contain whole-number intensities")

        lo, hi = arr.min(), arr.max()
        if lo < 0 or hi > MAX_PIXEL_VALUE:
            raise InvalidBufferError(
                f"Pixel values must lie in [0, {MAX_PIXEL_VALUE}], got [{lo}, {hi}]"
            )

        logger.debug(f"Converting {arr.dtype} image to uint8")
        return cls(arr.astype(np.uint8))

    @property
    def data(self) -> np.ndarray:
        """Read-only (height, width) uint8 view of the pixels."""
        return self._data

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order."""
        return (self.height, self.width)

    @property
    def pixel_count(self) -> int:
        return int(self._data.size)

    def pixel(self, x: int, y: int) -> int:
        """
        Return the intensity at column x, row y.

        Raises:
            IndexError: If (x, y) lies outside the buffer
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of range for {self.width}x{self.height} buffer"
            )
        return int(self._data[y, x])

    def same_size(self, other: "PixelBuffer") -> bool:
        return self.shape == other.shape

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash((self.shape, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
