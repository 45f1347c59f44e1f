"""
Exceptions raised by the metrics engine.

All precondition failures are detected before any scorer runs, so a caller
either receives a complete metrics record or one of these errors.
"""

from typing import Tuple


class MetricsError(Exception):
    """Base class for all metrics engine errors."""


class NullInputError(MetricsError):
    """Raised when a required image is missing."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} image cannot be None")


class DimensionMismatchError(MetricsError):
    """Raised when two images that must be compared differ in size."""

    def __init__(self, first_name: str, first_shape: Tuple[int, int],
                 second_name: str, second_shape: Tuple[int, int]):
        self.first_shape = first_shape
        self.second_shape = second_shape
        # Shapes are (height, width); messages read width x height
        super().__init__(
            f"image dimensions must match: "
            f"{first_name} {first_shape[1]}x{first_shape[0]}, "
            f"{second_name} {second_shape[1]}x{second_shape[0]}"
        )


class InvalidBufferError(MetricsError, ValueError):
    """Raised when data cannot be interpreted as a single-channel 8-bit image."""
