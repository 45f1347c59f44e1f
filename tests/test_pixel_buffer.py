"""Tests for the read-only pixel buffer."""

import numpy as np
import pytest

from segmetrics.errors import InvalidBufferError
from segmetrics.pixel_buffer import PixelBuffer


class TestPixelBuffer:
    """Test construction and access."""

    def test_dimensions(self):
        buffer = PixelBuffer.from_array(np.zeros((3, 7), dtype=np.uint8))

        assert buffer.width == 7
        assert buffer.height == 3
        assert buffer.shape == (3, 7)
        assert buffer.pixel_count == 21

    def test_data_is_read_only(self):
        buffer = PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))

        with pytest.raises(ValueError):
            buffer.data[0, 0] = 1

    def test_copies_caller_array(self):
        source = np.zeros((2, 2), dtype=np.uint8)
        buffer = PixelBuffer.from_array(source)
        source[0, 0] = 200

        assert buffer.pixel(0, 0) == 0

    def test_pixel_bounds_checked(self):
        buffer = PixelBuffer.from_array(np.arange(6, dtype=np.uint8).reshape(2, 3))

        assert buffer.pixel(2, 1) == 5
        with pytest.raises(IndexError):
            buffer.pixel(3, 0)
        with pytest.raises(IndexError):
            buffer.pixel(0, -1)

    def test_bool_mask_maps_to_255(self):
        buffer = PixelBuffer.from_array(np.array([[True, False]]))

        assert buffer.data.tolist() == [[255, 0]]

    def test_integer_and_float_inputs(self):
        assert PixelBuffer.from_array([[0, 128, 255]]).data.dtype == np.uint8
        assert PixelBuffer.from_array(np.array([[1.0, 2.0]])).data.tolist() == [[1, 2]]

    def test_singleton_channel_squeezed(self):
        buffer = PixelBuffer.from_array(np.zeros((4, 5, 1), dtype=np.uint8))

        assert buffer.shape == (4, 5)

    def test_from_array_passthrough(self):
        buffer = PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))

        assert PixelBuffer.from_array(buffer) is buffer

    def test_equality(self):
        a = PixelBuffer.from_array(np.ones((2, 2), dtype=np.uint8))
        b = PixelBuffer.from_array(np.ones((2, 2), dtype=np.uint8))

        assert a == b
        assert hash(a) == hash(b)
        assert a != PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))

    @pytest.mark.parametrize("data", [
        np.zeros((4, 4, 3), dtype=np.uint8),
        np.zeros((0, 4), dtype=np.uint8),
        np.zeros(5, dtype=np.uint8),
        np.array([[300, 0]]),
        np.array([[-1, 0]]),
        np.array([[0.5, 1.0]]),
        np.array([["a", "b"]]),
    ])
    def test_invalid_inputs(self, data):
        with pytest.raises(InvalidBufferError):
            PixelBuffer.from_array(data)

    def test_constructor_requires_uint8(self):
        with pytest.raises(InvalidBufferError):
            PixelBuffer(np.zeros((2, 2), dtype=np.int32))
