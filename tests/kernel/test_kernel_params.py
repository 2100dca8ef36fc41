import numpy as np
import pytest

from tilebench.kernel import GlobalParams, allocate_pixels
from tilebench.kernel.params import (
    FRAME,
    MOUSE_CLICK_Y,
    MOUSE_X,
    NUM_CONSTANTS,
    PITCH,
    RES_X,
    RES_Y,
    RES_Z,
    TIME,
)


class TestAllocatePixels:
    def test_shape_and_dtype(self):
        pixels = allocate_pixels(16, 8)
        assert pixels.shape == (8, 16, 4)
        assert pixels.dtype == np.uint8
        assert not pixels.any()

    @pytest.mark.parametrize("width, height", [(0, 8), (8, 0), (-1, 8)])
    def test_invalid_size(self, width, height):
        with pytest.raises(ValueError):
            allocate_pixels(width, height)


class TestGlobalParams:
    def test_for_surface(self):
        params = GlobalParams.for_surface(32, 16)
        assert params.width == 32
        assert params.height == 16
        assert params.constants.shape == (NUM_CONSTANTS,)
        assert params.constants[PITCH] == 32
        assert params.constants[RES_X] == 32
        assert params.constants[RES_Y] == 16
        assert params.constants[RES_Z] == 1.0

    def test_resize_reallocates(self):
        params = GlobalParams.for_surface(8, 8)
        params.resize(104, 56)
        assert params.pixels.shape == (56, 104, 4)
        assert params.constants[RES_X] == 104
        assert params.constants[RES_Y] == 56

    def test_resize_same_size_keeps_buffer(self):
        params = GlobalParams.for_surface(8, 8)
        pixels = params.pixels
        params.resize(8, 8)
        assert params.pixels is pixels

    def test_set_frame(self):
        params = GlobalParams.for_surface(8, 8)
        params.set_frame(3, 0.5)
        assert params.constants[FRAME] == 3
        assert params.constants[TIME] == 0.5

    def test_set_mouse(self):
        params = GlobalParams.for_surface(8, 8)
        params.set_mouse(1.0, 2.0, 3.0, 4.0)
        assert params.constants[MOUSE_X] == 1.0
        assert params.constants[MOUSE_CLICK_Y] == 4.0
