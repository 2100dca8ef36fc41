"""Per-frame parameter block shared by every tile of a dispatch."""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

# Slots of the float64 constants vector handed to kernels.
TIME = 0
FRAME = 1
PITCH = 2
MOUSE_X = 3
MOUSE_Y = 4
MOUSE_CLICK_X = 5
MOUSE_CLICK_Y = 6
RES_X = 7
RES_Y = 8
RES_Z = 9
NUM_CONSTANTS = 10

CONSTANT_NAMES = {
    "TIME": TIME,
    "FRAME": FRAME,
    "PITCH": PITCH,
    "MOUSE_X": MOUSE_X,
    "MOUSE_Y": MOUSE_Y,
    "MOUSE_CLICK_X": MOUSE_CLICK_X,
    "MOUSE_CLICK_Y": MOUSE_CLICK_Y,
    "RES_X": RES_X,
    "RES_Y": RES_Y,
    "RES_Z": RES_Z,
}

PIXEL_CHANNELS = 4


def allocate_pixels(width: int, height: int) -> NDArray[np.uint8]:
    """Return a zeroed RGBA8 buffer shaped (height, width, 4)."""
    if width <= 0 or height <= 0:
        raise ValueError(
            f"Invalid surface size; expected positive dimensions but got {width}x{height}"
        )
    return np.zeros((height, width, PIXEL_CHANNELS), dtype=np.uint8)


@dataclass
class GlobalParams:
    """Constants and destination buffer for one frame.

    Args:
        pixels: RGBA8 destination, shaped (height, width, 4). Row pitch is the width.
        constants: float64 vector indexed by the slot constants of this module.
    """

    pixels: NDArray[np.uint8]
    constants: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(NUM_CONSTANTS, dtype=np.float64)
    )

    @classmethod
    def for_surface(cls, width: int, height: int) -> "GlobalParams":
        params = cls(pixels=allocate_pixels(width, height))
        params.resize(width, height)
        return params

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer if needed and refresh pitch and resolution."""
        if self.pixels.shape[:2] != (height, width):
            self.pixels = allocate_pixels(width, height)
        self.constants[PITCH] = width
        self.constants[RES_X] = width
        self.constants[RES_Y] = height
        self.constants[RES_Z] = 1.0

    def set_frame(self, frame: int, time_s: float) -> None:
        self.constants[FRAME] = frame
        self.constants[TIME] = time_s

    def set_mouse(self, x: float, y: float, click_x: float, click_y: float) -> None:
        self.constants[MOUSE_X] = x
        self.constants[MOUSE_Y] = y
        self.constants[MOUSE_CLICK_X] = click_x
        self.constants[MOUSE_CLICK_Y] = click_y
