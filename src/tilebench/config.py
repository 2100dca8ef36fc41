from enum import StrEnum
from typing import Self

from msgspec import Struct, structs

DEFAULT_TILE_SIZE = 8
MAX_RESOLUTION = 8192
DEFAULT_RESOLUTION = (1280, 720)


def round_up_to_tile(value: int, tile_size: int) -> int:
    """Round ``value`` up to the next multiple of ``tile_size``."""
    return ((value + tile_size - 1) // tile_size) * tile_size


class KernelDialect(StrEnum):
    """How kernel source is turned into a callable."""

    NUMBA = "numba"
    PYTHON = "python"


class SessionConfig(Struct, frozen=True):
    """Per-session render settings, replaced between runs by script commands.

    Args:
        resolution_w: Frame width in pixels, a multiple of ``tile_size``.
        resolution_h: Frame height in pixels, a multiple of ``tile_size``.
        forced_frame_delta: Fixed time step in seconds, or None for realtime.
        multithreaded: Dispatch tiles across the worker pool.
        tile_size: Edge length of a dispatch tile.
    """

    resolution_w: int
    resolution_h: int
    forced_frame_delta: float | None = None
    multithreaded: bool = True
    tile_size: int = DEFAULT_TILE_SIZE

    def __post_init__(self):
        """Validate tile size and tile-aligned resolution."""
        if self.tile_size <= 0:
            raise ValueError(
                f"Invalid tile_size; expected >0 but got {self.tile_size}"
            )
        for name, value in (("resolution_w", self.resolution_w), ("resolution_h", self.resolution_h)):
            if value <= 0 or value % self.tile_size != 0:
                raise ValueError(
                    f"Invalid {name}; expected a positive multiple of {self.tile_size} but got {value}"
                )
        if self.forced_frame_delta is not None and self.forced_frame_delta <= 0.0:
            raise ValueError(
                f"Invalid forced_frame_delta; expected >0 or None but got {self.forced_frame_delta}"
            )

    @classmethod
    def default(cls, tile_size: int = DEFAULT_TILE_SIZE) -> Self:
        """Return 1280x720 (tile aligned), realtime, multithreaded."""
        w, h = DEFAULT_RESOLUTION
        return cls(
            resolution_w=round_up_to_tile(w, tile_size),
            resolution_h=round_up_to_tile(h, tile_size),
            tile_size=tile_size,
        )

    def with_resolution(self, width: float, height: float) -> Self:
        """Clamp to [1, MAX_RESOLUTION] and round up to the tile size."""
        w = min(max(int(width), 1), MAX_RESOLUTION)
        h = min(max(int(height), 1), MAX_RESOLUTION)
        return structs.replace(
            self,
            resolution_w=round_up_to_tile(w, self.tile_size),
            resolution_h=round_up_to_tile(h, self.tile_size),
        )

    def with_framerate(self, fps: float) -> Self:
        """Force a fixed frame delta of ``1/fps``; ``fps <= 0`` means realtime."""
        delta = None if fps <= 0.0 else 1.0 / fps
        return structs.replace(self, forced_frame_delta=delta)

    def with_multithreading(self, enabled: bool) -> Self:
        return structs.replace(self, multithreaded=enabled)


class HarnessConfig(Struct, frozen=True):
    """Process-level settings taken from the command line.

    Args:
        tile_size: Edge length of a dispatch tile.
        max_workers: Size of the tile worker pool; None lets the executor decide.
        dialect: Kernel dialect used for every ``run``.
    """

    tile_size: int = DEFAULT_TILE_SIZE
    max_workers: int | None = None
    dialect: KernelDialect = KernelDialect.NUMBA

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(
                f"Invalid tile_size; expected >0 but got {self.tile_size}"
            )
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(
                f"Invalid max_workers; expected >0 but got {self.max_workers}"
            )
