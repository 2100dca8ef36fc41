"""Tiled fork-join dispatch of kernels over a frame."""

from .dispatcher import (
    TileDispatcher as TileDispatcher,
)
from .tiles import (
    iter_tiles as iter_tiles,
)
from .tiles import (
    round_up_to_tile as round_up_to_tile,
)
from .tiles import (
    tile_grid as tile_grid,
)
