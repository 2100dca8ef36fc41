"""Tile grid arithmetic."""

from collections.abc import Iterator

from tilebench.config import round_up_to_tile

__all__ = ["round_up_to_tile", "tile_grid", "iter_tiles"]


def tile_grid(width: int, height: int, tile_size: int) -> tuple[int, int]:
    """Number of tiles along x and y needed to cover a ``width`` x ``height`` frame."""
    if tile_size <= 0:
        raise ValueError(f"Invalid tile_size; expected >0 but got {tile_size}")
    if width < 0 or height < 0:
        raise ValueError(
            f"Invalid frame size; expected non-negative dimensions but got {width}x{height}"
        )
    return (
        (width + tile_size - 1) // tile_size,
        (height + tile_size - 1) // tile_size,
    )


def iter_tiles(tiles_x: int, tiles_y: int) -> Iterator[tuple[int, int]]:
    """Yield tile coordinates in row-major order (y outer, x inner)."""
    for y in range(tiles_y):
        for x in range(tiles_x):
            yield x, y
