"""Fork-join driver invoking a kernel once per tile of a frame."""

from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any

from tilebench.config import DEFAULT_TILE_SIZE
from tilebench.dispatch.tiles import iter_tiles, tile_grid
from tilebench.time import elapsed_s, time_ns

Kernel = Callable[[tuple[int, int, int], Any, Any], None]


class TileDispatcher:
    """Partitions frames into tiles and invokes a kernel per tile.

    The dispatcher does no pixel work itself. Each kernel call writes its own
    disjoint block of the shared buffer, so tiles need no locking and may
    finish in any order.

    Args:
        tile_size: Edge length of a tile in pixels.
        max_workers: Size of the worker pool used for parallel dispatch.
    """

    def __init__(
        self, tile_size: int = DEFAULT_TILE_SIZE, max_workers: int | None = None
    ) -> None:
        if tile_size <= 0:
            raise ValueError(f"Invalid tile_size; expected >0 but got {tile_size}")
        self.tile_size = tile_size
        self.max_workers = max_workers
        self._pool: ThreadPoolExecutor | None = None

    @property
    def pool(self) -> ThreadPoolExecutor:
        """Lazily start the worker pool; it is reused for every frame."""
        if self._pool is None:
            self._pool = ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="tilebench-tile"
            )
        return self._pool

    def dispatch_sequential(
        self, kernel: Kernel, params: Any, width: int, height: int
    ) -> None:
        tiles_x, tiles_y = tile_grid(width, height, self.tile_size)
        for x, y in iter_tiles(tiles_x, tiles_y):
            kernel((x, y, 0), None, params)

    def dispatch_parallel(
        self, kernel: Kernel, params: Any, width: int, height: int
    ) -> None:
        """Submit one task per tile and block until all of them finish.

        The first kernel exception is re-raised once the pool has drained or
        the remaining tiles were cancelled.
        """
        tiles_x, tiles_y = tile_grid(width, height, self.tile_size)
        pool = self.pool
        futures: list[Future] = [
            pool.submit(kernel, (x, y, 0), None, params)
            for x, y in iter_tiles(tiles_x, tiles_y)
        ]
        _, pending = wait(futures, return_when=FIRST_EXCEPTION)
        if pending:
            for future in pending:
                future.cancel()
            wait(pending)
        for future in futures:
            if future.done() and not future.cancelled():
                future.result()

    def dispatch(
        self,
        kernel: Kernel,
        params: Any,
        width: int,
        height: int,
        multithreaded: bool = True,
    ) -> float:
        """Render one frame and return its wall-clock dispatch time in seconds."""
        start_ns = time_ns()
        if multithreaded:
            self.dispatch_parallel(kernel, params, width, height)
        else:
            self.dispatch_sequential(kernel, params, width, height)
        return elapsed_s(start_ns)

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> "TileDispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
