"""Turns kernel source into a callable that renders one tile.

Kernel source is Python defining::

    def main_image(frag_x, frag_y, constants):
        return r, g, b, a

``frag_x``/``frag_y`` are pixel centres with y pointing up, ``constants`` is the
float64 vector described in ``tilebench.kernel.params`` and the returned
channels are saturated to [0, 1] before being stored as RGBA8. The source is
executed with ``math``, ``np`` and the constant slot names (``TIME``,
``RES_X``, ...) already in scope.
"""

import math
import traceback
from collections.abc import Callable
from pathlib import Path

import numba
import numpy as np
from numba.core.errors import NumbaError

from tilebench.config import DEFAULT_TILE_SIZE, KernelDialect
from tilebench.errors import KernelCompileFailure
from tilebench.kernel.params import CONSTANT_NAMES, RES_Y, GlobalParams

ENTRY_POINT = "main_image"
TILE_SIGNATURE = "void(int64, int64, float64[::1], uint8[:, :, ::1])"


def read_kernel_source(path: str | Path) -> str:
    """Read a kernel file; unreadable files count as compile failures."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise KernelCompileFailure(str(path), f"unable to read kernel: {exc}") from exc


def channel_to_byte(value: float) -> int:
    """Saturate a [0, 1] channel to 0..255; NaN maps to 0."""
    if not value > 0.0:
        return 0
    if value >= 1.0:
        return 255
    return int(value * 255.0)


def make_tile_runner(
    main_image: Callable, to_byte: Callable, tile_size: int
) -> Callable[[int, int, np.ndarray, np.ndarray], None]:
    """Build the per-tile entry point around a kernel's ``main_image``.

    The returned function shades the ``tile_size`` x ``tile_size`` block at
    group ``(group_x, group_y)``. Pixels outside the buffer are skipped, so a
    tile never writes outside its own block.
    """

    def render_tile(group_x, group_y, constants, pixels):
        height = pixels.shape[0]
        width = pixels.shape[1]
        res_y = constants[RES_Y]
        x0 = group_x * tile_size
        y0 = group_y * tile_size
        for ty in range(tile_size):
            y = y0 + ty
            if y >= height:
                break
            frag_y = res_y - (y + 0.5)
            for tx in range(tile_size):
                x = x0 + tx
                if x >= width:
                    break
                r, g, b, a = main_image(x + 0.5, frag_y, constants)
                pixels[y, x, 0] = to_byte(r)
                pixels[y, x, 1] = to_byte(g)
                pixels[y, x, 2] = to_byte(b)
                pixels[y, x, 3] = to_byte(a)

    return render_tile


class KernelHandle:
    """Compiled kernel, invoked once per tile.

    Args:
        tile_fn: ``(group_x, group_y, constants, pixels) -> None``.
        dialect: Dialect the kernel was compiled with.
        tile_size: Tile edge the entry point was generated for.
        name: Source path or label, for diagnostics.
    """

    def __init__(
        self,
        tile_fn: Callable[[int, int, np.ndarray, np.ndarray], None],
        dialect: KernelDialect,
        tile_size: int,
        name: str = "<kernel>",
    ) -> None:
        self._tile_fn = tile_fn
        self.dialect = dialect
        self.tile_size = tile_size
        self.name = name

    def __call__(
        self,
        group_id: tuple[int, int, int],
        entry_point_params: object,
        global_params: GlobalParams,
    ) -> None:
        self._tile_fn(
            group_id[0], group_id[1], global_params.constants, global_params.pixels
        )

    def __repr__(self) -> str:
        return f"KernelHandle(name={self.name!r}, dialect={self.dialect.value}, tile_size={self.tile_size})"


class KernelCompiler:
    """Compiles kernel source for a fixed tile size.

    Args:
        tile_size: Edge length of the tiles the generated entry point shades.
    """

    def __init__(self, tile_size: int = DEFAULT_TILE_SIZE) -> None:
        if tile_size <= 0:
            raise ValueError(f"Invalid tile_size; expected >0 but got {tile_size}")
        self.tile_size = tile_size

    def _load_entry_point(self, source: str, name: str) -> Callable:
        namespace = {"__name__": "tilebench_kernel", "math": math, "np": np}
        namespace.update(CONSTANT_NAMES)
        try:
            code = compile(source, name, "exec")
            exec(code, namespace)
        except Exception as exc:
            raise KernelCompileFailure(
                name, "".join(traceback.format_exception_only(exc)).rstrip()
            ) from exc

        main_image = namespace.get(ENTRY_POINT)
        if not callable(main_image):
            raise KernelCompileFailure(
                name, f"kernel does not define a '{ENTRY_POINT}' function"
            )
        return main_image

    def compile(
        self,
        source: str,
        dialect: KernelDialect = KernelDialect.NUMBA,
        name: str = "<kernel>",
    ) -> KernelHandle:
        """Compile ``source`` into a KernelHandle.

        Numba kernels are compiled eagerly (``nogil`` so tiles can run in
        parallel threads), so the time spent here is the full build time.

        Raises:
            KernelCompileFailure: The source does not execute, lacks
                ``main_image``, or fails numba typing/lowering.
        """
        main_image = self._load_entry_point(source, name)

        if dialect is KernelDialect.PYTHON:
            tile_fn = make_tile_runner(main_image, channel_to_byte, self.tile_size)
            return KernelHandle(tile_fn, dialect, self.tile_size, name)

        try:
            runner = make_tile_runner(
                numba.njit(main_image),
                numba.njit(channel_to_byte),
                self.tile_size,
            )
            tile_fn = numba.njit(TILE_SIGNATURE, nogil=True)(runner)
        except NumbaError as exc:
            raise KernelCompileFailure(name, str(exc)) from exc
        return KernelHandle(tile_fn, dialect, self.tile_size, name)

    def compile_file(
        self, path: str | Path, dialect: KernelDialect = KernelDialect.NUMBA
    ) -> KernelHandle:
        return self.compile(read_kernel_source(path), dialect, name=str(path))
