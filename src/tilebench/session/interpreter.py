"""Executes parsed benchmark scripts.

A session owns the statistics store, the output surface and the tile
dispatcher. Render settings live in an immutable ``SessionConfig`` that each
command receives and returns, so two sessions never share state.
"""

import sys
import traceback
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from tilebench.config import HarnessConfig, SessionConfig
from tilebench.dispatch import TileDispatcher
from tilebench.errors import KernelRuntimeFailure, TilebenchError, UserInterrupt
from tilebench.kernel import GlobalParams, KernelCompiler, KernelHandle, read_kernel_source
from tilebench.logging import Logger, LoggerConfig, LogLevel
from tilebench.session.commands import (
    ClearCommand,
    Command,
    FramerateCommand,
    MultithreadingCommand,
    PrintCommand,
    ResolutionCommand,
    RunCommand,
    ScriptLine,
    parse_script,
)
from tilebench.stats import MetricResolver, RunRecord, StatisticsStore
from tilebench.time import elapsed_s, time_ns


class BenchmarkSession:
    """Runs benchmark commands against one store and one output surface.

    Args:
        harness: Tile size, worker count and kernel dialect.
        config: Initial render settings; defaults to ``SessionConfig.default``.
        output: Stream receiving ``print`` lines.
        logger: Session logger; a quiet default is created when omitted.
        base_dir: Directory relative ``run`` paths are resolved against.
    """

    def __init__(
        self,
        harness: HarnessConfig | None = None,
        config: SessionConfig | None = None,
        output: TextIO | None = None,
        logger: Logger | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self.harness = harness if harness is not None else HarnessConfig()
        self.config = (
            config
            if config is not None
            else SessionConfig.default(self.harness.tile_size)
        )
        if self.config.tile_size != self.harness.tile_size:
            raise ValueError(
                f"Invalid config tile_size; expected {self.harness.tile_size} but got {self.config.tile_size}"
            )

        self.store = StatisticsStore()
        self.resolver = MetricResolver(self.store)
        self.compiler = KernelCompiler(self.harness.tile_size)
        self.dispatcher = TileDispatcher(
            self.harness.tile_size, self.harness.max_workers
        )
        self.params = GlobalParams.for_surface(
            self.config.resolution_w, self.config.resolution_h
        )
        self.params.set_mouse(0.0, 0.0, 0.0, 0.0)

        self._output = output if output is not None else sys.stdout
        if logger is None:
            logger = Logger(
                name="tilebench.session",
                config=LoggerConfig(base_level=LogLevel.WARNING),
            )
        self._logger = logger
        self._base_dir = Path(base_dir) if base_dir is not None else None

    def resolve_path(self, path: str) -> Path:
        resolved = Path(path)
        if not resolved.is_absolute() and self._base_dir is not None:
            resolved = self._base_dir / resolved
        return resolved

    def compile_kernel(self, path: str) -> tuple[KernelHandle, float]:
        """Compile the kernel at ``path``; returns the handle and build time in seconds."""
        kernel_path = self.resolve_path(path)
        source = read_kernel_source(kernel_path)
        start_ns = time_ns()
        kernel = self.compiler.compile(source, self.harness.dialect, name=str(kernel_path))
        build_time = elapsed_s(start_ns)
        self._logger.info(f"Built {kernel_path} ({self.harness.dialect.value}) in {build_time:f}s")
        return kernel, build_time

    def render_frames(
        self, kernel: KernelHandle, frames: int, config: SessionConfig
    ) -> list[float]:
        """Render ``frames`` frames and return each frame's dispatch time.

        Frame 0 sees elapsed time 0. Every later frame advances the clock by
        the forced delta, or by the real time since the previous frame.
        """
        width, height = config.resolution_w, config.resolution_h
        self.params.resize(width, height)

        timings: list[float] = []
        elapsed = 0.0
        prev_ns = time_ns()
        for frame in range(frames):
            now_ns = time_ns()
            if frame > 0:
                if config.forced_frame_delta is not None:
                    elapsed += config.forced_frame_delta
                else:
                    elapsed += elapsed_s(prev_ns, now_ns)
            prev_ns = now_ns

            self.params.set_frame(frame, elapsed)
            try:
                frame_time = self.dispatcher.dispatch(
                    kernel, self.params, width, height, config.multithreaded
                )
            except TilebenchError:
                raise
            except Exception as exc:
                raise KernelRuntimeFailure(
                    kernel.name,
                    frame,
                    "".join(traceback.format_exception_only(exc)).rstrip(),
                ) from exc
            timings.append(frame_time)
            self._logger.trace(f"frame {frame}: {frame_time:f}s (t={elapsed:f})")
        return timings

    def run_kernel(self, command: RunCommand, config: SessionConfig) -> RunRecord:
        kernel, build_time = self.compile_kernel(command.path)
        self._logger.info(
            f"Rendering {command.frames} frames at {config.resolution_w}x{config.resolution_h} "
            f"({'multithreaded' if config.multithreaded else 'sequential'})"
        )
        timings = self.render_frames(kernel, command.frames, config)
        return RunRecord(build_time=build_time, frames=tuple(timings))

    def emit(self, text: str) -> None:
        self._output.write(text + "\n")
        self._output.flush()

    def execute(self, command: Command, config: SessionConfig) -> SessionConfig:
        """Apply one command and return the settings for the next one."""
        match command:
            case ClearCommand():
                self.store.clear()
                self._logger.debug("Cleared statistics")
                return config
            case FramerateCommand(fps=fps):
                config = config.with_framerate(fps)
                self._logger.debug(f"Forced frame delta: {config.forced_frame_delta}")
                return config
            case ResolutionCommand(width=width, height=height):
                config = config.with_resolution(width, height)
                self.params.resize(config.resolution_w, config.resolution_h)
                self._logger.debug(
                    f"Resolution: {config.resolution_w}x{config.resolution_h}"
                )
                return config
            case MultithreadingCommand(enabled=enabled):
                return config.with_multithreading(enabled)
            case RunCommand():
                self.store.append(self.run_kernel(command, config))
                return config
            case PrintCommand(template=template):
                self.emit(template.render(self.resolver))
                return config
            case _:
                raise TypeError(f"Unhandled command type {type(command).__name__}")

    def run(self, script: Iterable[ScriptLine]) -> SessionConfig:
        """Execute parsed lines in order; any error ends the session.

        Raises:
            UserInterrupt: Ctrl-C arrived mid-session. The interrupted run is discarded.
        """
        config = self.config
        try:
            for line in script:
                self._logger.debug(f"line {line.line_number}: {line.text}")
                config = self.execute(line.command, config)
                self.config = config
        except KeyboardInterrupt:
            raise UserInterrupt() from None
        return config

    def run_text(self, text: str) -> SessionConfig:
        return self.run(parse_script(text.splitlines()))

    def run_file(self, path: str | Path) -> SessionConfig:
        """Parse and execute a script file; relative kernel paths follow the script."""
        path = Path(path)
        if self._base_dir is None:
            self._base_dir = path.resolve().parent
        script = parse_script(path.read_text(encoding="utf-8").splitlines())
        return self.run(script)

    def close(self) -> None:
        self.dispatcher.close()
        self._logger.flush()

    def __enter__(self) -> "BenchmarkSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
