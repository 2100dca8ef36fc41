import io
from collections.abc import Callable
from pathlib import Path

import pytest

from tilebench.config import HarnessConfig, KernelDialect
from tilebench.logging import Logger, LoggerConfig, LogLevel
from tilebench.session import BenchmarkSession
from tilebench.stats import RunRecord, StatisticsStore

GRADIENT_KERNEL = """
def main_image(frag_x, frag_y, constants):
    return frag_x / constants[RES_X], frag_y / constants[RES_Y], 0.25, 1.0
"""

CHECKER_KERNEL = """
def main_image(frag_x, frag_y, constants):
    cell = (int(frag_x) // 4 + int(frag_y) // 4 + int(constants[FRAME])) % 2
    shade = 0.2 + 0.6 * cell
    return shade, 1.0 - shade, 0.5 + 0.5 * math.sin(constants[TIME]), 1.0
"""


def pytest_configure(config: pytest.Config) -> None:
    """Register shared markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (numba compilation)"
    )


@pytest.fixture
def make_store() -> Callable[..., StatisticsStore]:
    """Return a helper building a store from ``(build_time, frames)`` pairs."""

    def _make_store(*runs: tuple[float, list[float]]) -> StatisticsStore:
        store = StatisticsStore()
        for build_time, frames in runs:
            store.append(RunRecord(build_time=build_time, frames=tuple(frames)))
        return store

    return _make_store


@pytest.fixture
def quiet_logger() -> Logger:
    logger = Logger(
        name="test",
        config=LoggerConfig(base_level=LogLevel.ERROR, do_stderr=False),
    )
    yield logger
    logger.shutdown()


@pytest.fixture
def kernel_dir(tmp_path: Path) -> Path:
    """Directory holding gradient.py and checker.py kernels."""
    (tmp_path / "gradient.py").write_text(GRADIENT_KERNEL)
    (tmp_path / "checker.py").write_text(CHECKER_KERNEL)
    return tmp_path


@pytest.fixture
def write_script(kernel_dir: Path) -> Callable[[str], Path]:
    """Return a helper that writes a script next to the test kernels."""

    def _write_script(text: str, name: str = "bench.txt") -> Path:
        path = kernel_dir / name
        path.write_text(text)
        return path

    return _write_script


@pytest.fixture
def python_session(kernel_dir: Path, quiet_logger: Logger):
    """Session using the interpreted dialect, printing into a StringIO."""
    output = io.StringIO()
    session = BenchmarkSession(
        HarnessConfig(dialect=KernelDialect.PYTHON, max_workers=4),
        output=output,
        logger=quiet_logger,
        base_dir=kernel_dir,
    )
    session.output_buffer = output
    yield session
    session.close()
