"""Benchmark harness for tiled CPU image kernels."""

from .config import (
    HarnessConfig as HarnessConfig,
)
from .config import (
    KernelDialect as KernelDialect,
)
from .config import (
    SessionConfig as SessionConfig,
)
from .dispatch import (
    TileDispatcher as TileDispatcher,
)
from .dispatch import (
    tile_grid as tile_grid,
)
from .kernel import (
    GlobalParams as GlobalParams,
)
from .kernel import (
    KernelCompiler as KernelCompiler,
)
from .kernel import (
    KernelHandle as KernelHandle,
)
from .logging import (
    Logger as Logger,
)
from .logging import (
    LoggerConfig as LoggerConfig,
)
from .logging import (
    LogLevel as LogLevel,
)
from .session import (
    BenchmarkSession as BenchmarkSession,
)
from .session import (
    parse_script as parse_script,
)
from .stats import (
    Cumulation as Cumulation,
)
from .stats import (
    MetricResolver as MetricResolver,
)
from .stats import (
    RunRecord as RunRecord,
)
from .stats import (
    StatisticsStore as StatisticsStore,
)
from .stats import (
    parse_metric_spec as parse_metric_spec,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "HarnessConfig",
    "KernelDialect",
    "SessionConfig",
    # Dispatch
    "TileDispatcher",
    "tile_grid",
    # Kernels
    "GlobalParams",
    "KernelCompiler",
    "KernelHandle",
    # Logging
    "Logger",
    "LoggerConfig",
    "LogLevel",
    # Session
    "BenchmarkSession",
    "parse_script",
    # Statistics
    "Cumulation",
    "MetricResolver",
    "RunRecord",
    "StatisticsStore",
    "parse_metric_spec",
]
