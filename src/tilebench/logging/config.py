"""Log levels and logger settings for benchmark sessions."""

from enum import IntEnum

from msgspec import Struct


class LogLevel(IntEnum):
    """Severity of a log line; ``TRACE`` carries per-frame timings."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


class LoggerConfig(Struct, frozen=True):
    """Settings for the session logger.

    Log lines go to stderr because stdout carries ``print`` output and the
    ``--report`` table, so the two streams can be redirected separately.

    Args:
        base_level: Lowest level that is recorded. ``--log-level`` sets it.
        do_stderr: Mirror every flushed line to stderr. Tests turn this off.
        str_format: ``%``-style line format; fields are ``asctime``,
            ``levelname``, ``name`` and ``message`` (required).
        flush_interval_s: Longest time a line waits in the buffer before the
            next log call pushes it out. Per-frame ``TRACE`` lines are batched
            this way so logging stays out of the frame timings.
        buffer_size: Number of buffered lines that forces a flush.
    """

    base_level: LogLevel = LogLevel.INFO
    do_stderr: bool = True
    str_format: str = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    flush_interval_s: float = 1.0
    buffer_size: int = 10000

    def __post_init__(self):
        if self.flush_interval_s <= 0.0:
            raise ValueError(
                f"Invalid flush_interval_s; expected >0 but got {self.flush_interval_s}"
            )
        if "%(message)s" not in self.str_format:
            raise ValueError(
                f"Invalid str_format; expected a '%(message)s' placeholder but got {self.str_format!r}"
            )
        if self.buffer_size <= 0:
            raise ValueError(
                f"Invalid buffer_size; expected >0 but got {self.buffer_size}"
            )
