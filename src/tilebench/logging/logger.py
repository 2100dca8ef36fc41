"""Buffered single-process logger implementation."""

import sys
import traceback

from tilebench.logging.config import LoggerConfig, LogLevel
from tilebench.logging.handlers import BaseLogHandler
from tilebench.time.time import time_iso8601, time_s


class Logger:
    """A synchronous logger that buffers messages for its handlers.

    The buffer is pushed once it fills, when the flush interval has elapsed,
    or when an error is logged. Benchmark runs are timed on the calling
    thread, so nothing here spawns a background task.
    """

    def __init__(
        self,
        name: str = "",
        config: LoggerConfig | None = None,
        handlers: list[BaseLogHandler] | None = None,
    ):
        """Initializes a Logger with specified configuration and handlers.

        Args:
            name (str): Name of the logger. Defaults to an empty string.
            config (LoggerConfig, optional): Level, stderr mirroring and flush policy. Defaults to LoggerConfig().
            handlers (list[BaseLogHandler], optional): A list of handler objects that inherit from BaseLogHandler.
                Defaults to an empty list if not provided.

        Raises:
            TypeError: If one of the provided handlers does not inherit from BaseLogHandler.

        """
        self._name = name

        self._config = config
        if self._config is None:
            self._config = LoggerConfig()

        self._handlers = handlers
        if self._handlers is None:
            self._handlers = []

        for handler in self._handlers:
            if not isinstance(handler, BaseLogHandler):
                raise TypeError(
                    f"Invalid handler base class; expected BaseLogHandler but got {type(handler).__name__}"
                )

        self._buffer: list[str] = []
        self._buffer_start_time_s = time_s()
        self._is_running = True

    def _flush_buffer(self) -> None:
        """Flushes the log message buffer to all handlers."""
        if not self._buffer:
            return

        pending = self._buffer
        self._buffer = []
        self._buffer_start_time_s = time_s()

        if self._config.do_stderr:
            sys.stderr.write("\n".join(pending) + "\n")
            sys.stderr.flush()

        for handler in self._handlers:
            handler.push(pending)

    def _process_log(self, level: LogLevel, msg: str) -> None:
        """Formats a message into the buffer and flushes when due.

        Args:
            level (LogLevel): The severity level of the message.
            msg (str): The actual log message.

        """
        try:
            log_msg = self._config.str_format % {
                "asctime": time_iso8601(),
                "name": self._name,
                "levelname": level.name,
                "message": msg,
            }
        except (KeyError, TypeError, ValueError):
            traceback.print_exc(file=sys.stderr)
            return

        self._buffer.append(log_msg)

        if (
            level >= LogLevel.ERROR
            or len(self._buffer) >= self._config.buffer_size
            or (time_s() - self._buffer_start_time_s) >= self._config.flush_interval_s
        ):
            self._flush_buffer()

    def _should_log(self, level: LogLevel) -> bool:
        return self._is_running and self._config.base_level <= level

    def trace(self, msg: str) -> None:
        """Send a trace-level log message."""
        if self._should_log(LogLevel.TRACE):
            self._process_log(LogLevel.TRACE, msg)

    def debug(self, msg: str) -> None:
        """Send a debug-level log message."""
        if self._should_log(LogLevel.DEBUG):
            self._process_log(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        """Send an info-level log message."""
        if self._should_log(LogLevel.INFO):
            self._process_log(LogLevel.INFO, msg)

    def warning(self, msg: str) -> None:
        """Send a warning-level log message."""
        if self._should_log(LogLevel.WARNING):
            self._process_log(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        """Send an error-level log message. Always flushes immediately."""
        if self._should_log(LogLevel.ERROR):
            self._process_log(LogLevel.ERROR, msg)

    def flush(self) -> None:
        self._flush_buffer()

    def shutdown(self) -> None:
        """Flushes anything still buffered and closes all handlers."""
        if not self._is_running:
            return
        self._flush_buffer()
        self._is_running = False
        for handler in self._handlers:
            handler.close()
