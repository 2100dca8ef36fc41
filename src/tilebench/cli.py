"""Command-line entry point: ``tilebench SCRIPT [options]``.

Exit status is 0 when the whole script ran, 1 on any fatal error and 130 when
interrupted.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tilebench.config import DEFAULT_TILE_SIZE, HarnessConfig, KernelDialect
from tilebench.errors import TilebenchError, UserInterrupt
from tilebench.logging import FileLogHandler, Logger, LoggerConfig, LogLevel
from tilebench.reporting import RunReporter
from tilebench.session import BenchmarkSession

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


class BenchmarkCLI:
    """Builder for the harness command-line interface.

    Args:
        description: Description shown by --help.
    """

    def __init__(self, description: str) -> None:
        self.parser = argparse.ArgumentParser(prog="tilebench", description=description)
        self._add_common_args()

    def _add_common_args(self) -> None:
        """Add the script argument and the session options."""
        self.parser.add_argument("script", help="Benchmark script to execute")
        self.parser.add_argument(
            "--tile-size",
            "-t",
            type=int,
            default=DEFAULT_TILE_SIZE,
            help=f"Dispatch tile edge in pixels (default: {DEFAULT_TILE_SIZE})",
        )
        self.parser.add_argument(
            "--workers",
            "-w",
            type=int,
            default=None,
            help="Tile worker threads (default: executor default)",
        )
        self.parser.add_argument(
            "--dialect",
            "-d",
            choices=[d.value for d in KernelDialect],
            default=KernelDialect.NUMBA.value,
            help="Kernel dialect (default: numba)",
        )

    def add_logging_args(self) -> BenchmarkCLI:
        """Add --log-level and --log-file.

        Returns:
            Self for method chaining.
        """
        self.parser.add_argument(
            "--log-level",
            choices=[level.name.lower() for level in LogLevel],
            default=LogLevel.INFO.name.lower(),
            help="Minimum level written to stderr (default: info)",
        )
        self.parser.add_argument(
            "--log-file",
            default=None,
            help="Also append log lines to this .txt file",
        )
        return self

    def add_output_args(self) -> BenchmarkCLI:
        """Add --json and --report.

        Returns:
            Self for method chaining.
        """
        self.parser.add_argument(
            "--json",
            default=None,
            help="Write the stored runs as JSON to this path when the script ends",
        )
        self.parser.add_argument(
            "--report",
            action="store_true",
            help="Print a per-run summary table when the script ends",
        )
        return self

    def parse(self, argv: list[str] | None = None) -> argparse.Namespace:
        """Parse command-line arguments.

        Returns:
            Parsed arguments namespace.
        """
        return self.parser.parse_args(argv)


def build_parser() -> BenchmarkCLI:
    return (
        BenchmarkCLI("Benchmark tiled CPU kernels from a command script")
        .add_logging_args()
        .add_output_args()
    )


def build_logger(args: argparse.Namespace) -> Logger:
    handlers = []
    if args.log_file:
        handlers.append(FileLogHandler(args.log_file, create=True))
    config = LoggerConfig(base_level=LogLevel[args.log_level.upper()])
    return Logger(name="tilebench", config=config, handlers=handlers)


def main(argv: list[str] | None = None) -> int:
    cli = build_parser()
    args = cli.parse(argv)

    try:
        harness = HarnessConfig(
            tile_size=args.tile_size,
            max_workers=args.workers,
            dialect=KernelDialect(args.dialect),
        )
        logger = build_logger(args)
    except ValueError as exc:
        cli.parser.error(str(exc))

    status = EXIT_OK
    try:
        with BenchmarkSession(harness, logger=logger) as session:
            session.run_file(args.script)
            if args.json:
                Path(args.json).write_bytes(session.store.to_json())
                logger.info(f"Wrote {len(session.store)} runs to {args.json}")
            if args.report:
                RunReporter.for_session(
                    Path(args.script).name, session.config
                ).print_full_report(session.store)
    except (UserInterrupt, KeyboardInterrupt) as exc:
        logger.error(str(exc) or str(UserInterrupt()))
        status = EXIT_INTERRUPTED
    except TilebenchError as exc:
        logger.error(str(exc))
        status = EXIT_FATAL
    except OSError as exc:
        logger.error(f"I/O error: {exc}")
        status = EXIT_FATAL
    finally:
        logger.shutdown()
    return status


if __name__ == "__main__":
    sys.exit(main())
