"""Report formatting for completed benchmark runs."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from tilebench.stats.aggregation import (
    cumulate_max,
    cumulate_mean,
    cumulate_median,
    cumulate_min,
)

if TYPE_CHECKING:
    from tilebench.config import SessionConfig
    from tilebench.stats.store import StatisticsStore


class RunReporter:
    """Formats and prints a per-run summary table.

    Args:
        title: Report title (e.g., the script name).
        config_info: Settings to list above the table.
        stream: Destination, stdout by default.
    """

    def __init__(
        self,
        title: str,
        config_info: dict[str, str | int | float] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.title = title
        self.config_info = config_info if config_info is not None else {}
        self.stream = stream if stream is not None else sys.stdout

    @classmethod
    def for_session(cls, title: str, config: SessionConfig, **kwargs) -> RunReporter:
        return cls(
            title,
            {
                "Resolution": f"{config.resolution_w}x{config.resolution_h}",
                "Tile size": config.tile_size,
                "Multithreaded": "on" if config.multithreaded else "off",
                "Frame delta": (
                    "realtime"
                    if config.forced_frame_delta is None
                    else f"{config.forced_frame_delta:f}s"
                ),
            },
            **kwargs,
        )

    def _print(self, text: str = "") -> None:
        self.stream.write(text + "\n")

    def print_header(self, store: StatisticsStore) -> None:
        self._print("=" * 100)
        self._print(self.title)
        self._print("=" * 100)

        for key, value in self.config_info.items():
            self._print(f"{key}: {value}")

        self._print(f"Runs: {len(store)}")
        self._print()

    def print_run_table(self, store: StatisticsStore) -> None:
        """Print one row per run; times in milliseconds."""
        self._print("Run Performance")
        self._print("-" * 100)
        self._print(
            f"{'Run':>4} {'Frames':>8} {'Build ms':>10} {'Mean ms':>10} "
            f"{'Median ms':>10} {'Min ms':>10} {'Max ms':>10} {'fps':>10}"
        )

        for index, record in enumerate(store.all()):
            mean = cumulate_mean(record.frames)
            fps = 1.0 / mean if mean > 0 else 0.0
            self._print(
                f"{index:>4} {len(record.frames):>8} {record.build_time * 1e3:>10.3f} "
                f"{mean * 1e3:>10.3f} {cumulate_median(record.frames) * 1e3:>10.3f} "
                f"{cumulate_min(record.frames) * 1e3:>10.3f} "
                f"{cumulate_max(record.frames) * 1e3:>10.3f} {fps:>10.1f}"
            )

        self._print("=" * 100)

    def print_full_report(self, store: StatisticsStore) -> None:
        self.print_header(store)
        self.print_run_table(store)
        self.stream.flush()
