"""Run records and the ordered store they are collected in."""

import msgspec
from msgspec import Struct


class RunRecord(Struct, frozen=True):
    """Timings of one completed ``run``.

    Args:
        build_time: Kernel compile time in seconds.
        frames: Dispatch time of each frame in seconds, in render order.
    """

    build_time: float
    frames: tuple[float, ...] = ()


class StatisticsStore:
    """Append-only collection of RunRecords in chronological order.

    Written only by the interpreter thread; ``clear`` is the only way records
    leave the store.
    """

    def __init__(self) -> None:
        self._runs: list[RunRecord] = []
        self._json_encode = msgspec.json.Encoder().encode

    def append(self, record: RunRecord) -> None:
        if not isinstance(record, RunRecord):
            raise TypeError(
                f"Invalid record type; expected RunRecord but got {type(record).__name__}"
            )
        self._runs.append(record)

    def clear(self) -> None:
        self._runs.clear()

    def all(self) -> tuple[RunRecord, ...]:
        """Read view of every stored run, oldest first."""
        return tuple(self._runs)

    def to_json(self) -> bytes:
        """Serialize the stored runs as a JSON array of records."""
        return self._json_encode(self._runs)

    @staticmethod
    def records_from_json(data: bytes | str) -> list[RunRecord]:
        return msgspec.json.decode(data, type=list[RunRecord])

    def __len__(self) -> int:
        return len(self._runs)

