from datetime import datetime, timezone
from time import (
    perf_counter_ns,
    time as time_sec,
)


def time_s() -> float:
    """
    Get the current time in seconds since the epoch.

    Returns
    -------
    float
        The current time in seconds.
    """
    return time_sec()


def time_ns() -> int:
    """
    Get a monotonic high resolution timestamp in nanoseconds.

    Only differences between two readings are meaningful.

    Returns
    -------
    int
        The current monotonic counter in nanoseconds.
    """
    return perf_counter_ns()


def elapsed_s(start_ns: int, end_ns: int | None = None) -> float:
    """
    Convert the span between two ``time_ns`` readings to seconds.

    Parameters
    ----------
    start_ns : int
        Earlier reading.
    end_ns : int, optional
        Later reading, defaults to now.

    Returns
    -------
    float
        The elapsed time in seconds.
    """
    if end_ns is None:
        end_ns = perf_counter_ns()
    return (end_ns - start_ns) * 1e-9


def time_iso8601() -> str:
    """
    Get the current UTC time as an ISO 8601 string with millisecond precision.

    Returns
    -------
    str
        e.g. "2023-04-04T00:28:50.516Z".
    """
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
