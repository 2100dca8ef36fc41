"""Cumulation functions reducing a sequence of timings to one scalar.

Every reducer returns 0.0 for an empty sequence instead of signalling missing
data. Scripts rely on this (e.g. ``print`` right after ``clear``).
"""

import math
from collections.abc import Callable, Sequence
from enum import StrEnum


def _ieee_divide(numerator: float, denominator: float) -> float:
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def cumulate_sum(values: Sequence[float]) -> float:
    total = 0.0
    for value in values:
        total += float(value)
    return total


def cumulate_mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return cumulate_sum(values) / len(values)


def cumulate_min(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    lowest = float(values[0])
    for value in values:
        if value < lowest:
            lowest = float(value)
    return lowest


def cumulate_max(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    highest = float(values[0])
    for value in values:
        if value > highest:
            highest = float(value)
    return highest


def cumulate_median(values: Sequence[float]) -> float:
    """Upper-middle element of the sorted sequence; never interpolated."""
    if len(values) == 0:
        return 0.0
    ordered = sorted(float(v) for v in values)
    return ordered[len(ordered) // 2]


def cumulate_geomean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    product = 1.0
    for value in values:
        product *= float(value)
    exponent = 1.0 / len(values)
    # Real-valued pow: a negative base with a fractional exponent has no real root.
    if product < 0.0 and not exponent.is_integer():
        return math.nan
    return product**exponent


def cumulate_harmonic_mean(values: Sequence[float]) -> float:
    """``n / sum(1/v)`` with IEEE division: zero elements yield inf/nan, never raise."""
    if len(values) == 0:
        return 0.0
    inverse_sum = 0.0
    for value in values:
        inverse_sum += _ieee_divide(1.0, float(value))
    return _ieee_divide(float(len(values)), inverse_sum)


def cumulate_variance(values: Sequence[float]) -> float:
    """Population variance, ``sum((mean - v)^2) / n``."""
    if len(values) == 0:
        return 0.0
    mean = cumulate_mean(values)
    total = 0.0
    for value in values:
        diff = mean - float(value)
        total += diff * diff
    return total / len(values)


def cumulate_stddev(values: Sequence[float]) -> float:
    return math.sqrt(cumulate_variance(values))


def cumulate_last(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(values[-1])


class Cumulation(StrEnum):
    """Reducer names accepted in metric specifiers.

    ``LAST`` is the implicit reducer used when no token is given; it cannot be
    spelled in a specifier.
    """

    SUM = "sum"
    MEAN = "mean"
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"
    GEOMEAN = "geomean"
    HARMONIC_MEAN = "harmonic-mean"
    VARIANCE = "variance"
    STDDEV = "stddev"
    LAST = "<last>"

    @classmethod
    def from_token(cls, token: str) -> "Cumulation | None":
        """Look up a specifier token, returning None if it names no reducer."""
        if token == cls.LAST.value:
            return None
        try:
            return cls(token)
        except ValueError:
            return None

    def __call__(self, values: Sequence[float]) -> float:
        return _REDUCERS[self](values)


_REDUCERS: dict[Cumulation, Callable[[Sequence[float]], float]] = {
    Cumulation.SUM: cumulate_sum,
    Cumulation.MEAN: cumulate_mean,
    Cumulation.MIN: cumulate_min,
    Cumulation.MAX: cumulate_max,
    Cumulation.MEDIAN: cumulate_median,
    Cumulation.GEOMEAN: cumulate_geomean,
    Cumulation.HARMONIC_MEAN: cumulate_harmonic_mean,
    Cumulation.VARIANCE: cumulate_variance,
    Cumulation.STDDEV: cumulate_stddev,
    Cumulation.LAST: cumulate_last,
}
