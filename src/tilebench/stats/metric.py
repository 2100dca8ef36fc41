"""Stacked metric specifiers such as ``"geomean sum frame-time"``.

A specifier is read right to left: the last token names the variable, the
token before it (``frame-time`` only) reduces each run's frames to one scalar,
and the first token reduces the per-run scalars across all runs. Missing
tokens fall back to ``Cumulation.LAST``.
"""

from enum import StrEnum

from msgspec import Struct

from tilebench.errors import (
    EmptySpec,
    TooManyCumulationPrefixes,
    UnknownCumulation,
    UnknownVariable,
)
from tilebench.stats.aggregation import Cumulation
from tilebench.stats.store import RunRecord, StatisticsStore


class Variable(StrEnum):
    BUILD_TIME = "build-time"
    FRAME_TIME = "frame-time"


class MetricSpec(Struct, frozen=True):
    """Parsed specifier.

    Args:
        variable: Which timing to read from each run.
        per_run: Reducer over one run's frames (always LAST for build-time).
        across_runs: Reducer over the per-run scalars.
        text: The specifier as written, for diagnostics.
    """

    variable: Variable
    per_run: Cumulation = Cumulation.LAST
    across_runs: Cumulation = Cumulation.LAST
    text: str = ""

    def per_run_value(self, record: RunRecord) -> float:
        if self.variable is Variable.BUILD_TIME:
            return record.build_time
        return self.per_run(record.frames)

    def evaluate(self, runs: tuple[RunRecord, ...] | list[RunRecord]) -> float:
        return self.across_runs([self.per_run_value(record) for record in runs])


def _cumulation(token: str) -> Cumulation:
    cumulation = Cumulation.from_token(token)
    if cumulation is None:
        raise UnknownCumulation(token)
    return cumulation


def parse_metric_spec(text: str) -> MetricSpec:
    """Parse a whitespace separated specifier.

    Raises:
        EmptySpec: No tokens.
        UnknownVariable: Last token is neither build-time nor frame-time.
        TooManyCumulationPrefixes: More cumulations than the variable allows.
        UnknownCumulation: A prefix token names no reducer.
    """
    tokens = text.split()
    if not tokens:
        raise EmptySpec()

    name = tokens.pop()
    try:
        variable = Variable(name)
    except ValueError:
        raise UnknownVariable(name) from None

    per_run = Cumulation.LAST
    if variable is Variable.FRAME_TIME and tokens:
        per_run_token = tokens.pop()
        if len(tokens) > 1:
            raise TooManyCumulationPrefixes(text)
        per_run = _cumulation(per_run_token)

    if len(tokens) > 1:
        raise TooManyCumulationPrefixes(text)
    across_runs = _cumulation(tokens[0]) if tokens else Cumulation.LAST

    return MetricSpec(
        variable=variable,
        per_run=per_run,
        across_runs=across_runs,
        text=text.strip(),
    )


class MetricResolver:
    """Evaluates metric specifiers against a StatisticsStore."""

    def __init__(self, store: StatisticsStore) -> None:
        self._store = store

    def resolve(self, spec: MetricSpec | str) -> float:
        if isinstance(spec, str):
            spec = parse_metric_spec(spec)
        return spec.evaluate(self._store.all())
