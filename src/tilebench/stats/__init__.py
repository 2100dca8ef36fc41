"""Run statistics: reducers, metric specifiers and the run store."""

from .aggregation import (
    Cumulation as Cumulation,
)
from .metric import (
    MetricResolver as MetricResolver,
)
from .metric import (
    MetricSpec as MetricSpec,
)
from .metric import (
    Variable as Variable,
)
from .metric import (
    parse_metric_spec as parse_metric_spec,
)
from .store import (
    RunRecord as RunRecord,
)
from .store import (
    StatisticsStore as StatisticsStore,
)
