"""Clock helpers for timestamps and elapsed-time measurement."""

from .time import (
    elapsed_s as elapsed_s,
)
from .time import (
    time_iso8601 as time_iso8601,
)
from .time import (
    time_ns as time_ns,
)
from .time import (
    time_s as time_s,
)
