"""Benchmark script parsing and execution."""

from .commands import (
    Command as Command,
)
from .commands import (
    CommandKind as CommandKind,
)
from .commands import (
    ScriptLine as ScriptLine,
)
from .commands import (
    parse_line as parse_line,
)
from .commands import (
    parse_script as parse_script,
)
from .interpreter import (
    BenchmarkSession as BenchmarkSession,
)
from .template import (
    Template as Template,
)
from .template import (
    parse_template as parse_template,
)
