"""``print`` text with ``${spec}`` metric placeholders."""

from msgspec import Struct

from tilebench.stats.metric import MetricResolver, MetricSpec, parse_metric_spec

OPEN = "${"
CLOSE = "}"


class Template(Struct, frozen=True):
    """Literal text interleaved with parsed metric specifiers.

    Args:
        segments: ``str`` pieces are emitted verbatim, ``MetricSpec`` pieces
            are replaced by their resolved value.
    """

    segments: tuple[str | MetricSpec, ...] = ()

    def render(self, resolver: MetricResolver) -> str:
        parts = []
        for segment in self.segments:
            if isinstance(segment, MetricSpec):
                parts.append(format_value(resolver.resolve(segment)))
            else:
                parts.append(segment)
        return "".join(parts)

    @property
    def specs(self) -> tuple[MetricSpec, ...]:
        return tuple(s for s in self.segments if isinstance(s, MetricSpec))


def format_value(value: float) -> str:
    """Fixed-point with six decimals, e.g. ``0.600000``."""
    return f"{value:f}"


def parse_template(text: str) -> Template:
    """Split ``text`` on ``${...}`` placeholders and parse each specifier.

    A ``${`` without a closing ``}`` takes the rest of the text as its
    specifier.

    Raises:
        EmptySpec, UnknownVariable, UnknownCumulation, TooManyCumulationPrefixes:
            A placeholder does not hold a valid specifier.
    """
    segments: list[str | MetricSpec] = []
    pos = 0
    while True:
        start = text.find(OPEN, pos)
        if start < 0:
            break
        if start > pos:
            segments.append(text[pos:start])
        spec_start = start + len(OPEN)
        end = text.find(CLOSE, spec_start)
        if end < 0:
            segments.append(parse_metric_spec(text[spec_start:]))
            pos = len(text)
            break
        segments.append(parse_metric_spec(text[spec_start:end]))
        pos = end + len(CLOSE)

    if pos < len(text):
        segments.append(text[pos:])
    return Template(segments=tuple(segments))
