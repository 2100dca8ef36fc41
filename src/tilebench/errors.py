"""Fatal error taxonomy for benchmark sessions.

Every error raised by the harness derives from ``TilebenchError``. None of them
are recoverable: a session that hits one terminates with a non-zero status.
"""


class TilebenchError(Exception):
    """Base class for all fatal harness errors."""


class ArgumentCountMismatch(TilebenchError):
    """A command received the wrong number of arguments."""

    def __init__(self, command: str, expected: str, got: int) -> None:
        self.command = command
        self.expected = expected
        self.got = got
        super().__init__(
            f"Invalid argument count for '{command}'; expected {expected} but got {got}"
        )


class NonNumericArgument(TilebenchError):
    """A command argument that must be numeric could not be parsed."""

    def __init__(self, command: str, value: str) -> None:
        self.command = command
        self.value = value
        super().__init__(
            f"Invalid argument for '{command}'; expected a number but got '{value}'"
        )


class UnknownCommand(TilebenchError):
    """The first token of a script line is not a known command."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command '{name}'")


class EmptySpec(TilebenchError):
    """A metric specifier contained no tokens."""

    def __init__(self) -> None:
        super().__init__("Empty metric specifier")


class UnknownVariable(TilebenchError):
    """The last token of a metric specifier is not a known variable."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Unknown variable '{name}'; expected 'build-time' or 'frame-time'"
        )


class UnknownCumulation(TilebenchError):
    """A cumulation token does not name a reducer."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown cumulation '{name}'")


class TooManyCumulationPrefixes(TilebenchError):
    """A metric specifier stacks more cumulations than its variable allows."""

    def __init__(self, spec: str) -> None:
        self.spec = spec
        super().__init__(f"Too many cumulation prefixes in '{spec}'")


class KernelCompileFailure(TilebenchError):
    """The kernel provider rejected a kernel source."""

    def __init__(self, path: str, diagnostics: str) -> None:
        self.path = path
        self.diagnostics = diagnostics
        super().__init__(f"Failed to compile kernel '{path}':\n{diagnostics}")


class KernelRuntimeFailure(TilebenchError):
    """A compiled kernel raised while rendering a frame."""

    def __init__(self, path: str, frame: int, diagnostics: str) -> None:
        self.path = path
        self.frame = frame
        self.diagnostics = diagnostics
        super().__init__(f"Kernel '{path}' failed on frame {frame}:\n{diagnostics}")


class UserInterrupt(TilebenchError):
    """The session was aborted from outside (Ctrl-C)."""

    def __init__(self) -> None:
        super().__init__("Benchmark interrupted by user")


class ScriptError(TilebenchError):
    """Wraps an error raised while parsing one line of a benchmark script."""

    def __init__(self, line_number: int, line: str, cause: TilebenchError) -> None:
        self.line_number = line_number
        self.line = line
        self.cause = cause
        super().__init__(f"line {line_number}: {cause}\n    {line.strip()}")
