"""Benchmark script grammar.

One command per line; blank lines and ``#`` comments are skipped. Each line is
parsed into one member of the ``Command`` tagged union, so nothing downstream
compares command names as strings.
"""

import math
from collections.abc import Callable, Iterable
from enum import StrEnum

from msgspec import Struct

from tilebench.errors import (
    ArgumentCountMismatch,
    NonNumericArgument,
    ScriptError,
    TilebenchError,
    UnknownCommand,
)
from tilebench.session.template import Template, parse_template

COMMENT = "#"
TRUTHY = frozenset({"on", "true"})


class CommandKind(StrEnum):
    CLEAR = "clear"
    FRAMERATE = "framerate"
    RESOLUTION = "resolution"
    MULTITHREADING = "multithreading"
    RUN = "run"
    PRINT = "print"


class Command(Struct, frozen=True, tag_field="command"):
    """Base of all parsed script commands."""


class ClearCommand(Command, tag=CommandKind.CLEAR.value):
    pass


class FramerateCommand(Command, tag=CommandKind.FRAMERATE.value):
    fps: float


class ResolutionCommand(Command, tag=CommandKind.RESOLUTION.value):
    width: float
    height: float


class MultithreadingCommand(Command, tag=CommandKind.MULTITHREADING.value):
    enabled: bool


class RunCommand(Command, tag=CommandKind.RUN.value):
    path: str
    frames: int


class PrintCommand(Command, tag=CommandKind.PRINT.value):
    template: Template


class ScriptLine(Struct, frozen=True):
    """A parsed command and where it came from."""

    line_number: int
    text: str
    command: Command


def _expect_args(kind: CommandKind, args: list[str], count: int) -> None:
    if len(args) != count:
        raise ArgumentCountMismatch(kind.value, str(count), len(args))


def _parse_number(kind: CommandKind, token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise NonNumericArgument(kind.value, token) from None
    if not math.isfinite(value):
        raise NonNumericArgument(kind.value, token)
    return value


def _parse_frame_count(kind: CommandKind, token: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise NonNumericArgument(kind.value, token) from None
    if value < 0:
        raise NonNumericArgument(kind.value, token)
    return value


def _parse_clear(args: list[str], rest: str) -> Command:
    _expect_args(CommandKind.CLEAR, args, 0)
    return ClearCommand()


def _parse_framerate(args: list[str], rest: str) -> Command:
    _expect_args(CommandKind.FRAMERATE, args, 1)
    return FramerateCommand(fps=_parse_number(CommandKind.FRAMERATE, args[0]))


def _parse_resolution(args: list[str], rest: str) -> Command:
    _expect_args(CommandKind.RESOLUTION, args, 2)
    return ResolutionCommand(
        width=_parse_number(CommandKind.RESOLUTION, args[0]),
        height=_parse_number(CommandKind.RESOLUTION, args[1]),
    )


def _parse_multithreading(args: list[str], rest: str) -> Command:
    _expect_args(CommandKind.MULTITHREADING, args, 1)
    return MultithreadingCommand(enabled=args[0].lower() in TRUTHY)


def _parse_run(args: list[str], rest: str) -> Command:
    _expect_args(CommandKind.RUN, args, 2)
    return RunCommand(
        path=args[0], frames=_parse_frame_count(CommandKind.RUN, args[1])
    )


def _parse_print(args: list[str], rest: str) -> Command:
    return PrintCommand(template=parse_template(rest))


_PARSERS: dict[CommandKind, Callable[[list[str], str], Command]] = {
    CommandKind.CLEAR: _parse_clear,
    CommandKind.FRAMERATE: _parse_framerate,
    CommandKind.RESOLUTION: _parse_resolution,
    CommandKind.MULTITHREADING: _parse_multithreading,
    CommandKind.RUN: _parse_run,
    CommandKind.PRINT: _parse_print,
}


def parse_line(line: str) -> Command | None:
    """Parse one script line; returns None for blank and comment lines.

    Raises:
        UnknownCommand, ArgumentCountMismatch, NonNumericArgument: Malformed command.
        EmptySpec, UnknownVariable, UnknownCumulation, TooManyCumulationPrefixes:
            Malformed ``print`` placeholder.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT):
        return None

    name = stripped.split(maxsplit=1)[0]
    try:
        kind = CommandKind(name)
    except ValueError:
        raise UnknownCommand(name) from None

    rest = line.lstrip()[len(name) :].lstrip().rstrip("\r\n")
    return _PARSERS[kind](rest.split(), rest)


def parse_script(lines: Iterable[str]) -> list[ScriptLine]:
    """Parse every line up front so a malformed script never starts running.

    Raises:
        ScriptError: Wrapping the first error, with its 1-based line number.
    """
    parsed: list[ScriptLine] = []
    for line_number, line in enumerate(lines, start=1):
        try:
            command = parse_line(line)
        except TilebenchError as exc:
            raise ScriptError(line_number, line, exc) from exc
        if command is not None:
            parsed.append(
                ScriptLine(line_number=line_number, text=line.strip(), command=command)
            )
    return parsed
