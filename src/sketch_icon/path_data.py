"""Path data lexing, rewriting and precision limiting.

Path data is lexed into a list of PathCommand values, every command is
rewritten under a TransformContext, and the result is rendered with a
limited number of fractional digits.

Only absolute move, line and arc commands carry coordinates that can be
rewritten. Close-path commands carry none and are passed through.
"""

import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

from .errors import PathDataError, UnsupportedPathCommandError
from .geometry import TransformContext

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 5

# Wide enough to quantize any finite float at any practical precision
QUANTIZE_CONTEXT = Context(prec=1000)

# Number of arguments taken by each supported command
COMMAND_ARITY = {
    "M": 2,
    "L": 2,
    "A": 7,
    "Z": 0,
    "z": 0,
}

NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
SEPARATOR = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class PathCommand:
    """A single path command with its numeric arguments."""

    letter: str
    args: tuple[float, ...] = ()


def _group_command(letter: str, args: list[float]) -> list[PathCommand]:
    """Split a command's argument run into one command per argument group."""
    arity = COMMAND_ARITY[letter]
    if arity == 0:
        if args:
            raise PathDataError(f'path command "{letter}" takes no arguments')
        return [PathCommand(letter)]

    if not args or len(args) % arity:
        raise PathDataError(
            f'path command "{letter}" expects {arity} arguments, got {len(args)}'
        )
    return [
        PathCommand(letter, tuple(args[i : i + arity]))
        for i in range(0, len(args), arity)
    ]


def tokenize_path(data: str) -> list[PathCommand]:
    """Lex path data into commands.

    Command letters may be glued to numbers (``M1 1L2 2``) and numbers may
    be separated by whitespace or commas. A command followed by several
    argument groups becomes several commands with the same letter.

    Args:
        data: Path ``d`` attribute.

    Returns:
        Commands in their original order.

    Raises:
        UnsupportedPathCommandError: If a command letter is not supported.
        PathDataError: If the data cannot be tokenized.
    """
    commands: list[PathCommand] = []
    letter: str | None = None
    args: list[float] = []
    pos = 0

    while pos < len(data):
        sep = SEPARATOR.match(data, pos)
        if sep:
            pos = sep.end()
            continue

        char = data[pos]
        if char.isalpha():
            if char not in COMMAND_ARITY:
                raise UnsupportedPathCommandError(char)
            if letter is not None:
                commands.extend(_group_command(letter, args))
            letter = char
            args = []
            pos += 1
            continue

        number = NUMBER.match(data, pos)
        if number is None:
            raise PathDataError(f"unexpected character {char!r} in path data")
        if letter is None:
            raise PathDataError(f"path data must start with a command: {data!r}")
        args.append(float(number.group()))
        pos = number.end()

    if letter is not None:
        commands.extend(_group_command(letter, args))

    return commands


def transform_command(
    command: PathCommand, context: TransformContext
) -> PathCommand:
    """Rewrite a command into viewport coordinates.

    Arcs under a mirroring scale get their rotation negated and their sweep
    flag flipped so they still bend the same way on screen.

    Raises:
        UnsupportedPathCommandError: If the command cannot be rewritten.
    """
    letter = command.letter
    if letter in ("M", "L"):
        return PathCommand(letter, context.apply(*command.args))

    if letter == "A":
        rx, ry, rotation, large_arc, sweep, x, y = command.args
        rx *= context.scale[0]
        ry *= context.scale[1]
        if context.is_reflecting:
            rotation = -rotation
            sweep = 0.0 if sweep == 1 else 1.0
        x, y = context.apply(x, y)
        return PathCommand(letter, (rx, ry, rotation, large_arc, sweep, x, y))

    if letter in ("Z", "z"):
        return command

    raise UnsupportedPathCommandError(letter)


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Render a number with at most ``precision`` fractional digits.

    Ties round away from zero. The result is the shortest decimal that
    reads back as the rounded value, with no exponent, no trailing zeros
    and no dangling point.

    Example:
        >>> format_number(1.23456789, 3)
        '1.235'
        >>> format_number(2.50000, 5)
        '2.5'
        >>> format_number(1.25, 1)
        '1.3'
    """
    if not math.isfinite(value):
        raise PathDataError(f"coordinate is not a finite number: {value}")
    step = Decimal(1).scaleb(-precision)
    rounded = float(
        Decimal(value).quantize(step, rounding=ROUND_HALF_UP, context=QUANTIZE_CONTEXT)
    )
    if rounded == 0:
        # Avoid "-0"
        return "0"
    return format(Decimal(repr(rounded)).normalize(), "f")


def format_command(command: PathCommand, precision: int = DEFAULT_PRECISION) -> str:
    """Render a command as its letter followed by space separated arguments."""
    parts = [command.letter]
    parts.extend(format_number(arg, precision) for arg in command.args)
    return " ".join(parts)


def normalize_path_data(
    data: str,
    context: TransformContext,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Rewrite path data into precision limited viewport coordinates.

    Args:
        data: Path ``d`` attribute.
        context: Transform context of the path element.
        precision: Maximum fractional digits.

    Returns:
        Normalized path data.

    Raises:
        UnsupportedPathCommandError: If a command is not supported.
        PathDataError: If the data cannot be tokenized.
    """
    commands = [transform_command(c, context) for c in tokenize_path(data)]
    logger.debug(
        "Normalized %d path commands (translate=%s, scale=%s)",
        len(commands),
        context.translate,
        context.scale,
    )
    return " ".join(format_command(c, precision) for c in commands)
