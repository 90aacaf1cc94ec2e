"""Linearization of normalized path commands.

Straight commands are passed through as segments, curve commands are handed
to ``AvCurveLinearizer``. The command stream is expected to be normalized:
absolute coordinates, only the commands M, L, H, V, Z, Q and C.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Tuple, cast

from avlin.common import COMMAND_BATCH_SIZES, SUPPORTED_COMMANDS, AvPathCmds, Point
from avlin.config import DEFAULT_OPTIONS, LinearizationOptions
from avlin.linearizer import AvCurveLinearizer
from avlin.segment import AvSegment, SegmentCollector, SegmentConsumer

logger = logging.getLogger(__name__)

# A path command: command letter followed by its numeric arguments, e.g. ["C", 0, 100, 100, 100, 100, 0]
PathSegment = Sequence[Any]


###############################################################################
# Errors
###############################################################################


class UnsupportedCommandError(ValueError):
    """Raised for a path command letter that cannot be linearized."""

    def __init__(self, command: Any):
        super().__init__(f"path command '{command}' not supported")
        self.command = command


class MalformedCommandError(ValueError):
    """Raised if the number of arguments does not fit the command."""

    def __init__(self, command: AvPathCmds, num_args: int):
        batch_size = COMMAND_BATCH_SIZES[command]
        if batch_size:
            expected = f"a positive multiple of {batch_size}"
        else:
            expected = "no"
        super().__init__(f"path command '{command}' expects {expected} arguments, got {num_args}")
        self.command = command
        self.num_args = num_args


def _check_segment(segment: PathSegment) -> AvPathCmds:
    """Validate command letter and argument count, return the command letter."""
    if not segment:
        raise UnsupportedCommandError(None)
    command = segment[0]
    if not isinstance(command, str) or len(command) != 1 or command not in SUPPORTED_COMMANDS:
        raise UnsupportedCommandError(command)
    command = cast(AvPathCmds, command)
    num_args = len(segment) - 1
    batch_size = COMMAND_BATCH_SIZES[command]
    if batch_size == 0:
        if num_args != 0:
            raise MalformedCommandError(command, num_args)
    elif num_args == 0 or num_args % batch_size:
        raise MalformedCommandError(command, num_args)
    return command


def command_end_point(segment: PathSegment, current: Point, subpath_start: Point) -> Point:
    """Return the cursor position after the given command.

    Args:
        segment: Path command, letter followed by its arguments
        current: Cursor position entering the command
        subpath_start: Start point of the current subpath (target of Z)
    """
    command = _check_segment(segment)
    if command == "Z":
        return subpath_start
    if command == "H":
        return (float(segment[-1]), current[1])
    if command == "V":
        return (current[0], float(segment[-1]))
    return (float(segment[-2]), float(segment[-1]))


###############################################################################
# AvPathLinearizer
###############################################################################


class AvPathLinearizer:
    """Dispatches normalized path commands into line segments.

    The cursor is owned by the caller: ``dispatch`` gets the cursor entering
    the command and only tracks a local running cursor across the repeated
    argument groups of that single command. ``linearize_path`` is a driver
    doing the cursor bookkeeping for a whole command list.
    """

    def __init__(self, consumer: SegmentConsumer, options: Optional[LinearizationOptions] = None):
        self.consumer = consumer
        self.options = options if options is not None else DEFAULT_OPTIONS
        self.curve_linearizer = AvCurveLinearizer(consumer, self.options)

    def dispatch(self, segment: PathSegment, index: Any, cur_x: float, cur_y: float) -> None:
        """Linearize a single path command.

        Args:
            segment: Command letter followed by its arguments
            index: Caller data attached to every emitted segment, usually the command index
            cur_x: x-coordinate of the cursor entering the command
            cur_y: y-coordinate of the cursor entering the command

        Raises:
            UnsupportedCommandError: For a command letter other than M, L, H, V, Z, Q, C
            MalformedCommandError: If the argument count does not fit the command
        """
        # pylint: disable=too-many-branches
        command = _check_segment(segment)
        args = [float(value) for value in segment[1:]]
        emit = self.consumer.emit

        if command in "ML":
            for i in range(0, len(args), 2):
                x, y = args[i], args[i + 1]
                emit(AvSegment(cur_x, cur_y, x, y, index, (command, x, y)))
                cur_x, cur_y = x, y

        elif command == "H":
            for x in args:
                emit(AvSegment(cur_x, cur_y, x, cur_y, index, ("H", x)))
                cur_x = x

        elif command == "V":
            for y in args:
                emit(AvSegment(cur_x, cur_y, cur_x, y, index, ("V", y)))
                cur_y = y

        elif command == "Z":
            emit(AvSegment(cur_x, cur_y, cur_x, cur_y, index, ("Z",)))

        elif command == "Q":
            for i in range(0, len(args), 4):
                control = (args[i], args[i + 1])
                end = (args[i + 2], args[i + 3])
                self.curve_linearizer.linearize_quadratic([(cur_x, cur_y), control, end], index)
                cur_x, cur_y = end

        else:  # "C"
            for i in range(0, len(args), 6):
                control1 = (args[i], args[i + 1])
                control2 = (args[i + 2], args[i + 3])
                end = (args[i + 4], args[i + 5])
                self.curve_linearizer.linearize([(cur_x, cur_y), control1, control2, end], index)
                cur_x, cur_y = end

    def linearize_path(self, segments: Iterable[PathSegment], start: Point = (0.0, 0.0)) -> Point:
        """Linearize a whole normalized command list.

        The command index is passed as datum. After a Z command the cursor
        returns to the start point of the subpath.

        Args:
            segments: Path commands, each a letter followed by its arguments
            start: Cursor position before the first command

        Returns:
            The cursor position after the last command
        """
        current = (float(start[0]), float(start[1]))
        subpath_start = current
        for index, segment in enumerate(segments):
            end = command_end_point(segment, current, subpath_start)
            self.dispatch(segment, index, current[0], current[1])
            if segment[0] == "M":
                # Only the first pair starts the subpath, further pairs are implicit lines
                subpath_start = (float(segment[1]), float(segment[2]))
            current = end
        logger.debug("Linearized path ending at %s", current)
        return current


def linearize_path_segments(
    segments: Iterable[PathSegment], options: Optional[LinearizationOptions] = None
) -> Tuple[AvSegment, ...]:
    """Convenience wrapper returning all segments of a linearized command list."""
    collector = SegmentCollector()
    AvPathLinearizer(collector, options).linearize_path(segments)
    return tuple(collector.segments)
