"""Segment events emitted by the linearization and the consumers receiving them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Protocol

import numpy as np
from numpy.typing import NDArray

from avlin.common import Point, SegmentDescriptor

# Callback signature: (from_x, from_y, to_x, to_y, datum, descriptor)
SegmentCallback = Callable[[float, float, float, float, Any, SegmentDescriptor], None]


###############################################################################
# AvSegment
###############################################################################


@dataclass(frozen=True)
class AvSegment:
    """A straight line from (x1, y1) to (x2, y2).

    Attributes:
        x1, y1: Start point ("from")
        x2, y2: End point ("to")
        datum: Opaque caller data, usually the index of the originating path command
        descriptor: Symbolic description of the emitted primitive, first item is
            the command letter, followed by its destination arguments,
            e.g. ("L", x, y), ("H", x), ("V", y) or ("Z",)
    """

    x1: float
    y1: float
    x2: float
    y2: float
    datum: Any = None
    descriptor: SegmentDescriptor = ("L",)

    @property
    def command(self) -> str:
        """Command letter of the descriptor."""
        return self.descriptor[0]

    @property
    def start(self) -> Point:
        return (self.x1, self.y1)

    @property
    def end(self) -> Point:
        return (self.x2, self.y2)

    @property
    def is_close(self) -> bool:
        """True for an explicit close-subpath marker."""
        return self.command == "Z"

    @property
    def is_move(self) -> bool:
        return self.command == "M"

    @property
    def is_drawing(self) -> bool:
        """True if the segment is a drawable line (neither move nor close marker)."""
        return not (self.is_move or self.is_close)

    @property
    def is_degenerate(self) -> bool:
        """True if start and end point coincide."""
        return self.x1 == self.x2 and self.y1 == self.y2

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


###############################################################################
# Consumers
###############################################################################


class SegmentConsumer(Protocol):
    """Receiver of emitted segments, called once per segment in emission order."""

    def emit(self, segment: AvSegment) -> None: ...


class CallbackSegmentConsumer:
    """Adapts a plain callback ``(from_x, from_y, to_x, to_y, datum, descriptor)``."""

    def __init__(self, callback: SegmentCallback):
        self._callback = callback

    def emit(self, segment: AvSegment) -> None:
        self._callback(segment.x1, segment.y1, segment.x2, segment.y2, segment.datum, segment.descriptor)


@dataclass
class SegmentCollector:
    """Consumer storing all emitted segments.

    Besides plain access to the segments it can rebuild the traced polyline(s)
    and an equivalent simplified SVG path string from the descriptors.
    """

    segments: List[AvSegment] = field(default_factory=list)

    def emit(self, segment: AvSegment) -> None:
        self.segments.append(segment)

    def clear(self) -> None:
        self.segments.clear()

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[AvSegment]:
        return iter(self.segments)

    @property
    def drawing_segments(self) -> List[AvSegment]:
        """Segments which are drawable lines."""
        return [segment for segment in self.segments if segment.is_drawing]

    def to_points(self) -> NDArray[np.float64]:
        """Return the traced polyline as (n, 2) array.

        The start point of the first segment is followed by the end point of
        every segment. A close marker adds the start point of its subpath
        unless the trace already ends there.
        """
        points: List[Point] = []
        subpath_start: Optional[Point] = None
        for segment in self.segments:
            if not points:
                points.append(segment.start)
                subpath_start = segment.start
            if segment.is_move:
                subpath_start = segment.end
            if segment.is_close:
                if subpath_start is not None and points[-1] != subpath_start:
                    points.append(subpath_start)
                continue
            points.append(segment.end)
        return np.array(points, dtype=np.float64).reshape(-1, 2)

    def to_polylines(self) -> List[NDArray[np.float64]]:
        """Split the traced geometry into one (n, 2) array per subpath.

        A subpath starts at every move segment and contains its end point
        followed by the end points of the drawing segments. A close marker
        appends the first point of the subpath unless the polyline already
        ends there.
        """
        polylines: List[List[Point]] = []
        current: Optional[List[Point]] = None
        for segment in self.segments:
            if segment.is_move:
                current = [segment.end]
                polylines.append(current)
            elif segment.is_drawing:
                if current is None:
                    current = [segment.start]
                    polylines.append(current)
                current.append(segment.end)
            elif current is not None and current[-1] != current[0]:
                current.append(current[0])
        return [np.array(polyline, dtype=np.float64) for polyline in polylines]

    def to_path_string(self) -> str:
        """Build an SVG path string from the descriptors, e.g. ``"M0 0 L10 5 Z"``."""
        commands = []
        for segment in self.segments:
            args = " ".join(f"{float(arg):g}" for arg in segment.descriptor[1:])
            commands.append(f"{segment.command}{args}")
        return " ".join(commands)
