"""Central module containing types and command definitions for path linearization."""

from __future__ import annotations

from typing import Any, Dict, Literal, Tuple

###############################################################################
# Types
###############################################################################


AvPathCmds = Literal[  # Type-Definition for normalized path commands (absolute coordinates only)
    # MoveTo (2) - start a new subpath and move the current point to (x,y)
    "M",
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "L",
    # Horizontal LineTo (1) - draw a horizontal line to the given x coordinate (y stays unchanged)
    "H",
    # Vertical LineTo (1) - draw a vertical line to the given y coordinate (x stays unchanged)
    "V",
    # Cubic Bezier To (6) - draw a cubic Bezier curve with two control points and an endpoint (x,y)
    "C",
    # Quadratic Bezier To (4) - draw a quadratic Bezier curve with one control point and an endpoint (x,y)
    "Q",
    # ClosePath (0) - close subpath
    "Z",
]

Point = Tuple[float, float]

# Symbolic description of an emitted primitive, e.g. ("L", x, y), ("H", x) or ("Z",)
SegmentDescriptor = Tuple[Any, ...]


###############################################################################
# Command metadata
###############################################################################


# Number of numeric arguments consumed per repetition of a command
COMMAND_BATCH_SIZES: Dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "Z": 0,
    "Q": 4,
    "C": 6,
}

SUPPORTED_COMMANDS: str = "".join(COMMAND_BATCH_SIZES)
