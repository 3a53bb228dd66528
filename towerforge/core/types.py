"""Foundational types for Towerforge.

This module defines the core types used throughout the generator:
- Direction: The six cube-face directions with offsets
- Position: Grid coordinates (x, y, z)
- Socket: Connector tags on tile faces, and the compatibility rule between them
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, NewType

# A socket is an opaque tag. None means "this face borders empty space".
Socket = NewType("Socket", str)


class Direction(Enum):
    """Face directions of a grid cell.

    Coordinate system: x increases east, y increases upward, z increases north.
    """

    TOP = "top"
    BOTTOM = "bottom"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def offset(self) -> tuple[int, int, int]:
        """Get the (dx, dy, dz) offset for this direction."""
        return _DIRECTION_OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        """Get the opposite direction."""
        return _DIRECTION_OPPOSITES[self]

    @property
    def is_horizontal(self) -> bool:
        return self in HORIZONTAL


# Lookup tables for Direction properties
_DIRECTION_OFFSETS: dict[Direction, tuple[int, int, int]] = {
    Direction.TOP: (0, 1, 0),
    Direction.BOTTOM: (0, -1, 0),
    Direction.NORTH: (0, 0, 1),
    Direction.SOUTH: (0, 0, -1),
    Direction.EAST: (1, 0, 0),
    Direction.WEST: (-1, 0, 0),
}

_DIRECTION_OPPOSITES: dict[Direction, Direction] = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

HORIZONTAL: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)


class Position(NamedTuple):
    """A cell position in the structure grid.

    Tuple ordering is lexicographic on (x, y, z), which is also the
    order cells are scanned and extracted in.
    """

    x: int
    y: int
    z: int

    def __add__(self, other: object) -> Position:
        """Add a direction offset or 3-tuple to this position."""
        if isinstance(other, Direction):
            dx, dy, dz = other.offset
            return Position(self.x + dx, self.y + dy, self.z + dz)
        if isinstance(other, tuple) and len(other) == 3:
            return Position(self.x + other[0], self.y + other[1], self.z + other[2])
        return NotImplemented

    def neighbors(self) -> dict[Direction, Position]:
        """Get all adjacent positions keyed by direction."""
        return {d: self + d for d in Direction}


def sockets_compatible(a: Socket | None, b: Socket | None) -> bool:
    """Check whether two facing sockets may touch.

    Two empty faces are compatible, an empty face never meets a connector,
    and two connectors must carry the same tag.
    """
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return a == b
