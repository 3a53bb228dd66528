"""Core domain models for Towerforge.

Pure values with no I/O: directions, positions, sockets, tiles and the
error taxonomy.

Usage:
    from towerforge.core import Direction, Position, TileDefinition, TileCatalog
"""

# Types
from .types import (
    Socket,
    Direction,
    HORIZONTAL,
    Position,
    sockets_compatible,
)

# Tiles
from .tiles import TileDefinition, TileCatalog

# Events
from .events import ResolutionEvent

# Errors
from .errors import (
    TowerforgeError,
    InvalidDimensionsError,
    EmptyCatalogError,
    DuplicateTileError,
    InvalidTilesetError,
    CellIndexError,
    ContradictionKind,
    Contradiction,
)

__all__ = [
    # Types
    "Socket",
    "Direction",
    "HORIZONTAL",
    "Position",
    "sockets_compatible",
    # Tiles
    "TileDefinition",
    "TileCatalog",
    # Events
    "ResolutionEvent",
    # Errors
    "TowerforgeError",
    "InvalidDimensionsError",
    "EmptyCatalogError",
    "DuplicateTileError",
    "InvalidTilesetError",
    "CellIndexError",
    "ContradictionKind",
    "Contradiction",
]
