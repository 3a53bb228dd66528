"""Error taxonomy for Towerforge.

Construction problems (bad dimensions, empty or malformed catalogs) are
raised as exceptions and end the run before it starts. Contradictions found
while generating are not exceptions: they are recorded as Contradiction
values and the run carries on.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .types import Position


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class TowerforgeError(Exception):
    """Base exception for Towerforge errors."""

    pass


class InvalidDimensionsError(TowerforgeError, ValueError):
    """A grid extent was zero or negative."""

    def __init__(self, message: str, dimensions: tuple[int, int, int] | None = None):
        super().__init__(message)
        self.dimensions = dimensions


class EmptyCatalogError(TowerforgeError, ValueError):
    """No tiles were supplied to seed cell domains with."""

    pass


class DuplicateTileError(TowerforgeError, ValueError):
    """Two tiles in a catalog share the same id."""

    pass


class InvalidTilesetError(TowerforgeError, ValueError):
    """A tileset file or entry does not have the expected shape."""

    pass


class CellIndexError(TowerforgeError, IndexError):
    """A direct grid access fell outside the grid.

    This is a programming error in the caller, never a generation outcome.
    """

    def __init__(self, message: str, position: Position | None = None):
        super().__init__(message)
        self.position = position


# -----------------------------------------------------------------------------
# Recoverable contradictions
# -----------------------------------------------------------------------------


class ContradictionKind(Enum):
    """Where a cell lost its last possible tile."""

    SEED = "seed"
    PROPAGATION = "propagation"


class Contradiction(BaseModel):
    """A cell whose domain became empty.

    step is the solver step that caused it (0 for seeding).
    """

    model_config = ConfigDict(frozen=True)

    kind: ContradictionKind
    position: Position
    step: int = 0
