"""
Result extraction for Wave Function Collapse.

Reads a finished grid and produces what a renderer needs: one placement
per resolved cell, plus a diagnostic summary of what did not resolve.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict

from towerforge.core.errors import Contradiction
from towerforge.core.types import Position
from .grid import Grid


class Placement(BaseModel):
    """A tile to place at a grid position."""

    model_config = ConfigDict(frozen=True)

    position: Position
    tile_id: str


class GenerationSummary(BaseModel):
    """Counts of how a run ended, for logging and telemetry.

    unresolved should always be 0 after a finished run; a non-zero value
    means the solver stopped early.
    """

    model_config = ConfigDict(frozen=True)

    resolved: int
    contradicted: int
    unresolved: int
    contradiction_positions: tuple[Position, ...] = ()

    @property
    def total(self) -> int:
        return self.resolved + self.contradicted + self.unresolved

    @property
    def is_complete(self) -> bool:
        """True when every cell holds exactly one tile."""
        return self.contradicted == 0 and self.unresolved == 0


def extract_placements(grid: Grid) -> list[Placement]:
    """
    List every resolved cell in ascending (x, y, z) order.

    Contradicted and open cells are skipped. Reading does not modify the
    grid, so extracting twice gives the same list.
    """
    placements = []
    for cell in grid.all_cells():
        tile_id = grid.tile_id(cell)
        if tile_id is not None:
            placements.append(Placement(position=cell.position, tile_id=tile_id))
    return placements


def summarize(grid: Grid, contradictions: Iterable[Contradiction] = ()) -> GenerationSummary:
    """
    Count resolved, contradicted and unresolved cells.

    contradiction_positions merges the recorded contradictions with any
    cell that is empty now, sorted and without repeats.
    """
    resolved = contradicted = unresolved = 0
    positions: set[Position] = {c.position for c in contradictions}

    for cell in grid.all_cells():
        if cell.collapsed:
            resolved += 1
        elif cell.contradicted:
            contradicted += 1
            positions.add(cell.position)
        else:
            unresolved += 1

    return GenerationSummary(
        resolved=resolved,
        contradicted=contradicted,
        unresolved=unresolved,
        contradiction_positions=tuple(sorted(positions)),
    )
