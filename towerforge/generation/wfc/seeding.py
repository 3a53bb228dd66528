"""
Constraint seeding for Wave Function Collapse.

Before any cell is collapsed, two passes narrow the initial domains:

- Boundary pass: a tile at the edge of the footprint may not point a
  connector out of the grid. Only the horizontal faces are bounded; the
  top layer is handled by the roof pass instead.
- Roof pass: the top layer may only hold roof tiles.

A cell emptied by seeding is a contradiction. It is logged and recorded,
and generation still goes ahead without it.
"""

from towerforge.core.errors import Contradiction, ContradictionKind
from towerforge.core.types import Direction
from towerforge.logging_config import get_logger, log_contradiction
from .grid import Cell, Grid

logger = get_logger(__name__)


def _tiles_with_socket(grid: Grid, direction: Direction) -> int:
    """Bitset of tiles that have a connector (non-None socket) on a face."""
    mask = 0
    for index, tile in enumerate(grid.catalog):
        if tile.get_socket(direction) is not None:
            mask |= 1 << index
    return mask


def _record(cell: Cell, pass_name: str, contradictions: list[Contradiction]) -> None:
    contradiction = Contradiction(kind=ContradictionKind.SEED, position=cell.position)
    contradictions.append(contradiction)
    log_contradiction(logger, 0, ContradictionKind.SEED.value, cell.position, f"{pass_name} pass")


def apply_boundary_constraints(grid: Grid) -> list[Contradiction]:
    """
    Remove tiles that would connect to a neighbor outside the footprint.

    Returns the contradictions caused by this pass.
    """
    west = _tiles_with_socket(grid, Direction.WEST)
    east = _tiles_with_socket(grid, Direction.EAST)
    south = _tiles_with_socket(grid, Direction.SOUTH)
    north = _tiles_with_socket(grid, Direction.NORTH)

    contradictions: list[Contradiction] = []
    for cell in grid.all_cells():
        banned = 0
        if cell.x == 0:
            banned |= west
        if cell.x == grid.size_x - 1:
            banned |= east
        if cell.z == 0:
            banned |= south
        if cell.z == grid.size_z - 1:
            banned |= north

        if not banned or cell.contradicted:
            continue
        if cell.remove_where(banned) and cell.contradicted:
            _record(cell, "boundary", contradictions)

    return contradictions


def apply_roof_constraints(grid: Grid) -> list[Contradiction]:
    """
    Only allow roof tiles on the top layer.

    Returns the contradictions caused by this pass.
    """
    non_roof = 0
    for index, tile in enumerate(grid.catalog):
        if not tile.is_roof_tile:
            non_roof |= 1 << index

    contradictions: list[Contradiction] = []
    top_y = grid.height - 1
    for x in range(grid.size_x):
        for z in range(grid.size_z):
            cell = grid.get_cell(x, top_y, z)
            if cell.contradicted:
                continue
            if cell.remove_where(non_roof) and cell.contradicted:
                _record(cell, "roof", contradictions)

    return contradictions


def seed_constraints(grid: Grid) -> list[Contradiction]:
    """Run the boundary and roof passes. Returns every seed contradiction."""
    contradictions = apply_boundary_constraints(grid)
    contradictions.extend(apply_roof_constraints(grid))
    logger.debug(
        f"Seeded {grid.dimensions} grid | possibilities={grid.total_possibilities()} "
        f"| contradictions={len(contradictions)}"
    )
    return contradictions
