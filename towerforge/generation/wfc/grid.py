"""
Grid representation for Wave Function Collapse.

The Grid is the "wave function" - a 3D block of cells where each cell
is in superposition (a set of possible tiles) until it collapses to a
single definite tile.

Domains are stored as integer bitsets over catalog indices: bit i set
means catalog tile i is still possible. Domains only ever lose bits.
"""

from dataclasses import dataclass
from typing import Iterator

from towerforge.core.errors import CellIndexError, EmptyCatalogError, InvalidDimensionsError
from towerforge.core.tiles import TileCatalog
from towerforge.core.types import Direction, Position


@dataclass(eq=False)
class Cell:
    """
    A single cell in the WFC grid.

    Open: more than one possible tile
    Resolved: exactly one possible tile
    Contradicted: no possible tiles left

    The "entropy" of a cell is how many tiles it could still become.
    """
    x: int
    y: int
    z: int
    domain: int = 0

    def __hash__(self):
        """Hash by position - cells are unique by their grid location."""
        return hash((self.x, self.y, self.z))

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return False
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    @property
    def position(self) -> Position:
        return Position(self.x, self.y, self.z)

    @property
    def entropy(self) -> int:
        """Number of tiles still possible here."""
        return self.domain.bit_count()

    @property
    def collapsed(self) -> bool:
        """A cell is collapsed (resolved) when it has exactly one possibility."""
        return self.entropy == 1

    @property
    def contradicted(self) -> bool:
        return self.domain == 0

    @property
    def is_open(self) -> bool:
        return self.entropy > 1

    @property
    def tile_index(self) -> int | None:
        """Catalog index of the chosen tile, or None if not resolved."""
        if self.collapsed:
            return self.domain.bit_length() - 1
        return None

    def indices(self) -> list[int]:
        """Catalog indices in the domain, ascending."""
        result = []
        mask = self.domain
        while mask:
            low = mask & -mask
            result.append(low.bit_length() - 1)
            mask ^= low
        return result

    def has(self, index: int) -> bool:
        return bool(self.domain >> index & 1)

    def collapse_to(self, index: int):
        """Force this cell to a single tile already in its domain."""
        if not self.has(index):
            raise ValueError(f"Tile index {index} is not possible at {self.position}")
        self.domain = 1 << index

    def constrain_to(self, allowed: int) -> bool:
        """
        Intersect this cell's domain with an allowed bitset.

        Returns True if the cell changed (lost possibilities).
        """
        narrowed = self.domain & allowed
        if narrowed == self.domain:
            return False
        self.domain = narrowed
        return True

    def remove_where(self, mask: int) -> bool:
        """Remove every tile in mask from the domain. Returns True if changed."""
        return self.constrain_to(~mask)

    def clear(self):
        """Mark this cell contradicted."""
        self.domain = 0


class Grid:
    """
    The 3D block of cells representing the wave function.

    Cells live in one flat list indexed by (x * height + y) * size_z + z,
    so walking the list visits positions in ascending (x, y, z) order.
    """

    def __init__(self, size_x: int, height: int, size_z: int, catalog: TileCatalog):
        """
        Create a grid with all cells in maximum superposition.

        Args:
            size_x: Number of cells along x (west to east)
            height: Number of layers along y (bottom to top)
            size_z: Number of cells along z (south to north)
            catalog: Tiles every cell may initially become

        Raises:
            InvalidDimensionsError: If any extent is not positive
            EmptyCatalogError: If the catalog has no tiles
        """
        if size_x <= 0 or height <= 0 or size_z <= 0:
            raise InvalidDimensionsError(
                f"Grid extents must be positive, got {size_x}x{height}x{size_z}",
                (size_x, height, size_z),
            )
        if len(catalog) == 0:
            raise EmptyCatalogError("Cannot build a grid from an empty tile catalog")

        self.size_x = size_x
        self.height = height
        self.size_z = size_z
        self.catalog = catalog

        full = catalog.full_mask
        self.cells: list[Cell] = [
            Cell(x=x, y=y, z=z, domain=full)
            for x in range(size_x)
            for y in range(height)
            for z in range(size_z)
        ]

    @property
    def dimensions(self) -> tuple[int, int, int]:
        return (self.size_x, self.height, self.size_z)

    def __len__(self) -> int:
        return len(self.cells)

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.size_x and 0 <= y < self.height and 0 <= z < self.size_z

    def _linear(self, x: int, y: int, z: int) -> int:
        return (x * self.height + y) * self.size_z + z

    def get_cell(self, x: int, y: int, z: int) -> Cell:
        """Get cell at position. Out of bounds access raises CellIndexError."""
        if not self.in_bounds(x, y, z):
            raise CellIndexError(
                f"Position {(x, y, z)} is outside grid {self.dimensions}",
                Position(x, y, z),
            )
        return self.cells[self._linear(x, y, z)]

    def __getitem__(self, position: tuple[int, int, int]) -> Cell:
        return self.get_cell(*position)

    def neighbors(self, cell: Cell) -> Iterator[tuple[Cell, Direction]]:
        """
        Yield all in-bounds neighbors of a cell with their directions.

        Direction is FROM the input cell TO the neighbor.
        """
        for direction in Direction:
            dx, dy, dz = direction.offset
            nx, ny, nz = cell.x + dx, cell.y + dy, cell.z + dz
            if self.in_bounds(nx, ny, nz):
                yield self.cells[self._linear(nx, ny, nz)], direction

    def all_cells(self) -> Iterator[Cell]:
        """Iterate over all cells in ascending (x, y, z) order."""
        return iter(self.cells)

    def open_cells(self) -> list[Cell]:
        return [cell for cell in self.cells if cell.is_open]

    def tile_ids(self, cell: Cell) -> frozenset[str]:
        """The tile ids still possible in a cell."""
        return frozenset(self.catalog[i].id for i in cell.indices())

    def tile_id(self, cell: Cell) -> str | None:
        """The chosen tile id, or None if the cell is not resolved."""
        index = cell.tile_index
        return None if index is None else self.catalog[index].id

    def total_possibilities(self) -> int:
        """Sum of domain sizes. Strictly decreases while the solver runs."""
        return sum(cell.entropy for cell in self.cells)

    def has_contradiction(self) -> bool:
        return any(cell.contradicted for cell in self.cells)

    def is_complete(self) -> bool:
        """Check if every cell has resolved to exactly one tile."""
        return all(cell.collapsed for cell in self.cells)

    def snapshot(self) -> dict[Position, int]:
        """Domain size of every cell, keyed by position."""
        return {cell.position: cell.entropy for cell in self.cells}
