"""
Wave Function Collapse solver.

This is the heart of WFC - the algorithm that observes (collapses) cells
and propagates constraints until no cell is left undecided.

The algorithm, one step at a time:
1. Find every open cell with the lowest entropy (fewest possibilities)
2. Pick one of them at random and collapse it to a random possible tile
3. Propagate: narrow neighbor domains breadth-first until nothing changes
4. Repeat until no open cell remains

There is no backtracking. A cell whose domain empties is recorded as a
contradiction and simply never resolves; the rest of the run continues.
"""

from collections import deque
from enum import Enum, auto
import random
from typing import Callable, Iterator

from towerforge.core.errors import Contradiction, ContradictionKind
from towerforge.core.events import ResolutionEvent
from towerforge.core.tiles import TileCatalog
from towerforge.core.types import Direction, sockets_compatible
from towerforge.logging_config import get_logger, log_collapse, log_contradiction, log_run
from .grid import Grid, Cell

logger = get_logger(__name__)


class SolverState(Enum):
    """The current state of a generation run."""
    RUNNING = auto()    # Open cells remain, more steps needed
    CONVERGED = auto()  # No open cells and no contradictions
    EXHAUSTED = auto()  # No open cells, but at least one cell is contradicted


def build_compatibility(catalog: TileCatalog) -> dict[Direction, list[int]]:
    """
    Precompute which tiles may sit next to which.

    compat[d][i] is the bitset of tiles j such that tile i's socket facing d
    is compatible with tile j's socket facing back (opposite of d).
    """
    compat: dict[Direction, list[int]] = {}
    for direction in Direction:
        opposite = direction.opposite
        row = []
        for tile in catalog:
            socket = tile.get_socket(direction)
            mask = 0
            for j, other in enumerate(catalog):
                if sockets_compatible(socket, other.get_socket(opposite)):
                    mask |= 1 << j
            row.append(mask)
        compat[direction] = row
    return compat


class WFCSolver:
    """
    The WFC algorithm implementation.

    Usage:
        solver = WFCSolver(grid, rng=random.Random(42))
        while solver.step() == SolverState.RUNNING:
            ...

    Or for bulk solving:
        state = solver.solve()

    Or lazily, one resolution event per step:
        for event in solver.iter_events():
            place(event)

    All three drive the same step() and give identical grids for the same seed.
    """

    def __init__(
        self,
        grid: Grid,
        rng: random.Random | None = None,
        on_resolve: Callable[[ResolutionEvent], None] | None = None,
    ):
        """
        Initialize the solver.

        Args:
            grid: The Grid to solve (already seeded)
            rng: Random source for cell and tile choices. Pass a seeded
                 random.Random for reproducible runs.
            on_resolve: Called synchronously with each ResolutionEvent
        """
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.on_resolve = on_resolve
        self.step_count = 0

        self.events: list[ResolutionEvent] = []
        self.contradictions: list[Contradiction] = []

        # Track the last step's work (for visualization/debugging)
        self.last_collapsed: Cell | None = None
        self.last_propagated: set[Cell] = set()

        self._compat = build_compatibility(grid.catalog)
        self._state = SolverState.RUNNING

    @property
    def state(self) -> SolverState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is not SolverState.RUNNING

    def step(self) -> SolverState:
        """
        Perform one outer iteration: entropy scan, one collapse, full propagation.

        Returns the state after this step. Once the run has finished, further
        calls return the final state without touching the grid or the rng.
        """
        if self.done:
            return self._state

        self.last_collapsed = None
        self.last_propagated.clear()

        candidates = self._lowest_entropy_cells()
        if not candidates:
            self._state = (
                SolverState.EXHAUSTED if self.grid.has_contradiction() else SolverState.CONVERGED
            )
            log_run(
                logger,
                self._state.name,
                f"steps={self.step_count} | contradictions={len(self.contradictions)}",
            )
            return self._state

        self.step_count += 1

        # Candidate first, then tile: both draws come from the same rng
        cell = self.rng.choice(candidates)
        index = self.rng.choice(cell.indices())
        cell.collapse_to(index)
        self.last_collapsed = cell

        event = ResolutionEvent(
            position=cell.position,
            tile_id=self.grid.catalog[index].id,
            step=self.step_count,
        )
        self.events.append(event)
        log_collapse(logger, self.step_count, cell.position, event.tile_id, len(candidates))
        if self.on_resolve is not None:
            self.on_resolve(event)

        self._propagate(cell)
        return SolverState.RUNNING

    def solve(self) -> SolverState:
        """Run the solver to completion and return the final state."""
        while self.step() is SolverState.RUNNING:
            pass
        return self._state

    def iter_events(self) -> Iterator[ResolutionEvent]:
        """
        Lazily run the solver, yielding the event produced by each step.

        Stopping iteration early leaves the grid as it was after the last
        completed step; calling step() or iter_events() again resumes it.
        """
        while self.step() is SolverState.RUNNING:
            yield self.events[-1]

    def _lowest_entropy_cells(self) -> list[Cell]:
        """
        Find every open cell sharing the minimum entropy.

        Resolved and contradicted cells are never candidates. Cells come back
        in grid order so that the random pick is reproducible.
        """
        min_entropy = None
        candidates: list[Cell] = []

        for cell in self.grid.all_cells():
            entropy = cell.entropy
            if entropy <= 1:
                continue

            if min_entropy is None or entropy < min_entropy:
                min_entropy = entropy
                candidates = [cell]
            elif entropy == min_entropy:
                candidates.append(cell)

        return candidates

    def _supported(self, cell: Cell, direction: Direction) -> int:
        """
        Bitset of tiles allowed next to cell in the given direction.

        This unions the allowed neighbors of all tiles that cell could still be.
        """
        table = self._compat[direction]
        allowed = 0
        for index in cell.indices():
            allowed |= table[index]
        return allowed

    def _propagate(self, start: Cell):
        """
        Narrow neighbor domains breadth-first until a fixed point is reached.

        A neighbor left with no compatible tile is contradicted: its domain is
        emptied, the contradiction recorded, and it is not queued.
        """
        queue: deque[Cell] = deque([start])
        in_queue: set[Cell] = {start}

        while queue:
            cell = queue.popleft()
            in_queue.discard(cell)

            if cell.contradicted:
                continue

            for neighbor, direction in self.grid.neighbors(cell):
                allowed = neighbor.domain & self._supported(cell, direction)

                if allowed == 0:
                    neighbor.clear()
                    self.last_propagated.add(neighbor)
                    self._record_contradiction(neighbor, cell, direction)
                    continue

                if neighbor.constrain_to(allowed):
                    self.last_propagated.add(neighbor)
                    if neighbor not in in_queue:
                        queue.append(neighbor)
                        in_queue.add(neighbor)

    def _record_contradiction(self, neighbor: Cell, source: Cell, direction: Direction):
        contradiction = Contradiction(
            kind=ContradictionKind.PROPAGATION,
            position=neighbor.position,
            step=self.step_count,
        )
        self.contradictions.append(contradiction)
        log_contradiction(
            logger,
            self.step_count,
            ContradictionKind.PROPAGATION.value,
            neighbor.position,
            f"from {source.position} facing {direction.value}",
        )
