"""
Tower generation using Wave Function Collapse.

This module provides the main entry points for generating a defender
tower. A run builds the grid, seeds the boundary and roof constraints,
collapses cells until none is left open and then extracts the placements.

Two ways to drive it:
- generate_tower(): one blocking call that returns the finished result
- TowerGenerator / iter_tower(): one collapse per step, so a caller can
  place tiles between animation frames and stop whenever it likes
"""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Callable, Iterator

from towerforge.core.errors import Contradiction
from towerforge.core.events import ResolutionEvent
from towerforge.core.tiles import TileCatalog
from towerforge.logging_config import get_logger, log_run
from .tileset import create_defender_tileset
from .wfc import (
    Grid,
    WFCSolver,
    SolverState,
    GenerationSummary,
    Placement,
    extract_placements,
    seed_constraints,
    summarize,
)

logger = get_logger(__name__)

# The original tower footprint
DEFAULT_SIZE_X = 2
DEFAULT_SIZE_Z = 2
DEFAULT_HEIGHT = 4


@dataclass(frozen=True)
class TowerResult:
    """Everything a finished (or stopped) run produced."""

    state: SolverState
    placements: tuple[Placement, ...]
    events: tuple[ResolutionEvent, ...]
    summary: GenerationSummary
    seed_contradictions: tuple[Contradiction, ...]
    propagation_contradictions: tuple[Contradiction, ...]

    @property
    def contradictions(self) -> tuple[Contradiction, ...]:
        return self.seed_contradictions + self.propagation_contradictions


class TowerGenerator:
    """
    A single generation run over one grid.

    Usage:
        generator = TowerGenerator(height=6, seed=7)
        for event in generator:
            spawn(event)
        result = generator.result()
    """

    def __init__(
        self,
        catalog: TileCatalog | None = None,
        height: int = DEFAULT_HEIGHT,
        size_x: int = DEFAULT_SIZE_X,
        size_z: int = DEFAULT_SIZE_Z,
        seed: int | None = None,
        rng: random.Random | None = None,
        on_resolve: Callable[[ResolutionEvent], None] | None = None,
    ):
        """
        Build and seed the grid for a new run.

        Args:
            catalog: Tiles to build from (None = bundled defender tileset)
            height: Number of layers
            size_x: Footprint width
            size_z: Footprint depth
            seed: Random seed for reproducibility (ignored if rng is given)
            rng: Random source to use directly
            on_resolve: Called with each ResolutionEvent as it happens

        Raises:
            InvalidDimensionsError: If any extent is not positive
            EmptyCatalogError: If the catalog has no tiles
        """
        if catalog is None:
            catalog = create_defender_tileset()
        if rng is None:
            rng = random.Random(seed)

        self.grid = Grid(size_x, height, size_z, catalog)
        log_run(
            logger,
            "START",
            f"grid={self.grid.dimensions} | tiles={len(catalog)} | seed={seed}",
        )
        self.seed_contradictions = seed_constraints(self.grid)
        self.solver = WFCSolver(self.grid, rng=rng, on_resolve=on_resolve)

    @property
    def state(self) -> SolverState:
        return self.solver.state

    @property
    def done(self) -> bool:
        return self.solver.done

    def step(self) -> SolverState:
        """Run one collapse-and-propagate step."""
        return self.solver.step()

    def __iter__(self) -> Iterator[ResolutionEvent]:
        return self.solver.iter_events()

    def run(self) -> TowerResult:
        """Finish the run and return the result."""
        self.solver.solve()
        return self.result()

    def result(self) -> TowerResult:
        """
        Snapshot the run as it stands.

        Before the solver has finished, open cells show up as unresolved.
        """
        summary = summarize(
            self.grid,
            self.seed_contradictions + self.solver.contradictions,
        )
        if self.done:
            log_run(
                logger,
                "RESULT",
                f"resolved={summary.resolved} | contradicted={summary.contradicted} "
                f"| unresolved={summary.unresolved}",
            )
        return TowerResult(
            state=self.solver.state,
            placements=tuple(extract_placements(self.grid)),
            events=tuple(self.solver.events),
            summary=summary,
            seed_contradictions=tuple(self.seed_contradictions),
            propagation_contradictions=tuple(self.solver.contradictions),
        )


def generate_tower(
    catalog: TileCatalog | None = None,
    height: int = DEFAULT_HEIGHT,
    size_x: int = DEFAULT_SIZE_X,
    size_z: int = DEFAULT_SIZE_Z,
    seed: int | None = None,
    rng: random.Random | None = None,
    on_resolve: Callable[[ResolutionEvent], None] | None = None,
) -> TowerResult:
    """
    Generate a tower in one blocking call.

    Contradictions never raise: cells that could not be filled are left
    empty and reported in result.summary.

    Args:
        catalog: Tiles to build from (None = bundled defender tileset)
        height: Number of layers
        size_x: Footprint width
        size_z: Footprint depth
        seed: Random seed for reproducibility (None = random)
        rng: Random source to use directly (overrides seed)
        on_resolve: Optional callback(event) for each collapse

    Returns:
        TowerResult with placements in ascending (x, y, z) order

    Raises:
        InvalidDimensionsError: If any extent is not positive
        EmptyCatalogError: If the catalog has no tiles
    """
    generator = TowerGenerator(
        catalog,
        height=height,
        size_x=size_x,
        size_z=size_z,
        seed=seed,
        rng=rng,
        on_resolve=on_resolve,
    )
    return generator.run()


def iter_tower(
    catalog: TileCatalog | None = None,
    height: int = DEFAULT_HEIGHT,
    size_x: int = DEFAULT_SIZE_X,
    size_z: int = DEFAULT_SIZE_Z,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> Iterator[ResolutionEvent]:
    """
    Generate a tower lazily, yielding each ResolutionEvent as it happens.

    Yields the same events, in the same order, as generate_tower() records
    for the same arguments. Stop iterating to cancel.
    """
    generator = TowerGenerator(
        catalog,
        height=height,
        size_x=size_x,
        size_z=size_z,
        seed=seed,
        rng=rng,
    )
    yield from generator
