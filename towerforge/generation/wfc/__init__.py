"""Wave Function Collapse algorithm for structure generation."""

from .grid import Grid, Cell
from .seeding import apply_boundary_constraints, apply_roof_constraints, seed_constraints
from .solver import WFCSolver, SolverState, build_compatibility
from .extract import Placement, GenerationSummary, extract_placements, summarize

__all__ = [
    "Grid",
    "Cell",
    "apply_boundary_constraints",
    "apply_roof_constraints",
    "seed_constraints",
    "WFCSolver",
    "SolverState",
    "build_compatibility",
    "Placement",
    "GenerationSummary",
    "extract_placements",
    "summarize",
]
