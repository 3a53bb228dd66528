"""Towerforge - Wave Function Collapse generator for defender towers."""

import argparse
import logging
import sys
import time
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from towerforge import __version__
from towerforge.core.errors import (
    DuplicateTileError,
    EmptyCatalogError,
    InvalidDimensionsError,
    InvalidTilesetError,
)
from towerforge.core.events import ResolutionEvent
from towerforge.generation import TowerGenerator, TowerResult, load_tileset, local_position
from towerforge.generation.wfc import SolverState
from towerforge.logging_config import setup_logging
from towerforge.settings import GeneratorSettings, load_settings


EXIT_CONVERGED = 0
EXIT_EXHAUSTED = 1
EXIT_ERROR = 2


def render_layers(console: Console, result: TowerResult, settings: GeneratorSettings) -> None:
    """Print each layer of the tower as a table, top layer first.

    Rows run north to south so the table reads like a map.
    """
    tiles = {p.position: p.tile_id for p in result.placements}
    contradicted = set(result.summary.contradiction_positions)

    for y in reversed(range(settings.height)):
        table = Table(title=f"Layer {y}", show_header=True, header_style="bold")
        table.add_column("z \\ x", style="dim")
        for x in range(settings.size_x):
            table.add_column(str(x))

        for z in reversed(range(settings.size_z)):
            row = [str(z)]
            for x in range(settings.size_x):
                pos = (x, y, z)
                if pos in tiles:
                    row.append(tiles[pos])
                elif pos in contradicted:
                    row.append("[red]contradiction[/red]")
                else:
                    row.append("[yellow]?[/yellow]")
            table.add_row(*row)
        console.print(table)


def render_summary(console: Console, result: TowerResult) -> None:
    """Print the diagnostic summary."""
    summary = result.summary
    style = "green" if result.state is SolverState.CONVERGED else "red"
    console.print(f"State: [{style}]{result.state.name}[/{style}]")
    console.print(
        f"Resolved: {summary.resolved}  "
        f"Contradicted: {summary.contradicted}  "
        f"Unresolved: {summary.unresolved}"
    )
    if summary.contradiction_positions:
        positions = ", ".join(str(tuple(p)) for p in summary.contradiction_positions)
        console.print(f"Contradictions at: {positions}")


def run_generation(settings: GeneratorSettings, animate: bool, console: Console) -> int:
    """Generate one tower and print it.

    Args:
        settings: Resolved generator settings
        animate: Print each resolution event as it happens
        console: Where to print

    Returns:
        Exit code
    """
    catalog = load_tileset(settings.tiles_path)

    def print_event(event: ResolutionEvent) -> None:
        offset = local_position(event.position, settings.size_x, settings.size_z, settings.tile_size)
        console.print(
            f"  step {event.step:3d}: {tuple(event.position)} -> {event.tile_id} "
            f"@ ({offset[0]:.2f}, {offset[1]:.2f}, {offset[2]:.2f})"
        )
        if settings.step_delay > 0:
            time.sleep(settings.step_delay)

    generator = TowerGenerator(
        catalog,
        height=settings.height,
        size_x=settings.size_x,
        size_z=settings.size_z,
        seed=settings.seed,
        on_resolve=print_event if animate else None,
    )
    result = generator.run()

    console.print()
    render_layers(console, result, settings)
    render_summary(console, result)

    if result.state is SolverState.CONVERGED:
        return EXIT_CONVERGED
    return EXIT_EXHAUSTED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Towerforge - Wave Function Collapse generator for defender towers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  towerforge                       # 2x4x2 tower from the bundled tileset
  towerforge --height 6 --seed 7   # Taller, reproducible tower
  towerforge --tiles my_tiles.yaml # Custom tileset
  towerforge --animate             # Print each collapse as it happens
        """,
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--tiles", type=Path, help="YAML tileset (default: bundled)")
    parser.add_argument("--height", type=int, help="Number of layers")
    parser.add_argument("--size-x", type=int, help="Footprint width")
    parser.add_argument("--size-z", type=int, help="Footprint depth")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--tile-size", type=float, help="Spacing between tiles")
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Print each resolution event as it happens",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between animated steps",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path("data"),
        help="Data directory for logs (default: data/)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for Towerforge."""
    # Load environment variables first
    load_dotenv()

    args = build_parser().parse_args(argv)

    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(args.data, console_level=console_level)

    console = Console()
    console.print(f"Towerforge v{__version__}")
    console.print(f"Log file: {log_path}")

    try:
        settings = load_settings(args.config).with_overrides(
            tiles_path=args.tiles,
            height=args.height,
            size_x=args.size_x,
            size_z=args.size_z,
            seed=args.seed,
            tile_size=args.tile_size,
            step_delay=args.delay,
        )
        return run_generation(settings, args.animate, console)
    except (
        InvalidDimensionsError,
        EmptyCatalogError,
        DuplicateTileError,
        InvalidTilesetError,
        ValidationError,
        yaml.YAMLError,
        FileNotFoundError,
    ) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
