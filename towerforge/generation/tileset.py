"""
Defender tower tileset for Wave Function Collapse.

The bundled tileset lives in config/tiles.yaml and is laid out for the
2x2 tower footprint: every cell is a corner, walls carry a material seam
(stone or timber) on their two inward faces, and battlements cap the top.

The key insight: because seams must match across neighbors, one collapse
fixes the material of a whole layer, while layers stay free to differ.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from towerforge.core.tiles import TileCatalog


def _get_config_path() -> Path:
    """Get path to the bundled config directory."""
    return Path(__file__).parent.parent / "config"


DEFAULT_TILESET_PATH = _get_config_path() / "tiles.yaml"


@lru_cache(maxsize=1)
def create_defender_tileset() -> TileCatalog:
    """
    Load the bundled defender tower tileset.

    Returns a cached TileCatalog; catalogs are immutable so sharing is safe.
    """
    return TileCatalog.from_yaml(DEFAULT_TILESET_PATH)


def load_tileset(path: Path | str | None = None) -> TileCatalog:
    """
    Load a tileset from a YAML file, or the bundled one if path is None.

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if path is None:
        return create_defender_tileset()
    return TileCatalog.from_yaml(path)
