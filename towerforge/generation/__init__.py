"""Structure generation for Towerforge."""

from .tower import TowerGenerator, TowerResult, generate_tower, iter_tower
from .tileset import create_defender_tileset, load_tileset, DEFAULT_TILESET_PATH
from .placement import local_position

__all__ = [
    "TowerGenerator",
    "TowerResult",
    "generate_tower",
    "iter_tower",
    "create_defender_tileset",
    "load_tileset",
    "DEFAULT_TILESET_PATH",
    "local_position",
]
