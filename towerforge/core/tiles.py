"""Tile definitions and the tile catalog.

A TileDefinition describes one module a structure can be built from: a
socket on each of its six faces and whether it may cap the structure. The
catalog is the ordered, read-only set of tiles a generation run works with.
Catalog order matters: a tile's index is its bit in every cell domain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import yaml
from pydantic import BaseModel, ConfigDict

from .errors import DuplicateTileError, InvalidTilesetError
from .types import Direction, Socket


class TileDefinition(BaseModel):
    """A tile with one socket per face.

    A socket of None means the face must touch empty space or the edge of
    the grid. Roof tiles are the only tiles allowed on the top layer.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    top: Socket | None = None
    bottom: Socket | None = None
    north: Socket | None = None
    south: Socket | None = None
    east: Socket | None = None
    west: Socket | None = None
    is_roof_tile: bool = False

    def get_socket(self, direction: Direction) -> Socket | None:
        """Get the socket on the given face."""
        return getattr(self, direction.value)

    @property
    def sockets(self) -> dict[Direction, Socket | None]:
        return {d: self.get_socket(d) for d in Direction}

    @classmethod
    def from_dict(cls, data: dict) -> TileDefinition:
        """Create a TileDefinition from a dictionary (YAML data).

        Sockets may be given flat (``east: wall``) or nested under a
        ``sockets`` mapping.

        Raises:
            InvalidTilesetError: If data is not a mapping, has no id or has
                malformed sockets
        """
        if not isinstance(data, dict):
            raise InvalidTilesetError(f"Tile entry must be a mapping, got {type(data).__name__}")
        if "id" not in data:
            raise InvalidTilesetError(f"Tile entry has no id: {data!r}")

        nested = data.get("sockets") or {}
        if not isinstance(nested, dict):
            raise InvalidTilesetError(f"Tile {data['id']!r}: sockets must be a mapping")
        sockets = dict(nested)
        for direction in Direction:
            if direction.value in data:
                sockets[direction.value] = data[direction.value]
        return cls(
            id=data["id"],
            is_roof_tile=data.get("is_roof_tile", False),
            **{name: sockets.get(name) for name in (d.value for d in Direction)},
        )


class TileCatalog:
    """Ordered, immutable collection of tile definitions."""

    def __init__(self, tiles: list[TileDefinition] | tuple[TileDefinition, ...]):
        self._tiles: tuple[TileDefinition, ...] = tuple(tiles)
        self._index: dict[str, int] = {}
        for i, tile in enumerate(self._tiles):
            if tile.id in self._index:
                raise DuplicateTileError(f"Duplicate tile id in catalog: {tile.id!r}")
            self._index[tile.id] = i

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[TileDefinition]:
        return iter(self._tiles)

    def __getitem__(self, index: int) -> TileDefinition:
        return self._tiles[index]

    def __repr__(self) -> str:
        return f"TileCatalog({list(self.ids)!r})"

    @property
    def tiles(self) -> tuple[TileDefinition, ...]:
        return self._tiles

    @property
    def ids(self) -> tuple[str, ...]:
        """Tile ids in catalog order."""
        return tuple(tile.id for tile in self._tiles)

    @property
    def full_mask(self) -> int:
        """Bitset with every tile in the catalog set."""
        return (1 << len(self._tiles)) - 1

    def index_of(self, tile_id: str) -> int:
        """Get the catalog index of a tile id. Raises KeyError if unknown."""
        return self._index[tile_id]

    def get(self, tile_id: str) -> TileDefinition:
        return self._tiles[self._index[tile_id]]

    @staticmethod
    def get_socket(tile: TileDefinition, direction: Direction) -> Socket | None:
        """Socket of a tile on the given face."""
        return tile.get_socket(direction)

    @classmethod
    def from_dicts(cls, entries: list[dict]) -> TileCatalog:
        return cls([TileDefinition.from_dict(entry) for entry in entries])

    @classmethod
    def from_yaml(cls, path: Path | str) -> TileCatalog:
        """
        Load a catalog from a YAML file with a top-level ``tiles`` list.

        An empty file gives an empty catalog.

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
            InvalidTilesetError: If the document does not have the expected shape
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        if not data:
            return cls([])
        if not isinstance(data, dict):
            raise InvalidTilesetError(f"{path}: expected a mapping with a tiles list")
        entries = data.get("tiles") or []
        if not isinstance(entries, list):
            raise InvalidTilesetError(f"{path}: tiles must be a list")
        return cls.from_dicts(entries)
