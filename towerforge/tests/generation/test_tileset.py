"""Tests for the bundled defender tileset."""

from pathlib import Path

import pytest

from towerforge.core import Direction, HORIZONTAL
from towerforge.generation import DEFAULT_TILESET_PATH, create_defender_tileset, load_tileset


class TestTilesetCreation:
    """Test tileset loading."""

    def test_bundled_file_exists(self):
        assert DEFAULT_TILESET_PATH.exists()

    def test_loads_all_pieces(self):
        tileset = create_defender_tileset()
        assert len(tileset) == 16

    def test_has_roof_tiles(self):
        tileset = create_defender_tileset()
        roofs = [t.id for t in tileset if t.is_roof_tile]
        assert len(roofs) == 4
        assert all(tile_id.startswith("battlement") for tile_id in roofs)

    def test_cached(self):
        assert create_defender_tileset() is create_defender_tileset()

    def test_load_tileset_default(self):
        assert load_tileset() is create_defender_tileset()

    def test_load_tileset_from_path(self, tmp_path: Path):
        path = tmp_path / "tiles.yaml"
        path.write_text("tiles:\n  - id: only\n    is_roof_tile: true\n")
        assert load_tileset(path).ids == ("only",)

    def test_load_tileset_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_tileset(tmp_path / "missing.yaml")


class TestFootprintRules:
    """The bundled pieces are corners of a 2x2 footprint."""

    @pytest.mark.parametrize(
        "suffix,open_faces",
        [
            ("_sw", {Direction.SOUTH, Direction.WEST}),
            ("_se", {Direction.SOUTH, Direction.EAST}),
            ("_nw", {Direction.NORTH, Direction.WEST}),
            ("_ne", {Direction.NORTH, Direction.EAST}),
        ],
    )
    def test_corner_faces(self, suffix, open_faces):
        tileset = create_defender_tileset()
        corners = [t for t in tileset if t.id.endswith(suffix)]
        assert len(corners) == 4
        for tile in corners:
            for direction in HORIZONTAL:
                socket = tile.get_socket(direction)
                if direction in open_faces:
                    assert socket is None, f"{tile.id} has a connector facing {direction}"
                else:
                    assert socket is not None, f"{tile.id} is open facing {direction}"

    def test_every_piece_stacks(self):
        tileset = create_defender_tileset()
        for tile in tileset:
            assert tile.get_socket(Direction.TOP) == "column"
            assert tile.get_socket(Direction.BOTTOM) == "column"
