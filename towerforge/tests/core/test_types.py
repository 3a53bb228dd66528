"""Tests for directions, positions and socket compatibility."""

import pytest

from towerforge.core import Direction, HORIZONTAL, Position, sockets_compatible


class TestDirection:
    """Tests for Direction enum."""

    def test_six_directions(self):
        """There is one direction per cube face."""
        assert len(Direction) == 6

    @pytest.mark.parametrize(
        "direction,expected",
        [
            (Direction.TOP, (0, 1, 0)),
            (Direction.BOTTOM, (0, -1, 0)),
            (Direction.NORTH, (0, 0, 1)),
            (Direction.SOUTH, (0, 0, -1)),
            (Direction.EAST, (1, 0, 0)),
            (Direction.WEST, (-1, 0, 0)),
        ],
    )
    def test_offsets(self, direction, expected):
        assert direction.offset == expected

    @pytest.mark.parametrize(
        "direction,opposite",
        [
            (Direction.TOP, Direction.BOTTOM),
            (Direction.NORTH, Direction.SOUTH),
            (Direction.EAST, Direction.WEST),
        ],
    )
    def test_opposite_pairs(self, direction, opposite):
        assert direction.opposite == opposite
        assert opposite.opposite == direction

    def test_opposite_is_involution(self):
        """Opposite of opposite is the original direction."""
        for direction in Direction:
            assert direction.opposite.opposite == direction
            assert direction.opposite != direction

    def test_opposite_offsets_cancel(self):
        """A step and its opposite step return to the start."""
        for direction in Direction:
            a = direction.offset
            b = direction.opposite.offset
            assert tuple(i + j for i, j in zip(a, b)) == (0, 0, 0)

    def test_horizontal_excludes_vertical(self):
        assert set(HORIZONTAL) == {Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST}
        assert not Direction.TOP.is_horizontal
        assert Direction.EAST.is_horizontal


class TestPosition:
    """Tests for Position."""

    def test_add_direction(self):
        assert Position(1, 1, 1) + Direction.TOP == Position(1, 2, 1)
        assert Position(1, 1, 1) + Direction.WEST == Position(0, 1, 1)
        assert Position(1, 1, 1) + Direction.SOUTH == Position(1, 1, 0)

    def test_add_tuple(self):
        assert Position(1, 2, 3) + (1, 1, 1) == Position(2, 3, 4)

    def test_neighbors(self):
        neighbors = Position(0, 0, 0).neighbors()
        assert len(neighbors) == 6
        assert neighbors[Direction.EAST] == Position(1, 0, 0)

    def test_ordering_is_lexicographic(self):
        positions = [Position(1, 0, 0), Position(0, 1, 0), Position(0, 0, 1), Position(0, 0, 0)]
        assert sorted(positions) == [
            Position(0, 0, 0),
            Position(0, 0, 1),
            Position(0, 1, 0),
            Position(1, 0, 0),
        ]


class TestSocketsCompatible:
    """Tests for the socket compatibility rule."""

    def test_both_none(self):
        assert sockets_compatible(None, None)

    def test_one_none(self):
        assert not sockets_compatible(None, "stone")
        assert not sockets_compatible("stone", None)

    def test_equal_tags(self):
        assert sockets_compatible("stone", "stone")

    def test_different_tags(self):
        assert not sockets_compatible("stone", "timber")

    def test_symmetric(self):
        values = [None, "a", "b"]
        for a in values:
            for b in values:
                assert sockets_compatible(a, b) == sockets_compatible(b, a)
