"""
Local-space layout for placed tiles.

The generator only knows grid positions. Whoever spawns the visual tiles
needs a local offset for each one: the footprint is centered on the
parent's origin, layers stack upward from it, and cells are tile_size apart.
Rotating into world space is left to the caller.
"""

from towerforge.core.types import Position


def local_position(
    position: Position,
    size_x: int,
    size_z: int,
    tile_size: float,
) -> tuple[float, float, float]:
    """
    Offset of a cell from the structure's local origin.

    For the 2x2 footprint the four columns sit at +/- tile_size / 2 on x and z.
    """
    half_x = (size_x - 1) * 0.5
    half_z = (size_z - 1) * 0.5
    return (
        (position.x - half_x) * tile_size,
        position.y * tile_size,
        (position.z - half_z) * tile_size,
    )
