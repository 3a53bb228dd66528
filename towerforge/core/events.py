"""Event types for Towerforge.

Events are what a generation run reports outward while it works. A
renderer can place tiles as events arrive, or replay the full list once
the run has finished.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from .types import Position


class ResolutionEvent(BaseModel):
    """A cell was collapsed to a single tile.

    step is the 1-based solver step that performed the collapse.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["tile_resolved"] = "tile_resolved"
    position: Position
    tile_id: str
    step: int

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    @property
    def z(self) -> int:
        return self.position.z
