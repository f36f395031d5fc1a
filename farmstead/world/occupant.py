"""Occupant and Footprint — what holds a grid cell, and which cells it holds.

The grid itself only stores integer handles; these small value types are
what callers pass in and get back.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class OccupantKind(Enum):
    """What sort of entity holds a cell."""

    CROP = "crop"
    BUILDING = "building"


@dataclass(frozen=True)
class Occupant:
    """Identity of something placed on the grid.

    Attributes:
        kind: Crop tile or building.
        ident: Id unique within ``kind`` (tile id or building id).
    """

    kind: OccupantKind
    ident: int


@dataclass(frozen=True)
class Footprint:
    """A rectangle of cells ``[x, x+width) x [y, y+height)``.

    Attributes:
        x: Left column (origin).
        y: Top row (origin).
        width: Columns covered.
        height: Rows covered.
    """

    x: int
    y: int
    width: int = 1
    height: int = 1

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield every ``(x, y)`` covered, row by row."""
        for cy in range(self.y, self.y + self.height):
            for cx in range(self.x, self.x + self.width):
                yield cx, cy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def moved_to(self, x: int, y: int) -> Footprint:
        return Footprint(x=x, y=y, width=self.width, height=self.height)
