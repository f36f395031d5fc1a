"""PlacementGrid — the shared spatial allocator for crops and buildings.

Occupancy is a NumPy integer array indexed ``grid[y, x]``: 0 means empty,
any other value is the handle of the occupant holding the cell.  Crop
tiles (1x1) and buildings (WxH) go through exactly the same bounds and
overlap checks.  Bounds are always checked before occupancy, so an
out-of-bounds request never reports as ``CELL_OCCUPIED``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from farmstead.simulation.results import ErrorKind, Result
from farmstead.world.occupant import Footprint, Occupant

_EMPTY = 0


@dataclass
class PlacementGrid:
    """A fixed ``width`` x ``height`` rectangle of cells.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: Occupant handle per cell, indexed ``cells[y, x]``.
    """

    width: int
    height: int
    cells: NDArray[np.int64] = field(init=False, repr=False)
    _handles: dict[Occupant, int] = field(init=False, repr=False, default_factory=dict)
    _occupants: dict[int, Occupant] = field(init=False, repr=False, default_factory=dict)
    _footprints: dict[int, Footprint] = field(init=False, repr=False, default_factory=dict)
    _next_handle: int = field(init=False, repr=False, default=1)

    def __post_init__(self) -> None:
        """Start with every cell empty."""
        if self.width <= 0 or self.height <= 0:
            msg = f"grid must be at least 1x1, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.cells = np.zeros((self.height, self.width), dtype=np.int64)

    def in_bounds(self, x: int, y: int, width: int = 1, height: int = 1) -> bool:
        """Return True if the rectangle lies fully inside the grid."""
        return (
            width > 0
            and height > 0
            and x >= 0
            and y >= 0
            and x + width <= self.width
            and y + height <= self.height
        )

    def check(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        *,
        ignore: Occupant | None = None,
    ) -> ErrorKind | None:
        """Validate a rectangle without changing anything.

        Args:
            x: Left column.
            y: Top row.
            width: Columns to cover.
            height: Rows to cover.
            ignore: Occupant whose own cells count as free (for moves).

        Returns:
            None if the rectangle could be placed, else the reason.
        """
        if not self.in_bounds(x, y, width, height):
            return ErrorKind.OUT_OF_BOUNDS
        region = self.cells[y : y + height, x : x + width]
        free = region == _EMPTY
        if ignore is not None and ignore in self._handles:
            free |= region == self._handles[ignore]
        if not free.all():
            return ErrorKind.CELL_OCCUPIED
        return None

    def can_place(self, x: int, y: int, width: int, height: int) -> bool:
        """True iff in bounds and every covered cell is empty."""
        return self.check(x, y, width, height) is None

    def place(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        occupant: Occupant,
    ) -> Result:
        """Mark the rectangle as held by ``occupant``.

        Nothing changes on failure.  Placing an occupant that is already on
        the grid reports ``CELL_OCCUPIED``; use ``move`` instead.
        """
        if occupant in self._handles:
            return Result.failure(ErrorKind.CELL_OCCUPIED)
        error = self.check(x, y, width, height)
        if error is not None:
            return Result.failure(error)

        handle = self._next_handle
        self._next_handle += 1
        footprint = Footprint(x=x, y=y, width=width, height=height)
        self.cells[y : y + height, x : x + width] = handle
        self._handles[occupant] = handle
        self._occupants[handle] = occupant
        self._footprints[handle] = footprint
        return Result.success(footprint)

    def remove(self, occupant: Occupant) -> None:
        """Free every cell held by ``occupant``.  Unknown occupants are ignored."""
        handle = self._handles.pop(occupant, None)
        if handle is None:
            return
        fp = self._footprints.pop(handle)
        del self._occupants[handle]
        self.cells[fp.y : fp.y + fp.height, fp.x : fp.x + fp.width] = _EMPTY

    def move(self, occupant: Occupant, new_x: int, new_y: int) -> Result:
        """Relocate ``occupant`` so its origin is ``(new_x, new_y)``.

        The new rectangle may overlap the occupant's current cells.  On
        failure the occupant keeps its original position.
        """
        handle = self._handles.get(occupant)
        if handle is None:
            return Result.failure(ErrorKind.UNKNOWN_OCCUPANT)
        old = self._footprints[handle]
        error = self.check(new_x, new_y, old.width, old.height, ignore=occupant)
        if error is not None:
            return Result.failure(error)

        new = old.moved_to(new_x, new_y)
        self.cells[old.y : old.y + old.height, old.x : old.x + old.width] = _EMPTY
        self.cells[new.y : new.y + new.height, new.x : new.x + new.width] = handle
        self._footprints[handle] = new
        return Result.success(new)

    def occupant_at(self, x: int, y: int) -> Occupant | None:
        """Return whoever holds ``(x, y)``, or None (also when out of bounds)."""
        if not self.in_bounds(x, y):
            return None
        handle = int(self.cells[y, x])
        if handle == _EMPTY:
            return None
        return self._occupants[handle]

    def footprint(self, occupant: Occupant) -> Footprint | None:
        handle = self._handles.get(occupant)
        if handle is None:
            return None
        return self._footprints[handle]

    def occupants(self) -> list[Occupant]:
        return list(self._handles)

    def occupied_cells(self) -> int:
        """Number of cells currently held by anything."""
        return int(np.count_nonzero(self.cells))
