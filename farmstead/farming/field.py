"""CropField — planting, growth, and harvest over the farm field.

The field owns one ``CropTile`` per plantable cell.  A planted tile also
holds its cell on the shared ``PlacementGrid`` (as a 1x1 CROP occupant),
so buildings can never be dropped on top of a growing crop.

Tile lifecycle::

    EMPTY --plant--> SEEDED --update--> GROWING --update--> READY
      ^                                                       |
      +----------------------- harvest -----------------------+
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from farmstead.catalog.types import CropType, ResourceType
from farmstead.farming.crop import (
    CropState,
    CropTile,
    growth_progress,
    state_for_progress,
)
from farmstead.simulation.results import ErrorKind, Result
from farmstead.world.occupant import Footprint, Occupant, OccupantKind

if TYPE_CHECKING:
    from farmstead.catalog.catalog import Catalog
    from farmstead.economy.inventory import Inventory
    from farmstead.world.grid import PlacementGrid

logger = logging.getLogger(__name__)


@dataclass
class CropField:
    """The plantable area of the grid and its crop tiles.

    Attributes:
        grid: Shared occupancy grid.
        catalog: Crop definitions.
        inventory: Pays seed costs, receives harvests.
        area: Rectangle of plantable cells.
        tiles: Crop tile per plantable ``(x, y)``.
    """

    grid: PlacementGrid
    catalog: Catalog
    inventory: Inventory
    area: Footprint
    tiles: dict[tuple[int, int], CropTile] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Create an EMPTY tile for every plantable cell inside the grid."""
        self.tiles = {
            (x, y): CropTile(x=x, y=y)
            for x, y in self.area.cells()
            if self.grid.in_bounds(x, y)
        }

    def tile_at(self, x: int, y: int) -> CropTile | None:
        return self.tiles.get((x, y))

    def occupant_for(self, tile: CropTile) -> Occupant:
        """Grid identity of a tile (its row-major cell index)."""
        return Occupant(OccupantKind.CROP, tile.y * self.grid.width + tile.x)

    def _locate(self, x: int, y: int) -> CropTile | ErrorKind:
        if not self.grid.in_bounds(x, y):
            return ErrorKind.OUT_OF_BOUNDS
        tile = self.tile_at(x, y)
        if tile is None:
            return ErrorKind.NOT_PLANTABLE
        return tile

    def plant(self, x: int, y: int, crop_type: CropType, now: float) -> Result:
        """Plant ``crop_type`` at ``(x, y)``, paying its seed cost in coin.

        Returns:
            Result carrying the planted tile.  Failures, in check order:
            OUT_OF_BOUNDS, NOT_PLANTABLE, CELL_NOT_EMPTY,
            UNKNOWN_CATALOG_ENTRY, CELL_OCCUPIED (a building is there),
            INSUFFICIENT_RESOURCES.
        """
        tile = self._locate(x, y)
        if isinstance(tile, ErrorKind):
            return Result.failure(tile)
        if tile.state is not CropState.EMPTY:
            return Result.failure(ErrorKind.CELL_NOT_EMPTY)
        entry = self.catalog.crop(crop_type)
        if entry is None:
            return Result.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        error = self.grid.check(x, y, 1, 1)
        if error is not None:
            return Result.failure(error)
        if not self.inventory.use_resource(ResourceType.COIN, entry.seed_cost):
            return Result.failure(ErrorKind.INSUFFICIENT_RESOURCES)

        self.grid.place(x, y, 1, 1, self.occupant_for(tile))
        tile.crop_type = crop_type
        tile.state = CropState.SEEDED
        tile.growth_progress = 0.0
        tile.plant_time = now
        logger.info("Planted %s at (%d, %d)", entry.name, x, y)
        return Result.success(tile)

    def harvest(self, x: int, y: int) -> Result:
        """Harvest a READY tile.

        Returns:
            Result carrying the number of units credited.  Fails with
            NOT_READY unless the tile is READY.
        """
        tile = self._locate(x, y)
        if isinstance(tile, ErrorKind):
            return Result.failure(tile)
        if tile.state is not CropState.READY:
            return Result.failure(ErrorKind.NOT_READY)
        entry = self.catalog.crop(tile.crop_type)
        if entry is None:
            return Result.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)

        self.inventory.add_resource(entry.resource_type, entry.harvest_yield)
        self.grid.remove(self.occupant_for(tile))
        tile.reset()
        logger.info("Harvested %d %s at (%d, %d)", entry.harvest_yield, entry.name, x, y)
        return Result.success(entry.harvest_yield)

    def update(self, now: float) -> list[CropTile]:
        """Recompute growth of every planted tile at time ``now``.

        Safe to call any number of times. Progress never decreases, so a
        ``now`` earlier than a previous call leaves tiles where they are.

        Returns:
            Tiles that became READY during this call.
        """
        ripened: list[CropTile] = []
        for tile in self.tiles.values():
            if tile.state not in (CropState.SEEDED, CropState.GROWING):
                continue
            entry = self.catalog.crop(tile.crop_type)
            if entry is None:
                continue
            tile.growth_progress = max(
                tile.growth_progress,
                growth_progress(tile.plant_time, now, entry.growth_time_minutes),
            )
            tile.state = state_for_progress(tile.growth_progress)
            if tile.state is CropState.READY:
                ripened.append(tile)
        return ripened

    def restore(self, tile: CropTile) -> Result:
        """Load-time: put a saved tile back verbatim and claim its cell.

        Fails with NOT_PLANTABLE for cells outside the field and
        CELL_OCCUPIED if the cell is already held.
        """
        current = self._locate(tile.x, tile.y)
        if isinstance(current, ErrorKind):
            return Result.failure(current)
        if tile.is_planted:
            placed = self.grid.place(tile.x, tile.y, 1, 1, self.occupant_for(tile))
            if not placed.ok:
                return placed
        self.tiles[(tile.x, tile.y)] = tile
        return Result.success(tile)
