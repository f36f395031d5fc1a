"""BuildingYard — placing, moving, and looking up buildings.

Buildings are identified to callers by their origin (top-left) cell and
internally by a ``building_id`` that survives moves.  The occupied cells
live on the shared ``PlacementGrid``; the yard keeps the building records.

Placing a building applies its production boosts to the ledger exactly
once.  Moving a building leaves the boosts alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from farmstead.catalog.types import BuildingType, ResourceType
from farmstead.simulation.results import ErrorKind, Result
from farmstead.world.occupant import Occupant, OccupantKind

if TYPE_CHECKING:
    from farmstead.catalog.catalog import Catalog
    from farmstead.economy.inventory import Inventory
    from farmstead.economy.production import ProductionLedger
    from farmstead.world.grid import PlacementGrid

logger = logging.getLogger(__name__)


@dataclass
class PlacedBuilding:
    """A building standing on the grid.

    Attributes:
        building_id: Stable id (unchanged by moves).
        building_type: Catalog type.
        x: Origin column.
        y: Origin row.
        width: Footprint columns.
        height: Footprint rows.
    """

    building_id: int
    building_type: BuildingType
    x: int
    y: int
    width: int
    height: int

    @property
    def occupant(self) -> Occupant:
        return Occupant(OccupantKind.BUILDING, self.building_id)


@dataclass
class BuildingYard:
    """All placed buildings plus the pending placement, if any.

    Attributes:
        grid: Shared occupancy grid.
        catalog: Building definitions.
        inventory: Pays building costs.
        ledger: Receives production boosts.
        placed: Live buildings keyed by id.
        pending: Building type chosen by ``start_placement``, if any.
    """

    grid: PlacementGrid
    catalog: Catalog
    inventory: Inventory
    ledger: ProductionLedger
    placed: dict[int, PlacedBuilding] = field(default_factory=dict)
    pending: BuildingType | None = None
    _boosted: set[int] = field(default_factory=set, repr=False)
    _next_id: int = field(default=1, repr=False)

    def buildings(self) -> list[PlacedBuilding]:
        return list(self.placed.values())

    def building_at(self, x: int, y: int) -> PlacedBuilding | None:
        """Return the building covering ``(x, y)``, if any."""
        occupant = self.grid.occupant_at(x, y)
        if occupant is None or occupant.kind is not OccupantKind.BUILDING:
            return None
        return self.placed.get(occupant.ident)

    def building_at_origin(self, x: int, y: int) -> PlacedBuilding | None:
        for building in self.placed.values():
            if building.x == x and building.y == y:
                return building
        return None

    def place(self, building_type: BuildingType, x: int, y: int) -> Result:
        """Buy and place a building with its origin at ``(x, y)``.

        Coin is only spent once the footprint is known to fit; no state
        changes on failure.

        Returns:
            Result carrying the new ``PlacedBuilding``.
        """
        entry = self.catalog.building(building_type)
        if entry is None:
            return Result.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        error = self.grid.check(x, y, entry.width, entry.height)
        if error is not None:
            logger.debug("Cannot place %s at (%d, %d): %s", entry.name, x, y, error.name)
            return Result.failure(error)
        if not self.inventory.use_resource(ResourceType.COIN, entry.cost):
            logger.debug("Not enough coin to place %s", entry.name)
            return Result.failure(ErrorKind.INSUFFICIENT_RESOURCES)

        building = PlacedBuilding(
            building_id=self._next_id,
            building_type=building_type,
            x=x,
            y=y,
            width=entry.width,
            height=entry.height,
        )
        self._next_id += 1
        self.grid.place(x, y, entry.width, entry.height, building.occupant)
        self.placed[building.building_id] = building
        self._apply_boosts(building)
        logger.info("Placed %s at (%d, %d)", entry.name, x, y)
        return Result.success(building)

    def move(self, old_x: int, old_y: int, new_x: int, new_y: int) -> Result:
        """Move the building whose origin is ``(old_x, old_y)``.

        Returns:
            Result carrying the moved building; UNKNOWN_OCCUPANT if no
            building has that origin.  A failed move changes nothing.
        """
        building = self.building_at_origin(old_x, old_y)
        if building is None:
            logger.debug("No building found at (%d, %d)", old_x, old_y)
            return Result.failure(ErrorKind.UNKNOWN_OCCUPANT)
        moved = self.grid.move(building.occupant, new_x, new_y)
        if not moved.ok:
            return moved
        building.x, building.y = new_x, new_y
        logger.info(
            "Moved building from (%d, %d) to (%d, %d)",
            old_x,
            old_y,
            new_x,
            new_y,
        )
        return Result.success(building)

    def restore(self, building_type: BuildingType, x: int, y: int, width: int, height: int) -> Result:
        """Load-time: replay a saved building without charging or boosting.

        The saved production rates already include its boosts.  A saved
        size that differs from the catalog footprint is CORRUPT_SNAPSHOT.
        """
        entry = self.catalog.building(building_type)
        if entry is None:
            return Result.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        if (width, height) != (entry.width, entry.height):
            return Result.failure(ErrorKind.CORRUPT_SNAPSHOT)
        building = PlacedBuilding(
            building_id=self._next_id,
            building_type=building_type,
            x=x,
            y=y,
            width=width,
            height=height,
        )
        placed = self.grid.place(x, y, width, height, building.occupant)
        if not placed.ok:
            return placed
        self._next_id += 1
        self.placed[building.building_id] = building
        self._boosted.add(building.building_id)
        return Result.success(building)

    # -- Placement preview -------------------------------------------------

    def start_placement(self, building_type: BuildingType) -> Result:
        """Begin placing ``building_type``; replaces any pending choice."""
        if self.catalog.building(building_type) is None:
            return Result.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        self.pending = building_type
        return Result.success(building_type)

    def placement_preview(self, x: int, y: int) -> bool:
        """Would the pending building fit at ``(x, y)``?  Ignores cost."""
        entry = self.catalog.building(self.pending)
        if entry is None:
            return False
        return self.grid.can_place(x, y, entry.width, entry.height)

    def confirm_placement(self, x: int, y: int) -> Result:
        """Place the pending building.  It stays pending if this fails."""
        if self.pending is None:
            return Result.failure(ErrorKind.NO_PLACEMENT_ACTIVE)
        result = self.place(self.pending, x, y)
        if result.ok:
            self.pending = None
        return result

    def cancel_placement(self) -> None:
        self.pending = None

    def _apply_boosts(self, building: PlacedBuilding) -> None:
        if building.building_id in self._boosted:
            return
        entry = self.catalog.building(building.building_type)
        if entry is not None:
            self.ledger.apply_boosts(entry.production_boosts)
        self._boosted.add(building.building_id)
