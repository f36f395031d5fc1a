"""FarmEngine — the single entry point for everything that changes the farm.

The engine owns all simulation state.  The UI and input layers call its
operations and get a ``Result`` back; they never touch the grid, crops,
ledger, or inventory directly.  The engine never schedules itself: an
external clock calls ``tick(delta)`` every ``config.tick_interval`` seconds.

Each tick, in order:

1. Advance production by ``delta`` seconds.
2. Recompute crop growth at the current wall-clock time.
3. Record the tick time (used as the save timestamp).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from farmstead.buildings.yard import PlacedBuilding
from farmstead.catalog.catalog import Catalog
from farmstead.catalog.types import BuildingType, CropType, ResourceType
from farmstead.economy.inventory import Inventory
from farmstead.economy.production import ProductionLedger
from farmstead.farming.crop import CropTile
from farmstead.persistence import codec
from farmstead.persistence.snapshot import PersistedSnapshot
from farmstead.simulation.config import SimulationConfig
from farmstead.simulation.results import Result
from farmstead.simulation.state import FarmState

logger = logging.getLogger(__name__)


@dataclass
class FarmEngine:
    """Runs one farm.

    Attributes:
        config: Loaded simulation configuration.
        catalog: Crop and building definitions (defaults to the config's).
        clock: Returns wall-clock seconds; injectable for tests.
        state: Current simulation state.
        tick_count: Ticks run since the engine was created.
    """

    config: SimulationConfig
    catalog: Catalog | None = None
    clock: Callable[[], float] = time.time
    state: FarmState = field(init=False)
    tick_count: int = 0

    def __post_init__(self) -> None:
        """Build the catalog and a first-run state."""
        if self.catalog is None:
            self.catalog = self.config.build_catalog()
        self.state = FarmState.fresh(self.config, self.catalog, now=self.clock())

    @property
    def inventory(self) -> Inventory:
        return self.state.inventory

    @property
    def ledger(self) -> ProductionLedger:
        return self.state.ledger

    # -- Crops -------------------------------------------------------------

    def plant(self, x: int, y: int, crop_type: CropType) -> Result:
        result = self.state.crops.plant(x, y, crop_type, now=self.clock())
        if not result.ok:
            logger.debug("plant(%d, %d, %s) rejected: %s", x, y, crop_type, result.error.name)
        return result

    def harvest(self, x: int, y: int) -> Result:
        result = self.state.crops.harvest(x, y)
        if not result.ok:
            logger.debug("harvest(%d, %d) rejected: %s", x, y, result.error.name)
        return result

    def get_tile_state(self, x: int, y: int) -> CropTile | None:
        """A copy of the crop tile at ``(x, y)``, or None if not plantable."""
        tile = self.state.crops.tile_at(x, y)
        return replace(tile) if tile is not None else None

    # -- Buildings ---------------------------------------------------------

    def start_placement(self, building_type: BuildingType) -> Result:
        return self.state.yard.start_placement(building_type)

    def placement_preview(self, x: int, y: int) -> bool:
        """Whether the pending building would fit at ``(x, y)``."""
        return self.state.yard.placement_preview(x, y)

    def confirm_placement(self, x: int, y: int) -> Result:
        return self.state.yard.confirm_placement(x, y)

    def cancel_placement(self) -> None:
        self.state.yard.cancel_placement()

    def move_building(self, old_x: int, old_y: int, new_x: int, new_y: int) -> Result:
        return self.state.yard.move(old_x, old_y, new_x, new_y)

    def get_building_at(self, x: int, y: int) -> PlacedBuilding | None:
        """A copy of the building covering ``(x, y)``, if any."""
        building = self.state.yard.building_at(x, y)
        return replace(building) if building is not None else None

    # -- Economy -----------------------------------------------------------

    def collect_resources(self) -> Result:
        """Move whole units of production into the inventory."""
        collected = self.state.ledger.collect(self.state.inventory)
        if collected:
            logger.info(
                "Collected %s",
                ", ".join(f"{n} {res.value}" for res, n in collected.items()),
            )
        return Result.success(collected)

    def get_amount(self, resource: ResourceType) -> int:
        return self.state.inventory.get_amount(resource)

    # -- Time --------------------------------------------------------------

    def tick(self, delta: float) -> list[CropTile]:
        """Advance the simulation by ``delta`` seconds.

        Returns:
            Crop tiles that became ready during this tick.
        """
        self.state.ledger.advance(delta / 60.0)
        now = self.clock()
        ripened = self.state.crops.update(now)
        self.state.last_tick = now
        self.tick_count += 1
        return ripened

    def run(self, ticks: int, delta: float | None = None) -> None:
        """Run a fixed number of ticks back to back.

        Args:
            ticks: Number of ticks to advance.
            delta: Seconds per tick (defaults to ``config.tick_interval``).
        """
        step = self.config.tick_interval if delta is None else delta
        for _ in range(ticks):
            self.tick(step)

    # -- Persistence -------------------------------------------------------

    def save(self) -> PersistedSnapshot:
        return codec.capture(self.state)

    def load(self, snapshot: PersistedSnapshot | None) -> Result:
        """Replace the current state with ``snapshot`` plus offline catch-up.

        ``None`` means there is no save yet: the engine starts fresh and
        reports success.  A dimension mismatch or corrupt snapshot also
        starts fresh, but the error is returned so the caller can tell.
        """
        if snapshot is None:
            self.reset()
            return Result.success(self.state)
        result = codec.restore(snapshot, self.config, self.catalog, now=self.clock())
        if not result.ok:
            logger.warning("Discarding saved game (%s); starting fresh", result.error.name)
            self.reset()
            return result
        self.state = result.value
        return Result.success(self.state)

    def reset(self) -> None:
        """Throw away all state and start a brand-new farm."""
        self.state = FarmState.fresh(self.config, self.catalog, now=self.clock())

