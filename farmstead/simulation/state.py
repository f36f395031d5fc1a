"""FarmState — every piece of mutable simulation state, in one object.

The engine owns exactly one FarmState at a time.  Loading a saved game
builds a complete new FarmState on the side and swaps it in only if the
whole restore succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from farmstead.buildings.yard import BuildingYard
from farmstead.farming.field import CropField
from farmstead.world.grid import PlacementGrid

if TYPE_CHECKING:
    from farmstead.catalog.catalog import Catalog
    from farmstead.economy.inventory import Inventory
    from farmstead.economy.production import ProductionLedger
    from farmstead.simulation.config import SimulationConfig


@dataclass
class FarmState:
    """Grid, crops, buildings, production, and inventory.

    Attributes:
        grid: Shared occupancy grid.
        crops: Farm field crop tiles.
        yard: Placed buildings.
        ledger: Passive production buckets.
        inventory: Collected resources and coin.
        last_tick: Wall-clock seconds of the last tick (or load).
    """

    grid: PlacementGrid
    crops: CropField
    yard: BuildingYard
    ledger: ProductionLedger
    inventory: Inventory
    last_tick: float

    @classmethod
    def assemble(
        cls,
        config: SimulationConfig,
        catalog: Catalog,
        ledger: ProductionLedger,
        inventory: Inventory,
        now: float,
    ) -> FarmState:
        """Wire an empty grid, field, and yard around ``ledger`` and ``inventory``."""
        grid = PlacementGrid(width=config.grid_width, height=config.grid_height)
        crops = CropField(
            grid=grid,
            catalog=catalog,
            inventory=inventory,
            area=config.farm_field,
        )
        yard = BuildingYard(
            grid=grid,
            catalog=catalog,
            inventory=inventory,
            ledger=ledger,
        )
        return cls(
            grid=grid,
            crops=crops,
            yard=yard,
            ledger=ledger,
            inventory=inventory,
            last_tick=now,
        )

    @classmethod
    def fresh(cls, config: SimulationConfig, catalog: Catalog, now: float) -> FarmState:
        """A first-run state: empty grid, default ledger, starting inventory."""
        return cls.assemble(
            config,
            catalog,
            ledger=config.build_ledger(),
            inventory=config.build_inventory(),
            now=now,
        )
