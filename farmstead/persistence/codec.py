"""Codec — turn a FarmState into a snapshot and back.

Restoring replays buildings through the grid's normal ``place`` path,
reclaims planted crop cells, puts inventory values back verbatim, and lays
the saved production buckets over the configured ones (a resource missing
from the save starts empty at its configured rate).  It then applies the
offline catch-up for the time between the save and ``now``:

- production gets one ``advance`` for the whole gap;
- crop growth is recomputed from the saved planting timestamps.

A restore either produces a complete new FarmState or fails without
touching anything.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from farmstead.economy.inventory import Inventory
from farmstead.economy.production import ResourceProduction
from farmstead.farming.crop import CropState, CropTile
from farmstead.persistence.snapshot import (
    SNAPSHOT_VERSION,
    BuildingRecord,
    CropRecord,
    PersistedSnapshot,
    ProductionRecord,
)
from farmstead.simulation.results import ErrorKind, Result
from farmstead.simulation.state import FarmState

if TYPE_CHECKING:
    from farmstead.catalog.catalog import Catalog
    from farmstead.simulation.config import SimulationConfig

logger = logging.getLogger(__name__)


def capture(state: FarmState) -> PersistedSnapshot:
    """Snapshot ``state``, stamped with its last tick time."""
    return PersistedSnapshot(
        width=state.grid.width,
        height=state.grid.height,
        saved_at=state.last_tick,
        crops=[
            CropRecord(
                x=tile.x,
                y=tile.y,
                crop_type=tile.crop_type,
                crop_state=tile.state,
                growth_progress=tile.growth_progress,
                plant_time=tile.plant_time,
            )
            for tile in state.crops.tiles.values()
        ],
        buildings=[
            BuildingRecord(
                building_type=b.building_type,
                x=b.x,
                y=b.y,
                width=b.width,
                height=b.height,
            )
            for b in state.yard.buildings()
        ],
        productions=[
            ProductionRecord(
                resource_type=p.resource_type,
                rate_per_minute=p.rate_per_minute,
                max_capacity=p.max_capacity,
                current_amount=p.current_amount,
            )
            for p in state.ledger.entries()
        ],
        inventory=dict(state.inventory.balances),
    )


def restore(
    snapshot: PersistedSnapshot,
    config: SimulationConfig,
    catalog: Catalog,
    now: float,
) -> Result:
    """Rebuild a FarmState from ``snapshot`` and catch up to ``now``.

    Returns:
        Result carrying the new FarmState.  Fails with DIMENSION_MISMATCH
        if the saved grid size differs from the configured one, and with
        CORRUPT_SNAPSHOT for an unknown version or contents that cannot be
        replayed (overlaps, cells outside the field, unknown types).
    """
    if snapshot.version != SNAPSHOT_VERSION:
        logger.warning("Unsupported snapshot version %s", snapshot.version)
        return Result.failure(ErrorKind.CORRUPT_SNAPSHOT)
    if snapshot.width != config.grid_width or snapshot.height != config.grid_height:
        logger.warning(
            "Saved grid is %dx%d but the configured grid is %dx%d",
            snapshot.width,
            snapshot.height,
            config.grid_width,
            config.grid_height,
        )
        return Result.failure(ErrorKind.DIMENSION_MISMATCH)

    ledger = config.build_ledger()
    for record in snapshot.productions:
        ledger.track(
            ResourceProduction(
                resource_type=record.resource_type,
                rate_per_minute=record.rate_per_minute,
                max_capacity=record.max_capacity,
                current_amount=min(
                    float(record.max_capacity),
                    max(0.0, record.current_amount),
                ),
            ),
        )
    inventory = Inventory()
    for resource, amount in snapshot.inventory.items():
        if amount < 0:
            logger.warning("Negative saved balance for %s", resource.value)
            return Result.failure(ErrorKind.CORRUPT_SNAPSHOT)
        inventory.add_resource(resource, amount)

    state = FarmState.assemble(config, catalog, ledger, inventory, now=now)

    for building in snapshot.buildings:
        placed = state.yard.restore(
            building.building_type,
            building.x,
            building.y,
            building.width,
            building.height,
        )
        if not placed.ok:
            logger.warning(
                "Cannot replay %s at (%d, %d): %s",
                building.building_type.value,
                building.x,
                building.y,
                placed.error.name,
            )
            return Result.failure(ErrorKind.CORRUPT_SNAPSHOT)

    for record in snapshot.crops:
        planted = record.crop_state is not CropState.EMPTY
        if planted and catalog.crop(record.crop_type) is None:
            logger.warning("Unknown crop planted at (%d, %d)", record.x, record.y)
            return Result.failure(ErrorKind.CORRUPT_SNAPSHOT)
        tile = CropTile(
            x=record.x,
            y=record.y,
            crop_type=record.crop_type if planted else None,
            state=record.crop_state,
            growth_progress=record.growth_progress,
            plant_time=record.plant_time,
        )
        restored = state.crops.restore(tile)
        if not restored.ok:
            logger.warning(
                "Cannot replay crop tile at (%d, %d): %s",
                record.x,
                record.y,
                restored.error.name,
            )
            return Result.failure(ErrorKind.CORRUPT_SNAPSHOT)

    state.ledger.catch_up(snapshot.saved_at, now)
    state.crops.update(max(now, snapshot.saved_at))
    logger.info(
        "Restored %d buildings and %d planted tiles",
        len(snapshot.buildings),
        sum(1 for c in snapshot.crops if c.crop_state is not CropState.EMPTY),
    )
    return Result.success(state)
