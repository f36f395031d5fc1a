"""ProductionLedger — passive resource production between collections.

Each tracked resource fills a bucket at ``rate_per_minute`` up to
``max_capacity``.  Collecting moves the whole units into the inventory and
keeps the fractional remainder, so sub-unit production is never lost.

Production depends only on elapsed minutes, so one large catch-up step
after the game was closed gives the same amount as many small ticks
(apart from capacity clamping).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from farmstead.catalog.types import ResourceType
    from farmstead.economy.inventory import Inventory

logger = logging.getLogger(__name__)


@dataclass
class ResourceProduction:
    """Production bucket for a single resource.

    Attributes:
        resource_type: Resource being produced.
        rate_per_minute: Units produced per minute.
        max_capacity: Upper bound on ``current_amount``.
        current_amount: Uncollected production (may be fractional).
    """

    resource_type: ResourceType
    rate_per_minute: float
    max_capacity: int
    current_amount: float = 0.0

    def advance(self, elapsed_minutes: float) -> None:
        """Accumulate production, clamped to ``[0, max_capacity]``."""
        amount = self.current_amount + self.rate_per_minute * elapsed_minutes
        self.current_amount = min(float(self.max_capacity), max(0.0, amount))


@dataclass
class ProductionLedger:
    """All production buckets, keyed by resource.

    Attributes:
        productions: One bucket per tracked resource.
    """

    productions: dict[ResourceType, ResourceProduction] = field(default_factory=dict)

    def track(self, production: ResourceProduction) -> None:
        """Register (or replace) the bucket for a resource."""
        self.productions[production.resource_type] = production

    def entries(self) -> Iterator[ResourceProduction]:
        return iter(self.productions.values())

    def advance(self, elapsed_minutes: float) -> None:
        """Apply one production update to every bucket.

        Args:
            elapsed_minutes: Minutes since the previous update.  Zero or
                negative values change nothing.
        """
        if elapsed_minutes <= 0:
            return
        for production in self.productions.values():
            production.advance(elapsed_minutes)

    def catch_up(self, last_wall_clock: float, now_wall_clock: float) -> float:
        """Apply production for the gap between two wall-clock readings.

        Args:
            last_wall_clock: Timestamp (seconds) of the last recorded update.
            now_wall_clock: Current timestamp (seconds).

        Returns:
            Minutes of production applied (0 if the clock went backwards).
        """
        minutes = (now_wall_clock - last_wall_clock) / 60.0
        if minutes <= 0:
            if minutes < 0:
                logger.warning(
                    "Clock moved backwards by %.1f minutes; skipping catch-up",
                    -minutes,
                )
            return 0.0
        self.advance(minutes)
        logger.info("Applied %.1f minutes of offline production", minutes)
        return minutes

    def collect(self, inventory: Inventory) -> dict[ResourceType, int]:
        """Move whole units of production into ``inventory``.

        Returns:
            Units collected per resource (resources with nothing whole to
            collect are omitted).
        """
        collected: dict[ResourceType, int] = {}
        for production in self.productions.values():
            whole = math.floor(production.current_amount)
            if whole <= 0:
                continue
            inventory.add_resource(production.resource_type, whole)
            production.current_amount = max(0.0, production.current_amount - whole)
            collected[production.resource_type] = whole
        return collected

    def set_production_rate(self, resource: ResourceType, rate: float) -> bool:
        production = self.productions.get(resource)
        if production is None:
            logger.warning("No production found for resource type: %s", resource.value)
            return False
        production.rate_per_minute = rate
        return True

    def set_max_capacity(self, resource: ResourceType, capacity: int) -> bool:
        production = self.productions.get(resource)
        if production is None:
            logger.warning("No production found for resource type: %s", resource.value)
            return False
        production.max_capacity = capacity
        production.current_amount = min(production.current_amount, float(capacity))
        return True

    def apply_boosts(self, boosts: Mapping[ResourceType, int]) -> None:
        """Add percentage boosts to production rates (10% adds 0.1/min)."""
        for resource, percent in boosts.items():
            rate = self.get_production_rate(resource) + percent / 100.0
            if self.set_production_rate(resource, rate):
                logger.info("Applied %d%% production boost to %s", percent, resource.value)

    def get_current_amount(self, resource: ResourceType) -> float:
        production = self.productions.get(resource)
        return production.current_amount if production is not None else 0.0

    def get_production_rate(self, resource: ResourceType) -> float:
        production = self.productions.get(resource)
        return production.rate_per_minute if production is not None else 0.0

    def get_max_capacity(self, resource: ResourceType) -> int:
        production = self.productions.get(resource)
        return production.max_capacity if production is not None else 0
