"""Config — load simulation parameters from YAML files.

Grid size, the farm field, tick interval, starting inventory, the default
production ledger and (optionally) the whole catalog live in YAML and are
parsed into typed dataclasses here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from farmstead.catalog.catalog import Catalog
from farmstead.catalog.types import ResourceType, parse_enum
from farmstead.economy.inventory import Inventory
from farmstead.economy.production import ProductionLedger, ResourceProduction
from farmstead.world.occupant import Footprint


def _default_inventory() -> dict[str, int]:
    return {"coin": 100, "wheat": 10}


def _default_productions() -> list[dict[str, Any]]:
    return [
        {"resource": "wheat", "rate_per_minute": 1.0, "max_capacity": 100},
        {"resource": "corn", "rate_per_minute": 0.5, "max_capacity": 50},
    ]


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        field_x: Left column of the plantable farm field.
        field_y: Top row of the plantable farm field.
        field_width: Columns in the farm field (None = to the grid edge).
        field_height: Rows in the farm field (None = to the grid edge).
        tick_interval: Seconds between scheduled ticks.
        starting_inventory: Balances for a brand-new game, by resource name.
        productions: Default production ledger entries.
        catalog: Optional catalog override (see ``Catalog.from_mapping``).
    """

    grid_width: int = 10
    grid_height: int = 10
    field_x: int = 0
    field_y: int = 0
    field_width: int | None = None
    field_height: int | None = None
    tick_interval: float = 10.0

    starting_inventory: dict[str, int] = field(default_factory=_default_inventory)
    productions: list[dict[str, Any]] = field(default_factory=_default_productions)
    catalog: dict[str, Any] = field(default_factory=dict)

    @property
    def farm_field(self) -> Footprint:
        """The plantable rectangle, defaulting to the rest of the grid."""
        width = self.field_width
        if width is None:
            width = self.grid_width - self.field_x
        height = self.field_height
        if height is None:
            height = self.grid_height - self.field_y
        return Footprint(x=self.field_x, y=self.field_y, width=width, height=height)

    def build_catalog(self) -> Catalog:
        """The configured catalog, or the built-in one if none is given."""
        if not self.catalog:
            return Catalog.default()
        return Catalog.from_mapping(self.catalog)

    def build_inventory(self) -> Inventory:
        return Inventory.from_dict(self.starting_inventory)

    def build_ledger(self) -> ProductionLedger:
        """A fresh ledger with every configured bucket empty."""
        ledger = ProductionLedger()
        for raw in self.productions:
            ledger.track(
                ResourceProduction(
                    resource_type=parse_enum(ResourceType, raw["resource"]),
                    rate_per_minute=float(raw["rate_per_minute"]),
                    max_capacity=int(raw["max_capacity"]),
                ),
            )
        return ledger

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            grid_width=data.get("grid_width", cls.grid_width),
            grid_height=data.get("grid_height", cls.grid_height),
            field_x=data.get("field_x", cls.field_x),
            field_y=data.get("field_y", cls.field_y),
            field_width=data.get("field_width", cls.field_width),
            field_height=data.get("field_height", cls.field_height),
            tick_interval=data.get("tick_interval", cls.tick_interval),
            starting_inventory=data.get(
                "starting_inventory",
                _default_inventory(),
            ),
            productions=data.get("productions", _default_productions()),
            catalog=data.get("catalog") or {},
        )
