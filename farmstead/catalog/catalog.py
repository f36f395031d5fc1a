"""Catalog — immutable crop and building definitions.

The catalog is built once at startup (either the built-in defaults or the
``catalog`` block of the YAML config) and only read afterwards.  Entries
are frozen dataclasses; building boosts are exposed as read-only mappings.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from farmstead.catalog.types import (
    BuildingType,
    CropType,
    ResourceType,
    parse_enum,
)


@dataclass(frozen=True)
class CropEntry:
    """Static definition of a crop.

    Attributes:
        crop_type: Type id.
        name: Display name.
        growth_time_minutes: Minutes from planting until ready.
        seed_cost: Coin deducted when planting.
        harvest_yield: Units credited on harvest.
        resource_type: Resource the harvest is credited as.
    """

    crop_type: CropType
    name: str
    growth_time_minutes: float
    seed_cost: int
    harvest_yield: int
    resource_type: ResourceType

    @property
    def growth_time_seconds(self) -> float:
        """Total growth time in seconds."""
        return self.growth_time_minutes * 60.0


@dataclass(frozen=True)
class BuildingEntry:
    """Static definition of a building.

    Attributes:
        building_type: Type id.
        name: Display name.
        width: Footprint columns.
        height: Footprint rows.
        cost: Coin deducted on placement.
        production_boosts: Percent added to each resource's production
            rate when the building is placed.
    """

    building_type: BuildingType
    name: str
    width: int
    height: int
    cost: int
    production_boosts: Mapping[ResourceType, int] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def __post_init__(self) -> None:
        """Reject empty footprints and freeze the boost mapping."""
        if self.width <= 0 or self.height <= 0:
            msg = f"{self.name}: footprint must be positive, got {self.width}x{self.height}"
            raise ValueError(msg)
        object.__setattr__(
            self,
            "production_boosts",
            MappingProxyType(dict(self.production_boosts)),
        )


class Catalog:
    """Read-only registry of crop and building definitions."""

    def __init__(
        self,
        crops: list[CropEntry],
        buildings: list[BuildingEntry],
    ) -> None:
        self._crops: dict[CropType, CropEntry] = {c.crop_type: c for c in crops}
        self._buildings: dict[BuildingType, BuildingEntry] = {
            b.building_type: b for b in buildings
        }

    def crop(self, crop_type: CropType | None) -> CropEntry | None:
        """Return the entry for ``crop_type``, or None if unregistered."""
        if crop_type is None:
            return None
        return self._crops.get(crop_type)

    def building(self, building_type: BuildingType | None) -> BuildingEntry | None:
        """Return the entry for ``building_type``, or None if unregistered."""
        if building_type is None:
            return None
        return self._buildings.get(building_type)

    def crops(self) -> Iterator[CropEntry]:
        return iter(self._crops.values())

    def buildings(self) -> Iterator[BuildingEntry]:
        return iter(self._buildings.values())

    @classmethod
    def default(cls) -> Catalog:
        """Return the built-in catalog (two crops, three buildings)."""
        return cls(
            crops=[
                CropEntry(
                    crop_type=CropType.WHEAT,
                    name="Wheat",
                    growth_time_minutes=2,
                    seed_cost=5,
                    harvest_yield=15,
                    resource_type=ResourceType.WHEAT,
                ),
                CropEntry(
                    crop_type=CropType.CORN,
                    name="Corn",
                    growth_time_minutes=5,
                    seed_cost=10,
                    harvest_yield=25,
                    resource_type=ResourceType.CORN,
                ),
            ],
            buildings=[
                BuildingEntry(
                    building_type=BuildingType.BARN,
                    name="Barn",
                    width=2,
                    height=2,
                    cost=100,
                    production_boosts={ResourceType.WHEAT: 10},
                ),
                BuildingEntry(
                    building_type=BuildingType.SILO,
                    name="Silo",
                    width=1,
                    height=2,
                    cost=75,
                    production_boosts={ResourceType.CORN: 5},
                ),
                BuildingEntry(
                    building_type=BuildingType.MILL,
                    name="Mill",
                    width=2,
                    height=1,
                    cost=150,
                    production_boosts={
                        ResourceType.WHEAT: 5,
                        ResourceType.CORN: 5,
                    },
                ),
            ],
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Catalog:
        """Build a catalog from the ``catalog`` block of a YAML config.

        Expected shape::

            crops:
              wheat: {name: Wheat, growth_time_minutes: 2, seed_cost: 5,
                      harvest_yield: 15, resource: wheat}
            buildings:
              barn: {name: Barn, width: 2, height: 2, cost: 100,
                     boosts: {wheat: 10}}

        Args:
            data: Parsed YAML mapping.

        Raises:
            KeyError: If a type or resource name is unknown.
        """
        crops = []
        for key, raw in (data.get("crops") or {}).items():
            crop_type = parse_enum(CropType, key)
            crops.append(
                CropEntry(
                    crop_type=crop_type,
                    name=raw.get("name", crop_type.name.title()),
                    growth_time_minutes=float(raw["growth_time_minutes"]),
                    seed_cost=int(raw["seed_cost"]),
                    harvest_yield=int(raw["harvest_yield"]),
                    resource_type=parse_enum(
                        ResourceType,
                        raw.get("resource", crop_type.value),
                    ),
                ),
            )

        buildings = []
        for key, raw in (data.get("buildings") or {}).items():
            building_type = parse_enum(BuildingType, key)
            boosts = {
                parse_enum(ResourceType, name): int(percent)
                for name, percent in (raw.get("boosts") or {}).items()
            }
            buildings.append(
                BuildingEntry(
                    building_type=building_type,
                    name=raw.get("name", building_type.name.title()),
                    width=int(raw["width"]),
                    height=int(raw["height"]),
                    cost=int(raw["cost"]),
                    production_boosts=boosts,
                ),
            )
        return cls(crops=crops, buildings=buildings)
