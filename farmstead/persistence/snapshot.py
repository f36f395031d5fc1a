"""PersistedSnapshot — the saved-game record and its dict form.

The grid itself is never saved.  It is rebuilt on load from the crop and
building lists.  ``to_dict`` produces plain YAML/JSON-safe data (enum
members become their lower-case names); ``from_dict`` reverses it and
raises ``ValueError`` for anything malformed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from farmstead.catalog.types import BuildingType, CropType, ResourceType, parse_enum
from farmstead.farming.crop import CropState

SNAPSHOT_VERSION = 1


@dataclass
class CropRecord:
    x: int
    y: int
    crop_type: CropType | None
    crop_state: CropState
    growth_progress: float
    plant_time: float


@dataclass
class BuildingRecord:
    building_type: BuildingType
    x: int
    y: int
    width: int
    height: int


@dataclass
class ProductionRecord:
    resource_type: ResourceType
    rate_per_minute: float
    max_capacity: int
    current_amount: float


@dataclass
class PersistedSnapshot:
    """Everything needed to reproduce a game after a restart.

    Attributes:
        width: Grid columns when saved.
        height: Grid rows when saved.
        saved_at: Wall-clock seconds of the last tick before saving.
        crops: Every crop tile, planted or not.
        buildings: Every placed building.
        productions: Production ledger buckets.
        inventory: Balances keyed by resource.
        version: Snapshot format version.
    """

    width: int
    height: int
    saved_at: float
    crops: list[CropRecord] = field(default_factory=list)
    buildings: list[BuildingRecord] = field(default_factory=list)
    productions: list[ProductionRecord] = field(default_factory=list)
    inventory: dict[ResourceType, int] = field(default_factory=dict)
    version: int = SNAPSHOT_VERSION

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for crop in data["crops"]:
            crop["crop_type"] = crop["crop_type"].value if crop["crop_type"] else None
            crop["crop_state"] = crop["crop_state"].value
        for building in data["buildings"]:
            building["building_type"] = building["building_type"].value
        for production in data["productions"]:
            production["resource_type"] = production["resource_type"].value
        data["inventory"] = {res.value: amount for res, amount in self.inventory.items()}
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PersistedSnapshot:
        """Parse ``to_dict`` output.

        Raises:
            ValueError: If a field is missing, has the wrong type, or names
                an unknown crop, building, state, or resource.
        """
        try:
            crops = [
                CropRecord(
                    x=int(c["x"]),
                    y=int(c["y"]),
                    crop_type=parse_enum(CropType, c["crop_type"]) if c["crop_type"] else None,
                    crop_state=parse_enum(CropState, c["crop_state"]),
                    growth_progress=float(c["growth_progress"]),
                    plant_time=float(c["plant_time"]),
                )
                for c in data.get("crops") or []
            ]
            buildings = [
                BuildingRecord(
                    building_type=parse_enum(BuildingType, b["building_type"]),
                    x=int(b["x"]),
                    y=int(b["y"]),
                    width=int(b["width"]),
                    height=int(b["height"]),
                )
                for b in data.get("buildings") or []
            ]
            productions = [
                ProductionRecord(
                    resource_type=parse_enum(ResourceType, p["resource_type"]),
                    rate_per_minute=float(p["rate_per_minute"]),
                    max_capacity=int(p["max_capacity"]),
                    current_amount=float(p["current_amount"]),
                )
                for p in data.get("productions") or []
            ]
            inventory = {
                parse_enum(ResourceType, name): int(amount)
                for name, amount in (data.get("inventory") or {}).items()
            }
            return cls(
                width=int(data["width"]),
                height=int(data["height"]),
                saved_at=float(data["saved_at"]),
                crops=crops,
                buildings=buildings,
                productions=productions,
                inventory=inventory,
                version=int(data.get("version", SNAPSHOT_VERSION)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            msg = f"malformed snapshot: {exc}"
            raise ValueError(msg) from exc
