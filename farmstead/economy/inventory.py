"""Inventory — the player's collected resources, coin included."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from farmstead.catalog.types import ResourceType, parse_enum


@dataclass
class Inventory:
    """Integer balances keyed by resource type.

    Balances only change through ``add_resource`` and ``use_resource``;
    no operation can leave a balance below zero.

    Attributes:
        balances: Current amount per resource.  Missing keys mean 0.
    """

    balances: dict[ResourceType, int] = field(default_factory=dict)

    def add_resource(self, resource: ResourceType, amount: int) -> None:
        """Credit ``amount`` units.  There is no upper bound.

        Raises:
            ValueError: If ``amount`` is negative.
        """
        if amount < 0:
            msg = f"cannot add a negative amount ({amount}) of {resource.value}"
            raise ValueError(msg)
        self.balances[resource] = self.balances.get(resource, 0) + int(amount)

    def has_resource(self, resource: ResourceType, amount: int) -> bool:
        return self.balances.get(resource, 0) >= amount

    def use_resource(self, resource: ResourceType, amount: int) -> bool:
        """Deduct ``amount`` units if the balance covers it.

        Returns:
            True if deducted, False (and nothing changed) otherwise.
        """
        if amount < 0 or not self.has_resource(resource, amount):
            return False
        self.balances[resource] = self.balances.get(resource, 0) - amount
        return True

    def get_amount(self, resource: ResourceType) -> int:
        return self.balances.get(resource, 0)

    def as_dict(self) -> dict[str, int]:
        """Return balances keyed by resource name, for saving."""
        return {res.value: amount for res, amount in self.balances.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> Inventory:
        """Rebuild an inventory from ``as_dict`` output or a YAML block.

        Raises:
            KeyError: If a resource name is unknown.
            ValueError: If an amount is negative.
        """
        inventory = cls()
        for name, amount in data.items():
            inventory.add_resource(parse_enum(ResourceType, name), int(amount))
        return inventory
