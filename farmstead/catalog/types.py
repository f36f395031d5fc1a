"""Type ids shared by the catalog, the economy, and saved games.

Every crop, building, and resource is referenced by an enum member.  Saved
games and YAML files use the lower-case member name.
"""

from __future__ import annotations

from enum import Enum


class ResourceType(Enum):
    """Things the player can own."""

    COIN = "coin"
    WHEAT = "wheat"
    CORN = "corn"


class CropType(Enum):
    """Plantable crops.  An unplanted tile has no crop type (``None``)."""

    WHEAT = "wheat"
    CORN = "corn"


class BuildingType(Enum):
    """Placeable multi-cell buildings."""

    BARN = "barn"
    SILO = "silo"
    MILL = "mill"


def parse_enum(enum_cls: type[Enum], name: str) -> Enum:
    """Look up an enum member by its name or value, case-insensitively.

    Args:
        enum_cls: The enum to search.
        name: Member name (``"WHEAT"``) or value (``"wheat"``).

    Raises:
        KeyError: If nothing matches.
    """
    key = str(name).strip().lower()
    for member in enum_cls:
        if member.value == key or member.name.lower() == key:
            return member
    msg = f"unknown {enum_cls.__name__}: {name!r}"
    raise KeyError(msg)
