"""CropTile and the pure growth functions.

Growth is never accumulated tick by tick.  Progress is always recomputed
from the absolute planting timestamp, so a tile looks the same whether the
game ticked every second, skipped ticks, or was closed for a week.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from farmstead.catalog.types import CropType

# Progress below this is SEEDED; from here up to (not including) 1.0 is GROWING.
GROWING_THRESHOLD = 0.33


class CropState(Enum):
    """Lifecycle stage of a crop tile."""

    EMPTY = "empty"
    SEEDED = "seeded"
    GROWING = "growing"
    READY = "ready"


@dataclass
class CropTile:
    """One plantable cell.

    Attributes:
        x: Column position.
        y: Row position.
        crop_type: What is planted, or None.
        state: Current lifecycle stage.
        growth_progress: 0.0 (just planted) to 1.0 (ready).
        plant_time: Wall-clock seconds when the crop was planted.
    """

    x: int
    y: int
    crop_type: CropType | None = None
    state: CropState = CropState.EMPTY
    growth_progress: float = 0.0
    plant_time: float = 0.0

    @property
    def is_planted(self) -> bool:
        return self.state is not CropState.EMPTY

    def reset(self) -> None:
        """Return to the never-planted state."""
        self.crop_type = None
        self.state = CropState.EMPTY
        self.growth_progress = 0.0
        self.plant_time = 0.0


def growth_progress(plant_time: float, now: float, growth_time_minutes: float) -> float:
    """Fraction of growth completed at ``now``, clamped to ``[0, 1]``.

    A crop with no growth time is ready immediately; a ``now`` earlier than
    ``plant_time`` (clock skew) counts as no growth.
    """
    total = growth_time_minutes * 60.0
    if total <= 0:
        return 1.0
    return min(1.0, max(0.0, (now - plant_time) / total))


def state_for_progress(progress: float) -> CropState:
    """Map growth progress to the SEEDED / GROWING / READY stage."""
    if progress < GROWING_THRESHOLD:
        return CropState.SEEDED
    if progress < 1.0:
        return CropState.GROWING
    return CropState.READY
