"""Result values returned by every engine operation.

Expected failures (a full cell, too few coins, an unripe crop) are not
exceptions: operations return a ``Result`` and the caller decides what to
show the player.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ErrorKind(Enum):
    """Typed failure reasons."""

    OUT_OF_BOUNDS = auto()
    CELL_OCCUPIED = auto()
    CELL_NOT_EMPTY = auto()
    NOT_PLANTABLE = auto()
    INSUFFICIENT_RESOURCES = auto()
    UNKNOWN_CATALOG_ENTRY = auto()
    NOT_READY = auto()
    DIMENSION_MISMATCH = auto()
    UNKNOWN_OCCUPANT = auto()
    NO_PLACEMENT_ACTIVE = auto()
    CORRUPT_SNAPSHOT = auto()


@dataclass(frozen=True)
class Result:
    """Outcome of an operation.

    Attributes:
        error: Failure reason, or None on success.
        value: Success payload (operation specific, may be None).
    """

    error: ErrorKind | None = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> Result:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> Result:
        return cls(error=error)
