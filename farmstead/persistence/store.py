"""SaveStore — keep a snapshot in a YAML file on disk.

A missing file means "first run".  A file that cannot be read or parsed is
reported and treated the same way, so a broken save never blocks startup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from farmstead.persistence.snapshot import PersistedSnapshot

logger = logging.getLogger(__name__)


@dataclass
class SaveStore:
    """A single save slot.

    Attributes:
        path: Location of the YAML save file.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def write(self, snapshot: PersistedSnapshot) -> None:
        """Write ``snapshot``, replacing any previous save atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w") as f:
            yaml.safe_dump(snapshot.to_dict(), f, sort_keys=False)
        tmp.replace(self.path)

    def read(self) -> PersistedSnapshot | None:
        """Return the saved snapshot, or None if there is no usable save."""
        if not self.path.exists():
            return None
        try:
            with self.path.open("r") as f:
                data = yaml.safe_load(f)
            if not isinstance(data, dict):
                msg = "save file does not contain a mapping"
                raise ValueError(msg)
            return PersistedSnapshot.from_dict(data)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            logger.warning("Ignoring unreadable save %s: %s", self.path, exc)
            return None

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)
