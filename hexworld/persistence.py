from __future__ import annotations

import json
import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .features import prune_features
from .grid import HexGrid
from .hex import Feature, TerrainType, terrain_from_name
from .passes import derive_coast

logger = logging.getLogger("hexworld.persistence")
logger.addHandler(logging.NullHandler())


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------
MODIFICATIONS_FILE: Path = Path("terrain_modifications.json")


# -----------------------------------------------------------------------------
# Custom Exceptions
# -----------------------------------------------------------------------------
class ModificationSaveError(Exception):
    """Exception raised when saving terrain modifications fails."""


class ModificationLoadError(Exception):
    """Exception raised when loading terrain modifications fails."""


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------
@dataclass
class TerrainModification:
    """One manual terrain edit, replayable on a freshly generated grid."""

    q: int
    r: int
    terrain: TerrainType
    features: Optional[List[Feature]] = None
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"q": self.q, "r": self.r, "terrain": self.terrain.value, "timestamp": self.timestamp}
        if self.features is not None:
            data["features"] = [f.value for f in self.features]
        return data

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TerrainModification":
        """Raises ValueError / TypeError / KeyError on malformed input."""
        q, r = raw["q"], raw["r"]
        if not isinstance(q, int) or not isinstance(r, int) or isinstance(q, bool) or isinstance(r, bool):
            raise TypeError(f"q and r must be integers, got {q!r}, {r!r}")
        terrain = raw["terrain"]
        if not isinstance(terrain, str):
            raise TypeError(f"terrain must be a string, got {terrain!r}")
        features = raw.get("features")
        parsed_features = None
        if features is not None:
            parsed_features = [Feature(f) for f in features]
        return cls(
            q=q,
            r=r,
            terrain=terrain_from_name(terrain),
            features=parsed_features,
            timestamp=float(raw.get("timestamp", 0.0)),
        )


# -----------------------------------------------------------------------------
# Save / Load
# -----------------------------------------------------------------------------
def save_modifications(mods: List[TerrainModification], *, file_path: Optional[Path] = None) -> None:
    """
    Persist modifications atomically (temp file, then move).

    Raises:
        ModificationSaveError: if writing or renaming fails.
    """
    path = Path(file_path or MODIFICATIONS_FILE)
    temp_file = path.with_suffix(".json.tmp")
    data = [m.to_dict() for m in mods]

    try:
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise ModificationSaveError(f"Failed to write temporary modifications file: {e}") from e

    try:
        shutil.move(str(temp_file), str(path))
    except OSError as e:
        try:
            temp_file.unlink(missing_ok=True)
        except OSError:
            pass
        raise ModificationSaveError(f"Failed to move temporary modifications file into place: {e}") from e


def load_modifications(*, file_path: Optional[Path] = None) -> List[TerrainModification]:
    """
    Read saved modifications. A missing file yields an empty list; malformed
    entries are skipped with a warning.

    Raises:
        ModificationLoadError: if the file cannot be read, is not JSON, or is not a list.
    """
    path = Path(file_path or MODIFICATIONS_FILE)
    if not path.exists():
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ModificationLoadError(f"Failed to read or parse modifications file: {e}") from e

    if not isinstance(raw, list):
        raise ModificationLoadError("Modifications file must contain a JSON list.")

    mods: List[TerrainModification] = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning("Skipping invalid modification entry: %r", entry)
            continue
        try:
            mods.append(TerrainModification.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping invalid modification entry %r: %s", entry, e)
    return mods


def record_modification(
    q: int,
    r: int,
    terrain: Union[TerrainType, str],
    features: Optional[List[Feature]] = None,
    *,
    file_path: Optional[Path] = None,
) -> TerrainModification:
    """Add or replace the saved edit for (q, r)."""
    if not isinstance(terrain, TerrainType):
        terrain = terrain_from_name(terrain)
    mods = [m for m in load_modifications(file_path=file_path) if (m.q, m.r) != (q, r)]
    mod = TerrainModification(q=q, r=r, terrain=terrain, features=features)
    mods.append(mod)
    save_modifications(mods, file_path=file_path)
    return mod


def clear_modifications(*, file_path: Optional[Path] = None) -> None:
    path = Path(file_path or MODIFICATIONS_FILE)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise ModificationSaveError(f"Failed to remove modifications file: {e}") from e


def apply_modifications(grid: HexGrid, mods: List[TerrainModification]) -> int:
    """Replay saved edits onto ``grid``; returns how many tiles were changed."""
    changed = 0
    for mod in mods:
        tile = grid.get(mod.q, mod.r)
        if tile is None:
            logger.debug("Modification at (%d, %d) is outside the grid; skipping", mod.q, mod.r)
            continue
        tile.terrain = mod.terrain
        if mod.features is not None:
            tile.features = set(mod.features)
            tile.river = Feature.RIVER in tile.features
        changed += 1
    if changed:
        prune_features(grid)
        derive_coast(grid)
    return changed


__all__ = [
    "MODIFICATIONS_FILE",
    "ModificationLoadError",
    "ModificationSaveError",
    "TerrainModification",
    "apply_modifications",
    "clear_modifications",
    "load_modifications",
    "record_modification",
    "save_modifications",
]
