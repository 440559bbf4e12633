from __future__ import annotations

"""Pure consistency checks over a finished (or partially generated) grid."""

from dataclasses import dataclass, field
from typing import Dict, List

from .features import feature_allowed
from .grid import HexGrid
from .hex import Feature, TerrainType
from .settings import MOUNTAIN_ELEVATION

TUNDRA_ON_LAND = "tundra_on_land"
LOW_MOUNTAIN = "low_mountain"
CORDILLERA_NEIGHBOR = "cordillera_neighbor"
CORDILLERA_ELEVATION = "cordillera_elevation"
ORPHAN_COAST = "orphan_coast"
FEATURE_MISMATCH = "feature_mismatch"


@dataclass
class Violation:
    kind: str
    coord: tuple
    detail: str = ""


@dataclass
class InvariantReport:
    violations: List[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def counts(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for v in self.violations:
            out[v.kind] = out.get(v.kind, 0) + 1
        return out

    def of_kind(self, kind: str) -> List[Violation]:
        return [v for v in self.violations if v.kind == kind]


def check_invariants(grid: HexGrid) -> InvariantReport:
    """Walk every tile once and collect all violations; never raises."""
    report = InvariantReport()
    add = report.violations.append

    for tile in grid.tiles():
        terrain = tile.terrain

        if terrain is TerrainType.TUNDRA and tile.continent is not None:
            add(Violation(TUNDRA_ON_LAND, tile.coord, tile.continent))

        if terrain is TerrainType.MOUNTAIN_RANGE:
            if tile.elevation < MOUNTAIN_ELEVATION:
                add(Violation(LOW_MOUNTAIN, tile.coord, f"elevation={tile.elevation:.2f}"))
            for n in grid.neighbors(tile):
                if not n.is_land or n.terrain is TerrainType.MOUNTAIN_RANGE:
                    continue
                if n.terrain is not TerrainType.HILLS and not n.has_feature(Feature.MOUNTAIN):
                    add(Violation(CORDILLERA_NEIGHBOR, n.coord, n.terrain.value))
                if n.elevation >= tile.elevation:
                    add(Violation(CORDILLERA_ELEVATION, n.coord, f"{n.elevation:.2f} >= {tile.elevation:.2f}"))

        if terrain is TerrainType.COAST:
            if not any(n.is_land for n in grid.neighbors(tile)):
                add(Violation(ORPHAN_COAST, tile.coord))

        for f in tile.features:
            if not feature_allowed(tile, f):
                add(Violation(FEATURE_MISMATCH, tile.coord, f"{f.value} on {terrain.value}"))

    return report


__all__ = [
    "CORDILLERA_ELEVATION",
    "CORDILLERA_NEIGHBOR",
    "FEATURE_MISMATCH",
    "InvariantReport",
    "LOW_MOUNTAIN",
    "ORPHAN_COAST",
    "TUNDRA_ON_LAND",
    "Violation",
    "check_invariants",
]
