from __future__ import annotations

"""Map layout dataclasses and the tuning constants used by the generation passes."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Mountain tiles never sit below this elevation.
MOUNTAIN_ELEVATION = 6

# Months per year on this world.
MONTHS_PER_YEAR = 14

# Latitude bands (degrees).
EQUATORIAL_LATITUDE = 10
ICE_CAP_LATITUDE = 88
POLAR_TUNDRA_LATITUDE = 76

# Share of land tiles turned into desert, split across both continents.
DESERT_LAND_FRACTION = 0.2

# Jungle core around the Drantium desert offset.
JUNGLE_RADIUS = 30
JUNGLE_PROMOTION_CHANCE = 0.8

# Brontium tundra replacement rings.
TUNDRA_CORE_RADIUS = 15
TUNDRA_OUTER_RADIUS = 25

# Volcano placement.
VOLCANO_TARGET = 100
VOLCANO_MAX_DRAWS = 2000

# Mountain arc sweep.
ARC_POINTS = 50
ARC_THICKNESS = 3

# Cleanup loop limits.
CLEANUP_ROUNDS = 3
DESERT_COMPACTION_PASSES = 3
SMOOTHING_PASSES = 2

# Island spacing.
ISLAND_MIN_CONTINENT_DISTANCE = 40
ISLAND_MIN_ISLAND_DISTANCE = 10
ISLAND_ATTEMPTS_PER_ISLAND = 100


@dataclass
class ContinentConfig:
    """Elliptical land mass plus the offset of its desert/mountain core."""

    name: str
    center: Tuple[int, int]
    width: int
    height: int
    desert_offset: Tuple[int, int] = (0, 0)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Continent {self.name!r} must have positive size.")

    @property
    def desert_center(self) -> Tuple[int, int]:
        return self.center[0] + self.desert_offset[0], self.center[1] + self.desert_offset[1]


@dataclass
class IslandConfig:
    center: Tuple[int, int]
    island_type: str


@dataclass
class IslandGroup:
    """How many islands of one type to scatter and where they may go."""

    island_type: str
    count: int
    lat_range: Optional[Tuple[float, float]] = None
    side: Optional[str] = None  # "east" / "west"
    min_dist_from_equator: Optional[float] = None
    min_dist_from_poles: Optional[float] = None


@dataclass
class MapConfig:
    width: int = 420
    height: int = 220
    km_per_hex: int = 100
    continents: List[ContinentConfig] = field(default_factory=list)
    island_groups: List[IslandGroup] = field(default_factory=list)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Map dimensions must be positive.")

    def continent(self, name: str) -> Optional[ContinentConfig]:
        for c in self.continents:
            if c.name == name:
                return c
        return None

    @classmethod
    def earth(cls) -> "MapConfig":
        """Default Earth-sized layout: two continents and 160 islands."""
        return cls(
            width=420,
            height=220,
            km_per_hex=100,
            continents=[
                ContinentConfig("drantium", (-70, -17), 70, 70, desert_offset=(20, 27)),
                ContinentConfig("brontium", (70, 0), 70, 70, desert_offset=(-20, 15)),
            ],
            island_groups=[
                IslandGroup("tundra", 40, lat_range=(70, 88), min_dist_from_equator=70),
                IslandGroup("jungle", 40, lat_range=(-20, 20), side="west", min_dist_from_poles=50),
                IslandGroup("forest", 40, lat_range=(30, 60), side="east", min_dist_from_poles=35),
                IslandGroup("mountain_range", 40, min_dist_from_poles=20),
            ],
        )


__all__ = [
    "ARC_POINTS",
    "ARC_THICKNESS",
    "CLEANUP_ROUNDS",
    "ContinentConfig",
    "DESERT_COMPACTION_PASSES",
    "DESERT_LAND_FRACTION",
    "EQUATORIAL_LATITUDE",
    "ICE_CAP_LATITUDE",
    "ISLAND_ATTEMPTS_PER_ISLAND",
    "ISLAND_MIN_CONTINENT_DISTANCE",
    "ISLAND_MIN_ISLAND_DISTANCE",
    "IslandConfig",
    "IslandGroup",
    "JUNGLE_PROMOTION_CHANCE",
    "JUNGLE_RADIUS",
    "MONTHS_PER_YEAR",
    "MOUNTAIN_ELEVATION",
    "MapConfig",
    "POLAR_TUNDRA_LATITUDE",
    "SMOOTHING_PASSES",
    "TUNDRA_CORE_RADIUS",
    "TUNDRA_OUTER_RADIUS",
    "VOLCANO_MAX_DRAWS",
    "VOLCANO_TARGET",
]
