from __future__ import annotations

"""
Data model for a single world hex tile: terrain classification, layered
feature tags, climate values and the season/hemisphere display fields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple, Union

Coordinate = Tuple[int, int]


class TerrainType(Enum):
    OCEAN = "ocean"
    COAST = "coast"
    ICE = "ice"
    PLAINS = "plains"
    MEADOW = "meadow"
    HILLS = "hills"
    MOUNTAIN_RANGE = "mountain_range"
    TUNDRA = "tundra"
    DESERT = "desert"


class Feature(Enum):
    FOREST = "forest"
    JUNGLE = "jungle"
    BOREAL_FOREST = "boreal_forest"
    OASIS = "oasis"
    VOLCANO = "volcano"
    MOUNTAIN = "mountain"
    RIVER = "river"


class Hemisphere(Enum):
    NORTHERN = "northern"
    SOUTHERN = "southern"
    EQUATORIAL = "equatorial"


class Season(Enum):
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"


# Water never counts as land; ice is frozen ocean.
WATER_TERRAINS = frozenset({TerrainType.OCEAN, TerrainType.COAST})
NON_LAND_TERRAINS = frozenset({TerrainType.OCEAN, TerrainType.COAST, TerrainType.ICE})

_FEATURE_ORDER: Dict[Feature, int] = {f: i for i, f in enumerate(Feature)}


@dataclass
class Tile:
    """
    Represents a single hex tile in the world.

    Core Attributes:
      coord: Axial grid coordinate of this tile (q, r).
      terrain: One of TerrainType. Defaults to OCEAN.
      features: Feature tags layered on top of the terrain.
      elevation: 0 (sea level) to 10 (highest peaks).
      temperature: Degrees Celsius derived from latitude and elevation.
      rainfall: Percentage-like rainfall value; jungle cores can exceed 100.
      volcano: True if the tile is an active volcano.
      river: Convenience flag mirroring the RIVER feature.
      continent: Name of the continent (or island type) that produced the tile.
      latitude: Degrees, positive for northern latitudes.
      hemisphere: Hemisphere used for the season display.
      season: Season for the month the grid was generated for.
    """

    coord: Coordinate
    terrain: TerrainType = TerrainType.OCEAN
    features: Set[Feature] = field(default_factory=set)
    elevation: float = 0.0
    temperature: float = 0.0
    rainfall: float = 0.0
    volcano: bool = False
    river: bool = False
    continent: Optional[str] = None
    latitude: float = 0.0
    hemisphere: Hemisphere = Hemisphere.EQUATORIAL
    season: Season = Season.SUMMER
    index: int = field(default=-1, repr=False, compare=False)

    def __post_init__(self):
        if type(self.features) is not set:
            raise TypeError("`features` must be a plain set, not shared or a subclass.")
        if not isinstance(self.terrain, TerrainType):
            raise TypeError(f"terrain must be a TerrainType, not {type(self.terrain)}")
        if self.elevation < 0:
            raise ValueError("elevation cannot be negative.")

    @property
    def q(self) -> int:
        return self.coord[0]

    @property
    def r(self) -> int:
        return self.coord[1]

    @property
    def x(self) -> int:
        """Horizontal display coordinate (west to east)."""
        return self.coord[0]

    @property
    def y(self) -> int:
        """Vertical display coordinate (north to south)."""
        return self.coord[1]

    @property
    def key(self) -> str:
        return f"{self.coord[0]},{self.coord[1]}"

    @property
    def is_land(self) -> bool:
        """True for every terrain that is neither water nor ice."""
        return self.terrain not in NON_LAND_TERRAINS

    @property
    def is_water(self) -> bool:
        return self.terrain in WATER_TERRAINS

    def has_feature(self, feature: Feature) -> bool:
        return feature in self.features

    def add_feature(self, feature: Feature) -> None:
        self.features.add(feature)
        if feature is Feature.RIVER:
            self.river = True

    def discard_feature(self, feature: Feature) -> None:
        self.features.discard(feature)
        if feature is Feature.RIVER:
            self.river = False

    @property
    def feature_list(self) -> List[Feature]:
        """Features in declaration order, for stable output."""
        return sorted(self.features, key=_FEATURE_ORDER.__getitem__)

    def __repr__(self) -> str:
        base = f"Tile(coord={self.coord}, terrain={self.terrain.value}, elevation={self.elevation:.1f}"
        if self.features:
            base += ", features=[" + ", ".join(f.value for f in self.feature_list) + "]"
        if self.volcano:
            base += ", VOLCANO"
        if self.continent:
            base += f", continent={self.continent}"
        base += ")"
        return base

    def to_json(self) -> Dict[str, Union[str, float, bool, None, List[str], Dict[str, int]]]:
        """
        Serializes core attributes to a JSON-friendly dict.
        """
        return {
            "coord": {"q": self.coord[0], "r": self.coord[1]},
            "x": self.x,
            "y": self.y,
            "terrain": self.terrain.value,
            "features": [f.value for f in self.feature_list],
            "elevation": self.elevation,
            "temperature": self.temperature,
            "rainfall": self.rainfall,
            "volcano": self.volcano,
            "river": self.river,
            "continent": self.continent,
            "latitude": self.latitude,
            "hemisphere": self.hemisphere.value,
            "season": self.season.value,
        }


def terrain_from_name(name: str) -> TerrainType:
    """Case-insensitive terrain lookup. Raises ValueError if invalid."""
    name_lower = name.strip().lower()
    for t in TerrainType:
        if t.value == name_lower:
            return t
    valid = ", ".join(t.value for t in TerrainType)
    raise ValueError(f"Invalid terrain '{name}'. Valid values: {valid}")


__all__ = [
    "Coordinate",
    "Feature",
    "Hemisphere",
    "NON_LAND_TERRAINS",
    "Season",
    "TerrainType",
    "Tile",
    "WATER_TERRAINS",
    "terrain_from_name",
]
