from __future__ import annotations

"""
Base classification: island placement and the first per-tile pass that
assigns latitude, season, continent membership, elevation, climate and
starting terrain.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .grid import HexGrid, in_bounds, latitude_for_row, round_half_up
from .hex import Coordinate, TerrainType, Tile
from .prng import SeededRandom
from .seasons import hemisphere_for, season_for
from .settings import (
    ICE_CAP_LATITUDE,
    ISLAND_ATTEMPTS_PER_ISLAND,
    ISLAND_MIN_CONTINENT_DISTANCE,
    ISLAND_MIN_ISLAND_DISTANCE,
    MOUNTAIN_ELEVATION,
    POLAR_TUNDRA_LATITUDE,
    ContinentConfig,
    IslandConfig,
    IslandGroup,
    MapConfig,
)

# Island type tags, also used as the tile's ``continent`` value.
ISLAND_TUNDRA = "tundra"
ISLAND_JUNGLE = "jungle"
ISLAND_FOREST = "forest"
ISLAND_MOUNTAIN = "mountain_range"
ISLAND_DESERT = "desert"

DRANTIUM = "drantium"
BRONTIUM = "brontium"


@dataclass
class GenerationContext:
    """Shared state threaded through every pipeline stage."""

    grid: HexGrid
    config: MapConfig
    rng: SeededRandom
    month: int
    islands: List[IslandConfig] = field(default_factory=list)
    island_lookup: Dict[Coordinate, IslandConfig] = field(default_factory=dict)

    def continent(self, name: str) -> Optional[ContinentConfig]:
        return self.config.continent(name)


# ─────────────────────────────────────────────────────────────────────────────
# == ISLAND PLACEMENT ==

def _euclid(q: float, r: float, cq: float, cr: float) -> float:
    dq = q - cq
    dr = r - cr
    return math.sqrt(dq * dq + dr * dr)


def _too_close(q: int, r: int, config: MapConfig, islands: List[IslandConfig]) -> bool:
    if any(
        _euclid(q, r, c.center[0], c.center[1]) < ISLAND_MIN_CONTINENT_DISTANCE
        for c in config.continents
    ):
        return True
    return any(
        _euclid(q, r, i.center[0], i.center[1]) < ISLAND_MIN_ISLAND_DISTANCE for i in islands
    )


def place_island_group(
    islands: List[IslandConfig],
    group: IslandGroup,
    config: MapConfig,
    rng: SeededRandom,
) -> int:
    """
    Scatter up to ``group.count`` islands of one type, appending to ``islands``.

    Candidates are drawn uniformly (or inside the group's latitude band,
    mirrored to a random hemisphere) and rejected if they fall too close to a
    continent center, too close to an existing island, outside the map, or
    outside the group's pole/equator limits. Returns the number placed.
    """
    placed = 0
    attempts = group.count * ISLAND_ATTEMPTS_PER_ISLAND
    for _ in range(attempts):
        if placed >= group.count:
            break
        q = rng.int(-180, 180)
        r = rng.int(-90, 90)

        if group.lat_range is not None:
            lo, hi = group.lat_range
            target_r = rng.range(lo, hi) / 180 * config.height
            r = round_half_up(target_r * (1 if rng.next() > 0.5 else -1))

        if group.side == "east":
            q = abs(q)
        elif group.side == "west":
            q = -abs(q)

        if group.min_dist_from_poles is not None:
            pole_north = abs(r - config.height / 2)
            pole_south = abs(r + config.height / 2)
            if min(pole_north, pole_south) < group.min_dist_from_poles:
                continue

        if group.min_dist_from_equator is not None:
            if abs(r) < group.min_dist_from_equator / 180 * config.height:
                continue

        if _too_close(q, r, config, islands):
            continue
        if not in_bounds(q, r, config.width, config.height):
            continue

        islands.append(IslandConfig((q, r), group.island_type))
        placed += 1
    return placed


def build_island_lookup(islands: List[IslandConfig]) -> Dict[Coordinate, IslandConfig]:
    """Map every footprint coordinate (3x3 around each center) to its island; first island wins."""
    lookup: Dict[Coordinate, IslandConfig] = {}
    for island in islands:
        cq, cr = island.center
        for dq in (-1, 0, 1):
            for dr in (-1, 0, 1):
                lookup.setdefault((cq + dq, cr + dr), island)
    return lookup


# ─────────────────────────────────────────────────────────────────────────────
# == PER-TILE CLIMATE ==

def in_continent(q: int, r: int, continent: ContinentConfig, rng: SeededRandom) -> bool:
    """Elliptical membership test with a fresh noise factor per call."""
    dq = q - continent.center[0]
    dr = r - continent.center[1]
    normalized = (dq * dq) / ((continent.width / 2) ** 2) + (dr * dr) / ((continent.height / 2) ** 2)
    noise = rng.range(0.7, 1.3)
    return normalized * noise < 1


def base_elevation(
    q: int,
    r: int,
    continent: Optional[ContinentConfig],
    island: Optional[IslandConfig],
    rng: SeededRandom,
) -> float:
    if island is not None and island.island_type == ISLAND_MOUNTAIN:
        return rng.range(7, 10)
    if continent is not None:
        dist = _euclid(q, r, continent.center[0], continent.center[1])
        normalized = dist / (continent.width / 2)
        if normalized < 0.3:
            return rng.range(5, 8)
        if normalized < 0.6:
            return rng.range(2, 5)
        return rng.range(1, 3)
    return rng.range(1, 4)


def base_temperature(latitude: float, elevation: float) -> float:
    return 30 - abs(latitude) * 0.6 - elevation * 6


def base_rainfall(latitude: float, rng: SeededRandom) -> float:
    lat = abs(latitude)
    if lat < 20:
        return rng.range(60, 100)
    if lat < 40:
        return rng.range(20, 60)
    if lat < 60:
        return rng.range(40, 80)
    return rng.range(10, 40)


def _hills_or_meadow(elevation: float, threshold: float) -> TerrainType:
    return TerrainType.HILLS if elevation >= threshold else TerrainType.MEADOW


def classify_terrain(
    latitude: float,
    elevation: float,
    continent_type: Optional[str] = None,
    island_type: Optional[str] = None,
) -> TerrainType:
    """
    Starting terrain from climate and land type.

    Uses a nominal rainfall (80 in the tropics, 50 elsewhere) rather than the
    tile's sampled rainfall so the decision does not consume randomness.
    """
    temperature = base_temperature(latitude, elevation)
    rainfall = 80 if abs(latitude) < 20 else 50

    if island_type == ISLAND_MOUNTAIN:
        return TerrainType.MOUNTAIN_RANGE
    if island_type == ISLAND_DESERT:
        return TerrainType.DESERT
    if island_type == ISLAND_TUNDRA:
        return TerrainType.TUNDRA
    if island_type == ISLAND_JUNGLE:
        return _hills_or_meadow(elevation, 3)
    if island_type == ISLAND_FOREST:
        return TerrainType.HILLS

    if elevation >= MOUNTAIN_ELEVATION:
        return TerrainType.MOUNTAIN_RANGE

    if continent_type == DRANTIUM:
        if temperature > 20 and rainfall > 60:
            return _hills_or_meadow(elevation, 3)
        if temperature > 15 and rainfall > 40:
            return _hills_or_meadow(elevation, 2)
        return TerrainType.PLAINS

    if continent_type == BRONTIUM:
        if 5 < temperature < 25 and rainfall > 50:
            return _hills_or_meadow(elevation, 3)
        if elevation >= 2 and temperature > 0:
            return TerrainType.HILLS
        if rainfall > 40:
            return TerrainType.MEADOW
        return TerrainType.PLAINS

    if temperature > 25 and rainfall < 30:
        return TerrainType.DESERT
    if temperature > 20 and rainfall > 70:
        return _hills_or_meadow(elevation, 3)
    if 5 < temperature < 25 and rainfall > 50:
        return _hills_or_meadow(elevation, 3)
    if elevation >= 2 and rainfall > 30:
        return TerrainType.HILLS
    if rainfall > 50:
        return TerrainType.MEADOW
    return TerrainType.PLAINS


# ─────────────────────────────────────────────────────────────────────────────
# == BASE STAGE ==

def place_islands(ctx: GenerationContext) -> None:
    islands: List[IslandConfig] = []
    for group in ctx.config.island_groups:
        place_island_group(islands, group, ctx.config, ctx.rng)
    ctx.islands = islands
    ctx.island_lookup = build_island_lookup(islands)


def generate_base(ctx: GenerationContext) -> None:
    """Create every tile of the grid in row-major order."""
    place_islands(ctx)
    grid = ctx.grid
    continents = ctx.config.continents

    for q, r in grid.coords():
        latitude = latitude_for_row(r, grid.height)
        abs_lat = abs(latitude)
        hemisphere = hemisphere_for(latitude)

        continent: Optional[ContinentConfig] = None
        for c in continents:
            if in_continent(q, r, c, ctx.rng):
                continent = c
                break
        island = None if continent is not None else ctx.island_lookup.get((q, r))

        elevation = 0.0
        terrain = TerrainType.OCEAN
        if abs_lat > ICE_CAP_LATITUDE:
            terrain = TerrainType.ICE
        elif abs_lat > POLAR_TUNDRA_LATITUDE and continent is None and island is None:
            terrain = TerrainType.TUNDRA
        elif continent is not None or island is not None:
            elevation = base_elevation(q, r, continent, island, ctx.rng)
            terrain = classify_terrain(
                latitude,
                elevation,
                continent.name if continent else None,
                island.island_type if island else None,
            )

        tag: Optional[str] = None
        if continent is not None:
            tag = continent.name
        elif island is not None:
            tag = island.island_type

        grid.put(
            Tile(
                coord=(q, r),
                terrain=terrain,
                elevation=elevation,
                temperature=base_temperature(latitude, elevation),
                rainfall=base_rainfall(latitude, ctx.rng),
                continent=tag,
                latitude=latitude,
                hemisphere=hemisphere,
                season=season_for(ctx.month, hemisphere),
            )
        )


__all__ = [
    "BRONTIUM",
    "DRANTIUM",
    "GenerationContext",
    "ISLAND_DESERT",
    "ISLAND_FOREST",
    "ISLAND_JUNGLE",
    "ISLAND_MOUNTAIN",
    "ISLAND_TUNDRA",
    "base_elevation",
    "base_rainfall",
    "base_temperature",
    "build_island_lookup",
    "classify_terrain",
    "generate_base",
    "in_continent",
    "place_island_group",
    "place_islands",
]
