from __future__ import annotations

"""Feature placement rules and the tagging stage that applies them."""

from typing import Callable, Dict

from .generation import BRONTIUM, DRANTIUM, ISLAND_FOREST, ISLAND_JUNGLE, GenerationContext
from .grid import HexGrid
from .hex import Feature, TerrainType, Tile

# Where each feature may legally appear. RIVER is allowed everywhere.
FEATURE_RULES: Dict[Feature, Callable[[Tile], bool]] = {
    Feature.JUNGLE: lambda t: t.terrain is TerrainType.HILLS and t.continent in (DRANTIUM, ISLAND_JUNGLE),
    Feature.FOREST: lambda t: t.terrain is TerrainType.HILLS and t.continent in (BRONTIUM, ISLAND_FOREST),
    Feature.BOREAL_FOREST: lambda t: t.terrain is TerrainType.TUNDRA,
    Feature.OASIS: lambda t: t.terrain is TerrainType.DESERT,
    Feature.VOLCANO: lambda t: t.terrain is TerrainType.MOUNTAIN_RANGE,
    Feature.MOUNTAIN: lambda t: t.terrain in (TerrainType.TUNDRA, TerrainType.DESERT, TerrainType.ICE),
    Feature.RIVER: lambda t: True,
}

JUNGLE_CHANCE = 0.7
FOREST_CHANCE = 0.7
BOREAL_CHANCE = 0.6
OASIS_CHANCE = 0.08
VOLCANO_FEATURE_CHANCE = 0.15
MOUNTAIN_FEATURE_CHANCE = 0.08
ICE_MOUNTAIN_FEATURE_CHANCE = 0.05
MOUNTAIN_FEATURE_MIN_ELEVATION = 5


def feature_allowed(tile: Tile, feature: Feature) -> bool:
    return FEATURE_RULES[feature](tile)


def prune_features(grid: HexGrid) -> int:
    """Drop every feature that no longer matches its tile. Returns how many were removed."""
    removed = 0
    for tile in grid.tiles():
        if not tile.features:
            continue
        invalid = [f for f in tile.features if not feature_allowed(tile, f)]
        for f in invalid:
            tile.discard_feature(f)
        removed += len(invalid)
    return removed


def add_terrain_features(ctx: GenerationContext) -> None:
    """
    Tag land tiles with biome features.

    Randomness is drawn in a fixed order per tile (jungle, forest, boreal,
    oasis, volcano, mountain) and only when a tile qualifies for that check.
    """
    rng = ctx.rng
    for tile in ctx.grid.tiles():
        terrain = tile.terrain
        if not tile.is_land:
            continue

        if tile.continent == DRANTIUM and terrain is TerrainType.HILLS:
            if tile.temperature > 20 and tile.rainfall > 60 and rng.chance(JUNGLE_CHANCE):
                tile.add_feature(Feature.JUNGLE)

        if tile.continent == BRONTIUM and terrain is TerrainType.HILLS:
            if 5 < tile.temperature < 25 and tile.rainfall > 50 and rng.chance(FOREST_CHANCE):
                tile.add_feature(Feature.FOREST)

        if terrain is TerrainType.TUNDRA and tile.rainfall > 30:
            if rng.chance(BOREAL_CHANCE):
                tile.add_feature(Feature.BOREAL_FOREST)

        if terrain is TerrainType.DESERT and rng.chance(OASIS_CHANCE):
            tile.add_feature(Feature.OASIS)

        if terrain is TerrainType.MOUNTAIN_RANGE and rng.chance(VOLCANO_FEATURE_CHANCE):
            tile.add_feature(Feature.VOLCANO)

        if terrain in (TerrainType.TUNDRA, TerrainType.DESERT, TerrainType.ICE):
            chance = ICE_MOUNTAIN_FEATURE_CHANCE if terrain is TerrainType.ICE else MOUNTAIN_FEATURE_CHANCE
            if rng.chance(chance) and tile.elevation >= MOUNTAIN_FEATURE_MIN_ELEVATION:
                tile.add_feature(Feature.MOUNTAIN)

        # Island-type features only land on island hills.
        if terrain is TerrainType.HILLS:
            if tile.continent == ISLAND_JUNGLE:
                tile.add_feature(Feature.JUNGLE)
            elif tile.continent == ISLAND_FOREST:
                tile.add_feature(Feature.FOREST)


__all__ = ["FEATURE_RULES", "add_terrain_features", "feature_allowed", "prune_features"]
