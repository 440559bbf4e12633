from __future__ import annotations

"""
Refinement stages that run after the base classification.

Each stage takes the shared :class:`GenerationContext` and mutates tiles in
place. ``derive_coast`` only needs a grid and is re-run by the terrain editor.
"""

import logging
import math
from collections import Counter
from typing import Iterable, List, Optional, Tuple

from .features import prune_features
from .generation import BRONTIUM, DRANTIUM, ISLAND_MOUNTAIN, GenerationContext
from .grid import HexGrid, round_half_up
from .hex import Feature, TerrainType, Tile
from .prng import SeededRandom
from .settings import (
    ARC_POINTS,
    ARC_THICKNESS,
    CLEANUP_ROUNDS,
    DESERT_COMPACTION_PASSES,
    DESERT_LAND_FRACTION,
    JUNGLE_PROMOTION_CHANCE,
    JUNGLE_RADIUS,
    SMOOTHING_PASSES,
    TUNDRA_CORE_RADIUS,
    TUNDRA_OUTER_RADIUS,
    VOLCANO_MAX_DRAWS,
    VOLCANO_TARGET,
)

logger = logging.getLogger("hexworld.passes")
logger.addHandler(logging.NullHandler())

# Terrains a cleanup pass may never pick as a replacement.
_NEVER_REPLACEMENT = frozenset(
    {TerrainType.OCEAN, TerrainType.COAST, TerrainType.ICE, TerrainType.MOUNTAIN_RANGE}
)


def _dist(tile: Tile, cq: float, cr: float) -> float:
    dq = tile.coord[0] - cq
    dr = tile.coord[1] - cr
    return math.sqrt(dq * dq + dr * dr)


def _hills_or_meadow(elevation: float) -> TerrainType:
    return TerrainType.HILLS if elevation >= 3 else TerrainType.MEADOW


def _most_common(terrains: Iterable[TerrainType]) -> Optional[TerrainType]:
    """Most frequent terrain; ties go to the one seen first."""
    counts = Counter(terrains)
    if not counts:
        return None
    return max(counts, key=counts.__getitem__)


def _replacement_candidates(tile: Tile, neighbors: List[Tile], *, exclude: Tuple[TerrainType, ...] = ()) -> List[TerrainType]:
    out = []
    for n in neighbors:
        t = n.terrain
        if t in _NEVER_REPLACEMENT or t in exclude:
            continue
        if t is TerrainType.TUNDRA and tile.continent is not None:
            continue
        out.append(t)
    return out


# ─────────────────────────────────────────────────────────────────────────────
# == DESERTS ==

def count_land(grid: HexGrid) -> int:
    return sum(1 for t in grid.tiles() if t.is_land)


def add_desert_cluster(
    grid: HexGrid,
    center: Tuple[int, int],
    radius: float,
    max_tiles: int,
    continent: str,
    rng: SeededRandom,
) -> int:
    """
    Carve a roughly circular desert around ``center`` on tiles of one continent.
    Scans rows then columns across the bounding square and stops at ``max_tiles``.
    """
    cq, cr = center
    placed = 0
    r = cr - radius
    while r < cr + radius and placed < max_tiles:
        q = cq - radius
        while q < cq + radius and placed < max_tiles:
            tile = grid.get(round_half_up(q), round_half_up(r))
            if (
                tile is not None
                and tile.continent == continent
                and tile.is_land
                and tile.terrain is not TerrainType.MOUNTAIN_RANGE
            ):
                dist = math.sqrt((q - cq) ** 2 + (r - cr) ** 2)
                if dist < radius * rng.range(0.8, 1.1):
                    tile.terrain = TerrainType.DESERT
                    tile.rainfall = rng.range(5, 25)
                    placed += 1
            q += 1
        r += 1
    return placed


def add_deserts(ctx: GenerationContext) -> None:
    target = math.floor(count_land(ctx.grid) * DESERT_LAND_FRACTION)
    per_continent = target // 2
    radius = math.sqrt(per_continent * 1.5)
    for name in (DRANTIUM, BRONTIUM):
        continent = ctx.continent(name)
        if continent is None:
            continue
        placed = add_desert_cluster(ctx.grid, continent.desert_center, radius, per_continent, name, ctx.rng)
        logger.debug("Desert cluster on %s: %d tiles (target %d)", name, placed, per_continent)


# ─────────────────────────────────────────────────────────────────────────────
# == MOUNTAIN ARCS ==

def add_mountain_arc(
    grid: HexGrid,
    center: Tuple[float, float],
    radius: float,
    start_angle: float,
    end_angle: float,
    continent: str,
    rng: SeededRandom,
) -> None:
    cq, cr = center
    for i in range(ARC_POINTS):
        angle = start_angle + (end_angle - start_angle) * (i / ARC_POINTS)
        for t in range(ARC_THICKNESS):
            rad = radius + rng.range(-2, 2) + t
            q = round_half_up(cq + math.cos(angle) * rad)
            r = round_half_up(cr + math.sin(angle) * rad)
            tile = grid.get(q, r)
            if (
                tile is not None
                and tile.continent == continent
                and tile.terrain not in (TerrainType.OCEAN, TerrainType.ICE)
            ):
                tile.terrain = TerrainType.MOUNTAIN_RANGE
                tile.elevation = rng.range(7, 10)


def add_mountain_arcs(ctx: GenerationContext) -> None:
    """Three arcs per desert forming a C that opens toward the near coast."""
    half_pi = math.pi / 2
    drantium = ctx.continent(DRANTIUM)
    if drantium is not None:
        cx, cy = drantium.desert_center
        add_mountain_arc(ctx.grid, (cx - 15, cy), 20, 0, math.pi, DRANTIUM, ctx.rng)
        add_mountain_arc(ctx.grid, (cx - 8, cy - 15), 12, -half_pi, half_pi, DRANTIUM, ctx.rng)
        add_mountain_arc(ctx.grid, (cx - 8, cy + 15), 12, -half_pi, half_pi, DRANTIUM, ctx.rng)
    brontium = ctx.continent(BRONTIUM)
    if brontium is not None:
        cx, cy = brontium.desert_center
        add_mountain_arc(ctx.grid, (cx + 15, cy), 20, -math.pi, 0, BRONTIUM, ctx.rng)
        add_mountain_arc(ctx.grid, (cx + 8, cy - 15), 12, half_pi, 3 * half_pi, BRONTIUM, ctx.rng)
        add_mountain_arc(ctx.grid, (cx + 8, cy + 15), 12, half_pi, 3 * half_pi, BRONTIUM, ctx.rng)


# ─────────────────────────────────────────────────────────────────────────────
# == TUNDRA REPLACEMENT ==

def replace_continental_tundra(ctx: GenerationContext) -> None:
    """
    Brontium core tundra becomes mountains (inner ring) or foothills (outer
    ring). Any other tundra tagged with a continent or island type becomes
    hills or meadow so that tundra only survives in the open polar band.
    """
    brontium = ctx.continent(BRONTIUM)
    rng = ctx.rng
    for tile in ctx.grid.tiles():
        if tile.terrain is not TerrainType.TUNDRA or tile.continent is None:
            continue
        if brontium is not None and tile.continent == BRONTIUM:
            dist = _dist(tile, *brontium.center)
            if dist < TUNDRA_CORE_RADIUS:
                tile.terrain = TerrainType.MOUNTAIN_RANGE
                tile.elevation = rng.range(6, 9)
                continue
            if dist < TUNDRA_OUTER_RADIUS:
                tile.terrain = _hills_or_meadow(tile.elevation)
                tile.elevation = rng.range(2, 5)
                continue
        tile.terrain = _hills_or_meadow(tile.elevation)


# ─────────────────────────────────────────────────────────────────────────────
# == JUNGLE ==

def expand_jungle(ctx: GenerationContext) -> None:
    drantium = ctx.continent(DRANTIUM)
    if drantium is None:
        return
    rng = ctx.rng
    promoted = 0
    for tile in ctx.grid.tiles():
        if tile.continent != DRANTIUM:
            continue
        if tile.terrain in (TerrainType.MOUNTAIN_RANGE, TerrainType.DESERT):
            continue
        dist = _dist(tile, *drantium.center)
        if dist >= JUNGLE_RADIUS:
            continue
        if rng.chance((1 - dist / JUNGLE_RADIUS) * JUNGLE_PROMOTION_CHANCE):
            tile.terrain = _hills_or_meadow(tile.elevation)
            tile.rainfall = rng.range(80, 150)
            promoted += 1
    logger.debug("Jungle core promoted %d tiles", promoted)


# ─────────────────────────────────────────────────────────────────────────────
# == VOLCANOES ==

def add_volcanoes(ctx: GenerationContext) -> int:
    """Mountain island peaks first, then random high tiles until the target is met."""
    grid = ctx.grid
    count = 0
    for island in ctx.islands:
        if island.island_type != ISLAND_MOUNTAIN:
            continue
        tile = grid.get(*island.center)
        if tile is None:
            continue
        tile.volcano = True
        tile.terrain = TerrainType.MOUNTAIN_RANGE
        tile.elevation = 10
        count += 1

    half_w = grid.width // 2
    half_h = grid.height // 2
    for _ in range(VOLCANO_MAX_DRAWS):
        if count >= VOLCANO_TARGET:
            break
        q = ctx.rng.int(-half_w, half_w)
        r = ctx.rng.int(-half_h, half_h)
        tile = grid.get(q, r)
        if (
            tile is not None
            and (tile.terrain is TerrainType.MOUNTAIN_RANGE or tile.elevation >= 6)
            and not tile.volcano
            and tile.terrain is not TerrainType.ICE
        ):
            tile.volcano = True
            count += 1
    if count < VOLCANO_TARGET:
        logger.warning("Only %d of %d volcanoes placed", count, VOLCANO_TARGET)
    return count


# ─────────────────────────────────────────────────────────────────────────────
# == COASTS ==

def derive_coast(grid: HexGrid) -> int:
    """
    Ocean tiles touching land become coast, then coast tiles with no land
    neighbor revert to ocean. Land is anything but ocean, coast or ice.
    Safe to call repeatedly; returns the number of tiles changed.
    """
    to_coast = [
        t
        for t in grid.tiles()
        if t.terrain is TerrainType.OCEAN
        and any(n.is_land for n in grid.neighbors(t))
    ]
    for t in to_coast:
        t.terrain = TerrainType.COAST

    orphans = [
        t
        for t in grid.tiles()
        if t.terrain is TerrainType.COAST
        and not any(n.is_land for n in grid.neighbors(t))
    ]
    for t in orphans:
        t.terrain = TerrainType.OCEAN
    return len(to_coast) + len(orphans)


def add_coast(ctx: GenerationContext) -> None:
    derive_coast(ctx.grid)


# ─────────────────────────────────────────────────────────────────────────────
# == CLEANUP ==

def fix_inland_coast(grid: HexGrid) -> int:
    """Coast tiles with no ocean neighbor take the most common land neighbor terrain."""
    changes = []
    for tile in grid.tiles():
        if tile.terrain is not TerrainType.COAST:
            continue
        neighbors = grid.neighbors(tile)
        if any(n.terrain is TerrainType.OCEAN for n in neighbors):
            continue
        new = _most_common(_replacement_candidates(tile, neighbors)) or TerrainType.PLAINS
        changes.append((tile, new))
    for tile, new in changes:
        tile.terrain = new
    return len(changes)


def compact_deserts(grid: HexGrid) -> int:
    """Isolated deserts, or deserts boxed in by mountains, take a neighbor terrain."""
    total = 0
    for _ in range(DESERT_COMPACTION_PASSES):
        changes = []
        for tile in grid.tiles():
            if tile.terrain is not TerrainType.DESERT:
                continue
            neighbors = grid.neighbors(tile)
            deserts = sum(1 for n in neighbors if n.terrain is TerrainType.DESERT)
            mountains = sum(1 for n in neighbors if n.terrain is TerrainType.MOUNTAIN_RANGE)
            if deserts >= 2 and mountains < 4:
                continue
            candidates = _replacement_candidates(tile, neighbors, exclude=(TerrainType.DESERT,))
            changes.append((tile, _most_common(candidates) or TerrainType.PLAINS))
        for tile, new in changes:
            tile.terrain = new
        total += len(changes)
        if not changes:
            break
    return total


_SMOOTH_SKIP = frozenset(
    {TerrainType.OCEAN, TerrainType.COAST, TerrainType.ICE, TerrainType.MOUNTAIN_RANGE, TerrainType.DESERT}
)


def smooth_terrain(grid: HexGrid) -> int:
    """Single tiles with fewer than two same-terrain neighbors blend into their surroundings."""
    total = 0
    for _ in range(SMOOTHING_PASSES):
        changes = []
        for tile in grid.tiles():
            if tile.terrain in _SMOOTH_SKIP:
                continue
            neighbors = grid.neighbors(tile)
            same = sum(1 for n in neighbors if n.terrain is tile.terrain)
            if same >= 2:
                continue
            new = _most_common(_replacement_candidates(tile, neighbors, exclude=(tile.terrain,)))
            if new is not None:
                changes.append((tile, new))
        for tile, new in changes:
            tile.terrain = new
        total += len(changes)
        if not changes:
            break
    return total


def cleanup(ctx: GenerationContext) -> None:
    grid = ctx.grid
    for round_no in range(1, CLEANUP_ROUNDS + 1):
        changed = fix_inland_coast(grid)
        changed += compact_deserts(grid)
        changed += smooth_terrain(grid)
        changed += derive_coast(grid)
        pruned = prune_features(grid)
        logger.debug("Cleanup round %d: %d terrain changes, %d features pruned", round_no, changed, pruned)
        if changed == 0:
            break


# ─────────────────────────────────────────────────────────────────────────────
# == CORDILLERA ==

def enforce_cordillera(ctx: GenerationContext) -> None:
    """
    Every land neighbor of a mountain_range becomes hills (unless it carries
    the mountain feature) and sits strictly below the mountain.
    """
    grid = ctx.grid
    converted = 0
    for tile in grid.tiles():
        if tile.terrain is not TerrainType.MOUNTAIN_RANGE:
            continue
        floor = max(1, tile.elevation - 2)
        for n in grid.neighbors(tile):
            if not n.is_land or n.terrain is TerrainType.MOUNTAIN_RANGE:
                continue
            if n.terrain is not TerrainType.HILLS and not n.has_feature(Feature.MOUNTAIN):
                n.terrain = TerrainType.HILLS
                n.elevation = floor
                converted += 1
            elif n.elevation >= tile.elevation:
                n.elevation = floor
    pruned = prune_features(grid)
    logger.debug("Cordillera: %d neighbors converted to hills, %d features pruned", converted, pruned)


__all__ = [
    "add_coast",
    "add_desert_cluster",
    "add_deserts",
    "add_mountain_arc",
    "add_mountain_arcs",
    "add_volcanoes",
    "cleanup",
    "compact_deserts",
    "count_land",
    "derive_coast",
    "enforce_cordillera",
    "expand_jungle",
    "fix_inland_coast",
    "replace_continental_tundra",
    "smooth_terrain",
]
