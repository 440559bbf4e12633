from __future__ import annotations

"""
Manual terrain editing on a generated grid.

Every mutating call returns the number of tiles changed, drops features the
new terrain no longer supports, and re-derives coasts so that the coast
invariant survives the edit.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .features import prune_features
from .grid import HexGrid, iter_in_radius, parse_hex_key, validate_coordinate
from .hex import Coordinate, TerrainType, Tile, terrain_from_name
from .passes import derive_coast

logger = logging.getLogger("hexworld.editor")
logger.addHandler(logging.NullHandler())

TerrainLike = Union[TerrainType, str]
TilePredicate = Callable[[Tile], bool]


def _as_terrain(value: TerrainLike) -> TerrainType:
    if isinstance(value, TerrainType):
        return value
    return terrain_from_name(value)


def _finish_edit(grid: HexGrid, changed: int) -> int:
    if changed:
        prune_features(grid)
        derive_coast(grid)
    return changed


def _set(grid: HexGrid, q: int, r: int, terrain: TerrainType, predicate: Optional[TilePredicate] = None) -> bool:
    tile = grid.get(q, r)
    if tile is None:
        return False
    if predicate is not None and not predicate(tile):
        return False
    tile.terrain = terrain
    return True


def change_terrain(grid: HexGrid, changes: Iterable[Tuple[Coordinate, TerrainLike]]) -> int:
    """
    Apply ``((q, r), terrain)`` pairs. Out-of-bounds coordinates are skipped.

    Raises:
        InvalidCoordinateError: if a coordinate is not an (int, int) tuple.
        ValueError: if a terrain name is unknown.
    """
    changed = 0
    for coord, terrain in changes:
        q, r = validate_coordinate(coord)
        if _set(grid, q, r, _as_terrain(terrain)):
            changed += 1
    return _finish_edit(grid, changed)


def change_terrain_by_ids(grid: HexGrid, changes: Iterable[Tuple[str, TerrainLike]]) -> int:
    """Like :func:`change_terrain` but keyed by ``"q,r"`` or ``"q:r"`` ids."""
    changed = 0
    for tile_id, terrain in changes:
        q, r = parse_hex_key(tile_id)
        if _set(grid, q, r, _as_terrain(terrain)):
            changed += 1
    return _finish_edit(grid, changed)


def change_terrain_in_area(
    grid: HexGrid,
    min_q: int,
    max_q: int,
    min_r: int,
    max_r: int,
    terrain: TerrainLike,
    predicate: Optional[TilePredicate] = None,
) -> int:
    """Repaint the inclusive (q, r) rectangle, optionally filtered by ``predicate``."""
    new = _as_terrain(terrain)
    changed = 0
    for q in range(min_q, max_q + 1):
        for r in range(min_r, max_r + 1):
            if _set(grid, q, r, new, predicate):
                changed += 1
    return _finish_edit(grid, changed)


def change_terrain_in_radius(
    grid: HexGrid,
    center_q: int,
    center_r: int,
    radius: int,
    terrain: TerrainLike,
    predicate: Optional[TilePredicate] = None,
) -> int:
    """Repaint every tile within a euclidean (q, r) ``radius`` of the center."""
    new = _as_terrain(terrain)
    changed = 0
    for q, r in iter_in_radius((center_q, center_r), radius):
        if _set(grid, q, r, new, predicate):
            changed += 1
    return _finish_edit(grid, changed)


def terrain_report(grid: HexGrid, coords: Iterable[Coordinate]) -> List[Dict[str, object]]:
    """Terrain and continent for each in-bounds coordinate, in input order."""
    out: List[Dict[str, object]] = []
    for coord in coords:
        q, r = validate_coordinate(coord)
        tile = grid.get(q, r)
        if tile is None:
            continue
        out.append({"q": q, "r": r, "terrain": tile.terrain.value, "continent": tile.continent})
    return out


__all__ = [
    "change_terrain",
    "change_terrain_by_ids",
    "change_terrain_in_area",
    "change_terrain_in_radius",
    "terrain_report",
]
