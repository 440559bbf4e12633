from __future__ import annotations

from typing import List, Optional, Tuple

from hexworld.grid import HexGrid, hex_distance
from hexworld.hex import Coordinate, TerrainType

from .types import RejectReason, RiverGenerationConfig


def validate_path(
    grid: HexGrid, path: List[Coordinate], config: RiverGenerationConfig
) -> Tuple[Optional[RejectReason], str]:
    """
    Check a candidate river path against every acceptance rule.

    Returns ``(None, "")`` for a valid path, otherwise the first failing
    reason and a short human-readable detail.
    """
    if not path:
        return RejectReason.DEAD_END, "empty path"

    source = grid.get(*path[0])
    if source is None or source.terrain is not TerrainType.MOUNTAIN_RANGE:
        found = source.terrain.value if source else "nothing"
        return RejectReason.INVALID_SOURCE, f"source at {path[0]} is {found}"

    tiles = []
    for coord in path:
        tile = grid.get(*coord)
        if tile is None:
            return RejectReason.NOT_CONTIGUOUS, f"{coord} is outside the grid"
        tiles.append(tile)

    for prev, cur in zip(tiles, tiles[1:]):
        if hex_distance(prev.coord, cur.coord) != 1:
            return RejectReason.NOT_CONTIGUOUS, f"{prev.coord} -> {cur.coord} are not adjacent"
        if cur.elevation > prev.elevation:
            return RejectReason.UPHILL, f"{prev.coord} -> {cur.coord} climbs"

    mouth = tiles[-1]
    if mouth.terrain is TerrainType.OCEAN:
        return RejectReason.ENDS_IN_OCEAN, f"mouth {mouth.coord} is open ocean"
    if mouth.terrain is not TerrainType.COAST:
        return RejectReason.DEAD_END, f"mouth {mouth.coord} is {mouth.terrain.value}"

    if len(path) < config.required_length:
        return RejectReason.TOO_SHORT, f"{len(path)} < {config.required_length}"

    return None, ""


__all__ = ["validate_path"]
