from __future__ import annotations

"""
Primary river search: best-first from the source toward any coast tile.

Moves may only keep or lose elevation; ice and open ocean are impassable and
coast tiles end a branch. The priority is ``steps + coast distance +
0.5 * elevation above sea level``.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Tuple

from hexworld.grid import HexGrid
from hexworld.hex import TerrainType, Tile

from .coast import CoastField
from .settings import PRIMARY_ELEVATION_WEIGHT, PRIMARY_MAX_EXPANSIONS
from .types import STRATEGY_PRIMARY, RejectReason, RiverGenerationConfig, RiverPath

_BLOCKED = (TerrainType.ICE, TerrainType.OCEAN)


def _heuristic(tile: Tile, field: CoastField) -> float:
    dist = field.distance(tile)
    return (dist if dist is not None else 0) + tile.elevation * PRIMARY_ELEVATION_WEIGHT


def _rebuild(parents: Dict[int, Optional[Tile]], end: Tile) -> List[Tile]:
    out = [end]
    prev = parents[end.index]
    while prev is not None:
        out.append(prev)
        prev = parents[prev.index]
    out.reverse()
    return out


def find_primary_path(
    grid: HexGrid,
    source: Tile,
    field: CoastField,
    config: RiverGenerationConfig,
    *,
    max_expansions: int = PRIMARY_MAX_EXPANSIONS,
) -> RiverPath:
    if not field:
        return RiverPath([source.coord], STRATEGY_PRIMARY, RejectReason.NO_COAST_REACHABLE, "map has no coast")

    counter = itertools.count()
    steps: Dict[int, int] = {source.index: 0}
    parents: Dict[int, Optional[Tile]] = {source.index: None}
    closed = set()
    heap: List[Tuple[float, int, Tile]] = [(_heuristic(source, field), next(counter), source)]
    short_hits = 0
    longest_short = 0
    expansions = 0

    while heap:
        _, _, current = heapq.heappop(heap)
        if current.index in closed:
            continue
        closed.add(current.index)

        g = steps[current.index]
        if current.terrain is TerrainType.COAST:
            if g + 1 >= config.required_length:
                path = [t.coord for t in _rebuild(parents, current)]
                return RiverPath(path, STRATEGY_PRIMARY)
            short_hits += 1
            longest_short = max(longest_short, g + 1)
            continue

        expansions += 1
        if expansions > max_expansions:
            return RiverPath(
                [source.coord], STRATEGY_PRIMARY, RejectReason.STEP_LIMIT, f"{max_expansions} expansions"
            )

        for n in grid.neighbors(current):
            if n.index in closed or n.terrain in _BLOCKED:
                continue
            if n.elevation > current.elevation:
                continue
            tentative = g + 1
            if tentative < steps.get(n.index, tentative + 1):
                steps[n.index] = tentative
                parents[n.index] = current
                heapq.heappush(heap, (tentative + _heuristic(n, field), next(counter), n))

    if short_hits:
        return RiverPath(
            [source.coord],
            STRATEGY_PRIMARY,
            RejectReason.TOO_SHORT,
            f"{short_hits} coast hits, longest {longest_short} < {config.required_length}",
        )
    return RiverPath([source.coord], STRATEGY_PRIMARY, RejectReason.NO_COAST_REACHABLE, "no downhill route to a coast")


__all__ = ["find_primary_path"]
