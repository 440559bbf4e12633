from __future__ import annotations

"""
Fallback river search: a greedy downhill walk that backtracks.

``stack[i]`` holds the untried alternatives for path position ``i + 1``,
so ``len(stack) == len(path) - 1`` whenever the walk is between steps.
"""

from collections import deque
from typing import Deque, List, Set

from hexworld.grid import HexGrid, hex_distance
from hexworld.hex import TerrainType, Tile

from .coast import CoastField
from .settings import (
    FALLBACK_COAST_BONUS,
    FALLBACK_COAST_PROGRESS_WEIGHT,
    FALLBACK_CROWDING_PENALTY,
    FALLBACK_CROWDING_RADIUS,
    FALLBACK_DROP_WEIGHT,
    FALLBACK_MAX_STEPS,
)
from .types import STRATEGY_FALLBACK, RejectReason, RiverGenerationConfig, RiverPath

_BLOCKED = (TerrainType.ICE, TerrainType.OCEAN)


def score_candidate(current: Tile, candidate: Tile, path: List[Tile], field: CoastField) -> float:
    here = field.distance(current)
    there = field.distance(candidate)
    progress = (here - there) if here is not None and there is not None else 0
    score = FALLBACK_DROP_WEIGHT * (current.elevation - candidate.elevation)
    score += FALLBACK_COAST_PROGRESS_WEIGHT * progress
    if candidate.terrain is TerrainType.COAST:
        score += FALLBACK_COAST_BONUS
    crowding = sum(1 for t in path if hex_distance(t.coord, candidate.coord) <= FALLBACK_CROWDING_RADIUS)
    return score - FALLBACK_CROWDING_PENALTY * crowding


def rank_candidates(
    grid: HexGrid, current: Tile, path: List[Tile], on_path: Set[int], dead: Set[int], field: CoastField
) -> List[Tile]:
    """Legal next tiles, best first; ties keep neighbor direction order."""
    scored = []
    for n in grid.neighbors(current):
        if n.index in on_path or n.index in dead or n.terrain in _BLOCKED:
            continue
        if n.elevation > current.elevation:
            continue
        scored.append((score_candidate(current, n, path, field), n))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [n for _, n in scored]


def find_fallback_path(
    grid: HexGrid,
    source: Tile,
    field: CoastField,
    config: RiverGenerationConfig,
    *,
    max_steps: int = FALLBACK_MAX_STEPS,
) -> RiverPath:
    if not field:
        return RiverPath([source.coord], STRATEGY_FALLBACK, RejectReason.NO_COAST_REACHABLE, "map has no coast")

    path: List[Tile] = [source]
    on_path: Set[int] = {source.index}
    dead: Set[int] = set()
    stack: List[Deque[Tile]] = []
    short_hits = 0

    def backtrack() -> bool:
        """Abandon the path tip and resume from the nearest untried alternative."""
        while True:
            tip = path.pop()
            on_path.discard(tip.index)
            dead.add(tip.index)
            if not stack:
                return False
            alternatives = stack[-1]
            while alternatives:
                candidate = alternatives.popleft()
                if candidate.index in dead or candidate.index in on_path:
                    continue
                path.append(candidate)
                on_path.add(candidate.index)
                return True
            stack.pop()

    def failed(reason: RejectReason, detail: str) -> RiverPath:
        return RiverPath([source.coord], STRATEGY_FALLBACK, reason, detail)

    for _ in range(max_steps):
        current = path[-1]
        if current.terrain is TerrainType.COAST:
            if len(path) >= config.required_length:
                return RiverPath([t.coord for t in path], STRATEGY_FALLBACK)
            short_hits += 1
            if not backtrack():
                return failed(RejectReason.TOO_SHORT, f"{short_hits} coast hits below {config.required_length}")
            continue

        candidates = rank_candidates(grid, current, path, on_path, dead, field)
        if candidates:
            stack.append(deque(candidates[1:]))
            path.append(candidates[0])
            on_path.add(candidates[0].index)
        elif not backtrack():
            if short_hits:
                return failed(RejectReason.TOO_SHORT, f"{short_hits} coast hits below {config.required_length}")
            return failed(RejectReason.DEAD_END, "every downhill branch is exhausted")

    return failed(RejectReason.STEP_LIMIT, f"{max_steps} steps")


__all__ = ["find_fallback_path", "rank_candidates", "score_candidate"]
