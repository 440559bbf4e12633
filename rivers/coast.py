from __future__ import annotations

"""Distance-to-coast field shared by both search strategies."""

from collections import deque
from typing import Dict, Optional

from hexworld.grid import HexGrid
from hexworld.hex import TerrainType, Tile


class CoastField:
    """
    Hex-step distance from every tile to the nearest coast tile, computed once
    per grid with a multi-source breadth-first search. Terrain does not block
    the search, so the value matches straight hex distance on an open map.
    """

    def __init__(self, grid: HexGrid) -> None:
        self._dist: Dict[int, int] = {}
        frontier = deque()
        for tile in grid.tiles():
            if tile.terrain is TerrainType.COAST:
                self._dist[tile.index] = 0
                frontier.append(tile)
        self.coast_count = len(frontier)
        while frontier:
            tile = frontier.popleft()
            d = self._dist[tile.index] + 1
            for n in grid.neighbors(tile):
                if n.index not in self._dist:
                    self._dist[n.index] = d
                    frontier.append(n)

    def __bool__(self) -> bool:
        return self.coast_count > 0

    def distance(self, tile: Tile) -> Optional[int]:
        """Steps to the nearest coast, or None when no coast is reachable."""
        return self._dist.get(tile.index)


__all__ = ["CoastField"]
