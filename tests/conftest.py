import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from hexworld.grid import HexGrid
from hexworld.hex import TerrainType, Tile
from hexworld.settings import ContinentConfig, IslandGroup, MapConfig


# --- Hand-built grids ---------------------------------------------------------

def ocean_grid(width=30, height=30, seed=0):
    """Every in-bounds tile is open ocean at sea level."""
    grid = HexGrid(width, height, seed=seed)
    for q, r in grid.coords():
        grid.put(Tile(coord=(q, r), terrain=TerrainType.OCEAN))
    return grid


def paint(grid, coord, terrain, elevation=0.0, continent=None):
    tile = grid.get(*coord)
    tile.terrain = terrain
    tile.elevation = elevation
    tile.continent = continent
    return tile


def build_corridor(grid):
    """
    A single-tile-wide valley running south-east from a peak at (0, -10)
    down to a coast tile at (0, 0): 11 tiles, each one step lower.
    """
    paint(grid, (0, -10), TerrainType.MOUNTAIN_RANGE, 10)
    for r in range(-9, 0):
        paint(grid, (0, r), TerrainType.HILLS, -r)
    paint(grid, (0, 0), TerrainType.COAST, 0)
    return grid


@pytest.fixture
def corridor_grid():
    return build_corridor(ocean_grid())


@pytest.fixture
def branched_grid():
    """Corridor plus a steep dead-end pocket east of the peak."""
    grid = build_corridor(ocean_grid())
    paint(grid, (1, -10), TerrainType.PLAINS, 0)
    return grid


@pytest.fixture
def blocked_grid():
    """Corridor with a ridge halfway down that no river can climb."""
    grid = build_corridor(ocean_grid())
    paint(grid, (0, -5), TerrainType.HILLS, 12)
    return grid


# --- Small generated worlds ---------------------------------------------------

@pytest.fixture
def small_config():
    return MapConfig(
        width=160,
        height=100,
        continents=[
            ContinentConfig("drantium", (-40, -5), 50, 50, desert_offset=(10, 12)),
            ContinentConfig("brontium", (40, 0), 50, 50, desert_offset=(-10, 8)),
        ],
        island_groups=[
            IslandGroup("mountain_range", 6, min_dist_from_poles=10),
            IslandGroup("jungle", 6, lat_range=(-20, 20), side="west", min_dist_from_poles=25),
            IslandGroup("tundra", 6, lat_range=(70, 88), min_dist_from_equator=70),
        ],
    )
