from conftest import ocean_grid, paint

from hexworld.generation import GenerationContext
from hexworld.hex import Feature, TerrainType
from hexworld.invariants import (
    CORDILLERA_NEIGHBOR,
    FEATURE_MISMATCH,
    LOW_MOUNTAIN,
    ORPHAN_COAST,
    TUNDRA_ON_LAND,
    check_invariants,
)
from hexworld.passes import (
    compact_deserts,
    derive_coast,
    enforce_cordillera,
    fix_inland_coast,
    smooth_terrain,
)
from hexworld.prng import SeededRandom
from hexworld.settings import MapConfig


def make_ctx(grid):
    return GenerationContext(grid=grid, config=MapConfig(), rng=SeededRandom(1), month=1)


def ring(grid, center, terrains):
    """Paint the six neighbors of ``center`` in direction order."""
    q, r = center
    for (dq, dr), terrain in zip([(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)], terrains):
        paint(grid, (q + dq, r + dr), terrain, 1)


# --- Coasts -------------------------------------------------------------------

def test_derive_coast_rings_land_and_drops_orphans():
    grid = ocean_grid(20, 20)
    paint(grid, (0, 0), TerrainType.PLAINS, 2)
    paint(grid, (5, 5), TerrainType.COAST)

    assert derive_coast(grid) == 7
    assert grid.get(5, 5).terrain is TerrainType.OCEAN
    assert all(n.terrain is TerrainType.COAST for n in grid.neighbors_of(0, 0))
    assert derive_coast(grid) == 0


def test_ice_is_not_land_for_coasts():
    grid = ocean_grid(20, 20)
    paint(grid, (0, 0), TerrainType.ICE)
    assert derive_coast(grid) == 0
    assert not grid.tiles_with(TerrainType.COAST)


# --- Cleanup ------------------------------------------------------------------

def test_inland_coast_takes_first_most_common_neighbor():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.COAST)
    ring(
        grid,
        (0, 0),
        [
            TerrainType.HILLS,
            TerrainType.MEADOW,
            TerrainType.HILLS,
            TerrainType.MEADOW,
            TerrainType.PLAINS,
            TerrainType.PLAINS,
        ],
    )
    assert fix_inland_coast(grid) == 1
    assert grid.get(0, 0).terrain is TerrainType.HILLS


def test_coast_touching_ocean_is_kept():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.COAST)
    paint(grid, (1, 0), TerrainType.PLAINS, 1)
    assert fix_inland_coast(grid) == 0
    assert grid.get(0, 0).terrain is TerrainType.COAST


def test_isolated_desert_is_absorbed():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.DESERT, 1)
    ring(grid, (0, 0), [TerrainType.MEADOW] * 6)
    assert compact_deserts(grid) == 1
    assert grid.get(0, 0).terrain is TerrainType.MEADOW


def test_continental_desert_never_becomes_tundra():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.DESERT, 1, continent="brontium")
    ring(grid, (0, 0), [TerrainType.TUNDRA] * 6)
    compact_deserts(grid)
    assert grid.get(0, 0).terrain is TerrainType.PLAINS


def test_single_tile_blends_into_surroundings():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.HILLS, 3)
    ring(grid, (0, 0), [TerrainType.MEADOW] * 6)
    assert smooth_terrain(grid) == 1
    assert grid.get(0, 0).terrain is TerrainType.MEADOW


# --- Cordillera ---------------------------------------------------------------

def test_cordillera_turns_neighbors_into_lower_hills():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.MOUNTAIN_RANGE, 8)
    paint(grid, (1, 0), TerrainType.PLAINS, 9)
    paint(grid, (1, -1), TerrainType.HILLS, 9)
    desert = paint(grid, (0, -1), TerrainType.DESERT, 3)
    desert.add_feature(Feature.MOUNTAIN)
    tundra = paint(grid, (-1, 0), TerrainType.TUNDRA, 2)
    tundra.add_feature(Feature.BOREAL_FOREST)
    paint(grid, (0, 1), TerrainType.COAST)

    enforce_cordillera(make_ctx(grid))

    assert grid.get(1, 0).terrain is TerrainType.HILLS
    assert grid.get(1, 0).elevation == 6
    assert grid.get(1, -1).elevation == 6
    assert desert.terrain is TerrainType.DESERT
    assert desert.elevation == 3
    assert tundra.terrain is TerrainType.HILLS
    assert Feature.BOREAL_FOREST not in tundra.features
    assert grid.get(0, 1).terrain is TerrainType.COAST
    assert grid.get(-1, 1).terrain is TerrainType.OCEAN
    assert check_invariants(grid).ok


# --- Invariant checker --------------------------------------------------------

def test_checker_reports_each_kind():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.MOUNTAIN_RANGE, 3)
    paint(grid, (1, 0), TerrainType.PLAINS, 1)
    paint(grid, (5, 5), TerrainType.TUNDRA, 1, continent="brontium")
    oasis = paint(grid, (-5, -2), TerrainType.PLAINS, 1)
    oasis.add_feature(Feature.OASIS)
    paint(grid, (8, 0), TerrainType.COAST)

    report = check_invariants(grid)
    counts = report.counts()
    assert not report.ok
    assert counts[LOW_MOUNTAIN] == 1
    assert counts[CORDILLERA_NEIGHBOR] == 1
    assert counts[TUNDRA_ON_LAND] == 1
    assert counts[FEATURE_MISMATCH] == 1
    assert report.of_kind(ORPHAN_COAST)[0].coord == (8, 0)
