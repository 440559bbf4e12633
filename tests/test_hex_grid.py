import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from hexworld.grid import (
    HEX_DIRECTIONS,
    HexGrid,
    InvalidCoordinateError,
    coastal_land_sides,
    direction_between,
    hex_distance,
    in_bounds,
    iter_in_radius,
    ocean_neighbor_sides,
    parse_hex_key,
    round_half_up,
)
from hexworld.hex import Feature, TerrainType, Tile, terrain_from_name


def make_grid(width=30, height=30, terrain=TerrainType.OCEAN):
    grid = HexGrid(width, height)
    for q, r in grid.coords():
        grid.put(Tile(coord=(q, r), terrain=terrain))
    return grid


def test_hex_distance_calculation():
    assert hex_distance((0, 0), (2, 1)) == 3
    assert hex_distance((1, 1), (1, 4)) == 3
    assert hex_distance((0, 0), (0, 0)) == 0
    assert hex_distance((3, -2), (-1, 4)) == hex_distance((-1, 4), (3, -2))


def test_direction_order_is_clockwise_from_east():
    assert HEX_DIRECTIONS == [(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)]
    assert direction_between((0, 0), (1, 0)) == 0
    assert direction_between((0, 0), (0, 1)) == 5
    assert direction_between((0, 0), (2, 0)) is None


def test_in_bounds_uses_offset_rows():
    assert in_bounds(0, 0, 420, 220)
    assert not in_bounds(210, 0, 420, 220)
    assert in_bounds(-210, 0, 420, 220)
    assert not in_bounds(-210, -10, 420, 220)
    assert in_bounds(-210, 110, 420, 220)


def test_round_half_up_matches_floor_plus_half():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(-2.6) == -3


def test_parse_hex_key_accepts_both_separators():
    assert parse_hex_key("3,-4") == (3, -4)
    assert parse_hex_key("3:-4") == (3, -4)
    with pytest.raises(InvalidCoordinateError):
        parse_hex_key("a,b")
    with pytest.raises(InvalidCoordinateError):
        parse_hex_key("1,2,3")


def test_grid_get_returns_none_out_of_bounds():
    grid = make_grid(10, 10)
    assert grid.get(0, 0) is not None
    assert grid.get(50, 50) is None
    assert (0, 0) in grid
    assert (50, 50) not in grid
    assert len(grid) == sum(1 for _ in grid.coords())


def test_put_rejects_out_of_bounds_tile():
    grid = HexGrid(10, 10)
    with pytest.raises(InvalidCoordinateError):
        grid.put(Tile(coord=(40, 0)))


def test_iteration_is_row_major():
    grid = make_grid(6, 6)
    coords = [t.coord for t in grid.tiles()]
    assert coords == list(grid.coords())
    rows = [r for _, r in coords]
    assert rows == sorted(rows)


def test_neighbors_follow_direction_order():
    grid = make_grid()
    center = grid.get(0, 0)
    assert [n.coord for n in grid.neighbors(center)] == [(dq, dr) for dq, dr in HEX_DIRECTIONS]


def test_coastal_land_and_ocean_sides():
    grid = make_grid()
    center = grid.get(0, 0)
    center.terrain = TerrainType.COAST
    grid.get(1, 0).terrain = TerrainType.PLAINS
    grid.get(0, -1).terrain = TerrainType.ICE
    grid.get(-1, 0).terrain = TerrainType.COAST

    assert coastal_land_sides(grid, center) == [0]
    assert ocean_neighbor_sides(grid, center) == [1, 3, 4, 5]

    grid.get(0, 1).terrain = TerrainType.HILLS
    assert coastal_land_sides(grid, center) == [0, 5]


def test_tile_validation_and_features():
    with pytest.raises(TypeError):
        Tile(coord=(0, 0), terrain="plains")
    with pytest.raises(ValueError):
        Tile(coord=(0, 0), elevation=-1)

    tile = Tile(coord=(2, 3), terrain=TerrainType.HILLS)
    tile.add_feature(Feature.RIVER)
    tile.add_feature(Feature.JUNGLE)
    assert tile.river
    assert tile.to_json()["features"] == ["jungle", "river"]
    assert tile.key == "2,3"
    assert tile.to_json()["x"] == 2
    assert tile.to_json()["y"] == 3
    tile.discard_feature(Feature.RIVER)
    assert not tile.river


def test_terrain_from_name():
    assert terrain_from_name(" Mountain_Range ") is TerrainType.MOUNTAIN_RANGE
    with pytest.raises(ValueError):
        terrain_from_name("lava")


@pytest.mark.parametrize(
    "terrain,land,water",
    [
        (TerrainType.OCEAN, False, True),
        (TerrainType.COAST, False, True),
        (TerrainType.ICE, False, False),
        (TerrainType.PLAINS, True, False),
        (TerrainType.MOUNTAIN_RANGE, True, False),
    ],
)
def test_land_and_water_classification(terrain, land, water):
    tile = Tile(coord=(0, 0), terrain=terrain)
    assert tile.is_land is land
    assert tile.is_water is water


def test_iter_in_radius_is_euclidean():
    assert sorted(iter_in_radius((0, 0), 1)) == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]
    assert list(iter_in_radius((4, -2), 0)) == [(4, -2)]
    assert len(list(iter_in_radius((0, 0), 1.5))) == 9
