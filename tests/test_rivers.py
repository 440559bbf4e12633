import pytest

from conftest import ocean_grid, paint

from hexworld.hex import Feature, TerrainType
from hexworld.prng import SeededRandom
from rivers import (
    InvalidEdgeIdError,
    RejectReason,
    RiverGenerationConfig,
    RiverNetworkGenerator,
    edges_for_tile,
    generate_rivers,
    make_edge_id,
    parse_edge_id,
    river_edges,
)
from rivers.coast import CoastField


def test_single_river_on_corridor(corridor_grid):
    rivers = generate_rivers(corridor_grid, RiverGenerationConfig(), 5)
    assert len(rivers) == 1
    river = rivers[0]
    assert river.id == "river-1-0--10"
    assert river.source == (0, -10)
    assert river.mouth == (0, 0)
    assert river.length == 11
    assert river.strategy == "primary"
    assert river.path == [(0, r) for r in range(-10, 1)]


def test_river_tiles_are_marked(corridor_grid):
    generate_rivers(corridor_grid)
    for r in range(-10, 1):
        tile = corridor_grid.get(0, r)
        assert tile.river
        assert Feature.RIVER in tile.features
    assert not corridor_grid.get(1, 0).river


def test_segments_and_edges(corridor_grid):
    river = generate_rivers(corridor_grid)[0]
    first, last = river.segments[0], river.segments[-1]
    assert (first.distance_from_source, first.distance_to_mouth) == (0, 10)
    assert (last.distance_from_source, last.distance_to_mouth) == (10, 0)
    assert [s.elevation for s in river.segments] == sorted((s.elevation for s in river.segments), reverse=True)

    assert len(river.edges) == river.length - 1
    assert all(e.direction == 5 for e in river.edges)
    assert all(e.river_id == river.id for e in river.edges)
    assert river.edges[0].edge_id == make_edge_id((0, -10), (0, -9))


def test_flow_direction_lookup(corridor_grid):
    river = generate_rivers(corridor_grid)[0]
    assert river.flow_direction_at(0, -5) == "downstream"
    assert river.flow_direction_at(5, 5) is None


def test_edge_queries(corridor_grid):
    rivers = generate_rivers(corridor_grid)
    edges = river_edges(rivers)
    assert len(edges) == 10
    assert len(edges_for_tile(edges, 0, -5)) == 2
    assert len(edges_for_tile(edges, 0, -10)) == 1
    assert edges_for_tile(edges, 3, 3) == []


def test_edge_ids_are_order_independent():
    assert make_edge_id((1, 2), (2, 2)) == make_edge_id((2, 2), (1, 2))
    edge_id = make_edge_id((-3, 4), (-2, 4))
    assert set(parse_edge_id(edge_id)) == {(-3, 4), (-2, 4)}
    assert parse_edge_id("1,2:3,4") == ((1, 2), (3, 4))


@pytest.mark.parametrize("bad", ["bad", "1,2", "1,2:x,4", "1,2:3,4:5,6"])
def test_parse_edge_id_rejects_garbage(bad):
    with pytest.raises(InvalidEdgeIdError):
        parse_edge_id(bad)


def test_too_short_is_reported(corridor_grid):
    gen = RiverNetworkGenerator(corridor_grid, RiverGenerationConfig(min_length=12))
    assert gen.generate(5) == []
    assert gen.report.attempts == 1
    assert gen.report.rejections[RejectReason.TOO_SHORT] == 1
    assert not any(t.river for t in corridor_grid.tiles())


def test_blocked_source_is_a_dead_end(blocked_grid):
    gen = RiverNetworkGenerator(blocked_grid)
    assert gen.generate(5) == []
    assert gen.report.rejections[RejectReason.DEAD_END] == 1


def test_trace_skips_dead_end_pocket(branched_grid):
    gen = RiverNetworkGenerator(branched_grid)
    field = CoastField(branched_grid)
    result = gen.trace(branched_grid.get(0, -10), field)
    assert result.is_valid
    assert (1, -10) not in result.path


def test_trace_rejects_non_mountain_source(corridor_grid):
    gen = RiverNetworkGenerator(corridor_grid)
    result = gen.trace(corridor_grid.get(0, -5), CoastField(corridor_grid))
    assert result.reason is RejectReason.INVALID_SOURCE


def test_zero_target_returns_nothing(corridor_grid):
    assert generate_rivers(corridor_grid, target_count=0) == []
    assert not corridor_grid.get(0, -10).river


def test_zero_attempts_returns_nothing(corridor_grid):
    gen = RiverNetworkGenerator(corridor_grid, RiverGenerationConfig(max_attempts=0))
    assert gen.generate(5) == []
    assert gen.report.attempts == 0


def test_no_mountains_means_no_rivers():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.COAST)
    gen = RiverNetworkGenerator(grid)
    assert gen.generate(5) == []
    assert gen.report.sources == 0


def test_no_coast_means_no_rivers():
    grid = ocean_grid()
    paint(grid, (0, 0), TerrainType.MOUNTAIN_RANGE, 8)
    gen = RiverNetworkGenerator(grid)
    assert gen.generate(5) == []
    assert gen.report.sources == 1
    assert gen.report.attempts == 0


def two_valleys():
    """Two parallel corridors, three columns apart."""
    grid = ocean_grid(40, 40)
    for q in (0, 3):
        paint(grid, (q, -10), TerrainType.MOUNTAIN_RANGE, 10)
        for r in range(-9, 0):
            paint(grid, (q, r), TerrainType.HILLS, -r)
        paint(grid, (q, 0), TerrainType.COAST)
    return grid


def test_target_count_caps_accepted_rivers():
    assert len(generate_rivers(two_valleys(), target_count=2)) == 2
    assert len(generate_rivers(two_valleys(), target_count=1)) == 1


def test_river_ids_number_in_acceptance_order():
    rivers = generate_rivers(two_valleys(), target_count=2)
    assert [r.id.split("-")[1] for r in rivers] == ["1", "2"]


def test_source_order_follows_rng():
    first = generate_rivers(two_valleys(), target_count=2, rng=SeededRandom(3))
    second = generate_rivers(two_valleys(), target_count=2, rng=SeededRandom(3))
    assert [r.id for r in first] == [r.id for r in second]
    assert {r.source for r in first} == {(0, -10), (3, -10)}
