import pytest

from conftest import ocean_grid, paint

from hexworld.hex import TerrainType
from rivers.coast import CoastField
from rivers.fallback import find_fallback_path, rank_candidates
from rivers.primary import find_primary_path
from rivers.types import RejectReason, RiverGenerationConfig

CORRIDOR = [(0, r) for r in range(-10, 1)]


def test_coast_field_measures_hex_steps(corridor_grid):
    field = CoastField(corridor_grid)
    assert field
    assert field.coast_count == 1
    assert field.distance(corridor_grid.get(0, 0)) == 0
    assert field.distance(corridor_grid.get(0, -10)) == 10
    assert field.distance(corridor_grid.get(1, -10)) == 10


def test_coast_field_without_coast_is_falsy():
    grid = ocean_grid(10, 10)
    field = CoastField(grid)
    assert not field
    assert field.distance(grid.get(0, 0)) is None


def test_primary_follows_corridor(corridor_grid):
    source = corridor_grid.get(0, -10)
    result = find_primary_path(corridor_grid, source, CoastField(corridor_grid), RiverGenerationConfig())
    assert result.is_valid
    assert result.strategy == "primary"
    assert result.path == CORRIDOR


def test_primary_rejects_short_coast_hits(corridor_grid):
    source = corridor_grid.get(0, -10)
    config = RiverGenerationConfig(min_length=12)
    result = find_primary_path(corridor_grid, source, CoastField(corridor_grid), config)
    assert result.reason is RejectReason.TOO_SHORT
    assert result.path == [(0, -10)]


def test_primary_cannot_climb(blocked_grid):
    source = blocked_grid.get(0, -10)
    result = find_primary_path(blocked_grid, source, CoastField(blocked_grid), RiverGenerationConfig())
    assert result.reason is RejectReason.NO_COAST_REACHABLE


def test_primary_expansion_limit(corridor_grid):
    source = corridor_grid.get(0, -10)
    result = find_primary_path(
        corridor_grid, source, CoastField(corridor_grid), RiverGenerationConfig(), max_expansions=2
    )
    assert result.reason is RejectReason.STEP_LIMIT


def test_fallback_prefers_steepest_drop(branched_grid):
    source = branched_grid.get(0, -10)
    field = CoastField(branched_grid)
    ranked = rank_candidates(branched_grid, source, [source], {source.index}, set(), field)
    assert [t.coord for t in ranked] == [(1, -10), (0, -9)]


def test_fallback_backtracks_out_of_dead_end(branched_grid):
    source = branched_grid.get(0, -10)
    result = find_fallback_path(branched_grid, source, CoastField(branched_grid), RiverGenerationConfig())
    assert result.is_valid
    assert result.strategy == "fallback"
    assert result.path == CORRIDOR
    assert (1, -10) not in result.path


def test_fallback_reports_dead_end(blocked_grid):
    source = blocked_grid.get(0, -10)
    result = find_fallback_path(blocked_grid, source, CoastField(blocked_grid), RiverGenerationConfig())
    assert result.reason is RejectReason.DEAD_END


def test_fallback_reports_too_short(corridor_grid):
    source = corridor_grid.get(0, -10)
    config = RiverGenerationConfig(min_length=12)
    result = find_fallback_path(corridor_grid, source, CoastField(corridor_grid), config)
    assert result.reason is RejectReason.TOO_SHORT


def test_fallback_step_limit(corridor_grid):
    source = corridor_grid.get(0, -10)
    result = find_fallback_path(
        corridor_grid, source, CoastField(corridor_grid), RiverGenerationConfig(), max_steps=3
    )
    assert result.reason is RejectReason.STEP_LIMIT


@pytest.mark.parametrize("search", [find_primary_path, find_fallback_path])
def test_searches_never_cross_ocean(corridor_grid, search):
    paint(corridor_grid, (0, -5), TerrainType.OCEAN, 0)
    source = corridor_grid.get(0, -10)
    result = search(corridor_grid, source, CoastField(corridor_grid), RiverGenerationConfig())
    assert not result.is_valid
    assert result.reason in (RejectReason.NO_COAST_REACHABLE, RejectReason.DEAD_END)


@pytest.mark.parametrize("search", [find_primary_path, find_fallback_path])
def test_first_coast_ends_the_branch(corridor_grid, search):
    paint(corridor_grid, (0, -3), TerrainType.COAST, 3)
    source = corridor_grid.get(0, -10)
    field = CoastField(corridor_grid)

    result = search(corridor_grid, source, field, RiverGenerationConfig())
    assert result.is_valid
    assert result.path == CORRIDOR[:8]

    longer = search(corridor_grid, source, field, RiverGenerationConfig(min_length=9))
    assert longer.reason is RejectReason.TOO_SHORT
