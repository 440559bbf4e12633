from __future__ import annotations

"""
River network generation over a finished world grid.

Mountain sources are shuffled with a seeded stream derived from the world
seed, then tried one at a time: the primary search first, the fallback walk
if that fails. Only accepted rivers touch the grid.
"""

import logging
from typing import Iterable, List, Optional

from hexworld.grid import HexGrid, direction_between
from hexworld.hex import Feature, TerrainType, Tile
from hexworld.prng import SeededRandom, derive_seed

from .coast import CoastField
from .fallback import find_fallback_path
from .primary import find_primary_path
from .settings import DEFAULT_TARGET_COUNT, SOURCE_SHUFFLE_TAG
from .types import (
    RejectReason,
    River,
    RiverEdge,
    RiverGenerationConfig,
    RiverGenerationReport,
    RiverPath,
    RiverSegment,
    make_edge_id,
)
from .validation import validate_path

logger = logging.getLogger("rivers.network")
logger.addHandler(logging.NullHandler())


class RiverNetworkGenerator:
    """
    Generates up to ``target_count`` rivers on ``grid``.

    Args:
        grid: A fully generated world. Accepted rivers tag their tiles with
            the river feature; nothing else is modified.
        config: Length and attempt limits.
        rng: Source-order randomness. Defaults to a stream derived from
            ``grid.seed`` so runs are reproducible.
    """

    def __init__(
        self,
        grid: HexGrid,
        config: Optional[RiverGenerationConfig] = None,
        *,
        rng: Optional[SeededRandom] = None,
    ) -> None:
        self.grid = grid
        self.config = config or RiverGenerationConfig()
        self.rng = rng or SeededRandom(derive_seed(grid.seed, SOURCE_SHUFFLE_TAG))
        self.report = RiverGenerationReport()
        if not self.config.flow_to_ocean or self.config.allow_lakes:
            logger.warning(
                "flow_to_ocean=%s allow_lakes=%s requested; rivers always end on a coast",
                self.config.flow_to_ocean,
                self.config.allow_lakes,
            )
        if self.config.out_of_range:
            logger.warning(
                "min_length=%d max_attempts=%d out of range; using %d and %d",
                self.config.min_length,
                self.config.max_attempts,
                self.config.required_length,
                self.config.attempt_limit,
            )

    # Sources ----------------------------------------------------------------
    def find_sources(self) -> List[Tile]:
        """Mountain tiles in grid order."""
        return self.grid.tiles_with(TerrainType.MOUNTAIN_RANGE)

    # Single attempt ---------------------------------------------------------
    def trace(self, source: Tile, field: CoastField) -> RiverPath:
        """Run both strategies for one source and return the first valid path, or the last failure."""
        if source.terrain is not TerrainType.MOUNTAIN_RANGE:
            return RiverPath([source.coord], "none", RejectReason.INVALID_SOURCE, source.terrain.value)

        result = find_primary_path(self.grid, source, field, self.config)
        if result.is_valid:
            result = self._checked(result)
            if result.is_valid:
                return result
        logger.debug("Primary search from %s failed: %s %s", source.coord, result.reason.value, result.detail)

        result = find_fallback_path(self.grid, source, field, self.config)
        if result.is_valid:
            result = self._checked(result)
        return result

    def _checked(self, result: RiverPath) -> RiverPath:
        reason, detail = validate_path(self.grid, result.path, self.config)
        if reason is not None:
            return RiverPath(result.path, result.strategy, reason, detail)
        return result

    # Acceptance -------------------------------------------------------------
    def build_river(self, result: RiverPath, ordinal: int) -> River:
        path = result.path
        source = path[0]
        river_id = f"river-{ordinal}-{source[0]}-{source[1]}"
        last = len(path) - 1
        segments = [
            RiverSegment(
                coord=coord,
                elevation=self.grid.get(*coord).elevation,
                distance_from_source=i,
                distance_to_mouth=last - i,
            )
            for i, coord in enumerate(path)
        ]
        edges = [
            RiverEdge(
                edge_id=make_edge_id(a, b),
                hex1=a,
                hex2=b,
                direction=direction_between(a, b),
                river_id=river_id,
            )
            for a, b in zip(path, path[1:])
        ]
        return River(
            id=river_id,
            source=source,
            mouth=path[-1],
            segments=segments,
            edges=edges,
            strategy=result.strategy,
        )

    def _mark(self, river: River) -> None:
        for seg in river.segments:
            self.grid.get(*seg.coord).add_feature(Feature.RIVER)

    # Driving loop -----------------------------------------------------------
    def generate(self, target_count: int = DEFAULT_TARGET_COUNT) -> List[River]:
        self.report = RiverGenerationReport()
        rivers: List[River] = []
        if target_count <= 0:
            return rivers

        sources = self.find_sources()
        self.report.sources = len(sources)
        if not sources:
            logger.warning("No mountain_range tiles; no rivers generated")
            return rivers

        field = CoastField(self.grid)
        if not field:
            logger.warning("No coast tiles; no rivers generated")
            return rivers

        self.rng.shuffle(sources)
        allowed = min(len(sources), self.config.attempt_limit)

        for source in sources[:allowed]:
            if len(rivers) >= target_count:
                break
            self.report.attempts += 1
            result = self.trace(source, field)
            if not result.is_valid:
                self.report.reject(result.reason)
                logger.debug("Rejected source %s: %s (%s)", source.coord, result.reason.value, result.detail)
                continue
            river = self.build_river(result, len(rivers) + 1)
            self._mark(river)
            rivers.append(river)
            self.report.accept(river.strategy)

        if not rivers:
            logger.warning("No river accepted after %d attempts", self.report.attempts)
        elif len(rivers) < target_count:
            logger.info("Generated %d of %d rivers after %d attempts", len(rivers), target_count, self.report.attempts)
        logger.info("River generation: %s", self.report.summary())
        return rivers


def generate_rivers(
    grid: HexGrid,
    config: Optional[RiverGenerationConfig] = None,
    target_count: int = DEFAULT_TARGET_COUNT,
    *,
    rng: Optional[SeededRandom] = None,
) -> List[River]:
    """Convenience wrapper around :class:`RiverNetworkGenerator`."""
    return RiverNetworkGenerator(grid, config, rng=rng).generate(target_count)


def river_edges(rivers: Iterable[River]) -> List[RiverEdge]:
    """Every edge of every river, in river then path order."""
    return [edge for river in rivers for edge in river.edges]


def edges_for_tile(edges: Iterable[RiverEdge], q: int, r: int) -> List[RiverEdge]:
    return [e for e in edges if e.touches(q, r)]


__all__ = ["RiverNetworkGenerator", "edges_for_tile", "generate_rivers", "river_edges"]
