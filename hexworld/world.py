from __future__ import annotations

"""
world.py

Top-level world generator: an explicit, ordered pipeline of named stages
that turns a seed and month into a finished :class:`HexGrid`.

Stage order matters. Deserts are carved before the mountain arcs that
enclose them, volcanoes are placed before coasts are derived, features are
tagged once terrain has settled, and the cordillera rule runs last so no
later pass can undo it.
"""

import logging
import time
from typing import Callable, List, Optional, Tuple

from .features import add_terrain_features
from .generation import GenerationContext, generate_base
from .grid import HexGrid
from .invariants import InvariantReport, check_invariants
from .passes import (
    add_coast,
    add_deserts,
    add_mountain_arcs,
    add_volcanoes,
    cleanup,
    enforce_cordillera,
    expand_jungle,
    replace_continental_tundra,
)
from .prng import SeededRandom
from .seasons import normalize_month
from .settings import MapConfig

logger = logging.getLogger("hexworld.World")
logger.addHandler(logging.NullHandler())

Stage = Tuple[str, Callable[[GenerationContext], object]]


class WorldGenerator:
    """
    Runs the generation pipeline for one (seed, month) pair.

    ``PIPELINE`` lists the stages in execution order. In debug mode the
    invariant checker runs after every stage and logs violation counts and
    the terrain histogram; the finished grid is always checked once and any
    violations are logged as warnings.
    """

    PIPELINE: List[Stage] = [
        ("base", generate_base),
        ("deserts", add_deserts),
        ("mountain_arcs", add_mountain_arcs),
        ("tundra", replace_continental_tundra),
        ("jungle", expand_jungle),
        ("volcanoes", add_volcanoes),
        ("coast", add_coast),
        ("features", add_terrain_features),
        ("cleanup", cleanup),
        ("cordillera", enforce_cordillera),
    ]

    def __init__(self, seed: int = 42, month: int = 1, config: Optional[MapConfig] = None, *, debug: bool = False):
        self.seed = seed
        self.month = normalize_month(month)
        self.config = config or MapConfig.earth()
        self.debug = debug
        self.report: Optional[InvariantReport] = None

    def stage_names(self) -> List[str]:
        return [name for name, _ in self.PIPELINE]

    def generate(self) -> HexGrid:
        grid = HexGrid(self.config.width, self.config.height, seed=self.seed, month=self.month)
        ctx = GenerationContext(grid=grid, config=self.config, rng=SeededRandom(self.seed), month=self.month)

        started = time.perf_counter()
        for name, stage in self.PIPELINE:
            stage_start = time.perf_counter()
            stage(ctx)
            logger.info("Stage %s finished in %.2fs", name, time.perf_counter() - stage_start)
            if self.debug:
                report = check_invariants(grid)
                logger.debug("After %s: violations=%s", name, report.counts() or "none")
                logger.debug("After %s: terrain=%s", name, grid.terrain_histogram())

        self.report = check_invariants(grid)
        if not self.report.ok:
            logger.warning("World seed=%d finished with invariant violations: %s", self.seed, self.report.counts())
        logger.info(
            "Generated %dx%d world (seed=%d, month=%d, islands=%d) in %.2fs",
            grid.width,
            grid.height,
            self.seed,
            self.month,
            len(ctx.islands),
            time.perf_counter() - started,
        )
        return grid


def generate_world(seed: int = 42, month: int = 1, config: Optional[MapConfig] = None, *, debug: bool = False) -> HexGrid:
    """Generate a complete world. Same (seed, month, config) always gives the same grid."""
    return WorldGenerator(seed, month, config, debug=debug).generate()


__all__ = ["Stage", "WorldGenerator", "generate_world"]
