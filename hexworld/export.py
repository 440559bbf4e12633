from __future__ import annotations

"""Utilities for exporting a generated world (and its rivers) as JSON."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .grid import HexGrid


def world_to_dict(grid: HexGrid, rivers: Optional[Iterable[Any]] = None) -> Dict[str, Any]:
    """
    Snapshot of the grid in row-major tile order. ``rivers`` may be any
    objects exposing ``to_json()`` and an ``edges`` list whose items also
    expose ``to_json()``.
    """
    river_list = list(rivers or [])
    return {
        "seed": grid.seed,
        "month": grid.month,
        "width": grid.width,
        "height": grid.height,
        "tiles": [t.to_json() for t in grid.tiles()],
        "rivers": [r.to_json() for r in river_list],
        "river_edges": [e.to_json() for r in river_list for e in r.edges],
    }


def export_world_json(grid: HexGrid, path: str | Path, rivers: Optional[Iterable[Any]] = None) -> None:
    """Write the world snapshot to ``path``."""
    data = world_to_dict(grid, rivers)
    with open(Path(path), "w", encoding="utf-8") as f:
        json.dump(data, f)


__all__ = ["export_world_json", "world_to_dict"]
