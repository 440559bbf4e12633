from __future__ import annotations

from .editor import (
    change_terrain,
    change_terrain_by_ids,
    change_terrain_in_area,
    change_terrain_in_radius,
    terrain_report,
)
from .export import export_world_json, world_to_dict
from .grid import (
    HEX_DIRECTIONS,
    HexGrid,
    InvalidCoordinateError,
    coastal_land_sides,
    hex_distance,
    hex_key,
    in_bounds,
    ocean_neighbor_sides,
    parse_hex_key,
)
from .hex import Feature, Hemisphere, Season, TerrainType, Tile
from .invariants import InvariantReport, check_invariants
from .passes import derive_coast
from .persistence import (
    ModificationLoadError,
    ModificationSaveError,
    TerrainModification,
    apply_modifications,
    clear_modifications,
    load_modifications,
    record_modification,
    save_modifications,
)
from .prng import SeededRandom, derive_seed
from .seasons import hemisphere_for, season_for
from .settings import ContinentConfig, IslandConfig, IslandGroup, MapConfig
from .world import WorldGenerator, generate_world

__all__ = [
    "ContinentConfig",
    "Feature",
    "HEX_DIRECTIONS",
    "Hemisphere",
    "HexGrid",
    "InvalidCoordinateError",
    "InvariantReport",
    "IslandConfig",
    "IslandGroup",
    "MapConfig",
    "ModificationLoadError",
    "ModificationSaveError",
    "Season",
    "SeededRandom",
    "TerrainModification",
    "TerrainType",
    "Tile",
    "WorldGenerator",
    "apply_modifications",
    "change_terrain",
    "change_terrain_by_ids",
    "change_terrain_in_area",
    "change_terrain_in_radius",
    "check_invariants",
    "clear_modifications",
    "coastal_land_sides",
    "derive_coast",
    "derive_seed",
    "export_world_json",
    "generate_world",
    "hemisphere_for",
    "hex_distance",
    "hex_key",
    "in_bounds",
    "load_modifications",
    "ocean_neighbor_sides",
    "parse_hex_key",
    "record_modification",
    "save_modifications",
    "season_for",
    "terrain_report",
    "world_to_dict",
]
