from __future__ import annotations

"""
Axial hex math and the dense tile arena used by every generation stage.

The grid is addressed by a flat index derived from bounded axial
coordinates, so "missing key" is a bounds check rather than a hash miss.
"""

import math
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .hex import Coordinate, TerrainType, Tile

# ─────────────────────────────────────────────────────────────────────────────
# == HEX NEIGHBOR CONSTANTS ==

# Axial hex directions, clockwise from East: E, NE, NW, W, SW, SE.
# The position in this list is the side/direction index (0-5).
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
]


class InvalidCoordinateError(ValueError):
    """Raised when a provided coordinate is not a valid (int, int) pair."""


# ─────────────────────────────────────────────────────────────────────────────
# == COORDINATE HELPERS ==

def hex_key(q: int, r: int) -> str:
    """Map-storage key for a coordinate, e.g. ``"-3,12"``."""
    return f"{q},{r}"


def parse_hex_key(key: str) -> Coordinate:
    """
    Parse a ``"q,r"`` (or ``"q:r"``) key back into a coordinate.

    Raises:
        InvalidCoordinateError: If the key does not hold two integers.
    """
    parts = key.replace(":", ",").split(",")
    if len(parts) != 2:
        raise InvalidCoordinateError(f"Invalid hex key: {key!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidCoordinateError(f"Invalid hex key: {key!r}") from e


def validate_coordinate(coord: object) -> Coordinate:
    """Return ``coord`` as a tuple if it is an (int, int) pair, else raise."""
    if not (
        isinstance(coord, tuple)
        and len(coord) == 2
        and all(isinstance(c, int) and not isinstance(c, bool) for c in coord)
    ):
        raise InvalidCoordinateError(f"Coordinates must be (int,int) tuples, got {coord!r}")
    return coord  # type: ignore[return-value]


def hex_distance(a: Coordinate, b: Coordinate) -> int:
    """Axial hex distance between two coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def direction_between(a: Coordinate, b: Coordinate) -> Optional[int]:
    """Direction index (0-5) from ``a`` to adjacent ``b``, or None if not adjacent."""
    delta = (b[0] - a[0], b[1] - a[1])
    try:
        return HEX_DIRECTIONS.index(delta)
    except ValueError:
        return None


def in_bounds(q: int, r: int, width: int, height: int) -> bool:
    """
    True if (q, r) lies inside a ``width`` x ``height`` map centered on (0, 0).

    The row is converted to offset coordinates so the map is a rectangle in
    offset space rather than a rhombus in axial space.
    """
    row = r + q // 2
    return -width / 2 <= q < width / 2 and -height / 2 <= row < height / 2


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def latitude_for_row(r: int, height: int) -> float:
    """Latitude in degrees for axial row ``r`` (about -90 to +90)."""
    return (r / height) * 180


# ─────────────────────────────────────────────────────────────────────────────
# == TILE ARENA ==

class HexGrid:
    """
    Dense arena of tiles for a bounded map.

    Slots are indexed by ``(q + width // 2) + (r + height // 2) * width``;
    coordinates that fail :func:`in_bounds` have no tile and ``get`` returns
    None for them. Iteration is row-major (r outer, q inner).
    """

    __slots__ = ("width", "height", "seed", "month", "_slots", "_neighbor_cache", "_q0", "_r0")

    def __init__(self, width: int, height: int, *, seed: int = 0, month: int = 1) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.seed = seed
        self.month = month
        self._q0 = width // 2
        self._r0 = height // 2
        self._slots: List[Optional[Tile]] = [None] * (width * height)
        self._neighbor_cache: Dict[int, Tuple[Optional[Tile], ...]] = {}

    # Indexing ---------------------------------------------------------------
    def index_of(self, q: int, r: int) -> Optional[int]:
        """Flat slot index for (q, r), or None when out of bounds."""
        qi = q + self._q0
        ri = r + self._r0
        if not (0 <= qi < self.width and 0 <= ri < self.height):
            return None
        if not in_bounds(q, r, self.width, self.height):
            return None
        return qi + ri * self.width

    def coords(self) -> Iterator[Coordinate]:
        """Every in-bounds coordinate in row-major order."""
        for r in range(-self._r0, self.height - self._r0):
            for q in range(-self._q0, self.width - self._q0):
                if in_bounds(q, r, self.width, self.height):
                    yield q, r

    # Tile access ------------------------------------------------------------
    def put(self, tile: Tile) -> Tile:
        """Place a tile in its slot. Raises InvalidCoordinateError when out of bounds."""
        idx = self.index_of(*tile.coord)
        if idx is None:
            raise InvalidCoordinateError(f"Tile coordinate out of bounds: {tile.coord}")
        tile.index = idx
        self._slots[idx] = tile
        self._neighbor_cache.clear()
        return tile

    def get(self, q: int, r: int) -> Optional[Tile]:
        """Retrieve the tile at (q, r); None if out of bounds or never generated."""
        idx = self.index_of(q, r)
        if idx is None:
            return None
        return self._slots[idx]

    def __contains__(self, coord: Coordinate) -> bool:
        return self.get(coord[0], coord[1]) is not None

    def __len__(self) -> int:
        return sum(1 for t in self._slots if t is not None)

    def __iter__(self) -> Iterator[Tile]:
        return self.tiles()

    def tiles(self) -> Iterator[Tile]:
        for tile in self._slots:
            if tile is not None:
                yield tile

    def tiles_with(self, terrain: TerrainType) -> List[Tile]:
        return [t for t in self.tiles() if t.terrain is terrain]

    # Neighbors --------------------------------------------------------------
    def neighbor_slots(self, tile: Tile) -> Tuple[Optional[Tile], ...]:
        """
        Six neighbor slots in direction order; out-of-bounds slots are None.
        Cached per tile because tiles never move once placed.
        """
        cached = self._neighbor_cache.get(tile.index)
        if cached is None:
            q, r = tile.coord
            cached = tuple(self.get(q + dq, r + dr) for dq, dr in HEX_DIRECTIONS)
            self._neighbor_cache[tile.index] = cached
        return cached

    def neighbors(self, tile: Tile) -> List[Tile]:
        """In-bounds neighbors of ``tile`` in direction order."""
        return [n for n in self.neighbor_slots(tile) if n is not None]

    def neighbors_of(self, q: int, r: int) -> List[Tile]:
        tile = self.get(q, r)
        if tile is None:
            return []
        return self.neighbors(tile)

    def terrain_histogram(self) -> Dict[str, int]:
        """Count of tiles per terrain value, sorted by terrain name."""
        counts: Dict[str, int] = {}
        for tile in self.tiles():
            counts[tile.terrain.value] = counts.get(tile.terrain.value, 0) + 1
        return dict(sorted(counts.items()))


# ─────────────────────────────────────────────────────────────────────────────
# == DERIVED SIDE QUERIES ==

def coastal_land_sides(grid: HexGrid, tile: Tile) -> List[int]:
    """
    Which sides (0-5) of ``tile`` touch land (not ocean, coast or ice).
    Always recomputed from current terrain.
    """
    return [
        side
        for side, n in enumerate(grid.neighbor_slots(tile))
        if n is not None and n.is_land
    ]


def ocean_neighbor_sides(grid: HexGrid, tile: Tile) -> List[int]:
    """Which sides (0-5) of ``tile`` touch ocean or coast."""
    return [
        side
        for side, n in enumerate(grid.neighbor_slots(tile))
        if n is not None and n.is_water
    ]


def iter_in_radius(center: Coordinate, radius: float) -> Iterable[Coordinate]:
    """Coordinates within a euclidean (q, r) radius of ``center``."""
    cq, cr = center
    span = int(radius)
    for q in range(cq - span, cq + span + 1):
        for r in range(cr - span, cr + span + 1):
            dq = q - cq
            dr = r - cr
            if (dq * dq + dr * dr) ** 0.5 <= radius:
                yield q, r


__all__ = [
    "HEX_DIRECTIONS",
    "HexGrid",
    "InvalidCoordinateError",
    "coastal_land_sides",
    "direction_between",
    "hex_distance",
    "hex_key",
    "in_bounds",
    "iter_in_radius",
    "latitude_for_row",
    "ocean_neighbor_sides",
    "parse_hex_key",
    "round_half_up",
    "validate_coordinate",
]
