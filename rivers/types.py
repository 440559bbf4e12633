from __future__ import annotations

"""Configuration, result and diagnostic types for river generation."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from hexworld.grid import hex_key
from hexworld.hex import Coordinate

from .settings import DEFAULT_MAX_ATTEMPTS, DEFAULT_MIN_LENGTH

DOWNSTREAM = "downstream"

STRATEGY_PRIMARY = "primary"
STRATEGY_FALLBACK = "fallback"


class RejectReason(Enum):
    TOO_SHORT = "too_short"
    DEAD_END = "dead_end"
    UPHILL = "uphill"
    ENDS_IN_OCEAN = "ends_in_ocean"
    NO_COAST_REACHABLE = "no_coast_reachable"
    STEP_LIMIT = "step_limit"
    NOT_CONTIGUOUS = "not_contiguous"
    INVALID_SOURCE = "invalid_source"


class InvalidEdgeIdError(ValueError):
    """Raised when a river edge id cannot be parsed."""


# ─────────────────────────────────────────────────────────────────────────────
# == EDGE IDS ==

def make_edge_id(a: Coordinate, b: Coordinate) -> str:
    """Order-independent id for the border between two tiles: ``"q1,r1:q2,r2"``."""
    k1 = hex_key(*a)
    k2 = hex_key(*b)
    return f"{k1}:{k2}" if k1 < k2 else f"{k2}:{k1}"


def parse_edge_id(edge_id: str) -> Tuple[Coordinate, Coordinate]:
    """
    Inverse of :func:`make_edge_id`.

    Raises:
        InvalidEdgeIdError: if the id is not two ``q,r`` keys joined by ``:``.
    """
    halves = edge_id.split(":")
    if len(halves) != 2:
        raise InvalidEdgeIdError(f"Invalid edge id: {edge_id!r}")
    coords = []
    for half in halves:
        parts = half.split(",")
        if len(parts) != 2:
            raise InvalidEdgeIdError(f"Invalid edge id: {edge_id!r}")
        try:
            coords.append((int(parts[0]), int(parts[1])))
        except ValueError as e:
            raise InvalidEdgeIdError(f"Invalid edge id: {edge_id!r}") from e
    return coords[0], coords[1]


# ─────────────────────────────────────────────────────────────────────────────
# == CONFIG ==

@dataclass
class RiverGenerationConfig:
    """
    min_length: Minimum river length in tiles. Values below 1 count as 1.
    max_attempts: Upper bound on sources tried per run. Values below 0 count as 0.
    flow_to_ocean: Rivers must end on a coast tile. Only True is supported.
    allow_lakes: Reserved; lakes are never generated.
    """

    min_length: int = DEFAULT_MIN_LENGTH
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    flow_to_ocean: bool = True
    allow_lakes: bool = False

    @property
    def required_length(self) -> int:
        return max(1, self.min_length)

    @property
    def attempt_limit(self) -> int:
        return max(0, self.max_attempts)

    @property
    def out_of_range(self) -> bool:
        return self.min_length < 1 or self.max_attempts < 0


# ─────────────────────────────────────────────────────────────────────────────
# == RESULTS ==

@dataclass
class RiverPath:
    """Outcome of one search strategy for one source."""

    path: List[Coordinate]
    strategy: str
    reason: Optional[RejectReason] = None
    detail: str = ""

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @property
    def length(self) -> int:
        return len(self.path)


@dataclass
class RiverSegment:
    coord: Coordinate
    elevation: float
    distance_from_source: int
    distance_to_mouth: int
    flow_direction: str = DOWNSTREAM

    def to_json(self) -> Dict[str, Any]:
        return {
            "coord": {"q": self.coord[0], "r": self.coord[1]},
            "elevation": self.elevation,
            "flow_direction": self.flow_direction,
            "distance_from_source": self.distance_from_source,
            "distance_to_mouth": self.distance_to_mouth,
        }


@dataclass
class RiverEdge:
    edge_id: str
    hex1: Coordinate
    hex2: Coordinate
    direction: int
    river_id: str

    def touches(self, q: int, r: int) -> bool:
        return (q, r) == self.hex1 or (q, r) == self.hex2

    def to_json(self) -> Dict[str, Any]:
        return {
            "edge_id": self.edge_id,
            "hex1": {"q": self.hex1[0], "r": self.hex1[1]},
            "hex2": {"q": self.hex2[0], "r": self.hex2[1]},
            "direction": self.direction,
            "river_id": self.river_id,
        }


@dataclass
class River:
    id: str
    source: Coordinate
    mouth: Coordinate
    segments: List[RiverSegment]
    edges: List[RiverEdge]
    strategy: str
    flow_direction: str = DOWNSTREAM

    @property
    def length(self) -> int:
        return len(self.segments)

    @property
    def path(self) -> List[Coordinate]:
        return [s.coord for s in self.segments]

    def flow_direction_at(self, q: int, r: int) -> Optional[str]:
        """Flow direction through (q, r), or None if the river does not pass there."""
        for seg in self.segments:
            if seg.coord == (q, r):
                return seg.flow_direction
        return None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": {"q": self.source[0], "r": self.source[1]},
            "mouth": {"q": self.mouth[0], "r": self.mouth[1]},
            "length": self.length,
            "flow_direction": self.flow_direction,
            "strategy": self.strategy,
            "segments": [s.to_json() for s in self.segments],
            "edges": [e.to_json() for e in self.edges],
        }


@dataclass
class RiverGenerationReport:
    """Diagnostics for one generation run."""

    sources: int = 0
    attempts: int = 0
    accepted: int = 0
    rejections: Counter = field(default_factory=Counter)
    by_strategy: Counter = field(default_factory=Counter)

    def reject(self, reason: RejectReason) -> None:
        self.rejections[reason] += 1

    def accept(self, strategy: str) -> None:
        self.accepted += 1
        self.by_strategy[strategy] += 1

    def summary(self) -> Dict[str, Any]:
        return {
            "sources": self.sources,
            "attempts": self.attempts,
            "accepted": self.accepted,
            "rejections": {r.value: n for r, n in sorted(self.rejections.items(), key=lambda kv: kv[0].value)},
            "by_strategy": dict(sorted(self.by_strategy.items())),
        }


__all__ = [
    "DOWNSTREAM",
    "InvalidEdgeIdError",
    "RejectReason",
    "River",
    "RiverEdge",
    "RiverGenerationConfig",
    "RiverGenerationReport",
    "RiverPath",
    "RiverSegment",
    "STRATEGY_FALLBACK",
    "STRATEGY_PRIMARY",
    "make_edge_id",
    "parse_edge_id",
]
