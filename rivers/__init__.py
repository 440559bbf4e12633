"""River network generation on top of a finished hexworld grid."""

from .network import RiverNetworkGenerator, edges_for_tile, generate_rivers, river_edges
from .types import (
    InvalidEdgeIdError,
    RejectReason,
    River,
    RiverEdge,
    RiverGenerationConfig,
    RiverGenerationReport,
    RiverPath,
    RiverSegment,
    make_edge_id,
    parse_edge_id,
)
from .validation import validate_path

__all__ = [
    "InvalidEdgeIdError",
    "RejectReason",
    "River",
    "RiverEdge",
    "RiverGenerationConfig",
    "RiverGenerationReport",
    "RiverNetworkGenerator",
    "RiverPath",
    "RiverSegment",
    "edges_for_tile",
    "generate_rivers",
    "make_edge_id",
    "parse_edge_id",
    "river_edges",
    "validate_path",
]
