"""Layout module - layers, positions and canvas size for workflow graphs."""

from .constants import COMPACT, NORMAL, PROFILES, ConfigProfile, get_profile
from .layering import compute_layers, layer_index
from .positions import (
    canvas_height,
    canvas_width,
    compute_graph_layout,
    compute_positions,
    edge_anchors,
)

__all__ = [
    "COMPACT",
    "NORMAL",
    "PROFILES",
    "ConfigProfile",
    "canvas_height",
    "canvas_width",
    "compute_graph_layout",
    "compute_layers",
    "compute_positions",
    "edge_anchors",
    "get_profile",
    "layer_index",
]
