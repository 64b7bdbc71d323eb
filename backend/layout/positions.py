"""
Layered coordinate assignment.

Every layer is one row; rows are stacked top to bottom by layer index.
Centering uses offset = (container - content) / 2 with the widest layer as container.
"""

from typing import Any, Dict, List, Optional, Sequence

from shared.models import WorkflowNode

from .constants import ConfigProfile
from .layering import compute_layers

Position = Dict[str, float]


def layer_width(count: int, profile: ConfigProfile) -> float:
    if count <= 0:
        return 0
    return count * profile.node_width + (count - 1) * profile.spacing_x


def compute_positions(layers: List[List[str]], profile: ConfigProfile) -> Dict[str, Position]:
    """ref -> {x, y} (top-left corner). Narrower layers are centered within the widest one."""
    widths = [layer_width(len(layer), profile) for layer in layers]
    max_width = max(widths, default=0)
    stride = profile.node_width + profile.spacing_x
    row_h = profile.node_height + profile.spacing_y

    positions: Dict[str, Position] = {}
    for layer_idx, layer in enumerate(layers):
        offset = (max_width - widths[layer_idx]) / 2
        y = layer_idx * row_h
        for idx, ref in enumerate(layer):
            positions[ref] = {"x": offset + idx * stride, "y": float(y)}
    return positions


def canvas_width(positions: Dict[str, Position], profile: ConfigProfile) -> float:
    max_x = max((p["x"] for p in positions.values()), default=0)
    return max(max_x, 0) + profile.node_width + profile.spacing_x


def canvas_height(layers: List[List[str]], profile: ConfigProfile) -> float:
    return len(layers) * (profile.node_height + profile.spacing_y) + profile.spacing_y


def edge_anchors(src: Position, dst: Position, profile: ConfigProfile) -> List[List[float]]:
    """
    Bezier anchors for an edge from dependency `src` to dependent `dst`:
    [start, control1, control2, end]. Start is src's right-center, end is dst's
    left-center, both control points sit on the horizontal midpoint.
    """
    x1 = src["x"] + profile.node_width
    y1 = src["y"] + profile.node_height / 2
    x2 = dst["x"]
    y2 = dst["y"] + profile.node_height / 2
    mid_x = (x1 + x2) / 2
    return [[x1, y1], [mid_x, y1], [mid_x, y2], [x2, y2]]


def compute_graph_layout(
    nodes: Sequence[WorkflowNode],
    profile: ConfigProfile,
) -> Optional[Dict[str, Any]]:
    """
    Full layout payload for the dashboard.
    Returns {layers, nodes: {ref: {x,y,w,h}}, edges: [{from,to,points}], width, height}
    or None if there are no nodes.
    """
    if not nodes:
        return None

    layers = compute_layers(nodes)
    positions = compute_positions(layers, profile)

    nodes_out = {
        ref: {"x": round(p["x"], 1), "y": round(p["y"], 1), "w": profile.node_width, "h": profile.node_height}
        for ref, p in positions.items()
    }

    edges_out = []
    for n in nodes:
        for dep in n.depends_on:
            if dep not in positions:
                continue
            points = edge_anchors(positions[dep], positions[n.ref], profile)
            edges_out.append({
                "from": dep,
                "to": n.ref,
                "points": [[round(x, 1), round(y, 1)] for x, y in points],
            })

    return {
        "layers": layers,
        "nodes": nodes_out,
        "edges": edges_out,
        "width": round(canvas_width(positions, profile), 1),
        "height": round(canvas_height(layers, profile), 1),
    }
