"""
Visualization - SVG drawing of laid-out workflow graphs.

Takes positions from layout and statuses from monitor; no layout logic here.
"""

from .fallback import render_phases_fallback
from .svg import (
    AGENT_ICONS,
    EMPTY_NODES,
    EMPTY_PHASES,
    STATUS_STYLES,
    agent_icon,
    draw_edge,
    draw_node,
    node_style,
    render_graph_svg,
)

__all__ = [
    "AGENT_ICONS",
    "EMPTY_NODES",
    "EMPTY_PHASES",
    "STATUS_STYLES",
    "agent_icon",
    "draw_edge",
    "draw_node",
    "node_style",
    "render_graph_svg",
    "render_phases_fallback",
]
