"""
SVG rendering for workflow graphs.

Nodes are rounded rectangles styled by phase status; edges are cubic curves
from the dependency's right edge to the dependent's left edge. Edges are drawn
before nodes so arrowheads stay under node bodies.
"""

import html
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from layout.constants import ConfigProfile
from layout.positions import Position, edge_anchors
from shared.models import PhaseStatus, WorkflowNode

SVG_NS = "http://www.w3.org/2000/svg"

EDGE_COLOR = "#94a3b8"
TEXT_PRIMARY = "#1e293b"
TEXT_SECONDARY = "#64748b"
DEFAULT_FILL = "#ffffff"

# status -> (stroke, fill)
STATUS_STYLES: Dict[PhaseStatus, Tuple[str, str]] = {
    PhaseStatus.PENDING: ("#94a3b8", DEFAULT_FILL),
    PhaseStatus.CREATED: ("#94a3b8", DEFAULT_FILL),
    PhaseStatus.RUNNING: ("#3b82f6", "#dbeafe"),
    PhaseStatus.COMPLETED: ("#10b981", DEFAULT_FILL),
    PhaseStatus.FAILED: ("#ef4444", DEFAULT_FILL),
    PhaseStatus.CANCELLED: ("#6b7280", DEFAULT_FILL),
}

AGENT_ICONS = {
    "investigator": "🔍",
    "architect": "🏗️",
    "worker": "🔧",
    "tdd-guide": "🧪",
    "code-simplifier": "✨",
    "security-guidance": "🛡️",
    "code-reviewer": "👀",
    "llmdoc": "📚",
    "spec-guide": "📋",
    "unknown": "❓",
}
DEFAULT_AGENT_ICON = "🤖"

LABEL_MAX_CHARS = 12
AGENT_MAX_CHARS = 10

EMPTY_NODES = '<p class="empty">no nodes</p>'
EMPTY_PHASES = '<p class="empty">no phases</p>'


def agent_icon(agent: Optional[str]) -> str:
    return AGENT_ICONS.get(agent or "unknown", DEFAULT_AGENT_ICON)


def node_style(status: Any) -> Tuple[str, str]:
    """(stroke, fill) for a status; unknown values get the pending style."""
    return STATUS_STYLES.get(PhaseStatus.parse(status), STATUS_STYLES[PhaseStatus.PENDING])


def fmt(value: float) -> str:
    """Compact number for SVG attributes: 85.0 -> '85', 42.50 -> '42.5'."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


def svg_open(width: float, height: float) -> str:
    w, h = fmt(width), fmt(height)
    return (
        f'<svg class="workflow-graph" xmlns="{SVG_NS}" width="100%" height="{h}" '
        f'viewBox="0 0 {w} {h}" preserveAspectRatio="xMidYMid meet">'
    )


def arrow_defs() -> str:
    return (
        "<defs>"
        '<marker id="arrowhead" markerWidth="10" markerHeight="7" refX="9" refY="3.5" orient="auto">'
        f'<polygon points="0 0, 10 3.5, 0 7" fill="{EDGE_COLOR}"/>'
        "</marker>"
        "</defs>"
    )


def draw_node(label: str, agent: str, pos: Position, profile: ConfigProfile, status: Any) -> str:
    """One node glyph: rounded rect, name on top, agent icon + name below."""
    stroke, fill = node_style(status)
    cx = fmt(profile.node_width / 2)
    name = _esc((label or "")[:LABEL_MAX_CHARS])
    agent_text = _esc((agent or "")[:AGENT_MAX_CHARS])
    return (
        f'<g class="graph-node" transform="translate({fmt(pos["x"])}, {fmt(pos["y"])})">'
        f'<rect x="0" y="0" width="{profile.node_width}" height="{profile.node_height}" rx="6" ry="6" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
        f'<text x="{cx}" y="{profile.font_size + 8}" text-anchor="middle" '
        f'font-size="{profile.font_size}" font-weight="500" fill="{TEXT_PRIMARY}">{name}</text>'
        f'<text x="{cx}" y="{profile.node_height - 10}" text-anchor="middle" '
        f'font-size="{profile.font_size - 2}" fill="{TEXT_SECONDARY}">'
        f'<tspan font-size="{profile.icon_size}">{agent_icon(agent)}</tspan> {agent_text}</text>'
        "</g>"
    )


def draw_edge(src: Position, dst: Position, profile: ConfigProfile) -> str:
    (x1, y1), (c1x, c1y), (c2x, c2y), (x2, y2) = edge_anchors(src, dst, profile)
    d = f"M {fmt(x1)} {fmt(y1)} C {fmt(c1x)} {fmt(c1y)}, {fmt(c2x)} {fmt(c2y)}, {fmt(x2)} {fmt(y2)}"
    return (
        f'<path class="graph-edge" d="{d}" fill="none" stroke="{EDGE_COLOR}" '
        'stroke-width="1.5" marker-end="url(#arrowhead)"/>'
    )


def render_graph_svg(
    nodes: Sequence[WorkflowNode],
    positions: Mapping[str, Position],
    statuses: Mapping[str, Any],
    profile: ConfigProfile,
    width: float,
    height: float,
) -> str:
    """
    Assemble the full drawing. One edge per depends_on entry whose dependency
    has a position; every positioned node gets a glyph keyed by its status.
    """
    parts: List[str] = [svg_open(width, height), arrow_defs()]

    parts.append('<g class="graph-edges">')
    for n in nodes:
        dst = positions.get(n.ref)
        if dst is None:
            continue
        for dep in n.depends_on:
            src = positions.get(dep)
            if src is not None:
                parts.append(draw_edge(src, dst, profile))
    parts.append("</g>")

    parts.append('<g class="graph-nodes">')
    for n in nodes:
        pos = positions.get(n.ref)
        if pos is not None:
            parts.append(draw_node(n.label, n.agent, pos, profile, statuses.get(n.ref, PhaseStatus.PENDING)))
    parts.append("</g>")

    parts.append("</svg>")
    return "".join(parts)
