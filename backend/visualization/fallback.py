"""
Linear fallback drawing used when the workflow structure cannot be loaded.
Phases are placed left to right in list order, no edges.
"""

from typing import Any, Iterable, List

from layout.constants import ConfigProfile
from shared.graph import normalize_records

from .svg import EMPTY_PHASES, draw_node, svg_open


def fallback_positions(count: int, profile: ConfigProfile) -> List[dict]:
    return [
        {"x": float(profile.spacing_x + i * (profile.node_width + profile.spacing_x)), "y": float(profile.spacing_y)}
        for i in range(count)
    ]


def render_phases_fallback(records: Iterable[Any], profile: ConfigProfile) -> str:
    """Render phase records (PhaseStatusRecord) as a single row, each styled by its own status."""
    phases = normalize_records(records)
    if not phases:
        return EMPTY_PHASES

    width = len(phases) * (profile.node_width + profile.spacing_x) + profile.spacing_x
    height = profile.node_height + 2 * profile.spacing_y

    parts = [svg_open(width, height), '<g class="graph-nodes">']
    for phase, pos in zip(phases, fallback_positions(len(phases), profile)):
        label = phase.display_name or phase.phase_name
        parts.append(draw_node(label, phase.agent_name, pos, profile, phase.status))
    parts.append("</g></svg>")
    return "".join(parts)
