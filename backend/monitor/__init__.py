"""
Monitor Module
Builds workflow graph drawings, with live phase status when a task is running.
"""

import html
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from loguru import logger

from layout import (
    ConfigProfile,
    canvas_height,
    canvas_width,
    compute_graph_layout,
    compute_layers,
    compute_positions,
    get_profile,
)
from shared.graph import find_graph_issues, normalize_nodes, normalize_records, parse_workflow
from shared.models import WorkflowNode
from visualization import EMPTY_NODES, EMPTY_PHASES, render_graph_svg, render_phases_fallback

from .status import bind_statuses, build_phase_status_map, status_label

Size = Union[str, ConfigProfile, None]
WorkflowFetcher = Callable[[str], Awaitable[Any]]

__all__ = [
    "bind_statuses",
    "build_phase_status_map",
    "build_workflow_layout",
    "render_panel",
    "render_task_panel",
    "render_task_phases_graph",
    "render_workflow_graph",
    "render_workflow_graph_with_status",
    "status_label",
]


def _workflow_nodes(workflow: Any) -> List[WorkflowNode]:
    wf = parse_workflow(workflow)
    nodes = normalize_nodes(wf.nodes)
    issues = find_graph_issues(nodes)
    if issues:
        logger.warning("Workflow {} has structural issues: {}", wf.name or "<unnamed>", "; ".join(issues))
    return nodes


def render_workflow_graph_with_status(workflow: Any, phases: Optional[Iterable[Any]], size: Size = None) -> str:
    """Layered drawing of a workflow, each node colored by its bound phase status."""
    profile = get_profile(size)
    nodes = _workflow_nodes(workflow)
    if not nodes:
        return EMPTY_NODES

    layers = compute_layers(nodes)
    positions = compute_positions(layers, profile)
    statuses = bind_statuses(nodes, phases or [])
    width = canvas_width(positions, profile)
    height = canvas_height(layers, profile)
    logger.debug("Rendering {} node(s) in {} layer(s), canvas {}x{}", len(nodes), len(layers), width, height)
    return render_graph_svg(nodes, positions, statuses, profile, width, height)


def render_workflow_graph(workflow: Any, size: Size = None) -> str:
    """Structure preview (workflow cards/detail): every node is pending."""
    return render_workflow_graph_with_status(workflow, [], size)


def build_workflow_layout(workflow: Any, size: Size = None) -> Optional[Dict[str, Any]]:
    """Layout payload {layers, nodes, edges, width, height} or None when the workflow has no nodes."""
    return compute_graph_layout(_workflow_nodes(workflow), get_profile(size))


async def render_task_phases_graph(
    phases: Optional[Iterable[Any]],
    workflow_type: str,
    fetch_workflow: WorkflowFetcher,
    size: Size = None,
) -> str:
    """
    Drawing for a running task. Loads the workflow structure once through
    fetch_workflow; if that fails the phases are drawn as a single row instead.
    """
    profile = get_profile(size)
    records = normalize_records(phases)
    if not records:
        return EMPTY_PHASES

    try:
        workflow = parse_workflow(await fetch_workflow(workflow_type))
    except Exception as e:
        logger.warning("Workflow {!r} unavailable, drawing phases linearly: {}", workflow_type, e)
        return render_phases_fallback(records, profile)

    return render_workflow_graph_with_status(workflow, records, profile)


def _error_panel(e: Exception) -> str:
    return f'<p class="error">Failed to render graph: {html.escape(str(e) or e.__class__.__name__)}</p>'


def render_panel(render: Callable[..., str], *args, **kwargs) -> str:
    """Run a render function for a dashboard panel; failures become an inline error message."""
    try:
        return render(*args, **kwargs)
    except Exception as e:
        logger.exception("Graph render failed")
        return _error_panel(e)


async def render_task_panel(
    phases: Optional[Iterable[Any]],
    workflow_type: str,
    fetch_workflow: WorkflowFetcher,
    size: Size = None,
) -> str:
    try:
        return await render_task_phases_graph(phases, workflow_type, fetch_workflow, size)
    except Exception as e:
        logger.exception("Task phase graph render failed")
        return _error_panel(e)
