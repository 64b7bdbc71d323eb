"""Shared models and graph utilities for layout, monitor and visualization."""

from .graph import (
    build_dependency_graph,
    count_agents,
    find_graph_issues,
    normalize_nodes,
    normalize_records,
    parse_workflow,
)
from .models import PhaseStatus, PhaseStatusRecord, Workflow, WorkflowNode

__all__ = [
    "PhaseStatus",
    "PhaseStatusRecord",
    "Workflow",
    "WorkflowNode",
    "build_dependency_graph",
    "count_agents",
    "find_graph_issues",
    "normalize_nodes",
    "normalize_records",
    "parse_workflow",
]
