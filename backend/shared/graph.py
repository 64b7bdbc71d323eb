"""
Graph utilities for workflow node lists.
Parsing/normalization of raw workflow payloads and structural diagnostics.
Shared by layout (layering) and monitor (render pipeline).
"""

from typing import Any, Dict, Iterable, List, Optional, Union

import networkx as nx
import orjson
import yaml
from loguru import logger
from pydantic import ValidationError

from .models import PhaseStatusRecord, Workflow, WorkflowNode, coerce_node


def parse_workflow(data: Any) -> Workflow:
    """
    Parse a workflow from a model, dict, JSON text or YAML text.
    Accepts the API envelope {"workflow": {...}} as well.
    Raises ValueError on anything that is not a workflow object.
    """
    if isinstance(data, Workflow):
        return data
    if isinstance(data, (bytes, str)):
        data = _load_text(data)
    if isinstance(data, dict) and isinstance(data.get("workflow"), dict):
        data = data["workflow"]
    if not isinstance(data, dict):
        raise ValueError("Invalid workflow format")
    try:
        return Workflow.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid workflow format: {e.error_count()} field error(s)") from e


def _load_text(text: Union[bytes, str]) -> Any:
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError("Invalid workflow format") from e


def normalize_nodes(raw_nodes: Optional[Iterable[Any]]) -> List[WorkflowNode]:
    """Validate raw nodes into WorkflowNode models, dropping entries without a ref."""
    nodes: List[WorkflowNode] = []
    for idx, raw in enumerate(raw_nodes or []):
        node = coerce_node(raw, idx)
        if node is None:
            continue
        if not node.ref:
            logger.warning("Skipping workflow node without ref at index {}", idx)
            continue
        nodes.append(node)
    return nodes


def normalize_records(records: Optional[Iterable[Any]]) -> List[PhaseStatusRecord]:
    """Validate raw phase-status records. Malformed entries are skipped."""
    result: List[PhaseStatusRecord] = []
    for idx, raw in enumerate(records or []):
        if isinstance(raw, PhaseStatusRecord):
            result.append(raw)
            continue
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object phase record at index {}", idx)
            continue
        try:
            result.append(PhaseStatusRecord.model_validate(raw))
        except ValidationError:
            logger.warning("Skipping malformed phase record at index {}", idx)
    return result


def build_dependency_graph(nodes: List[WorkflowNode]) -> nx.DiGraph:
    """Build dependency graph (dependency -> dependent). Unknown refs and self-edges are left out."""
    refs = {n.ref for n in nodes}
    G = nx.DiGraph()
    for n in nodes:
        G.add_node(n.ref)
        for dep in n.depends_on:
            if dep in refs and dep != n.ref:
                G.add_edge(dep, n.ref)
    return G


def find_graph_issues(nodes: List[WorkflowNode]) -> List[str]:
    """
    Structural diagnostics: duplicate refs, dangling and self dependencies, cycles.
    Never raises; the layering tolerates every issue reported here.
    """
    issues: List[str] = []
    seen = set()
    for n in nodes:
        if n.ref in seen:
            issues.append(f"duplicate node ref: {n.ref}")
        seen.add(n.ref)

    for n in nodes:
        for dep in n.depends_on:
            if dep == n.ref:
                issues.append(f"node {n.ref} depends on itself")
            elif dep not in seen:
                issues.append(f"node {n.ref} depends on non-existent node {dep}")

    # one cycle per strongly connected component, not every simple cycle
    G = build_dependency_graph(nodes)
    order = {ref: i for i, ref in enumerate(G.nodes)}
    components = [c for c in nx.strongly_connected_components(G) if len(c) > 1]
    for component in sorted(components, key=lambda c: min(order[r] for r in c)):
        start = min(component, key=order.__getitem__)
        cycle = [u for u, _ in nx.find_cycle(G.subgraph(component), source=start)]
        issues.append("circular dependency: " + " -> ".join(cycle + cycle[:1]))
    return issues


def count_agents(nodes: List[WorkflowNode]) -> Dict[str, int]:
    """Agent -> node count, in first-seen order. Nodes without agent count as 'unknown'."""
    counts: Dict[str, int] = {}
    for n in nodes:
        agent = n.agent or "unknown"
        counts[agent] = counts.get(agent, 0) + 1
    return counts
