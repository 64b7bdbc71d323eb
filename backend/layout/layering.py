"""
Topological layering (Kahn-style) for workflow graphs.

Each node's pending in-degree is the number of depends_on entries not yet placed.
Refs are not checked against the node set, so a dependency on an unknown ref is
never satisfied. When no node is ready while nodes remain (cycle or dangling
reference), everything left goes into one final layer.
"""

from typing import Dict, List, Sequence, Set

from loguru import logger

from shared.models import WorkflowNode


def compute_layers(nodes: Sequence[WorkflowNode]) -> List[List[str]]:
    """
    Group nodes into layers of equal topological depth.
    Returns [[ref, ...], ...]; order within a layer follows the input order.
    Terminates on any input and places every node exactly once.
    """
    remaining = list(nodes or [])
    pending = [len(n.depends_on) for n in remaining]
    visited: Set[str] = set()
    layers: List[List[str]] = []

    while remaining:
        ready = [i for i, count in enumerate(pending) if count == 0]
        if not ready:
            stuck = [n.ref for n in remaining]
            logger.warning("Unresolvable dependencies, placing {} node(s) in final layer: {}", len(stuck), stuck)
            layers.append(stuck)
            break

        layer = [remaining[i].ref for i in ready]
        layers.append(layer)
        visited.update(layer)

        ready_set = set(ready)
        remaining = [n for i, n in enumerate(remaining) if i not in ready_set]
        pending = [sum(1 for dep in n.depends_on if dep not in visited) for n in remaining]

    return layers


def layer_index(layers: List[List[str]]) -> Dict[str, int]:
    """ref -> layer index. A duplicated ref keeps its last layer."""
    return {ref: idx for idx, layer in enumerate(layers) for ref in layer}
