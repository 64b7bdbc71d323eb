"""
Status overlay: binds runtime phase records onto workflow nodes.
"""

from typing import Any, Dict, Iterable, Sequence

from shared.graph import normalize_records
from shared.models import PhaseStatus, WorkflowNode

STATUS_LABELS = {
    PhaseStatus.PENDING: "Pending",
    PhaseStatus.CREATED: "Created",
    PhaseStatus.RUNNING: "Running",
    PhaseStatus.COMPLETED: "Completed",
    PhaseStatus.FAILED: "Failed",
    PhaseStatus.CANCELLED: "Cancelled",
}


def status_label(status: Any) -> str:
    return STATUS_LABELS[PhaseStatus.parse(status)]


def build_phase_status_map(records: Iterable[Any]) -> Dict[str, PhaseStatus]:
    """phaseName -> status. A later record for the same phase replaces an earlier one."""
    return {r.phase_name: r.status for r in normalize_records(records) if r.phase_name}


def bind_statuses(nodes: Sequence[WorkflowNode], records: Iterable[Any]) -> Dict[str, PhaseStatus]:
    """
    ref -> status for every node. A record matches on node.ref first, then on
    node.display_name; nodes without a match are PENDING.
    """
    by_phase = build_phase_status_map(records)
    statuses: Dict[str, PhaseStatus] = {}
    for n in nodes:
        if n.ref in by_phase:
            statuses[n.ref] = by_phase[n.ref]
        elif n.display_name and n.display_name in by_phase:
            statuses[n.ref] = by_phase[n.display_name]
        else:
            statuses[n.ref] = PhaseStatus.PENDING
    return statuses
