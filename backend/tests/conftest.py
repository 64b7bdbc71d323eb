"""Shared fixtures: small workflows built from (ref, deps) pairs."""

import pytest

from shared.models import WorkflowNode


def build_nodes(*specs):
    """build_nodes(("a", []), ("b", ["a"])) -> [WorkflowNode, ...]"""
    return [
        WorkflowNode(ref=ref, display_name=ref.upper(), agent="worker", depends_on=list(deps))
        for ref, deps in specs
    ]


@pytest.fixture
def make_nodes():
    return build_nodes


@pytest.fixture
def feature_workflow():
    """Diamond-shaped workflow in the dashboard's camelCase shape."""
    return {
        "name": "feat",
        "displayName": "Feature",
        "workflowType": "feat",
        "version": "1.0",
        "nodes": [
            {"ref": "discover", "displayName": "Discovery", "agent": "investigator", "model": "haiku",
             "timeoutSeconds": 60, "required": True, "dependsOn": []},
            {"ref": "design", "displayName": "Design", "agent": "architect", "model": "opus",
             "timeoutSeconds": 120, "required": True, "dependsOn": ["discover"]},
            {"ref": "tests", "displayName": "Write Tests", "agent": "tdd-guide", "model": "sonnet",
             "timeoutSeconds": 120, "required": False, "dependsOn": ["discover"]},
            {"ref": "implement", "displayName": "Implementation", "agent": "worker", "model": "sonnet",
             "timeoutSeconds": 300, "required": True, "dependsOn": ["design", "tests"]},
        ],
    }
