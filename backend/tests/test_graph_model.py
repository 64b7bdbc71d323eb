"""Tests for workflow parsing, node normalization and structural diagnostics."""

import orjson
import pytest

from shared.graph import (
    build_dependency_graph,
    count_agents,
    find_graph_issues,
    normalize_nodes,
    normalize_records,
    parse_workflow,
)
from shared.models import PhaseStatus, Workflow, WorkflowNode

WORKFLOW_YAML = """
name: fix
display_name: Bug Fix
version: 1.0
workflow_type: fix
nodes:
  - ref: investigate
    display_name: Investigate
    agent: investigator
    model: haiku
    timeout: 60
    required: true
  - ref: patch
    display_name: Patch
    agent: worker
    model: sonnet
    timeout: 300
    depends_on: [investigate]
"""


class TestParseWorkflow:
    def test_camel_case_dict(self, feature_workflow):
        wf = parse_workflow(feature_workflow)
        assert wf.display_name == "Feature"
        assert wf.workflow_type == "feat"
        assert wf.nodes[3].depends_on == ["design", "tests"]
        assert wf.nodes[0].timeout == 60
        assert wf.nodes[0].required is True

    def test_yaml_text(self):
        wf = parse_workflow(WORKFLOW_YAML)
        assert wf.name == "fix"
        assert wf.version == "1.0"
        assert wf.nodes[1].display_name == "Patch"
        assert wf.nodes[1].depends_on == ["investigate"]

    def test_json_bytes(self, feature_workflow):
        wf = parse_workflow(orjson.dumps(feature_workflow))
        assert [n.ref for n in wf.nodes] == ["discover", "design", "tests", "implement"]

    def test_api_envelope(self, feature_workflow):
        assert parse_workflow({"workflow": feature_workflow}).name == "feat"

    def test_model_passthrough(self):
        wf = Workflow(name="x")
        assert parse_workflow(wf) is wf

    def test_null_fields(self):
        wf = parse_workflow({"name": "n", "nodes": [{"ref": "a", "dependsOn": None, "agent": None}]})
        assert wf.nodes[0].depends_on == []
        assert wf.nodes[0].agent == ""

    @pytest.mark.parametrize("bad", [None, 42, "just text", "[1, 2]", b"{not: [valid"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            parse_workflow(bad)

    def test_invalid_nodes(self):
        with pytest.raises(ValueError):
            parse_workflow({"name": "n", "nodes": "not a list"})

    def test_malformed_node_is_skipped(self):
        wf = parse_workflow({"nodes": [
            {"ref": "a"},
            {"ref": "b", "dependsOn": ["a"], "timeoutSeconds": "slow"},
            "junk",
            {"ref": "c", "dependsOn": ["a"]},
        ]})
        assert [n.ref for n in wf.nodes] == ["a", "c"]


class TestNormalizeNodes:
    def test_drops_nodes_without_ref(self):
        nodes = normalize_nodes([{"ref": "a"}, {"displayName": "anonymous"}, "junk", {"ref": "b"}])
        assert [n.ref for n in nodes] == ["a", "b"]

    def test_drops_malformed_nodes(self):
        nodes = normalize_nodes([{"ref": "a", "required": {"no": 1}}, {"ref": "b"}])
        assert [n.ref for n in nodes] == ["b"]

    def test_keeps_models(self):
        node = WorkflowNode(ref="a")
        assert normalize_nodes([node]) == [node]

    def test_none(self):
        assert normalize_nodes(None) == []

    def test_label_falls_back_to_ref(self):
        assert WorkflowNode(ref="a").label == "a"
        assert WorkflowNode(ref="a", displayName="Alpha").label == "Alpha"


class TestNormalizeRecords:
    def test_camel_case_records(self):
        records = normalize_records([
            {"phaseName": "a", "displayName": "A", "agentName": "worker", "status": "running"},
            {"phaseName": "b", "status": "paused"},
            "junk",
        ])
        assert [r.phase_name for r in records] == ["a", "b"]
        assert records[0].status is PhaseStatus.RUNNING
        assert records[1].status is PhaseStatus.PENDING


class TestPhaseStatus:
    @pytest.mark.parametrize("value", ["pending", "running", "completed", "failed", "cancelled", "created"])
    def test_known(self, value):
        assert PhaseStatus.parse(value).value == value

    @pytest.mark.parametrize("value", [None, "", "skipped", "COMPLETED!", 3, ["running"]])
    def test_unknown_defaults_to_pending(self, value):
        assert PhaseStatus.parse(value) is PhaseStatus.PENDING


class TestGraphIssues:
    def test_clean_workflow(self, make_nodes):
        assert find_graph_issues(make_nodes(("a", []), ("b", ["a"]))) == []

    def test_reports_every_kind(self, make_nodes):
        nodes = make_nodes(("a", ["b"]), ("b", ["a"]), ("c", ["ghost"]), ("s", ["s"]), ("a", []))
        issues = find_graph_issues(nodes)
        assert "duplicate node ref: a" in issues
        assert "node c depends on non-existent node ghost" in issues
        assert "node s depends on itself" in issues
        assert any(i.startswith("circular dependency:") for i in issues)

    def test_two_node_cycle(self, make_nodes):
        issues = find_graph_issues(make_nodes(("a", ["b"]), ("b", ["a"])))
        assert issues == ["circular dependency: a -> b -> a"]

    def test_one_cycle_per_component(self, make_nodes):
        nodes = make_nodes(("a", ["b"]), ("b", ["a"]), ("c", []), ("x", ["y"]), ("y", ["z"]), ("z", ["x"]))
        cycles = [i for i in find_graph_issues(nodes) if i.startswith("circular dependency:")]
        assert len(cycles) == 2
        assert cycles[0].startswith("circular dependency: a")
        assert cycles[1].endswith("-> x")

    def test_dense_cycle_reported_once(self, make_nodes):
        refs = [f"p{i}" for i in range(12)]
        nodes = make_nodes(*[(r, [d for d in refs if d != r]) for r in refs])
        cycles = [i for i in find_graph_issues(nodes) if i.startswith("circular dependency:")]
        assert len(cycles) == 1

    def test_dependency_graph_skips_unknown_and_self(self, make_nodes):
        G = build_dependency_graph(make_nodes(("a", ["a"]), ("b", ["a", "ghost"])))
        assert sorted(G.nodes()) == ["a", "b"]
        assert list(G.edges()) == [("a", "b")]


class TestCountAgents:
    def test_counts_in_first_seen_order(self):
        nodes = [WorkflowNode(ref="a", agent="worker"), WorkflowNode(ref="b", agent="architect"),
                 WorkflowNode(ref="c", agent="worker"), WorkflowNode(ref="d")]
        assert list(count_agents(nodes).items()) == [("worker", 2), ("architect", 1), ("unknown", 1)]
