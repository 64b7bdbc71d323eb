"""Graph API - workflow previews, task phase graphs, structure checks."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from layout import compute_graph_layout
from monitor import render_task_phases_graph, render_workflow_graph
from shared.graph import count_agents, find_graph_issues, normalize_nodes, parse_workflow

from .. import state as api_state
from ..schemas import PhaseGraphRequest, WorkflowGraphRequest, WorkflowValidateRequest

router = APIRouter()


@router.get("/profiles")
async def get_profiles():
    profiles = api_state.get_settings().profiles()
    return {"profiles": {name: p.model_dump(by_alias=True) for name, p in profiles.items()}}


@router.post("/workflow")
async def workflow_graph(body: WorkflowGraphRequest):
    try:
        profile = api_state.get_settings().profile(body.size)
        workflow = parse_workflow(body.workflow)
        nodes = normalize_nodes(workflow.nodes)
        return {
            "svg": render_workflow_graph(workflow, profile),
            "layout": compute_graph_layout(nodes, profile),
            "agentCounts": count_agents(nodes),
        }
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        logger.exception("Error rendering workflow graph")
        return JSONResponse(status_code=500, content={"error": "Failed to render workflow graph"})


@router.post("/phases")
async def phases_graph(body: PhaseGraphRequest):
    async def fetch_workflow(workflow_type):
        if body.workflow is None:
            raise LookupError(f"No workflow supplied for type {workflow_type!r}")
        return body.workflow

    try:
        profile = api_state.get_settings().profile(body.size)
        svg = await render_task_phases_graph(body.phases, body.workflow_type, fetch_workflow, profile)
        return {"svg": svg}
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        logger.exception("Error rendering phase graph")
        return JSONResponse(status_code=500, content={"error": "Failed to render phase graph"})


@router.post("/validate")
async def validate_workflow(body: WorkflowValidateRequest):
    try:
        workflow = parse_workflow(body.workflow)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    nodes = normalize_nodes(workflow.nodes)
    return {"issues": find_graph_issues(nodes), "nodeCount": len(nodes)}
