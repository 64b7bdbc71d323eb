"""API route modules."""

from fastapi import FastAPI

from shared.settings import Settings

from . import graph
from ..state import init_api_state


def register_routes(app: FastAPI, settings: Settings):
    """Register all API routers. Call after app and settings are created."""
    init_api_state(settings)

    app.include_router(graph.router, prefix="/api/graph", tags=["graph"])
