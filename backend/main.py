"""
Phase Graph Backend - FastAPI entry point.
Serves layered workflow graph drawings for the task-monitoring dashboard.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from api import register_routes
from shared.settings import Settings, configure_logging, load_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Phase Graph Backend")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app, settings)
    logger.info("Phase graph backend ready (default size: {})", settings.default_size)
    return app


# ASGI app for uvicorn
app = create_app()
