"""
API module - routes and schemas.
Routes only turn request payloads into drawings; no data is fetched or stored.
"""

from .routes import register_routes

__all__ = ["register_routes"]
