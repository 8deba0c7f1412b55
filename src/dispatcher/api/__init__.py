"""API package - FastAPI routes and dependencies."""

from dispatcher.api.router import api_router, health_router

__all__ = ["api_router", "health_router"]
