"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter

from dispatcher.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, Any]:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": get_settings().service_name}


@router.get("/ready")
async def ready() -> dict[str, Any]:
    """
    Readiness check - reports whether each provider credential is configured.

    No provider is contacted; a missing credential only degrades the service
    since the other provider can still answer.
    """
    settings = get_settings()
    checks = {
        "primary": bool(settings.primary_api_key),
        "secondary": bool(settings.secondary_api_key),
    }
    return {
        "status": "ready" if all(checks.values()) else "degraded",
        "checks": checks,
    }
