"""Main FastAPI application for the model dispatch service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dispatcher.api import api_router, health_router
from dispatcher.clients.holder import close_clients
from dispatcher.core.config import get_settings
from dispatcher.observability import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
    get_logger,
    sanitize,
)

_settings = get_settings()

configure_logging(
    log_level=_settings.log_level,
    log_format=_settings.log_format if not _settings.debug else "console",
    development_mode=_settings.debug,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(f"Starting {settings.service_name}")
    logger.info("Settings loaded", settings=sanitize(settings.model_dump()))

    yield

    await close_clients()
    logger.info(f"Shutting down {settings.service_name}")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Model Dispatch",
        description="""
Query dispatch across generative-AI model backends.

## Features

- **Fallback chat**: Primary provider first, then secondary models in order
- **Multi-model query**: Fan out to several secondary models concurrently
- **Aggregation modes**: `parallel` (all successes) or `fallback` (first success)

## Workflow

1. Caller sends a conversation (ordered role-tagged messages)
2. Dispatcher tries the configured providers
3. Returns the best available text or the aggregated outcomes
        """,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)  # /health, /ready
    app.include_router(api_router)  # /api/v1/chat, /api/v1/query, /api/v1/models

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "dispatcher.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
