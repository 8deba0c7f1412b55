"""Dispatch endpoints for the model dispatcher API."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dispatcher.api.dependencies import get_executor, get_orchestrator
from dispatcher.core.catalog import MODEL_CATALOG
from dispatcher.core.config import ConfigurationError
from dispatcher.observability.constants import LogEvents
from dispatcher.observability.logger import get_logger
from dispatcher.schemas import (
    CatalogResponse,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    MultiModelQueryRequest,
    MultiModelQueryResponse,
)
from dispatcher.services import FallbackOrchestrator, MultiModelExecutor

logger = get_logger(__name__)

router = APIRouter(tags=["dispatch"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    orchestrator: Annotated[FallbackOrchestrator, Depends(get_orchestrator)],
) -> ChatResponse:
    """
    Answer a conversation with the primary provider, falling back to the
    secondary provider's models in catalog order.

    Always returns a response string; provider failures never surface as
    HTTP errors.
    """
    text = await orchestrator.process_with_fallback(request.messages, request.max_tokens)
    return ChatResponse(response=text)


@router.post(
    "/query",
    response_model=MultiModelQueryResponse,
    responses={
        503: {"model": ErrorResponse, "description": "Secondary provider not configured"},
    },
)
async def query(
    request: MultiModelQueryRequest,
    executor: Annotated[MultiModelExecutor, Depends(get_executor)],
):
    """
    Query several secondary-provider models concurrently.

    **Request:**
    - `messages`: The conversation, in order
    - `mode`: `parallel` (all successes) or `fallback` (first success)
    - `max_models`: How many catalog models to attempt (default: 4)
    - `max_tokens`: Token bound per model (default: 350)
    """
    options = request.to_options()
    try:
        outcomes = await executor.process_multi_model_query(request.messages, options)
    except ConfigurationError as e:
        logger.error(LogEvents.ERROR_CONFIGURATION, setting=e.setting)
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(
                error="configuration_error",
                message=str(e),
            ).model_dump(),
        )

    return MultiModelQueryResponse(mode=options.mode, outcomes=outcomes)


@router.get("/models", response_model=CatalogResponse)
async def models() -> CatalogResponse:
    """List the secondary-provider model catalog in preference order."""
    return CatalogResponse(models=list(MODEL_CATALOG))
