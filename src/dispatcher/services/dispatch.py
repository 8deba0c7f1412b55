"""Function-call entry points backed by the process-wide provider handles."""

from dispatcher.schemas.internal import ModelOutcome
from dispatcher.schemas.requests import DEFAULT_MAX_TOKENS, Message, QueryOptions
from dispatcher.services.multi_model import MultiModelExecutor
from dispatcher.services.orchestrator import FallbackOrchestrator


async def process_multi_model_query(
    messages: list[Message],
    options: QueryOptions | None = None,
) -> list[ModelOutcome]:
    """Query the secondary catalog and aggregate per ``options.mode``."""
    return await MultiModelExecutor().process_multi_model_query(messages, options)


async def process_with_fallback(
    messages: list[Message],
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> str:
    """Return the best available answer; never raises."""
    return await FallbackOrchestrator().process_with_fallback(messages, max_tokens)
