"""FastAPI dependencies for the dispatch API."""

from typing import Annotated

from fastapi import Depends

from dispatcher.clients.holder import get_primary_client, get_secondary_client
from dispatcher.services import FallbackOrchestrator, MultiModelExecutor, PromptBuilder


def get_prompt_builder() -> PromptBuilder:
    """Get a prompt builder instance."""
    return PromptBuilder()


def get_executor(
    prompt_builder: Annotated[PromptBuilder, Depends(get_prompt_builder)],
) -> MultiModelExecutor:
    """Get the multi-model executor bound to the shared secondary client."""
    return MultiModelExecutor(
        client_provider=get_secondary_client,
        prompt_builder=prompt_builder,
    )


def get_orchestrator(
    executor: Annotated[MultiModelExecutor, Depends(get_executor)],
) -> FallbackOrchestrator:
    """Get the fallback orchestrator bound to the shared primary client."""
    return FallbackOrchestrator(executor=executor, client_provider=get_primary_client)
