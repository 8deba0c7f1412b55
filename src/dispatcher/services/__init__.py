"""Services package - dispatch and aggregation logic."""

from dispatcher.services.multi_model import MultiModelExecutor
from dispatcher.services.orchestrator import (
    APOLOGY_MESSAGE,
    NO_RESPONSE_MESSAGE,
    FallbackOrchestrator,
)
from dispatcher.services.prompt_builder import PromptBuilder

__all__ = [
    "PromptBuilder",
    "MultiModelExecutor",
    "FallbackOrchestrator",
    "APOLOGY_MESSAGE",
    "NO_RESPONSE_MESSAGE",
]
