"""Schemas package - request/response models for the dispatcher."""

from dispatcher.schemas.internal import (
    EXHAUSTED_OUTCOME,
    ModelCategory,
    ModelDescriptor,
    ModelOutcome,
)
from dispatcher.schemas.requests import (
    AggregationMode,
    ChatRequest,
    Message,
    MultiModelQueryRequest,
    QueryOptions,
)
from dispatcher.schemas.responses import (
    CatalogResponse,
    ChatResponse,
    ErrorResponse,
    MultiModelQueryResponse,
)

__all__ = [
    # Requests
    "AggregationMode",
    "ChatRequest",
    "Message",
    "MultiModelQueryRequest",
    "QueryOptions",
    # Responses
    "CatalogResponse",
    "ChatResponse",
    "ErrorResponse",
    "MultiModelQueryResponse",
    # Internal
    "EXHAUSTED_OUTCOME",
    "ModelCategory",
    "ModelDescriptor",
    "ModelOutcome",
]
