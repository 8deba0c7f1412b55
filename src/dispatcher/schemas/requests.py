"""Request schemas for the dispatch API."""

import logging
from typing import Literal

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

AggregationMode = Literal["parallel", "fallback"]

DEFAULT_MODE: AggregationMode = "parallel"
DEFAULT_MAX_MODELS = 4
DEFAULT_MAX_TOKENS = 350


def normalize_mode(value: object) -> str:
    """Map unrecognised aggregation modes to ``parallel``."""
    if value in ("parallel", "fallback"):
        return value  # type: ignore[return-value]
    logger.warning(f"Unknown aggregation mode {value!r}, using {DEFAULT_MODE!r}")
    return DEFAULT_MODE


class Message(BaseModel):
    """A single message in a conversation."""

    role: Literal["system", "user", "assistant"] = Field(..., description="Message author role")
    content: str = Field(..., description="Message text")


class QueryOptions(BaseModel):
    """Options controlling a multi-model query.

    Defaults: ``mode="parallel"``, ``max_models=4``, ``max_tokens=350``.
    Unknown modes are accepted and treated as ``parallel``.
    """

    mode: AggregationMode = Field(default=DEFAULT_MODE, description="Aggregation policy")
    max_models: int = Field(
        default=DEFAULT_MAX_MODELS,
        ge=1,
        description="Maximum number of catalog models to attempt",
    )
    max_tokens: int = Field(
        default=DEFAULT_MAX_TOKENS,
        ge=1,
        description="Maximum tokens requested from each backend",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def _fallback_to_parallel(cls, value: object) -> str:
        return normalize_mode(value)


class ChatRequest(BaseModel):
    """Request to the fallback chat endpoint."""

    messages: list[Message] = Field(..., min_length=1, description="Conversation in order")
    max_tokens: int = Field(
        default=DEFAULT_MAX_TOKENS,
        ge=1,
        description="Maximum tokens to generate",
    )


class MultiModelQueryRequest(BaseModel):
    """Request to the multi-model query endpoint."""

    messages: list[Message] = Field(..., min_length=1, description="Conversation in order")
    mode: AggregationMode = Field(default=DEFAULT_MODE, description="Aggregation policy")
    max_models: int = Field(default=DEFAULT_MAX_MODELS, ge=1, description="Models to attempt")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1, description="Tokens per model")

    @field_validator("mode", mode="before")
    @classmethod
    def _fallback_to_parallel(cls, value: object) -> str:
        return normalize_mode(value)

    def to_options(self) -> QueryOptions:
        """Extract the query options from the request."""
        return QueryOptions(
            mode=self.mode,
            max_models=self.max_models,
            max_tokens=self.max_tokens,
        )
