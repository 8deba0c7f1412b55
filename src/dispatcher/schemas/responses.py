"""Response schemas for the dispatch API."""

from pydantic import BaseModel, Field

from dispatcher.schemas.internal import ModelDescriptor, ModelOutcome


class ChatResponse(BaseModel):
    """Response from the fallback chat endpoint."""

    response: str = Field(..., description="The best available answer")


class MultiModelQueryResponse(BaseModel):
    """Response from the multi-model query endpoint."""

    mode: str = Field(..., description="Aggregation mode that was applied")
    outcomes: list[ModelOutcome] = Field(default_factory=list, description="Reduced outcomes")


class CatalogResponse(BaseModel):
    """The secondary-provider model catalog."""

    models: list[ModelDescriptor] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error response from the dispatch service."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict | None = Field(default=None, description="Additional error details")
