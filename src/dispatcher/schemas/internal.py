"""Internal DTOs used within the dispatch service."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ModelCategory = Literal["text", "multimodal", "advanced", "lightweight"]


class ModelDescriptor(BaseModel):
    """A candidate model offered by the secondary provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Model identifier on the secondary provider")
    category: ModelCategory = Field(..., description="Capability class of the model")


class ModelOutcome(BaseModel):
    """Result of dispatching a query to a single model.

    One outcome is produced per attempted model, including failed attempts.
    The category is a plain string so the synthetic exhaustion outcome can
    carry ``"fallback"``.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier")
    category: str = Field(..., description="Model category")
    response: str | None = Field(default=None, description="Generated text if the call succeeded")
    succeeded: bool = Field(..., description="Whether the call produced text")


EXHAUSTED_OUTCOME = ModelOutcome(
    model="Error",
    category="fallback",
    response="No models could process the query",
    succeeded=False,
)
