"""Static catalog of secondary-provider models, ordered by preference."""

from dispatcher.schemas.internal import ModelDescriptor

MODEL_CATALOG: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(name="mistralai/Mistral-7B-Instruct-v0.3", category="text"),
    ModelDescriptor(name="meta-llama/Llama-3.2-11B-Vision-Instruct", category="multimodal"),
    ModelDescriptor(name="Qwen/Qwen2.5-72B-Instruct", category="advanced"),
    ModelDescriptor(name="microsoft/Phi-3-mini-4k-instruct", category="lightweight"),
)


def select_models(
    max_models: int,
    catalog: tuple[ModelDescriptor, ...] = MODEL_CATALOG,
) -> list[ModelDescriptor]:
    """Return the first ``max_models`` catalog entries in catalog order."""
    return list(catalog[: max(max_models, 0)])
