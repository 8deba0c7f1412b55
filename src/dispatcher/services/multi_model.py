"""Multi-model executor - fans a query out to several secondary models."""

import asyncio
import time
from collections.abc import Callable

from dispatcher.clients.holder import get_secondary_client
from dispatcher.clients.secondary import SecondaryClient
from dispatcher.core.catalog import MODEL_CATALOG, select_models
from dispatcher.observability.constants import LogEvents
from dispatcher.observability.logger import get_logger
from dispatcher.schemas.internal import EXHAUSTED_OUTCOME, ModelDescriptor, ModelOutcome
from dispatcher.schemas.requests import Message, QueryOptions
from dispatcher.services.prompt_builder import PromptBuilder

logger = get_logger(__name__)


class MultiModelExecutor:
    """
    Queries a prefix of the model catalog concurrently and reduces the results.

    Every selected model gets its own task; all tasks are launched before any
    is awaited and the batch is joined with ``asyncio.gather``. Per-model
    failures become failed outcomes and never abort sibling calls. Stragglers
    are not cancelled once a success is known in fallback mode.
    """

    def __init__(
        self,
        client_provider: Callable[[], SecondaryClient] = get_secondary_client,
        prompt_builder: PromptBuilder | None = None,
        catalog: tuple[ModelDescriptor, ...] = MODEL_CATALOG,
    ):
        self.client_provider = client_provider
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.catalog = catalog

    async def process_multi_model_query(
        self,
        messages: list[Message],
        options: QueryOptions | None = None,
    ) -> list[ModelOutcome]:
        """
        Dispatch the conversation to the selected models and aggregate.

        Args:
            messages: Conversation messages, in order
            options: Aggregation mode, model count and token bound

        Returns:
            Successful outcomes in catalog order (parallel mode), or a single
            outcome (fallback mode)

        Raises:
            ConfigurationError: If the secondary provider cannot be initialised
        """
        options = options or QueryOptions()
        client = self.client_provider()

        models = select_models(options.max_models, self.catalog)
        prompt = self.prompt_builder.build(messages)

        start_time = time.perf_counter()
        tasks = [
            asyncio.create_task(self._query_model(client, model, prompt, options.max_tokens))
            for model in models
        ]
        outcomes: list[ModelOutcome] = list(await asyncio.gather(*tasks))
        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if options.mode == "fallback":
            return [self._first_success(outcomes, latency_ms)]

        succeeded = [o for o in outcomes if o.succeeded]
        logger.info(
            LogEvents.DISPATCH_PARALLEL_COMPLETED,
            attempted=len(outcomes),
            succeeded=len(succeeded),
            latency_ms=latency_ms,
        )
        return succeeded

    async def _query_model(
        self,
        client: SecondaryClient,
        model: ModelDescriptor,
        prompt: str,
        max_tokens: int,
    ) -> ModelOutcome:
        """Run one model call, converting any failure into a failed outcome."""
        logger.debug(LogEvents.MODEL_QUERY_STARTED, model=model.name)
        start_time = time.perf_counter()

        try:
            text = await client.generate(model=model.name, prompt=prompt, max_tokens=max_tokens)
        except Exception as e:
            logger.warning(
                LogEvents.MODEL_QUERY_FAILED,
                model=model.name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ModelOutcome(model=model.name, category=model.category, succeeded=False)

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not text or not text.strip():
            logger.warning(
                LogEvents.MODEL_QUERY_FAILED,
                model=model.name,
                error_message="empty response",
            )
            return ModelOutcome(model=model.name, category=model.category, succeeded=False)

        logger.info(LogEvents.MODEL_QUERY_COMPLETED, model=model.name, latency_ms=latency_ms)
        return ModelOutcome(
            model=model.name,
            category=model.category,
            response=text,
            succeeded=True,
        )

    def _first_success(self, outcomes: list[ModelOutcome], latency_ms: int) -> ModelOutcome:
        """Pick the first successful outcome in launch order."""
        for outcome in outcomes:
            if outcome.succeeded:
                logger.info(
                    LogEvents.DISPATCH_FALLBACK_COMPLETED,
                    model=outcome.model,
                    attempted=len(outcomes),
                    latency_ms=latency_ms,
                )
                return outcome

        logger.error(LogEvents.DISPATCH_FALLBACK_EXHAUSTED, attempted=len(outcomes))
        return EXHAUSTED_OUTCOME
