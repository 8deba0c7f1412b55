"""Fallback orchestrator - primary provider first, secondary models after."""

from collections.abc import Callable

from dispatcher.clients.holder import get_primary_client
from dispatcher.clients.primary import PrimaryClient
from dispatcher.observability.constants import LogEvents
from dispatcher.observability.logger import get_logger
from dispatcher.schemas.requests import DEFAULT_MAX_TOKENS, Message, QueryOptions
from dispatcher.services.multi_model import MultiModelExecutor

logger = get_logger(__name__)

FALLBACK_MAX_MODELS = 4

NO_RESPONSE_MESSAGE = "I'm sorry, I couldn't generate a response."
APOLOGY_MESSAGE = (
    "I'm sorry, something went wrong while processing your request. Please try again later."
)


class FallbackOrchestrator:
    """
    Produces one best-effort answer for a conversation.

    Flow:
    1. Ask the primary provider; non-empty text is returned as-is
    2. Otherwise run the multi-model executor in fallback mode
    3. Substitute a fixed message when nothing produced text

    Each provider is attempted once per call. This never raises.
    """

    def __init__(
        self,
        executor: MultiModelExecutor | None = None,
        client_provider: Callable[[], PrimaryClient] = get_primary_client,
    ):
        self.executor = executor or MultiModelExecutor()
        self.client_provider = client_provider

    async def process_with_fallback(
        self,
        messages: list[Message],
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """
        Answer the conversation with the first provider that produces text.

        Args:
            messages: Conversation messages, in order
            max_tokens: Maximum tokens to request from each backend

        Returns:
            Non-empty response text; a fixed apology if everything failed
        """
        try:
            primary_text = await self._try_primary(messages, max_tokens)
            if primary_text:
                return primary_text

            outcomes = await self.executor.process_multi_model_query(
                messages,
                QueryOptions(
                    mode="fallback",
                    max_models=FALLBACK_MAX_MODELS,
                    max_tokens=max_tokens,
                ),
            )
            response = outcomes[0].response if outcomes else None
            return response if response and response.strip() else NO_RESPONSE_MESSAGE
        except Exception as e:
            logger.exception(
                LogEvents.DISPATCH_FAILED,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return APOLOGY_MESSAGE

    async def _try_primary(self, messages: list[Message], max_tokens: int) -> str:
        """Single primary attempt; any failure yields an empty result."""
        try:
            client = self.client_provider()
        except Exception as e:
            logger.warning(LogEvents.PRIMARY_UNAVAILABLE, error_message=str(e))
            return ""

        logger.debug(LogEvents.PRIMARY_QUERY_STARTED, model=client.model)
        try:
            text = await client.complete(messages, max_tokens=max_tokens)
        except Exception as e:
            logger.warning(
                LogEvents.PRIMARY_QUERY_FAILED,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ""

        if not isinstance(text, str) or not text.strip():
            logger.info(LogEvents.PRIMARY_QUERY_EMPTY, model=client.model)
            return ""

        logger.info(LogEvents.PRIMARY_QUERY_COMPLETED, model=client.model)
        return text
