"""Client for the primary (OpenAI-compatible) chat-completions provider."""

import logging
import time

from dispatcher.clients.base import ProviderCallError, ProviderClient
from dispatcher.schemas.requests import Message

logger = logging.getLogger(__name__)


class PrimaryClient(ProviderClient):
    """Single-model chat-completions client."""

    provider_name = "primary"

    def __init__(self, api_key: str, base_url: str, model: str, **kwargs):
        super().__init__(api_key, base_url, **kwargs)
        self.model = model

    async def complete(self, messages: list[Message], max_tokens: int) -> str:
        """
        Send the full conversation and return the first choice's text.

        Args:
            messages: Conversation messages, in order
            max_tokens: Maximum tokens to generate

        Returns:
            The generated text (may be empty)

        Raises:
            ProviderCallError: If the request fails or the response is malformed
        """
        start_time = time.perf_counter()

        payload = {
            "model": self.model,
            "messages": [m.model_dump() for m in messages],
            "max_tokens": max_tokens,
        }
        data = await self._post_json("/chat/completions", payload)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"Primary completion: model={self.model} latency={latency_ms}ms")

        return self._extract_response_text(data)

    def _extract_response_text(self, data: object) -> str:
        """Extract the first choice's message content."""
        if not isinstance(data, dict):
            raise ProviderCallError("primary response is not an object")

        choices = data.get("choices")
        if not choices:
            return ""
        if not isinstance(choices, list):
            raise ProviderCallError("primary choices is not a list")

        choice = choices[0]
        if not isinstance(choice, dict):
            raise ProviderCallError("primary choice is not an object")

        message = choice.get("message") or {}
        if not isinstance(message, dict):
            raise ProviderCallError("primary message is not an object")

        content = message.get("content")
        if content is None:
            return ""
        if not isinstance(content, str):
            raise ProviderCallError(
                f"primary content has unsupported type {type(content).__name__}"
            )
        return content
