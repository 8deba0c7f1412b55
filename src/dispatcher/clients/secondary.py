"""Client for the secondary multi-model text-generation provider."""

import logging
import time

from dispatcher.clients.base import ProviderCallError, ProviderClient

logger = logging.getLogger(__name__)


class SecondaryClient(ProviderClient):
    """Text-generation client addressing many models by name."""

    provider_name = "secondary"

    async def generate(self, model: str, prompt: str, max_tokens: int) -> str:
        """
        Run a single text-generation request against ``model``.

        Args:
            model: Model identifier on the provider
            prompt: Flattened single-string input
            max_tokens: Maximum new tokens to generate

        Returns:
            The generated text (may be empty)

        Raises:
            ProviderCallError: If the request fails or the response is malformed
        """
        start_time = time.perf_counter()

        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": max_tokens,
                "return_full_text": False,
            },
        }
        data = await self._post_json(f"/models/{model}", payload)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.debug(f"Secondary generation: model={model} latency={latency_ms}ms")

        return self._extract_generated_text(data)

    def _extract_generated_text(self, data: object) -> str:
        """Extract ``generated_text`` from a list or object response."""
        if isinstance(data, list):
            if not data:
                return ""
            data = data[0]

        if isinstance(data, dict):
            if "error" in data:
                raise ProviderCallError(f"secondary provider error: {data['error']}")
            text = data.get("generated_text")
            if text is None or isinstance(text, str):
                return text or ""

        raise ProviderCallError("secondary response has no generated_text")
