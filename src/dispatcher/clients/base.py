"""Shared plumbing for provider HTTP clients."""

import asyncio

import httpx


class ProviderCallError(Exception):
    """A single provider invocation failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderClient:
    """Base class for provider handles.

    Each handle owns one ``httpx.AsyncClient`` carrying the provider's base URL
    and credentials. The underlying client is created on first use and is
    bound to the event loop that created it. A call from another loop gets a
    fresh client.
    """

    provider_name = "provider"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout)
        self._api_key = api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying HTTP client for the running event loop."""
        loop = asyncio.get_running_loop()
        if self._client is not None and self._loop is not loop:
            # The previous loop owns the pool; it cannot be closed from here.
            self._client = None
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
            self._loop = loop
        return self._client

    async def _post_json(self, path: str, payload: dict) -> object:
        """POST a JSON payload and return the decoded JSON body.

        Raises:
            ProviderCallError: On non-200 status, timeout, network error or
                a body that is not valid JSON.
        """
        try:
            response = await self.client.post(path, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderCallError(f"{self.provider_name} request timed out") from e
        except httpx.RequestError as e:
            raise ProviderCallError(f"Network error: {e}") from e

        if response.status_code != 200:
            raise ProviderCallError(
                f"{self.provider_name} request failed: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderCallError(f"{self.provider_name} returned malformed JSON") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client if it was opened."""
        client, loop = self._client, self._loop
        self._client = None
        self._loop = None
        if client is not None and loop is asyncio.get_running_loop():
            await client.aclose()
