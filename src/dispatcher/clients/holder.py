"""Process-wide, lazily initialised provider client handles.

Each provider handle is built on first use and then shared for the lifetime
of the process. Initialisation is guarded by a lock with a double check, so
concurrent first callers observe exactly one construction and the same
handle. A failed initialisation caches nothing and is re-attempted on the
next call.
"""

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from dispatcher.clients.primary import PrimaryClient
from dispatcher.clients.secondary import SecondaryClient
from dispatcher.core.config import ConfigurationError, Settings, get_settings
from dispatcher.observability.constants import LogEvents
from dispatcher.observability.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class LazyHandle(Generic[T]):
    """Holds one lazily constructed value, built at most once."""

    def __init__(self, name: str, factory: Callable[[], T]):
        self.name = name
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None

    def get(self) -> T:
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                built = self._factory()
                self._value = built
                logger.info(LogEvents.PROVIDER_CLIENT_INITIALIZED, provider=self.name)
            return self._value

    def peek(self) -> T | None:
        """Return the value if it has been built, without building it."""
        return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = None


def _require(value: str | None, setting: str) -> str:
    if not value or not value.strip():
        env_name = f"{Settings.model_config['env_prefix']}{setting}".upper()
        raise ConfigurationError(f"{env_name} is not configured", setting=env_name)
    return value


def build_primary_client() -> PrimaryClient:
    """Construct the primary provider handle from settings."""
    settings = get_settings()
    return PrimaryClient(
        api_key=_require(settings.primary_api_key, "primary_api_key"),
        base_url=settings.primary_base_url,
        model=settings.primary_model,
        timeout=settings.request_timeout,
    )


def build_secondary_client() -> SecondaryClient:
    """Construct the secondary provider handle from settings."""
    settings = get_settings()
    return SecondaryClient(
        api_key=_require(settings.secondary_api_key, "secondary_api_key"),
        base_url=settings.secondary_base_url,
        timeout=settings.request_timeout,
    )


# Factories are looked up at call time so tests can patch the builders.
_primary = LazyHandle("primary", lambda: build_primary_client())
_secondary = LazyHandle("secondary", lambda: build_secondary_client())


def get_primary_client() -> PrimaryClient:
    """Get the primary provider handle, initialising it on first use.

    Raises:
        ConfigurationError: If the primary credential is not configured.
    """
    return _primary.get()


def get_secondary_client() -> SecondaryClient:
    """Get the secondary provider handle, initialising it on first use.

    Raises:
        ConfigurationError: If the secondary credential is not configured.
    """
    return _secondary.get()


def reset_clients() -> None:
    """Drop cached handles so the next access re-initialises them."""
    _primary.reset()
    _secondary.reset()


async def close_clients() -> None:
    """Close open provider HTTP clients and drop the cached handles."""
    for handle in (_primary, _secondary):
        client = handle.peek()
        if client is not None:
            await client.aclose()
        handle.reset()
