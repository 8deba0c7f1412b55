"""Shared pytest fixtures and configuration."""

import asyncio
from collections.abc import Iterator

import pytest
import structlog
from fastapi.testclient import TestClient

from dispatcher.clients.base import ProviderCallError
from dispatcher.clients.holder import reset_clients
from dispatcher.core.config import get_settings
from dispatcher.main import app
from dispatcher.schemas import Message

# Importing the app configures logging; loggers must stay uncached so that
# structlog.testing.capture_logs can intercept them.
structlog.configure(cache_logger_on_first_use=False)


class FakeSecondaryClient:
    """Stand-in for SecondaryClient with scripted per-model behaviour.

    ``behaviour`` maps a model name to either a response string, an exception
    instance to raise, or a ``(delay_seconds, result)`` tuple.
    """

    def __init__(self, behaviour: dict[str, object]):
        self.behaviour = behaviour
        self.calls: list[dict] = []
        self.completed: list[str] = []

    async def generate(self, model: str, prompt: str, max_tokens: int) -> str:
        self.calls.append({"model": model, "prompt": prompt, "max_tokens": max_tokens})
        result = self.behaviour.get(model, ProviderCallError(f"no script for {model}"))

        if isinstance(result, tuple):
            delay, result = result
            await asyncio.sleep(delay)

        self.completed.append(model)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run each test with fresh settings and no cached provider handles."""
    monkeypatch.setenv("DISPATCHER_PRIMARY_API_KEY", "sk-primary-test")
    monkeypatch.setenv("DISPATCHER_SECONDARY_API_KEY", "hf-secondary-test")
    get_settings.cache_clear()
    reset_clients()
    yield
    get_settings.cache_clear()
    reset_clients()


@pytest.fixture
def fake_secondary() -> type[FakeSecondaryClient]:
    """Factory for scripted secondary clients."""
    return FakeSecondaryClient


@pytest.fixture
def messages() -> list[Message]:
    """A short conversation with every role."""
    return [
        Message(role="system", content="You are terse."),
        Message(role="user", content="What is Python?"),
        Message(role="assistant", content="A language."),
        Message(role="user", content="Who created it?"),
    ]


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
