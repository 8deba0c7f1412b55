"""Tests for the multi-model executor."""

import asyncio

import pytest
import structlog.testing

from dispatcher.clients.base import ProviderCallError
from dispatcher.core.catalog import MODEL_CATALOG
from dispatcher.core.config import ConfigurationError
from dispatcher.observability.constants import LogEvents
from dispatcher.schemas import EXHAUSTED_OUTCOME, QueryOptions
from dispatcher.services.multi_model import MultiModelExecutor

TEXT, MULTIMODAL, ADVANCED, LIGHTWEIGHT = (m.name for m in MODEL_CATALOG)


def _executor(client) -> MultiModelExecutor:
    return MultiModelExecutor(client_provider=lambda: client)


class TestParallelMode:
    """Tests for parallel aggregation."""

    @pytest.mark.asyncio
    async def test_returns_only_successes_in_catalog_order(self, fake_secondary, messages):
        """Successful outcomes come back in catalog order despite completion order."""
        client = fake_secondary(
            {
                TEXT: (0.05, "text answer"),
                MULTIMODAL: ProviderCallError("quota exceeded", status_code=429),
                ADVANCED: (0.0, "advanced answer"),
                LIGHTWEIGHT: (0.02, "light answer"),
            }
        )

        outcomes = await _executor(client).process_multi_model_query(
            messages, QueryOptions(mode="parallel", max_models=4)
        )

        assert [o.model for o in outcomes] == [TEXT, ADVANCED, LIGHTWEIGHT]
        assert all(o.succeeded for o in outcomes)
        assert [o.response for o in outcomes] == ["text answer", "advanced answer", "light answer"]
        # Completion order differed from launch order
        assert client.completed.index(ADVANCED) < client.completed.index(TEXT)

    @pytest.mark.asyncio
    async def test_outcome_carries_category(self, fake_secondary, messages):
        client = fake_secondary({TEXT: "a", MULTIMODAL: "b"})

        outcomes = await _executor(client).process_multi_model_query(
            messages, QueryOptions(max_models=2)
        )

        assert [o.category for o in outcomes] == ["text", "multimodal"]

    @pytest.mark.asyncio
    async def test_all_failures_return_empty_list(self, fake_secondary, messages):
        client = fake_secondary({})

        outcomes = await _executor(client).process_multi_model_query(messages, QueryOptions())

        assert outcomes == []
        assert len(client.calls) == 4

    @pytest.mark.asyncio
    async def test_unknown_mode_behaves_as_parallel(self, fake_secondary, messages):
        client = fake_secondary({TEXT: "one", MULTIMODAL: "two"})

        options = QueryOptions(mode="broadcast", max_models=2)
        outcomes = await _executor(client).process_multi_model_query(messages, options)

        assert options.mode == "parallel"
        assert [o.response for o in outcomes] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_default_options(self, fake_secondary, messages):
        """Without options every catalog model is tried with 350 tokens."""
        client = fake_secondary({name: "ok" for name in (TEXT, MULTIMODAL, ADVANCED, LIGHTWEIGHT)})

        outcomes = await _executor(client).process_multi_model_query(messages)

        assert len(outcomes) == 4
        assert {call["max_tokens"] for call in client.calls} == {350}


class TestFallbackMode:
    """Tests for fallback aggregation."""

    @pytest.mark.asyncio
    async def test_first_success_in_launch_order(self, fake_secondary, messages):
        """B is returned even though C also succeeded and finished first."""
        client = fake_secondary(
            {
                TEXT: ProviderCallError("boom"),
                MULTIMODAL: (0.05, "B answer"),
                ADVANCED: (0.0, "C answer"),
            }
        )

        outcomes = await _executor(client).process_multi_model_query(
            messages, QueryOptions(mode="fallback", max_models=3)
        )

        assert len(outcomes) == 1
        assert outcomes[0].model == MULTIMODAL
        assert outcomes[0].response == "B answer"
        assert outcomes[0].succeeded is True

    @pytest.mark.asyncio
    async def test_siblings_are_not_cancelled(self, fake_secondary, messages):
        """Every launched call runs to completion even after a success."""
        client = fake_secondary(
            {
                TEXT: (0.0, "fast"),
                MULTIMODAL: (0.03, "slow"),
                ADVANCED: (0.05, ProviderCallError("late failure")),
            }
        )

        await _executor(client).process_multi_model_query(
            messages, QueryOptions(mode="fallback", max_models=3)
        )

        assert sorted(client.completed) == sorted([TEXT, MULTIMODAL, ADVANCED])

    @pytest.mark.asyncio
    async def test_all_failures_return_synthetic_outcome(self, fake_secondary, messages):
        client = fake_secondary({})

        with structlog.testing.capture_logs() as logs:
            outcomes = await _executor(client).process_multi_model_query(
                messages, QueryOptions(mode="fallback")
            )

        assert outcomes == [EXHAUSTED_OUTCOME]
        assert outcomes[0].model == "Error"
        assert outcomes[0].category == "fallback"
        assert outcomes[0].response == "No models could process the query"
        assert outcomes[0].succeeded is False
        assert any(log["event"] == LogEvents.DISPATCH_FALLBACK_EXHAUSTED for log in logs)

    @pytest.mark.asyncio
    async def test_empty_text_is_not_a_success(self, fake_secondary, messages):
        client = fake_secondary({TEXT: "   ", MULTIMODAL: "real answer"})

        outcomes = await _executor(client).process_multi_model_query(
            messages, QueryOptions(mode="fallback", max_models=2)
        )

        assert outcomes[0].model == MULTIMODAL


class TestDispatch:
    """Tests for model selection, isolation and concurrency."""

    @pytest.mark.asyncio
    async def test_max_models_selects_catalog_prefix(self, fake_secondary, messages):
        client = fake_secondary({name: "ok" for name in (TEXT, MULTIMODAL, ADVANCED, LIGHTWEIGHT)})

        await _executor(client).process_multi_model_query(messages, QueryOptions(max_models=2))

        assert [call["model"] for call in client.calls] == [TEXT, MULTIMODAL]

    @pytest.mark.asyncio
    async def test_max_models_larger_than_catalog(self, fake_secondary, messages):
        client = fake_secondary({})

        await _executor(client).process_multi_model_query(messages, QueryOptions(max_models=10))

        assert len(client.calls) == len(MODEL_CATALOG)

    @pytest.mark.asyncio
    async def test_calls_are_launched_before_any_is_awaited(self, messages):
        """The first call blocks until the last one has started."""
        started: list[str] = []
        all_started = asyncio.Event()

        class BlockingClient:
            async def generate(self, model: str, prompt: str, max_tokens: int) -> str:
                started.append(model)
                if len(started) == len(MODEL_CATALOG):
                    all_started.set()
                await asyncio.wait_for(all_started.wait(), timeout=1.0)
                return f"{model} done"

        outcomes = await _executor(BlockingClient()).process_multi_model_query(
            messages, QueryOptions()
        )

        assert len(outcomes) == len(MODEL_CATALOG)

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_isolated(self, fake_secondary, messages):
        client = fake_secondary({TEXT: RuntimeError("unexpected"), MULTIMODAL: "fine"})

        with structlog.testing.capture_logs() as logs:
            outcomes = await _executor(client).process_multi_model_query(
                messages, QueryOptions(max_models=2)
            )

        assert [o.model for o in outcomes] == [MULTIMODAL]
        failed = [log for log in logs if log["event"] == LogEvents.MODEL_QUERY_FAILED]
        assert failed[0]["model"] == TEXT
        assert failed[0]["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_flattened_prompt_and_token_bound_are_sent(self, fake_secondary, messages):
        client = fake_secondary({TEXT: "ok"})

        await _executor(client).process_multi_model_query(
            messages, QueryOptions(max_models=1, max_tokens=64)
        )

        call = client.calls[0]
        assert call["prompt"] == "[INST] You are terse. [/INST]\nWhat is Python?\nWho created it?"
        assert call["max_tokens"] == 64

    @pytest.mark.asyncio
    async def test_configuration_error_propagates(self, messages):
        def missing_client():
            raise ConfigurationError("DISPATCHER_SECONDARY_API_KEY is not configured")

        executor = MultiModelExecutor(client_provider=missing_client)

        with pytest.raises(ConfigurationError):
            await executor.process_multi_model_query(messages, QueryOptions())
