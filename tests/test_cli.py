"""Tests for the dispatch CLI."""

import json
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from dispatcher.cli import app
from dispatcher.core.config import ConfigurationError
from dispatcher.schemas import ModelOutcome


@pytest.fixture
def runner() -> Iterator[CliRunner]:
    """Create a CLI test runner that leaves the test logging setup alone."""
    with patch("dispatcher.cli.configure_logging"):
        yield CliRunner()


class TestChatCommand:
    """Tests for the chat command."""

    def test_chat_json(self, runner: CliRunner) -> None:
        with patch(
            "dispatcher.cli.process_with_fallback", AsyncMock(return_value="An answer.")
        ) as mock_fallback:
            result = runner.invoke(app, ["chat", "--json", "-s", "Be brief.", "Question?"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"status": "success", "response": "An answer."}
        messages, max_tokens = mock_fallback.call_args.args
        assert [m.role for m in messages] == ["system", "user"]
        assert max_tokens == 350

    def test_chat_plain(self, runner: CliRunner) -> None:
        with patch("dispatcher.cli.process_with_fallback", AsyncMock(return_value="Plain.")):
            result = runner.invoke(app, ["chat", "Question?"])

        assert result.exit_code == 0
        assert "Plain." in result.stdout


class TestQueryCommand:
    """Tests for the query command."""

    def test_query_json(self, runner: CliRunner) -> None:
        outcome = ModelOutcome(model="m", category="text", response="r", succeeded=True)
        with patch(
            "dispatcher.cli.process_multi_model_query", AsyncMock(return_value=[outcome])
        ) as mock_query:
            result = runner.invoke(
                app, ["query", "--json", "--mode", "fallback", "-n", "2", "Question?"]
            )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["mode"] == "fallback"
        assert data["outcomes"][0]["model"] == "m"
        options = mock_query.call_args.args[1]
        assert options.max_models == 2

    def test_query_not_configured(self, runner: CliRunner) -> None:
        with patch(
            "dispatcher.cli.process_multi_model_query",
            AsyncMock(side_effect=ConfigurationError("DISPATCHER_SECONDARY_API_KEY is not configured")),
        ):
            result = runner.invoke(app, ["query", "--json", "Question?"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["status"] == "error"


def test_models_lists_catalog(runner: CliRunner) -> None:
    result = runner.invoke(app, ["models"])
    assert result.exit_code == 0
    assert "Model Catalog" in result.stdout


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "dispatch version" in result.stdout


def test_chat_rejects_non_positive_max_tokens(runner: CliRunner) -> None:
    with patch("dispatcher.cli.process_with_fallback", AsyncMock()) as mock_fallback:
        result = runner.invoke(app, ["chat", "-m", "0", "Question?"])

    assert result.exit_code != 0
    mock_fallback.assert_not_called()
