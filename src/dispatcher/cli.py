"""Command-line entry point for the model dispatcher."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from dispatcher import __version__
from dispatcher.core.catalog import MODEL_CATALOG
from dispatcher.core.config import ConfigurationError, get_settings
from dispatcher.observability import configure_logging
from dispatcher.schemas import Message, ModelOutcome, QueryOptions
from dispatcher.services.dispatch import process_multi_model_query, process_with_fallback

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="dispatch",
    help="Model Dispatch - query several generative-AI backends.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def print_json(data: Any, *, indent: int = 2) -> None:
    """Print data as JSON."""
    print(json.dumps(data, indent=indent, default=str))


def _build_messages(prompt: str, system: str | None) -> list[Message]:
    messages: list[Message] = []
    if system:
        messages.append(Message(role="system", content=system))
    messages.append(Message(role="user", content=prompt))
    return messages


def _print_outcomes(outcomes: list[ModelOutcome]) -> None:
    if not outcomes:
        console.print("[bold yellow]Warning:[/bold yellow] No model returned a response.")
        return

    for outcome in outcomes:
        style = "green" if outcome.succeeded else "red"
        title = f"{outcome.model} ({outcome.category})"
        console.print(Panel(Markdown(outcome.response or ""), title=title, border_style=style))


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"dispatch version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Model Dispatch CLI."""
    settings = get_settings()
    configure_logging(
        log_level="WARNING",
        log_format="console",
        development_mode=settings.debug,
        stream=sys.stderr,
    )


@app.command()
def chat(
    prompt: Annotated[str, typer.Argument(help="User prompt.")],
    system: Annotated[
        str | None,
        typer.Option("--system", "-s", help="Optional system instruction."),
    ] = None,
    max_tokens: Annotated[
        int,
        typer.Option("--max-tokens", "-m", min=1, help="Maximum tokens in response."),
    ] = 350,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output result as JSON."),
    ] = False,
) -> None:
    """Ask the primary provider, falling back to the secondary models.

    Examples:

        dispatch chat "What is machine learning?"

        dispatch chat -s "Answer in one sentence." "Explain recursion"
    """
    messages = _build_messages(prompt, system)
    text = asyncio.run(process_with_fallback(messages, max_tokens))

    if json_output:
        print_json({"status": "success", "response": text})
    else:
        console.print(Markdown(text))


@app.command()
def query(
    prompt: Annotated[str, typer.Argument(help="User prompt.")],
    system: Annotated[
        str | None,
        typer.Option("--system", "-s", help="Optional system instruction."),
    ] = None,
    mode: Annotated[
        str,
        typer.Option("--mode", help="Aggregation mode: parallel or fallback."),
    ] = "parallel",
    max_models: Annotated[
        int,
        typer.Option("--max-models", "-n", min=1, help="Number of catalog models to try."),
    ] = 4,
    max_tokens: Annotated[
        int,
        typer.Option("--max-tokens", "-m", min=1, help="Maximum tokens per model."),
    ] = 350,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output result as JSON."),
    ] = False,
) -> None:
    """Query several secondary-provider models at once."""
    messages = _build_messages(prompt, system)
    options = QueryOptions(mode=mode, max_models=max_models, max_tokens=max_tokens)

    try:
        outcomes = asyncio.run(process_multi_model_query(messages, options))
    except ConfigurationError as e:
        if json_output:
            print_json({"status": "error", "message": str(e)})
        else:
            print_error(str(e))
        raise typer.Exit(1) from None

    if json_output:
        print_json(
            {
                "status": "success",
                "mode": options.mode,
                "outcomes": [o.model_dump() for o in outcomes],
            }
        )
    else:
        _print_outcomes(outcomes)


@app.command()
def models() -> None:
    """List the secondary-provider model catalog."""
    table = Table(title="Model Catalog")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Model", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta")

    for index, model in enumerate(MODEL_CATALOG, 1):
        table.add_row(str(index), model.name, model.category)

    console.print(table)


@app.command()
def serve(
    reload: Annotated[bool, typer.Option("--reload", help="Enable auto-reload.")] = False,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "dispatcher.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload or settings.debug,
    )


if __name__ == "__main__":
    app()
