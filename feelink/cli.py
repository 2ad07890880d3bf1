#!/usr/bin/env python3
"""
Feelink CLI
Analyse text and manage the API server from the terminal
"""

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from feelink.api.dependencies import get_analyzer, get_gateway, get_quota_store
from feelink.core.config import get_settings
from feelink.core.exceptions import ValidationError
from feelink.domain.services.analysis import AnalysisRequest

app = typer.Typer(
    name="feelink",
    help="Feelink - text emotion classifier CLI",
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


async def _analyze(text: str, user_id: str | None):
    analyzer = get_analyzer()
    result = await analyzer.analyze(AnalysisRequest(text=text, user_id=user_id))
    await analyzer.recorder.drain()
    return result


@app.command()
def analyze(
    text: str = typer.Argument(..., help="Text to analyse"),
    user_id: str | None = typer.Option(None, "--user-id", help="User id for the session record"),
):
    """
    Classify the emotion of a text
    """
    try:
        result = asyncio.run(_analyze(text, user_id))
    except ValidationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    decision = result.decision
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Emotion", decision.emotion.value)
    table.add_row("Confidence", f"{decision.confidence:.2f}")
    table.add_row("Method", decision.method.value)
    table.add_row("Language", result.lang)
    table.add_row("Activity", result.suggestion.activity)
    table.add_row("Encouragement", result.suggestion.encouragement)
    table.add_row("Activity source", result.suggestion.source.value)

    votes = decision.details.get("keywordVotes")
    if votes:
        table.add_row("Keyword votes", ", ".join(f"{k}={v}" for k, v in votes.items()))
    if "hfLabel" in decision.details:
        table.add_row("Remote label", f"{decision.details['hfLabel']} ({decision.details['hfScore']:.2f})")

    console.print(table)


@app.command()
def quota():
    """
    Show this month's remote classifier usage
    """
    gateway = get_gateway()
    key = gateway.current_key()
    used = asyncio.run(get_quota_store().get(key))
    limit = get_settings().huggingface.monthly_limit

    console.print(Panel(
        f"[bold]Key:[/bold] {key}\n"
        f"[bold]Used:[/bold] {used} / {limit}\n"
        f"[bold]Remote classifier:[/bold] {'enabled' if gateway.enabled else 'disabled'}",
        title="Quota",
        border_style="blue"
    ))


@app.command()
def server(
    host: str = typer.Option(None, help="Server host (defaults to API_HOST)"),
    port: int = typer.Option(None, help="Server port (defaults to API_PORT)"),
    reload: bool = typer.Option(False, help="Auto-reload for development")
):
    """
    Start the FastAPI server
    """
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(Panel(
        f"[bold blue]Feelink API Server[/bold blue]\n"
        f"🚀 http://{host}:{port}\n"
        f"📚 http://{host}:{port}/docs",
        title="Server"
    ))

    import uvicorn

    uvicorn.run(
        "feelink.api.main:app",
        host=host,
        port=port,
        reload=reload,
        access_log=True
    )


if __name__ == "__main__":
    app()
