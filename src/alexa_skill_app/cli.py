"""Developer CLI for exercising a skill application locally."""

import asyncio
import importlib
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from .application import Application, apps
from .config import configure_logging, settings
from .errors import RequestFailed

app = typer.Typer(help="Alexa skill application CLI")
console = Console()


def _name(func) -> str:
    return getattr(func, "__name__", repr(func))


def load_application(target: str) -> Application:
    """
    Resolve ``module:attribute`` (or ``module:name`` of a named application).

    Raises:
        typer.BadParameter: if the target cannot be resolved to an Application
    """
    module_name, _, attribute = target.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import {module_name}: {e}")

    attribute = attribute or "app"
    found = getattr(module, attribute, None) or apps.get(attribute)
    if not isinstance(found, Application):
        raise typer.BadParameter(f"{target} is not an Application")
    return found


@app.command()
def invoke(
    target: str = typer.Argument(..., help="Application as module:attribute"),
    request_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Request envelope JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show dispatch logging"),
):
    """Dispatch a request envelope and print the response."""
    if verbose:
        configure_logging(settings.model_copy(update={"debug": True}))

    skill = load_application(target)
    body = json.loads(request_file.read_text())

    try:
        response = asyncio.run(skill.request(body))
    except RequestFailed as e:
        console.print(f"[red]Request failed: {escape(str(e.reason))}[/red]")
        raise typer.Exit(1)

    console.print(Syntax(json.dumps(response, indent=2), "json"))


@app.command()
def intents(target: str = typer.Argument(..., help="Application as module:attribute")):
    """Show the handlers registered on an application."""
    skill = load_application(target)
    registry = skill.registry

    table = Table(title=f"Handlers ({skill.name or target})")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Handler", style="green")

    if registry.launch is not None:
        table.add_row("launch", "LaunchRequest", _name(registry.launch))
    for name, func in sorted(registry.intents.items()):
        table.add_row("intent", name, _name(func))
    for event, func in sorted(registry.audio_player_events.items()):
        table.add_row("audio player", f"AudioPlayer.{event}", _name(func))
    if registry.session_ended is not None:
        table.add_row("session ended", "SessionEndedRequest", _name(registry.session_ended))

    if not table.rows:
        console.print("[yellow]No handlers registered[/yellow]")
        return

    console.print(table)


if __name__ == "__main__":
    app()
