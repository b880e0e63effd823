"""
Taskboard CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer
from rich.console import Console

from taskboard import __version__
from taskboard.cli import metrics, serve
from taskboard.core.config.env import load_layered_env

app = typer.Typer(
    name="taskboard",
    help="Progressively enhanced task list server",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Taskboard - a task list that works with and without JavaScript.

    Quick Start:
        taskboard serve                  # Start on http://127.0.0.1:8080
        taskboard serve --port 9000      # Pick another port
        taskboard metrics                # Summarize recorded telemetry
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    ctx.obj = {"debug": debug}


app.command(name="serve")(serve.serve)
app.command(name="metrics")(metrics.metrics)


@app.command()
def version() -> None:
    """Show taskboard version and exit."""
    console.print(f"taskboard version {__version__}")
    raise typer.Exit(0)


def main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "main"]
