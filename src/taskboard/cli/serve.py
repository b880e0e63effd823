"""
Taskboard CLI - Serve command.

Start the task list web server.
"""

import logging
import threading
import time
import webbrowser

import typer
from rich.console import Console

from taskboard.core.config.loader import load_config
from taskboard.core.config.models import ServerConfig

console = Console()
logger = logging.getLogger(__name__)


def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(
        None,
        "--host",
        help="Interface to bind to (default from config: 127.0.0.1)",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to run the server on (default from config: 8080)",
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't open browser automatically",
    ),
) -> None:
    """
    Start the taskboard web server.

    Tasks live in memory and are lost when the server stops.

    Examples:
        taskboard serve                  # Serve on the configured port
        taskboard serve --port 3000      # Serve on port 3000
        taskboard serve --no-browser     # Don't open browser
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    try:
        config = load_config()
        overrides = {
            key: value
            for key, value in (("host", host), ("port", port))
            if value is not None
        }
        if overrides:
            server = ServerConfig(**{**config.server.model_dump(), **overrides})
            config = config.model_copy(update={"server": server})

        import uvicorn

        from taskboard.web.app import create_app

        app = create_app(config)

        url = f"http://{config.server.host}:{config.server.port}/tasks"
        console.print("[bold cyan]Starting taskboard server...[/bold cyan]")
        console.print(f"[dim]Tasks: {url}[/dim]")
        if config.telemetry.enabled and config.telemetry.csv_path:
            console.print(f"[dim]Metrics: {config.telemetry.csv_path}[/dim]")

        if not no_browser:
            def open_browser() -> None:
                time.sleep(1.5)  # Wait for server to start
                webbrowser.open(url)

            threading.Thread(target=open_browser, daemon=True).start()

        console.print("\n[dim]Press Ctrl+C to stop[/dim]\n")

        uvicorn.run(
            app,
            host=config.server.host,
            port=config.server.port,
            log_level="debug" if debug else "info",
        )

    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.debug("serve failed", exc_info=True)
        raise typer.Exit(1)
