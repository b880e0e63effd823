"""
Taskboard CLI - Metrics command.

Summarize the telemetry CSV recorded by the server.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from taskboard.core.config.loader import load_config
from taskboard.core.telemetry.summary import summarize_metrics

console = Console()


def metrics(
    path: Path | None = typer.Argument(
        None,
        help="Metrics CSV to read (default from config: data/metrics.csv)",
    ),
) -> None:
    """
    Summarize recorded request telemetry per action.

    Shows request counts, error rate, median latency and the share of
    requests made by htmx clients.
    """
    if path is None:
        csv_path = load_config().telemetry.csv_path
        if not csv_path:
            console.print("[red]Error:[/red] No metrics file configured.")
            raise typer.Exit(1)
        path = Path(csv_path)

    if not path.exists():
        console.print(f"[red]Error:[/red] Metrics file not found: {path}")
        raise typer.Exit(1)

    summaries = summarize_metrics(path)
    if not summaries:
        console.print("[yellow]No events recorded yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Task", style="cyan")
    table.add_column("Events", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Median ms", justify="right")
    table.add_column("htmx", justify="right")

    for summary in summaries:
        errors = f"{summary.errors} ({summary.error_rate:.0%})"
        if summary.errors:
            errors = f"[red]{errors}[/red]"
        table.add_row(
            summary.task_code,
            str(summary.count),
            errors,
            f"{summary.median_ms:.0f}",
            f"{summary.enhanced_share:.0%}",
        )

    console.print(table)
