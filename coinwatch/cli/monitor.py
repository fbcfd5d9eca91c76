"""Monitor CLI commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from coinwatch.config import get_settings, load_watchlist
from coinwatch.errors import ConfigError

console = Console()
app = typer.Typer()
settings = get_settings()


def _load(path: Optional[str]):
    try:
        return load_watchlist(path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command("start")
def start_daemon(
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help=f"Watch list file (default: {settings.watchlist_path})"
    ),
    interval: Optional[int] = typer.Option(
        None,
        "--interval",
        "-n",
        help=f"Seconds between polls (default: {settings.monitor_interval_seconds})",
    ),
):
    """Monitor every configured asset until stopped."""
    from coinwatch.core.alerts.notifier import build_notifier
    from coinwatch.core.scheduler import start_monitors

    assets = _load(config)
    effective_interval = interval or settings.monitor_interval_seconds

    console.print("[bold]Starting Coinwatch Monitor[/bold]")
    console.print(f"  Assets: {len(assets)}")
    console.print(f"  Interval: {effective_interval} seconds")
    console.print()
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    start_monitors(assets, interval_seconds=effective_interval, notifier=build_notifier(settings))


@app.command("check")
def check_once(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Watch list file"),
):
    """Run a single polling cycle for every configured asset."""
    from coinwatch.core.monitor import AssetMonitor

    assets = _load(config)
    breaches = 0
    for asset in assets:
        monitor = AssetMonitor(asset)
        event = monitor.poll_once()
        if monitor.consecutive_failures:
            console.print(f"[red]{asset.symbol}:[/red] price unavailable")
        elif event:
            breaches += 1
            console.print(f"[bold red]{asset.symbol}:[/bold red] {event.message}")
        else:
            console.print(f"[green]{asset.symbol}:[/green] below threshold")

    console.print(f"\n{breaches} breach(es) across {len(assets)} asset(s)")


@app.command("watchlist")
def show_watchlist(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Watch list file"),
):
    """Show the configured assets and thresholds."""
    assets = _load(config)
    if not assets:
        console.print("[yellow]No assets configured.[/yellow]")
        return

    table = Table(title="Watch List")
    table.add_column("Name")
    table.add_column("Symbol", style="cyan")
    table.add_column("Threshold", justify="right", style="green")

    for a in assets:
        table.add_row(a.name, a.symbol, f"${a.threshold:,.2f}")

    console.print(table)
