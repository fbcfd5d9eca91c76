"""Main CLI entry point using Typer."""

import logging

import typer
from rich.console import Console

from coinwatch.config import PRODUCT_NAME, PRODUCT_TAGLINE, PRODUCT_VERSION, get_settings
from coinwatch.db.database import init_db

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Reduce noise from third-party libraries
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("apscheduler").setLevel(logging.WARNING)

console = Console()
app = typer.Typer(
    name="coinwatch",
    help=f"{PRODUCT_NAME}: {PRODUCT_TAGLINE}",
    add_completion=False,
)


@app.callback()
def main_callback():
    """Initialize database on startup."""
    init_db()


# Import and add subcommands
from coinwatch.cli.portfolio import app as portfolio_app
from coinwatch.cli.monitor import app as monitor_app

app.add_typer(portfolio_app, name="portfolio", help="Manage and value holdings")
app.add_typer(monitor_app, name="monitor", help="Watch prices against thresholds")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]{PRODUCT_NAME}[/bold] {PRODUCT_VERSION}")
    console.print(f"[dim]{PRODUCT_TAGLINE}[/dim]")


if __name__ == "__main__":
    app()
