"""Portfolio CLI commands."""

import math
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from coinwatch.core.portfolio.repository import HoldingRepository
from coinwatch.core.portfolio.valuation import PortfolioValuator
from coinwatch.data.market.provider import market_data
from coinwatch.db.database import get_db
from coinwatch.errors import PriceSourceError

console = Console()
app = typer.Typer()


@app.command("add")
def add_holding(
    symbol: str = typer.Argument(..., help="Cryptocurrency symbol (e.g., BTC)"),
    quantity: float = typer.Argument(..., help="Amount held"),
    user_id: int = typer.Option(0, "--user", "-u", help="Owner user ID"),
):
    """Record a holding."""
    if not math.isfinite(quantity) or quantity <= 0:
        console.print(f"[red]Error:[/red] Quantity must be positive, got {quantity}")
        raise typer.Exit(1)

    with get_db() as db:
        holding = HoldingRepository(db).insert_holding(user_id, symbol, quantity)
        console.print(f"[green]Added:[/green] {holding.quantity} {holding.symbol} for user {user_id}")


@app.command("list")
def list_holdings(
    user_id: Optional[int] = typer.Option(None, "--user", "-u", help="Only this user's holdings"),
):
    """List recorded holdings."""
    with get_db() as db:
        holdings = HoldingRepository(db).list_all_holdings(user_id=user_id)

        if not holdings:
            console.print("[yellow]No holdings found.[/yellow] Use 'add' to add some.")
            return

        table = Table(title="Holdings")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("User", justify="right")
        table.add_column("Symbol", style="cyan")
        table.add_column("Quantity", justify="right")
        table.add_column("Added")

        for h in holdings:
            table.add_row(
                str(h.id),
                str(h.user_id),
                h.symbol,
                f"{h.quantity:,.8g}",
                h.created_at.strftime("%Y-%m-%d %H:%M"),
            )

        console.print(table)


@app.command("price")
def get_price(
    symbol: str = typer.Argument(..., help="Cryptocurrency symbol"),
):
    """Get current price for a symbol."""
    try:
        price = market_data.get_price(symbol.upper())
    except PriceSourceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[cyan]{symbol.upper()}[/cyan]: [green]${price:,.2f}[/green]")


@app.command("value")
def portfolio_value(
    user_id: Optional[int] = typer.Option(None, "--user", "-u", help="Only this user's holdings"),
):
    """Show portfolio value at current prices."""
    with get_db() as db:
        holdings = HoldingRepository(db).list_all_holdings(user_id=user_id)

    if not holdings:
        console.print("[yellow]No holdings found.[/yellow]")
        return

    valuator = PortfolioValuator()
    try:
        positions = valuator.appraise(holdings)
    except PriceSourceError as e:
        console.print(f"[red]Error fetching cryptocurrency price:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Portfolio Value")
    table.add_column("Symbol", style="cyan")
    table.add_column("Quantity", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right", style="green")

    for p in positions:
        table.add_row(p.symbol, f"{p.quantity:,}", f"${p.price:,.2f}", f"${p.value:,.2f}")

    console.print(table)
    console.print(f"\n[bold]Total value:[/bold] ${valuator.total(positions):,.2f}")
