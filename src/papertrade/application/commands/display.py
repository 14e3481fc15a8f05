"""Rich table rendering for CLI output"""

from rich.console import Console
from rich.table import Table

from papertrade.domain.models import (
    OptionContract,
    OptionsChain,
    Order,
    PerformanceMetrics,
    Portfolio,
)


def _pnl(value: float) -> str:
    colour = "green" if value >= 0 else "red"
    return f"[{colour}]{value:+,.2f}[/{colour}]"


def display_portfolio(portfolio: Portfolio, console: Console) -> None:
    """Display balances and open positions"""
    console.print(
        f"[bold]{portfolio.account_id}[/bold]  "
        f"Cash ${portfolio.cash_balance:,.2f}  "
        f"Positions ${portfolio.positions_value:,.2f}  "
        f"Total ${portfolio.total_value:,.2f}  "
        f"P&L {_pnl(portfolio.total_value - portfolio.initial_balance)}"
    )

    if not portfolio.positions:
        console.print("[yellow]No open positions[/yellow]")
        return

    table = Table(title="Positions")
    table.add_column("Instrument", style="cyan")
    table.add_column("Qty", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("Last", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Delta", justify="right")

    for position in portfolio.positions:
        table.add_row(
            str(position.instrument),
            str(position.quantity),
            f"{position.average_price:.2f}",
            f"{position.current_price:.2f}",
            f"{position.market_value:,.2f}",
            f"{_pnl(position.unrealized_pnl)} ({position.unrealized_pnl_percent:+.1f}%)",
            f"{position.greeks.delta:.3f}" if position.greeks else "-",
        )

    console.print(table)


def display_orders(orders: list[Order], console: Console) -> None:
    """Display the order history, oldest first"""
    if not orders:
        console.print("[yellow]No trades yet[/yellow]")
        return

    table = Table(title=f"Trades ({len(orders)})")
    table.add_column("ID", style="cyan")
    table.add_column("Time", style="yellow")
    table.add_column("Side")
    table.add_column("Instrument")
    table.add_column("Qty", justify="right")
    table.add_column("Type")
    table.add_column("Price", justify="right")
    table.add_column("Status")
    table.add_column("Realized", justify="right")
    table.add_column("Notes")

    for order in orders:
        price = order.price if order.filled_at else order.limit_price
        table.add_row(
            order.id,
            order.timestamp.strftime("%Y-%m-%d %H:%M"),
            order.action.value,
            str(order.instrument),
            str(order.quantity),
            order.order_type.value,
            f"{price:.2f}" if price else "-",
            order.status.value,
            _pnl(order.realized_pnl) if order.realized_pnl is not None else "",
            order.reasoning or "",
        )

    console.print(table)


def _chain_row(contract: OptionContract) -> tuple[str, ...]:
    return (
        f"{contract.bid:.2f}",
        f"{contract.ask:.2f}",
        f"{contract.greeks.delta:.2f}",
        f"{contract.volume:,}",
    )


def display_chain(chain: OptionsChain, console: Console) -> None:
    """Display calls and puts side by side around the strike column"""
    table = Table(
        title=f"{chain.symbol} {chain.expiration.isoformat()} "
        f"(spot ${chain.underlying_price:,.2f})"
    )
    for heading in ("Call Bid", "Call Ask", "Call Delta", "Call Vol"):
        table.add_column(heading, justify="right", style="green")
    table.add_column("Strike", justify="center", style="bold cyan")
    for heading in ("Put Bid", "Put Ask", "Put Delta", "Put Vol"):
        table.add_column(heading, justify="right", style="red")

    for call, put in zip(chain.calls, chain.puts):
        table.add_row(*_chain_row(call), f"{call.strike:g}", *_chain_row(put))

    console.print(table)


def display_metrics(metrics: PerformanceMetrics, console: Console) -> None:
    table = Table(title="Performance")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total Return", _pnl(metrics.total_return))
    table.add_row("Total Return %", f"{metrics.total_return_percent:+.2f}%")
    table.add_row("Closed Trades", str(metrics.total_trades))
    table.add_row("Winners", str(metrics.profitable_trades))
    table.add_row("Losers", str(metrics.losing_trades))
    table.add_row("Win Rate", f"{metrics.win_rate:.1f}%")
    table.add_row("Average Win", f"{metrics.average_win:,.2f}")
    table.add_row("Average Loss", f"{metrics.average_loss:,.2f}")

    console.print(table)
