from loguru import logger
from rich.console import Console

from papertrade.application.commands.base import PortfolioCommand, ResetCommand
from papertrade.application.commands.display import display_portfolio
from papertrade.shared.exceptions import PaperTradeError


async def handle_portfolio(
    service, command: PortfolioCommand, console: Console
) -> int:
    """Reconcile and display the portfolio

    Args:
        service: PaperTradingService instance
        command: PortfolioCommand for the account
        console: Rich console for output

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        portfolio = await service.get_portfolio(command.account_id)
    except PaperTradeError as e:
        logger.error(f"Could not load portfolio: {e}")
        return 1

    display_portfolio(portfolio, console)
    return 0


async def handle_reset(service, command: ResetCommand, console: Console) -> int:
    """Delete all orders and positions for the account"""
    try:
        portfolio = await service.reset_portfolio(command.account_id)
    except PaperTradeError as e:
        logger.error(f"Reset failed: {e}")
        return 1

    console.print(
        f"[green]Portfolio reset with ${portfolio.cash_balance:,.2f}[/green]"
    )
    return 0
