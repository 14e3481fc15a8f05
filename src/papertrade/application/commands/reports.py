from loguru import logger
from rich.console import Console

from papertrade.application.commands.base import (
    ChainCommand,
    MetricsCommand,
    TradesCommand,
)
from papertrade.application.commands.display import (
    display_chain,
    display_metrics,
    display_orders,
)
from papertrade.shared.exceptions import PaperTradeError


async def handle_trades(service, command: TradesCommand, console: Console) -> int:
    """Display the account's order history"""
    try:
        orders = await service.get_trades(command.account_id)
    except PaperTradeError as e:
        logger.error(f"Could not load trades: {e}")
        return 1

    display_orders(orders, console)
    return 0


async def handle_chain(service, command: ChainCommand, console: Console) -> int:
    """Display generated options chains for a symbol"""
    chains = await service.get_options_chain(command.symbol, command.expiration)
    for chain in chains:
        display_chain(chain, console)
    return 0


async def handle_metrics(service, command: MetricsCommand, console: Console) -> int:
    """Display performance metrics"""
    try:
        metrics = await service.get_performance_metrics(command.account_id)
    except PaperTradeError as e:
        logger.error(f"Could not compute metrics: {e}")
        return 1

    display_metrics(metrics, console)
    return 0
