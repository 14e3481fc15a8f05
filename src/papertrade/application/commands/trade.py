from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from papertrade.application.commands.base import (
    CancelCommand,
    CloseCommand,
    TradeCommand,
)
from papertrade.domain.models import OrderType
from papertrade.shared.exceptions import PaperTradeError
from papertrade.validation.orders import TradeRequest


def build_request(command: TradeCommand) -> TradeRequest:
    """Translate a TradeCommand into a validated TradeRequest

    Raises:
        ValidationError: If any field fails validation
    """
    return TradeRequest(
        account_id=command.account_id,
        symbol=command.symbol,
        action=command.action,
        quantity=command.quantity,
        order_type=(
            OrderType.LIMIT if command.limit_price is not None else OrderType.MARKET
        ),
        limit_price=command.limit_price,
        stop_loss=command.stop_loss,
        take_profit=command.take_profit,
        reasoning=command.reasoning,
        asset_type="option" if command.option_type else "equity",
        option_type=command.option_type,
        strike=command.strike,
        expiration=command.expiration,
    )


async def handle_trade(service, command: TradeCommand, console: Console) -> int:
    """Place an order

    Args:
        service: PaperTradingService instance
        command: TradeCommand describing the order
        console: Rich console for output

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        request = build_request(command)
    except ValidationError as e:
        logger.error(f"Invalid trade request: {e}")
        return 1

    try:
        order_id = await service.place_trade(request)
    except PaperTradeError as e:
        logger.error(f"Trade rejected: {e}")
        return 1

    order = await service.get_trade(order_id)
    console.print(
        f"[green]{order.action.value} {order.quantity} {order.instrument}"
        f" -> {order.status.value}[/green] ({order_id})"
    )
    return 0


async def handle_close(service, command: CloseCommand, console: Console) -> int:
    """Close an active order at market"""
    try:
        await service.close_trade(command.order_id)
    except PaperTradeError as e:
        logger.error(f"Close failed: {e}")
        return 1

    console.print(f"[green]Closed {command.order_id}[/green]")
    return 0


async def handle_cancel(service, command: CancelCommand, console: Console) -> int:
    """Cancel a pending order"""
    try:
        await service.cancel_order(command.order_id)
    except PaperTradeError as e:
        logger.error(f"Cancel failed: {e}")
        return 1

    console.print(f"[green]Cancelled {command.order_id}[/green]")
    return 0
