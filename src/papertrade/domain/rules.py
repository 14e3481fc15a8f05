"""Order trigger rules"""

from .models import Order, OrderAction

STOP_LOSS = "STOP-LOSS"
TAKE_PROFIT = "TAKE-PROFIT"


def limit_satisfied(
    action: OrderAction, limit_price: float, reference_price: float
) -> bool:
    """Whether a limit order is marketable at the reference price"""
    if action == OrderAction.BUY:
        return limit_price >= reference_price
    return limit_price <= reference_price


def exit_trigger(order: Order, price: float) -> str | None:
    """Which exit rule, if any, fires for an active order at a price

    BUY-opened orders stop out when price falls to the stop and take profit
    when it rises to the target; SELL-opened orders are the mirror image.
    The stop is checked first so a gap through both counts as a loss.
    """
    if order.action == OrderAction.BUY:
        if order.stop_loss is not None and price <= order.stop_loss:
            return STOP_LOSS
        if order.take_profit is not None and price >= order.take_profit:
            return TAKE_PROFIT
    else:
        if order.stop_loss is not None and price >= order.stop_loss:
            return STOP_LOSS
        if order.take_profit is not None and price <= order.take_profit:
            return TAKE_PROFIT
    return None
