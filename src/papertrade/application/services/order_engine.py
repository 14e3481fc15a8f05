"""Order engine - order lifecycle and portfolio mutation

Fills are the only way cash and positions change. BUY fills open or add to
a position and leave the order `active` so its exit rules can be managed.
SELL fills reduce a position, record realized P&L and are terminal.
"""

from datetime import datetime

from loguru import logger

from papertrade.domain.models import (
    Greeks,
    OptionContractSpec,
    Order,
    OrderAction,
    OrderStatus,
    OrderType,
    Portfolio,
    Position,
)
from papertrade.domain.rules import limit_satisfied
from papertrade.shared.exceptions import (
    InsufficientFunds,
    InsufficientHoldings,
    InvalidInstrument,
    OrderNotActionable,
)
from papertrade.validation.orders import TradeRequest

from .instrument_pricer import InstrumentPricer


class OrderEngine:
    """Accepts orders, decides execution, and applies fills to a portfolio

    The engine mutates the portfolio and orders it is handed; persisting
    them is the caller's job.
    """

    def __init__(self, pricer: InstrumentPricer) -> None:
        self.pricer = pricer

    async def place_order(
        self, portfolio: Portfolio, request: TradeRequest, now: datetime
    ) -> Order:
        """Create an order and fill it if it is marketable

        Args:
            portfolio: Portfolio to trade against (mutated on fill)
            request: Validated trade request
            now: Submission time

        Returns:
            The new order, `active`/`closed` if filled, else `pending`

        Raises:
            InvalidInstrument: Options request missing contract fields, or
                the contract has already expired
            InsufficientFunds: BUY cost exceeds cash
            InsufficientHoldings: SELL exceeds the matching position
        """
        instrument = request.instrument()
        if isinstance(instrument, OptionContractSpec) and instrument.is_expired(
            now.date()
        ):
            raise InvalidInstrument(
                f"{instrument} expired on {instrument.expiration.isoformat()}"
            )

        reference_price, greeks = await self.pricer.reference_price(
            instrument, now.date()
        )

        order = Order(
            account_id=portfolio.account_id,
            instrument=instrument,
            action=request.action,
            quantity=request.quantity,
            order_type=request.order_type,
            timestamp=now,
            limit_price=request.limit_price,
            stop_loss=request.stop_loss,
            take_profit=request.take_profit,
            reasoning=request.reasoning,
        )

        if order.order_type == OrderType.MARKET:
            self.fill(portfolio, order, reference_price, now, greeks)
        elif limit_satisfied(order.action, order.limit_price, reference_price):
            self.fill(portfolio, order, order.limit_price, now, greeks)
        else:
            self.check_can_fill(portfolio, order, order.limit_price)
            logger.info(
                f"{order.id}: {order.action.value} {order.quantity} {instrument} "
                f"LIMIT ${order.limit_price:.2f} pending (market ${reference_price:.2f})"
            )

        return order

    def check_can_fill(
        self, portfolio: Portfolio, order: Order, fill_price: float
    ) -> None:
        """Validate funds or holdings for a fill without mutating anything

        Raises:
            InsufficientFunds: BUY cost exceeds cash
            InsufficientHoldings: SELL exceeds the matching position
        """
        if order.action == OrderAction.BUY:
            cost = fill_price * order.quantity * order.multiplier
            if cost > portfolio.cash_balance:
                raise InsufficientFunds(cost, portfolio.cash_balance)
        else:
            held = portfolio.held_quantity(order.instrument)
            if held < order.quantity:
                raise InsufficientHoldings(
                    order.instrument.key, order.quantity, held
                )

    def fill(
        self,
        portfolio: Portfolio,
        order: Order,
        fill_price: float,
        now: datetime,
        greeks: Greeks | None = None,
    ) -> None:
        """Execute an order at a price and apply it to the portfolio

        Validation runs before any mutation, so a rejected fill leaves both
        the order and the portfolio untouched.
        """
        self.check_can_fill(portfolio, order, fill_price)

        amount = fill_price * order.quantity * order.multiplier
        if order.action == OrderAction.BUY:
            portfolio.cash_balance -= amount
            position = portfolio.find_position(order.instrument)
            if position is None:
                portfolio.positions.append(
                    Position(
                        instrument=order.instrument,
                        quantity=order.quantity,
                        average_price=fill_price,
                        current_price=fill_price,
                        greeks=greeks,
                    )
                )
            else:
                position.add(order.quantity, fill_price)
                if greeks is not None:
                    position.greeks = greeks
            next_status = OrderStatus.ACTIVE
        else:
            position = portfolio.find_position(order.instrument)
            order.realized_pnl = (
                (fill_price - position.average_price)
                * order.quantity
                * order.multiplier
            )
            portfolio.cash_balance += amount
            if position.reduce(order.quantity) == 0:
                portfolio.remove_position(order.instrument)
            next_status = OrderStatus.CLOSED

        order.price = fill_price
        order.filled_at = now
        order.transition(next_status, now)
        portfolio.updated_at = now

        logger.info(
            f"{order.id}: filled {order.action.value} {order.quantity} "
            f"{order.instrument} @ ${fill_price:.2f} -> {order.status.value}"
        )

    def closing_order(
        self,
        original: Order,
        now: datetime,
        reasoning: str,
        quantity: int | None = None,
    ) -> Order:
        """Synthesize the opposite MARKET order that flattens `original`"""
        return Order(
            account_id=original.account_id,
            instrument=original.instrument,
            action=original.action.opposite,
            quantity=original.quantity if quantity is None else quantity,
            order_type=OrderType.MARKET,
            timestamp=now,
            reasoning=reasoning,
        )

    async def close_trade(
        self, portfolio: Portfolio, order: Order, now: datetime
    ) -> Order:
        """Manually close an active order at market

        Returns:
            The synthesized closing order

        Raises:
            OrderNotActionable: If the order is not `active`
            InsufficientHoldings: If the position no longer covers the order
        """
        if not order.is_active:
            raise OrderNotActionable(order.id, order.status.value, "close")

        reference_price, greeks = await self.pricer.reference_price(
            order.instrument, now.date()
        )
        quantity = min(order.quantity, portfolio.held_quantity(order.instrument))
        closing = self.closing_order(
            order, now, f"Closing position for trade {order.id}", quantity=quantity
        )
        self.fill(portfolio, closing, reference_price, now, greeks)
        order.transition(OrderStatus.CLOSED, now)
        return closing

    def cancel(self, order: Order, now: datetime, reason: str | None = None) -> None:
        """Cancel a pending order

        Raises:
            OrderNotActionable: If the order is not `pending`
        """
        if not order.is_pending:
            raise OrderNotActionable(order.id, order.status.value, "cancel")
        order.transition(OrderStatus.CANCELLED, now)
        if reason:
            order.annotate(reason)
        logger.info(f"{order.id}: cancelled{f' ({reason})' if reason else ''}")

