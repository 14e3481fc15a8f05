"""Monitor module - reconciles pending fills, exit rules and expirations"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING

from loguru import logger

from papertrade.domain.models import (
    OptionContractSpec,
    Order,
    OrderStatus,
    Portfolio,
)
from papertrade.domain.pricing import intrinsic_value
from papertrade.domain.rules import (
    STOP_LOSS,
    exit_trigger,
    limit_satisfied,
)
from papertrade.shared.exceptions import InsufficientFunds, InsufficientHoldings

if TYPE_CHECKING:
    from papertrade.application.services.order_engine import OrderEngine


def _is_expired(order_or_instrument, today: date) -> bool:
    instrument = getattr(order_or_instrument, "instrument", order_or_instrument)
    return isinstance(instrument, OptionContractSpec) and instrument.is_expired(
        today
    )


@dataclass
class ReconcileResult:
    """Orders created or changed by one reconciliation pass"""

    changed: list[Order] = field(default_factory=list)

    def add(self, order: Order) -> None:
        if all(existing is not order for existing in self.changed):
            self.changed.append(order)

    @property
    def mutated(self) -> bool:
        return bool(self.changed)


class Monitor:
    """Runs the reconciliation pass over one account"""

    def __init__(self, engine: OrderEngine):
        """Initialise monitor

        Args:
            engine: Order engine used to execute deferred and closing orders
        """
        self.engine = engine
        self.pricer = engine.pricer

    async def reconcile(
        self, portfolio: Portfolio, orders: list[Order], now: datetime
    ) -> ReconcileResult:
        """Bring a portfolio and its orders up to date with current prices

        Args:
            portfolio: Account portfolio (mutated in place)
            orders: All of the account's orders (mutated in place)
            now: Evaluation time

        Returns:
            ReconcileResult listing every order to persist
        """
        symbols = {position.symbol for position in portfolio.positions}
        symbols.update(
            order.symbol
            for order in orders
            if order.status in (OrderStatus.PENDING, OrderStatus.ACTIVE)
        )
        spots = await self.pricer.spots(list(symbols)) if symbols else {}

        result = ReconcileResult()
        today = now.date()
        self._fill_pending(portfolio, orders, spots, now, result)
        self._check_exits(portfolio, orders, spots, now, result)
        self._settle_expirations(portfolio, orders, spots, now, result)
        self._close_orphans(portfolio, orders, now, result)
        self._mark_to_market(portfolio, spots, today)

        if result.mutated:
            logger.info(
                f"{portfolio.account_id}: reconciliation changed {len(result.changed)} orders"
            )
        return result

    def _fill_pending(
        self,
        portfolio: Portfolio,
        orders: list[Order],
        spots: dict[str, float],
        now: datetime,
        result: ReconcileResult,
    ) -> None:
        today = now.date()
        for order in [o for o in orders if o.is_pending]:
            if _is_expired(order, today):
                self.engine.cancel(
                    order, now, "[EXPIRED] contract expired before the limit was reached"
                )
                result.add(order)
                continue

            reference_price, greeks = self.pricer.value(
                order.instrument, spots[order.symbol], today
            )
            if not limit_satisfied(order.action, order.limit_price, reference_price):
                logger.debug(
                    f"{order.id}: limit ${order.limit_price:.2f} not reached "
                    f"(market ${reference_price:.2f})"
                )
                continue

            try:
                self.engine.fill(portfolio, order, order.limit_price, now, greeks)
            except (InsufficientFunds, InsufficientHoldings) as e:
                logger.warning(f"{order.id}: limit reached but cannot fill: {e}")
                self.engine.cancel(order, now, f"[CANCELLED] {e}")
            result.add(order)

    def _check_exits(
        self,
        portfolio: Portfolio,
        orders: list[Order],
        spots: dict[str, float],
        now: datetime,
        result: ReconcileResult,
    ) -> None:
        today = now.date()
        for order in [o for o in orders if o.is_active and o.has_exit_rules]:
            if _is_expired(order, today):
                continue

            price, greeks = self.pricer.value(
                order.instrument, spots[order.symbol], today
            )
            trigger = exit_trigger(order, price)
            if trigger is None:
                continue

            threshold = order.stop_loss if trigger == STOP_LOSS else order.take_profit
            logger.warning(
                f"{order.id}: {trigger} HIT! {order.instrument} ${price:.2f} "
                f"vs ${threshold:.2f}"
            )

            quantity = min(
                order.quantity, portfolio.held_quantity(order.instrument)
            )
            if quantity > 0:
                closing = self.engine.closing_order(
                    order,
                    now,
                    f"[{trigger}] Auto-close for trade {order.id}",
                    quantity=quantity,
                )
                self.engine.fill(portfolio, closing, price, now, greeks)
                result.add(closing)

            order.transition(OrderStatus.CLOSED, now)
            order.annotate(
                f"[{trigger}] triggered at ${price:.2f} (threshold ${threshold:.2f})"
            )
            result.add(order)

    def _settle_expirations(
        self,
        portfolio: Portfolio,
        orders: list[Order],
        spots: dict[str, float],
        now: datetime,
        result: ReconcileResult,
    ) -> None:
        today = now.date()
        for position in [p for p in portfolio.positions if _is_expired(p, today)]:
            contract = position.instrument
            settlement = intrinsic_value(
                spots[contract.symbol], contract.strike, contract.option_type
            )
            portfolio.cash_balance += (
                settlement * position.quantity * position.multiplier
            )
            portfolio.remove_position(contract)
            portfolio.updated_at = now

            if settlement > 0:
                note = f"[EXPIRED] auto-exercised at intrinsic ${settlement:.2f}"
            else:
                note = "[EXPIRED] expired worthless"
            logger.warning(f"{contract}: {note}")

            # Held quantity may be below the active orders' total after a
            # partial sell; only what is still held settles, oldest first.
            remaining = position.quantity
            for order in orders:
                if order.is_active and order.instrument.key == contract.key:
                    settled = min(order.quantity, remaining)
                    remaining -= settled
                    order.realized_pnl = (
                        (settlement - position.average_price)
                        * settled
                        * order.multiplier
                    )
                    order.transition(OrderStatus.CLOSED, now)
                    order.annotate(note)
                    result.add(order)

    def _close_orphans(
        self,
        portfolio: Portfolio,
        orders: list[Order],
        now: datetime,
        result: ReconcileResult,
    ) -> None:
        """Close active orders whose position has been fully sold elsewhere"""
        for order in orders:
            if order.is_active and portfolio.find_position(order.instrument) is None:
                order.transition(OrderStatus.CLOSED, now)
                order.annotate("[CLOSED] position no longer held")
                logger.info(f"{order.id}: closed, {order.instrument} no longer held")
                result.add(order)

    def _mark_to_market(
        self, portfolio: Portfolio, spots: dict[str, float], today: date
    ) -> None:
        for position in portfolio.positions:
            price, greeks = self.pricer.value(
                position.instrument, spots[position.symbol], today
            )
            position.current_price = price
            if greeks is not None:
                position.greeks = greeks
