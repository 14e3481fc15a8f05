"""Unit tests for the reconciliation monitor"""

from datetime import date, datetime

import pytest

from papertrade.application.services import OrderEngine
from papertrade.domain.models import Greeks, OptionType, OrderAction, OrderStatus
from papertrade.trading.monitor import Monitor, ReconcileResult
from tests.factories import InstrumentFactory, OrderFactory, PortfolioFactory

NOW = datetime(2024, 6, 3, 10, 0)


@pytest.fixture
def monitor(pricer) -> Monitor:
    return Monitor(OrderEngine(pricer))


def test_reconcile_result_deduplicates_by_identity():
    result = ReconcileResult()
    order = OrderFactory.create()

    result.add(order)
    result.add(order)

    assert result.changed == [order]
    assert result.mutated


@pytest.mark.asyncio
async def test_nothing_to_do(monitor):
    portfolio = PortfolioFactory.empty()

    result = await monitor.reconcile(portfolio, [], NOW)

    assert not result.mutated
    assert portfolio.updated_at == datetime(2024, 6, 3, 10, 0)


@pytest.mark.asyncio
async def test_marks_positions_to_market(monitor, quotes):
    option = InstrumentFactory.option(strike=100.0, expiration=date(2024, 7, 19))
    portfolio = PortfolioFactory.holding(
        instrument=option, quantity=1, average_price=5.0, greeks=Greeks()
    )
    quotes.set_price("XYZ", 100.0)

    result = await monitor.reconcile(portfolio, [], NOW)

    position = portfolio.positions[0]
    assert not result.mutated
    assert position.current_price != 5.0
    assert 0.4 < position.greeks.delta < 0.7
    assert position.greeks.theta < 0


@pytest.mark.asyncio
async def test_pending_sell_limit_fills_at_limit(monitor, quotes):
    portfolio = PortfolioFactory.holding(average_price=175.50, cash=0.0)
    order = OrderFactory.limit(180.0, action=OrderAction.SELL)
    quotes.set_price("AAPL", 182.0)

    result = await monitor.reconcile(portfolio, [order], NOW)

    assert result.changed == [order]
    assert order.status == OrderStatus.CLOSED
    assert order.price == 180.0
    assert order.realized_pnl == pytest.approx(45.0)
    assert portfolio.cash_balance == pytest.approx(1_800.0)


@pytest.mark.asyncio
async def test_orphaned_active_order_closed(monitor):
    portfolio = PortfolioFactory.empty()
    order = OrderFactory.active()

    result = await monitor.reconcile(portfolio, [order], NOW)

    assert result.changed == [order]
    assert order.status == OrderStatus.CLOSED
    assert order.reasoning == "[CLOSED] position no longer held"


@pytest.mark.asyncio
async def test_auto_close_limited_to_held_quantity(monitor, quotes):
    portfolio = PortfolioFactory.holding(quantity=4, cash=0.0)
    order = OrderFactory.active(quantity=10, stop_loss=170.0)
    quotes.set_price("AAPL", 165.0)

    result = await monitor.reconcile(portfolio, [order], NOW)

    closing = next(o for o in result.changed if o is not order)
    assert closing.quantity == 4
    assert order.status == OrderStatus.CLOSED
    assert portfolio.positions == []


@pytest.mark.asyncio
async def test_expired_put_settles_from_spot(monitor, quotes):
    put = InstrumentFactory.option(
        option_type=OptionType.PUT, strike=100.0, expiration=date(2024, 5, 31)
    )
    portfolio = PortfolioFactory.holding(
        instrument=put, quantity=2, average_price=3.0, cash=0.0
    )
    order = OrderFactory.active(instrument=put, quantity=2, price=3.0)
    quotes.set_price("XYZ", 96.0)

    await monitor.reconcile(portfolio, [order], NOW)

    assert portfolio.positions == []
    assert portfolio.cash_balance == pytest.approx(800.0)
    assert order.realized_pnl == pytest.approx(200.0)
    assert order.closed_at == NOW
    assert portfolio.updated_at == NOW


@pytest.mark.asyncio
async def test_expired_contract_skips_exit_rules(monitor, quotes):
    call = InstrumentFactory.option(expiration=date(2024, 5, 31))
    portfolio = PortfolioFactory.holding(
        instrument=call, quantity=1, average_price=5.0, cash=0.0
    )
    order = OrderFactory.active(
        instrument=call, quantity=1, price=5.0, take_profit=6.0
    )
    quotes.set_price("XYZ", 120.0)

    result = await monitor.reconcile(portfolio, [order], NOW)

    assert result.changed == [order]
    assert order.realized_pnl == pytest.approx(1_500.0)
    assert "[EXPIRED] auto-exercised" in order.reasoning


@pytest.mark.asyncio
async def test_expiry_pnl_limited_to_quantity_still_held(monitor, quotes):
    call = InstrumentFactory.option(strike=100.0, expiration=date(2024, 5, 31))
    # 2 bought, 1 already sold
    portfolio = PortfolioFactory.holding(
        instrument=call, quantity=1, average_price=3.0, cash=0.0
    )
    order = OrderFactory.active(instrument=call, quantity=2, price=3.0)
    quotes.set_price("XYZ", 95.0)

    await monitor.reconcile(portfolio, [order], NOW)

    assert order.status == OrderStatus.CLOSED
    assert order.realized_pnl == pytest.approx(-300.0)
    assert portfolio.cash_balance == pytest.approx(0.0)


@pytest.mark.asyncio
async def test_expiry_pnl_split_across_active_orders_oldest_first(monitor, quotes):
    call = InstrumentFactory.option(strike=100.0, expiration=date(2024, 5, 31))
    portfolio = PortfolioFactory.holding(
        instrument=call, quantity=3, average_price=4.0, cash=0.0
    )
    first = OrderFactory.active(instrument=call, quantity=2, price=4.0)
    second = OrderFactory.active(instrument=call, quantity=2, price=4.0)
    quotes.set_price("XYZ", 105.0)

    await monitor.reconcile(portfolio, [first, second], NOW)

    assert first.realized_pnl == pytest.approx(200.0)
    assert second.realized_pnl == pytest.approx(100.0)
    assert second.status == OrderStatus.CLOSED
    assert portfolio.cash_balance == pytest.approx(1_500.0)
