"""Tests for instrument, position, portfolio and order models"""

from datetime import date, datetime

import pytest

from papertrade.domain.models import (
    Equity,
    OptionContractSpec,
    OptionType,
    OrderAction,
    OrderStatus,
    Portfolio,
    Position,
)
from tests.factories import InstrumentFactory, OrderFactory, PortfolioFactory


class TestInstruments:
    def test_equity_key_and_multiplier(self):
        equity = Equity("AAPL")

        assert equity.key == "AAPL"
        assert equity.multiplier == 1
        assert not equity.is_option

    def test_option_key_includes_all_contract_terms(self):
        option = InstrumentFactory.option(strike=102.5)

        assert option.key == "XYZ 2024-06-21 102.5 CALL"
        assert option.multiplier == 100

    def test_options_differing_in_any_term_do_not_match(self):
        base = InstrumentFactory.option()

        assert base == InstrumentFactory.option()
        assert base != InstrumentFactory.option(option_type=OptionType.PUT)
        assert base != InstrumentFactory.option(strike=105.0)
        assert base != InstrumentFactory.option(expiration=date(2024, 6, 28))

    def test_expired_on_and_after_expiration_date(self):
        option = InstrumentFactory.option(expiration=date(2024, 6, 7))

        assert not option.is_expired(date(2024, 6, 6))
        assert option.is_expired(date(2024, 6, 7))
        assert option.is_expired(date(2024, 6, 8))

    def test_invalid_strike_rejected(self):
        with pytest.raises(ValueError):
            OptionContractSpec("XYZ", OptionType.CALL, 0, date(2024, 6, 7))


class TestPosition:
    def test_derived_values_apply_multiplier(self):
        position = Position(
            instrument=InstrumentFactory.option(),
            quantity=2,
            average_price=5.0,
            current_price=6.0,
        )

        assert position.market_value == 1200.0
        assert position.cost_basis == 1000.0
        assert position.unrealized_pnl == 200.0
        assert position.unrealized_pnl_percent == pytest.approx(20.0)

    def test_add_volume_weights_average(self):
        position = Position(Equity("AAPL"), 10, 100.0, 100.0)

        position.add(30, 120.0)

        assert position.quantity == 40
        assert position.average_price == pytest.approx(115.0)

    def test_reduce_beyond_holding_rejected(self):
        position = Position(Equity("AAPL"), 10, 100.0, 100.0)

        assert position.reduce(4) == 6
        with pytest.raises(ValueError):
            position.reduce(7)

    def test_non_positive_quantity_rejected(self):
        with pytest.raises(ValueError):
            Position(Equity("AAPL"), 0, 100.0, 100.0)


class TestPortfolio:
    def test_open_seeds_cash(self):
        portfolio = Portfolio.open("acct", datetime(2024, 6, 3), 50_000.0)

        assert portfolio.cash_balance == 50_000.0
        assert portfolio.total_value == 50_000.0
        assert portfolio.positions == []

    def test_total_value_is_cash_plus_positions(self):
        portfolio = PortfolioFactory.holding(average_price=175.50, cash=98_245.0)
        portfolio.positions[0].current_price = 180.0

        assert portfolio.positions_value == 1800.0
        assert portfolio.total_value == 100_045.0
        assert portfolio.unrealized_pnl == pytest.approx(45.0)

    def test_find_and_remove_by_key(self):
        option = InstrumentFactory.option()
        portfolio = PortfolioFactory.holding(instrument=option, quantity=3)

        assert portfolio.held_quantity(InstrumentFactory.option()) == 3
        assert portfolio.held_quantity(Equity("XYZ")) == 0

        removed = portfolio.remove_position(option)

        assert removed.quantity == 3
        assert portfolio.find_position(option) is None


class TestOrderLifecycle:
    @pytest.mark.parametrize(
        "target", [OrderStatus.ACTIVE, OrderStatus.CLOSED, OrderStatus.CANCELLED]
    )
    def test_pending_transitions(self, target):
        order = OrderFactory.create()

        order.transition(target, datetime(2024, 6, 3, 11))

        assert order.status == target

    def test_terminal_states_are_final(self):
        order = OrderFactory.create()
        order.transition(OrderStatus.CANCELLED, datetime(2024, 6, 3, 11))

        with pytest.raises(ValueError):
            order.transition(OrderStatus.ACTIVE, datetime(2024, 6, 3, 12))

    def test_active_cannot_be_cancelled(self):
        order = OrderFactory.active()

        with pytest.raises(ValueError):
            order.transition(OrderStatus.CANCELLED, datetime(2024, 6, 3, 11))

    def test_closed_at_set_on_terminal(self):
        order = OrderFactory.active()
        closed_at = datetime(2024, 6, 4, 9, 30)

        order.transition(OrderStatus.CLOSED, closed_at)

        assert order.closed_at == closed_at

    def test_annotate_appends(self):
        order = OrderFactory.create(reasoning="breakout")

        order.annotate("[STOP-LOSS] triggered")

        assert order.reasoning == "breakout | [STOP-LOSS] triggered"

    def test_ids_are_unique(self):
        assert OrderFactory.create().id != OrderFactory.create().id

    def test_opposite_action(self):
        assert OrderAction.BUY.opposite == OrderAction.SELL
        assert OrderAction.SELL.opposite == OrderAction.BUY

    def test_entry_cost(self):
        order = OrderFactory.active(
            instrument=InstrumentFactory.option(), quantity=2, price=3.25
        )

        assert order.entry_cost == 650.0
