"""Tests for limit and exit trigger rules"""

import pytest

from papertrade.domain.models import OrderAction, OrderStatus
from papertrade.domain.rules import (
    STOP_LOSS,
    TAKE_PROFIT,
    exit_trigger,
    limit_satisfied,
)
from tests.factories import OrderFactory


@pytest.mark.parametrize(
    "action,limit,reference,expected",
    [
        (OrderAction.BUY, 170.0, 175.5, False),
        (OrderAction.BUY, 175.5, 175.5, True),
        (OrderAction.BUY, 180.0, 175.5, True),
        (OrderAction.SELL, 180.0, 175.5, False),
        (OrderAction.SELL, 175.5, 175.5, True),
        (OrderAction.SELL, 170.0, 175.5, True),
    ],
)
def test_limit_satisfied(action, limit, reference, expected):
    assert limit_satisfied(action, limit, reference) is expected


class TestExitTrigger:
    def _order(self, action=OrderAction.BUY, **kwargs):
        return OrderFactory.create(
            action=action, status=OrderStatus.ACTIVE, price=100.0, **kwargs
        )

    def test_buy_stop_loss(self):
        order = self._order(stop_loss=90.0)

        assert exit_trigger(order, 90.0) == STOP_LOSS
        assert exit_trigger(order, 90.01) is None

    def test_buy_take_profit(self):
        order = self._order(take_profit=110.0)

        assert exit_trigger(order, 110.0) == TAKE_PROFIT
        assert exit_trigger(order, 109.99) is None

    def test_stop_checked_before_target(self):
        # Degenerate thresholds where both conditions hold at once
        order = self._order(stop_loss=105.0, take_profit=95.0)

        assert exit_trigger(order, 100.0) == STOP_LOSS

    def test_sell_rules_are_mirrored(self):
        order = self._order(
            action=OrderAction.SELL, stop_loss=110.0, take_profit=90.0
        )

        assert exit_trigger(order, 111.0) == STOP_LOSS
        assert exit_trigger(order, 89.0) == TAKE_PROFIT
        assert exit_trigger(order, 100.0) is None

    def test_no_rules(self):
        assert exit_trigger(self._order(), 1.0) is None
