"""Tests for Black-Scholes pricing"""

import math
from datetime import date, datetime

import pytest

from papertrade.domain.models import Greeks, OptionType
from papertrade.domain.pricing import (
    MIN_TICK,
    intrinsic_value,
    norm_cdf,
    price_option,
    years_between,
)


class TestNormCdf:
    def test_midpoint(self):
        assert norm_cdf(0.0) == pytest.approx(0.5)

    def test_known_quantile(self):
        assert norm_cdf(1.96) == pytest.approx(0.9750021, abs=1e-6)

    def test_saturates_without_overflow(self):
        assert norm_cdf(40.0) == 1.0
        assert 0.0 <= norm_cdf(-40.0) < 1e-300


class TestPriceOption:
    def test_reference_call_and_put(self):
        call = price_option(100, 100, 1.0, OptionType.CALL, 0.2, 0.05)
        put = price_option(100, 100, 1.0, OptionType.PUT, 0.2, 0.05)

        assert call.price == pytest.approx(10.4506, abs=1e-4)
        assert put.price == pytest.approx(5.5735, abs=1e-4)

    @pytest.mark.parametrize("strike", [80.0, 100.0, 120.0])
    def test_put_call_parity(self, strike):
        spot, t, r = 100.0, 0.5, 0.05
        call = price_option(spot, strike, t, OptionType.CALL, 0.3, r)
        put = price_option(spot, strike, t, OptionType.PUT, 0.3, r)

        assert call.price - put.price == pytest.approx(
            spot - strike * math.exp(-r * t), abs=1e-9
        )

    def test_greeks_signs_and_relationships(self):
        call = price_option(100, 100, 0.25, OptionType.CALL)
        put = price_option(100, 100, 0.25, OptionType.PUT)

        assert 0 < call.greeks.delta < 1
        assert -1 < put.greeks.delta < 0
        assert call.greeks.delta - put.greeks.delta == pytest.approx(1.0)
        assert call.greeks.gamma == pytest.approx(put.greeks.gamma)
        assert call.greeks.vega == pytest.approx(put.greeks.vega)
        assert call.greeks.gamma > 0
        assert call.greeks.theta < 0

    @pytest.mark.parametrize("years", [0.0, -0.1])
    def test_expired_returns_intrinsic_and_zero_greeks(self, years):
        call = price_option(110, 100, years, OptionType.CALL)
        put = price_option(110, 100, years, OptionType.PUT)

        assert call.price == 10.0
        assert put.price == 0.0
        assert call.greeks == Greeks.zero()

    def test_price_floor(self):
        quote = price_option(50, 200, 0.01, OptionType.CALL)

        assert quote.price == MIN_TICK

    def test_higher_volatility_costs_more(self):
        low = price_option(100, 105, 0.5, OptionType.CALL, volatility=0.15)
        high = price_option(100, 105, 0.5, OptionType.CALL, volatility=0.45)

        assert high.price > low.price


def test_intrinsic_value():
    assert intrinsic_value(110, 100, OptionType.CALL) == 10
    assert intrinsic_value(95, 100, OptionType.CALL) == 0
    assert intrinsic_value(95, 100, OptionType.PUT) == 5


def test_years_between_uses_calendar_days():
    assert years_between(date(2024, 1, 1), date(2025, 1, 1)) == pytest.approx(
        366 / 365
    )
    assert years_between(datetime(2024, 6, 3, 15, 30), date(2024, 6, 3)) == 0
    assert years_between(date(2024, 6, 10), date(2024, 6, 3)) < 0
