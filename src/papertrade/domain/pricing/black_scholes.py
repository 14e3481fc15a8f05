"""Black-Scholes option valuation and Greeks

Simplified educational model: European exercise, no dividends, flat
volatility and rate. All functions are pure.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime

from papertrade.domain.models.greeks import Greeks
from papertrade.domain.models.instrument import OptionType

DEFAULT_VOLATILITY = 0.25
DEFAULT_RISK_FREE_RATE = 0.05
MIN_TICK = 0.01
DAYS_PER_YEAR = 365.0


@dataclass(frozen=True)
class OptionQuote:
    """Model price and Greeks for one contract"""

    price: float
    greeks: Greeks


def norm_pdf(x: float) -> float:
    """Standard normal probability density"""
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


def norm_cdf(x: float) -> float:
    """Standard normal cumulative distribution

    erf-based, accurate to machine precision across the real line.
    """
    return 0.5 * math.erfc(-x / math.sqrt(2.0))


def intrinsic_value(spot: float, strike: float, option_type: OptionType) -> float:
    """In-the-money amount if exercised now"""
    if option_type == OptionType.CALL:
        return max(spot - strike, 0.0)
    return max(strike - spot, 0.0)


def years_between(now: datetime | date, expiration: date) -> float:
    """Calendar time to expiration in years (negative once past)"""
    today = now.date() if isinstance(now, datetime) else now
    return (expiration - today).days / DAYS_PER_YEAR


def price_option(
    spot: float,
    strike: float,
    years_to_expiry: float,
    option_type: OptionType,
    volatility: float = DEFAULT_VOLATILITY,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> OptionQuote:
    """Price a European option with Black-Scholes

    Args:
        spot: Underlying price
        strike: Strike price
        years_to_expiry: Time to expiration in years; <= 0 means settlement
        option_type: CALL or PUT
        volatility: Annualized volatility (0.25 = 25%)
        risk_free_rate: Annualized continuously-compounded rate

    Returns:
        OptionQuote with the premium per share and Greeks. At or past
        expiration the premium is the intrinsic value and Greeks are zero.
    """
    if years_to_expiry <= 0:
        return OptionQuote(
            price=intrinsic_value(spot, strike, option_type),
            greeks=Greeks.zero(),
        )

    t = years_to_expiry
    sqrt_t = math.sqrt(t)
    d1 = (
        math.log(spot / strike) + (risk_free_rate + 0.5 * volatility**2) * t
    ) / (volatility * sqrt_t)
    d2 = d1 - volatility * sqrt_t
    discount = math.exp(-risk_free_rate * t)

    if option_type == OptionType.CALL:
        price = spot * norm_cdf(d1) - strike * discount * norm_cdf(d2)
        delta = norm_cdf(d1)
        theta_annual = (
            -spot * norm_pdf(d1) * volatility / (2 * sqrt_t)
            - risk_free_rate * strike * discount * norm_cdf(d2)
        )
    else:
        price = strike * discount * norm_cdf(-d2) - spot * norm_cdf(-d1)
        delta = norm_cdf(d1) - 1.0
        theta_annual = (
            -spot * norm_pdf(d1) * volatility / (2 * sqrt_t)
            + risk_free_rate * strike * discount * norm_cdf(-d2)
        )

    gamma = norm_pdf(d1) / (spot * volatility * sqrt_t)
    vega = spot * norm_pdf(d1) * sqrt_t / 100.0

    return OptionQuote(
        price=max(price, MIN_TICK),
        greeks=Greeks(
            delta=delta,
            gamma=gamma,
            theta=theta_annual / DAYS_PER_YEAR,
            vega=vega,
        ),
    )
