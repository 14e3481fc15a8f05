"""Option pricing"""

from .black_scholes import (
    DEFAULT_RISK_FREE_RATE,
    DEFAULT_VOLATILITY,
    MIN_TICK,
    OptionQuote,
    intrinsic_value,
    norm_cdf,
    norm_pdf,
    price_option,
    years_between,
)

__all__ = [
    "DEFAULT_VOLATILITY",
    "DEFAULT_RISK_FREE_RATE",
    "MIN_TICK",
    "OptionQuote",
    "intrinsic_value",
    "norm_cdf",
    "norm_pdf",
    "price_option",
    "years_between",
]
