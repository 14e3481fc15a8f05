"""Quote provider adapters"""

from .fmp import FMPQuoteProvider
from .protocols import QuoteProvider
from .resolver import PriceResolver
from .synthetic import REFERENCE_PRICES, SyntheticQuoteProvider, synthetic_price

__all__ = [
    "QuoteProvider",
    "FMPQuoteProvider",
    "SyntheticQuoteProvider",
    "PriceResolver",
    "REFERENCE_PRICES",
    "synthetic_price",
]
