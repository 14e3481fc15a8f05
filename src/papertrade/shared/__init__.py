"""Shared utilities and exceptions"""

from .exceptions import (
    ConfigurationError,
    InsufficientFunds,
    InsufficientHoldings,
    InvalidInstrument,
    OrderError,
    OrderNotActionable,
    OrderNotFound,
    PaperTradeError,
    PersistenceFailure,
    QuoteError,
    QuoteUnavailable,
    RepositoryError,
    TradingError,
)

__all__ = [
    "PaperTradeError",
    "TradingError",
    "OrderError",
    "InsufficientFunds",
    "InsufficientHoldings",
    "InvalidInstrument",
    "OrderNotFound",
    "OrderNotActionable",
    "QuoteError",
    "QuoteUnavailable",
    "RepositoryError",
    "PersistenceFailure",
    "ConfigurationError",
]
