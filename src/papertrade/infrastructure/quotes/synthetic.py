"""Deterministic synthetic quote generator

Used when no live provider is configured and as the fallback whenever the
live provider fails. The same symbol always yields the same price unless
an override has been set.
"""

from loguru import logger

REFERENCE_PRICES: dict[str, float] = {
    "AAPL": 175.50,
    "GOOGL": 2800.25,
    "MSFT": 375.80,
    "TSLA": 245.90,
    "AMZN": 3200.15,
    "NVDA": 450.30,
    "META": 320.75,
    "NFLX": 425.60,
    "AMD": 105.40,
    "INTC": 45.20,
}


def synthetic_price(symbol: str) -> float:
    """Reference price for a symbol, derived from its characters if unknown"""
    symbol = symbol.upper()
    if symbol in REFERENCE_PRICES:
        return REFERENCE_PRICES[symbol]
    symbol_hash = sum(ord(char) for char in symbol)
    return float(80 + symbol_hash % 120)


class SyntheticQuoteProvider:
    """Quote provider backed by the synthetic price table"""

    def __init__(self, overrides: dict[str, float] | None = None) -> None:
        self._overrides: dict[str, float] = {}
        for symbol, price in (overrides or {}).items():
            self.set_price(symbol, price)

    def set_price(self, symbol: str, price: float) -> None:
        """Pin a symbol to a price (simulating a market move)"""
        if price <= 0:
            raise ValueError(f"Price must be positive, got {price}")
        self._overrides[symbol.upper()] = price
        logger.debug(f"Synthetic price for {symbol.upper()} set to ${price:.2f}")

    def clear(self) -> None:
        self._overrides.clear()

    async def get_price(self, symbol: str) -> float:
        symbol = symbol.upper()
        return self._overrides.get(symbol, synthetic_price(symbol))
