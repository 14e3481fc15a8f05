"""Price resolution with a single primary -> fallback order"""

import asyncio
import math

from loguru import logger

from papertrade.shared.exceptions import QuoteUnavailable

from .protocols import QuoteProvider
from .synthetic import SyntheticQuoteProvider


class PriceResolver:
    """Resolves reference prices for underlying symbols

    The primary provider (if any) is asked first under a timeout. A timeout,
    error or unusable value degrades to the synthetic provider; quote
    failures are logged and never surfaced.
    """

    def __init__(
        self,
        primary: QuoteProvider | None = None,
        fallback: SyntheticQuoteProvider | None = None,
        timeout: float = 3.0,
    ) -> None:
        """Initialise resolver

        Args:
            primary: Live quote provider, or None for synthetic-only pricing
            fallback: Synthetic provider used when the primary fails
            timeout: Seconds to wait on the primary before falling back
        """
        self.primary = primary
        self.fallback = fallback or SyntheticQuoteProvider()
        self.timeout = timeout

    async def resolve_price(self, symbol: str) -> float:
        """Get a positive, finite price for a symbol

        Args:
            symbol: Underlying ticker symbol

        Returns:
            Price from the primary provider, or the synthetic fallback
        """
        symbol = symbol.upper()
        if self.primary is not None:
            try:
                price = await asyncio.wait_for(
                    self.primary.get_price(symbol), timeout=self.timeout
                )
                if not math.isfinite(price) or price <= 0:
                    raise QuoteUnavailable(f"Unusable price {price} for {symbol}")
                return price
            except asyncio.TimeoutError:
                logger.warning(
                    f"{symbol}: quote timed out after {self.timeout}s, using synthetic price"
                )
            except QuoteUnavailable as e:
                logger.warning(f"{symbol}: {e}, using synthetic price")
            except Exception as e:
                logger.warning(
                    f"{symbol}: unexpected quote error ({e}), using synthetic price"
                )

        return await self.fallback.get_price(symbol)

    async def resolve_prices(self, symbols: list[str]) -> dict[str, float]:
        """Resolve several symbols concurrently

        Returns:
            Mapping of upper-cased symbol to price
        """
        unique = sorted({symbol.upper() for symbol in symbols})
        prices = await asyncio.gather(
            *(self.resolve_price(symbol) for symbol in unique)
        )
        return dict(zip(unique, prices))
