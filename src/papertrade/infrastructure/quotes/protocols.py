"""Quote provider protocol.

Concrete providers fetch a reference price for an underlying symbol.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class QuoteProvider(Protocol):
    """Protocol for reference price retrieval."""

    async def get_price(self, symbol: str) -> float:
        """Get the current price for a symbol.

        Raises:
            QuoteUnavailable: If no usable price can be produced
        """
        ...
