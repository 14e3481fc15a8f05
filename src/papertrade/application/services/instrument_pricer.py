"""Reference pricing for equities and option contracts"""

from datetime import date

from papertrade.domain.models import Greeks, Instrument, OptionContractSpec
from papertrade.domain.pricing import (
    DEFAULT_RISK_FREE_RATE,
    DEFAULT_VOLATILITY,
    price_option,
    years_between,
)
from papertrade.infrastructure.quotes import PriceResolver


class InstrumentPricer:
    """Combines underlying quotes with the option pricing model"""

    def __init__(
        self,
        resolver: PriceResolver,
        volatility: float = DEFAULT_VOLATILITY,
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    ) -> None:
        self.resolver = resolver
        self.volatility = volatility
        self.risk_free_rate = risk_free_rate

    async def spot(self, symbol: str) -> float:
        return await self.resolver.resolve_price(symbol)

    async def spots(self, symbols: list[str]) -> dict[str, float]:
        return await self.resolver.resolve_prices(symbols)

    def value(
        self, instrument: Instrument, spot: float, today: date
    ) -> tuple[float, Greeks | None]:
        """Price an instrument from its underlying spot

        Equities trade at spot and carry no Greeks. Options are priced
        with Black-Scholes; at or past expiration that is intrinsic value.
        """
        if not isinstance(instrument, OptionContractSpec):
            return spot, None

        quote = price_option(
            spot=spot,
            strike=instrument.strike,
            years_to_expiry=years_between(today, instrument.expiration),
            option_type=instrument.option_type,
            volatility=self.volatility,
            risk_free_rate=self.risk_free_rate,
        )
        return quote.price, quote.greeks

    async def reference_price(
        self, instrument: Instrument, today: date
    ) -> tuple[float, Greeks | None]:
        """Resolve the underlying spot, then price the instrument"""
        spot = await self.spot(instrument.symbol)
        return self.value(instrument, spot, today)
