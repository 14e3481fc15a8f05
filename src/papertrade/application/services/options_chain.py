"""Options chain generation from the pricing model"""

import zlib
from datetime import date, timedelta

from loguru import logger

from papertrade.domain.models import OptionContract, OptionsChain, OptionType
from papertrade.domain.pricing import MIN_TICK, intrinsic_value, price_option, years_between

from .instrument_pricer import InstrumentPricer

FRIDAY = 4


def strike_increment(spot: float) -> float:
    """Strike spacing for an underlying price"""
    if spot < 25:
        return 1.0
    if spot < 100:
        return 2.5
    if spot < 250:
        return 5.0
    if spot < 1000:
        return 10.0
    return 25.0


def strike_ladder(spot: float, strikes_per_side: int) -> list[float]:
    """Strikes centered on the at-the-money strike"""
    increment = strike_increment(spot)
    center = round(spot / increment) * increment
    ladder = [
        round(center + step * increment, 2)
        for step in range(-strikes_per_side, strikes_per_side + 1)
    ]
    return [strike for strike in ladder if strike > 0]


def upcoming_expirations(today: date, count: int) -> list[date]:
    """The next `count` weekly (Friday) expirations after today"""
    days_ahead = (FRIDAY - today.weekday()) % 7 or 7
    first = today + timedelta(days=days_ahead)
    return [first + timedelta(weeks=week) for week in range(count)]


def _activity(seed: str, strike: float, spot: float) -> tuple[int, int]:
    """Deterministic volume and open interest, heaviest near the money"""
    moneyness = abs(strike - spot) / spot
    base = 5000 / (1 + moneyness * 20)
    jitter = zlib.crc32(seed.encode()) % 1000 / 1000
    volume = int(base * (0.5 + jitter))
    return volume, volume * (3 + int(jitter * 7))


class OptionsChainBuilder:
    """Builds read-only chains across a strike ladder"""

    def __init__(
        self,
        pricer: InstrumentPricer,
        strikes_per_side: int = 10,
        expirations: int = 4,
    ) -> None:
        self.pricer = pricer
        self.strikes_per_side = strikes_per_side
        self.expirations = expirations

    async def build(
        self, symbol: str, today: date, expiration: date | None = None
    ) -> list[OptionsChain]:
        """Generate chains for one expiration or the upcoming weeklies

        Args:
            symbol: Underlying symbol
            today: Valuation date
            expiration: Specific expiration, or None for upcoming weeklies

        Returns:
            One OptionsChain per expiration
        """
        symbol = symbol.upper()
        spot = await self.pricer.spot(symbol)
        expirations = (
            [expiration]
            if expiration
            else upcoming_expirations(today, self.expirations)
        )
        strikes = strike_ladder(spot, self.strikes_per_side)

        chains = []
        for expiry in expirations:
            chain = OptionsChain(symbol=symbol, expiration=expiry, underlying_price=spot)
            for strike in strikes:
                chain.calls.append(
                    self._contract(symbol, spot, strike, expiry, today, OptionType.CALL)
                )
                chain.puts.append(
                    self._contract(symbol, spot, strike, expiry, today, OptionType.PUT)
                )
            chains.append(chain)

        logger.debug(
            f"{symbol}: generated {len(chains)} chains x {len(strikes)} strikes around ${spot:.2f}"
        )
        return chains

    def _contract(
        self,
        symbol: str,
        spot: float,
        strike: float,
        expiration: date,
        today: date,
        option_type: OptionType,
    ) -> OptionContract:
        quote = price_option(
            spot=spot,
            strike=strike,
            years_to_expiry=years_between(today, expiration),
            option_type=option_type,
            volatility=self.pricer.volatility,
            risk_free_rate=self.pricer.risk_free_rate,
        )
        half_spread = max(MIN_TICK, quote.price * 0.01)
        intrinsic = intrinsic_value(spot, strike, option_type)
        volume, open_interest = _activity(
            f"{symbol}:{expiration.isoformat()}:{strike}:{option_type.value}",
            strike,
            spot,
        )
        return OptionContract(
            option_type=option_type,
            strike=strike,
            bid=round(max(quote.price - half_spread, 0.0), 2),
            ask=round(quote.price + half_spread, 2),
            last_price=round(quote.price, 2),
            volume=volume,
            open_interest=open_interest,
            implied_volatility=self.pricer.volatility,
            greeks=quote.greeks,
            intrinsic_value=intrinsic,
            time_value=max(quote.price - intrinsic, 0.0),
        )
