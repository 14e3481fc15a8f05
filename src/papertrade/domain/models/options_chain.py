"""Options chain read models (generated on demand, never persisted)"""

from dataclasses import dataclass, field
from datetime import date

from .greeks import Greeks
from .instrument import OptionType


@dataclass(frozen=True)
class OptionContract:
    """One strike of an options chain"""

    option_type: OptionType
    strike: float
    bid: float
    ask: float
    last_price: float
    volume: int
    open_interest: int
    implied_volatility: float
    greeks: Greeks
    intrinsic_value: float
    time_value: float

    @property
    def mid(self) -> float:
        return (self.bid + self.ask) / 2


@dataclass
class OptionsChain:
    """Calls and puts for one symbol and expiration"""

    symbol: str
    expiration: date
    underlying_price: float
    calls: list[OptionContract] = field(default_factory=list)
    puts: list[OptionContract] = field(default_factory=list)

    @property
    def strikes(self) -> list[float]:
        return [contract.strike for contract in self.calls]
