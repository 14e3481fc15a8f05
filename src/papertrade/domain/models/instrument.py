"""Instrument value objects

An instrument is either an equity (keyed on symbol) or an option contract
(keyed on symbol, type, strike and expiration).
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

EQUITY_MULTIPLIER = 1
OPTION_MULTIPLIER = 100


class OptionType(str, Enum):
    """Option right"""

    CALL = "CALL"
    PUT = "PUT"


@dataclass(frozen=True)
class Equity:
    """Value object for a stock or ETF"""

    symbol: str

    def __post_init__(self):
        if not self.symbol:
            raise ValueError("Instrument symbol cannot be empty")

    @property
    def key(self) -> str:
        return self.symbol

    @property
    def multiplier(self) -> int:
        return EQUITY_MULTIPLIER

    @property
    def is_option(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class OptionContractSpec:
    """Value object for a listed option contract on an underlying symbol"""

    symbol: str
    option_type: OptionType
    strike: float
    expiration: date

    def __post_init__(self):
        if not self.symbol:
            raise ValueError("Instrument symbol cannot be empty")
        if self.strike <= 0:
            raise ValueError(f"Strike must be positive, got {self.strike}")

    @property
    def key(self) -> str:
        return (
            f"{self.symbol} {self.expiration.isoformat()} "
            f"{self.strike:g} {self.option_type.value}"
        )

    @property
    def multiplier(self) -> int:
        return OPTION_MULTIPLIER

    @property
    def is_option(self) -> bool:
        return True

    def is_expired(self, today: date) -> bool:
        return self.expiration <= today

    def __str__(self) -> str:
        return self.key


Instrument = Equity | OptionContractSpec
