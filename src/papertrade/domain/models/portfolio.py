"""Portfolio aggregate"""

from dataclasses import dataclass, field
from datetime import datetime

from .instrument import Instrument
from .position import Position

DEFAULT_INITIAL_BALANCE = 100_000.0


@dataclass
class Portfolio:
    """Virtual brokerage account (domain model)

    Positions are unique by instrument key. `total_value` is always derived
    from the cash balance and the positions' market values.
    """

    account_id: str
    initial_balance: float
    cash_balance: float
    created_at: datetime
    updated_at: datetime
    positions: list[Position] = field(default_factory=list)

    @classmethod
    def open(
        cls,
        account_id: str,
        now: datetime,
        initial_balance: float = DEFAULT_INITIAL_BALANCE,
    ) -> "Portfolio":
        return cls(
            account_id=account_id,
            initial_balance=initial_balance,
            cash_balance=initial_balance,
            created_at=now,
            updated_at=now,
        )

    @property
    def positions_value(self) -> float:
        return sum(position.market_value for position in self.positions)

    @property
    def total_value(self) -> float:
        return self.cash_balance + self.positions_value

    @property
    def unrealized_pnl(self) -> float:
        return sum(position.unrealized_pnl for position in self.positions)

    def find_position(self, instrument: Instrument) -> Position | None:
        """Find the position matching an instrument's identity key"""
        for position in self.positions:
            if position.key == instrument.key:
                return position
        return None

    def held_quantity(self, instrument: Instrument) -> int:
        position = self.find_position(instrument)
        return position.quantity if position else 0

    def remove_position(self, instrument: Instrument) -> Position | None:
        position = self.find_position(instrument)
        if position is not None:
            self.positions.remove(position)
        return position
