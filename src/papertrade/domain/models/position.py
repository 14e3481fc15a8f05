"""Position domain model"""

from dataclasses import dataclass

from .greeks import Greeks
from .instrument import Instrument


@dataclass
class Position:
    """Holding in one instrument (domain model)

    Quantity is always positive; a position that reaches zero is removed
    from its portfolio.
    """

    instrument: Instrument
    quantity: int
    average_price: float
    current_price: float
    greeks: Greeks | None = None

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(
                f"Position quantity must be positive, got {self.quantity}"
            )

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def key(self) -> str:
        return self.instrument.key

    @property
    def multiplier(self) -> int:
        return self.instrument.multiplier

    @property
    def market_value(self) -> float:
        return self.current_price * self.quantity * self.multiplier

    @property
    def cost_basis(self) -> float:
        return self.average_price * self.quantity * self.multiplier

    @property
    def unrealized_pnl(self) -> float:
        return self.market_value - self.cost_basis

    @property
    def unrealized_pnl_percent(self) -> float:
        if self.cost_basis == 0:
            return 0.0
        return self.unrealized_pnl / self.cost_basis * 100

    def add(self, quantity: int, price: float) -> None:
        """Increase the position, volume-weighting the average cost"""
        total_quantity = self.quantity + quantity
        self.average_price = (
            self.average_price * self.quantity + price * quantity
        ) / total_quantity
        self.quantity = total_quantity
        self.current_price = price

    def reduce(self, quantity: int) -> int:
        """Decrease the position and return the remaining quantity"""
        if quantity > self.quantity:
            raise ValueError(
                f"Cannot reduce {self.key} by {quantity}, only {self.quantity} held"
            )
        self.quantity -= quantity
        return self.quantity
