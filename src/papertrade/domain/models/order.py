"""Order domain model and lifecycle states"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .instrument import Instrument


class OrderAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    @property
    def opposite(self) -> "OrderAction":
        return OrderAction.SELL if self is OrderAction.BUY else OrderAction.BUY


class OrderType(str, Enum):
    MARKET = "MARKET"
    LIMIT = "LIMIT"


class OrderStatus(str, Enum):
    """Order lifecycle state

    pending -> active -> closed
    pending -> cancelled
    """

    PENDING = "pending"
    ACTIVE = "active"
    CLOSED = "closed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.CLOSED, OrderStatus.CANCELLED)


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.ACTIVE, OrderStatus.CLOSED, OrderStatus.CANCELLED}
    ),
    OrderStatus.ACTIVE: frozenset({OrderStatus.CLOSED}),
    OrderStatus.CLOSED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def new_order_id() -> str:
    return f"trade_{uuid.uuid4().hex[:16]}"


@dataclass
class Order:
    """A single submitted trading instruction (domain model)

    `price` is the fill price and stays 0 while the order is pending.
    `realized_pnl` is only set on fills that close exposure.
    """

    account_id: str
    instrument: Instrument
    action: OrderAction
    quantity: int
    order_type: OrderType
    timestamp: datetime
    id: str = field(default_factory=new_order_id)
    status: OrderStatus = OrderStatus.PENDING
    price: float = 0.0
    limit_price: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    reasoning: str | None = None
    realized_pnl: float | None = None
    filled_at: datetime | None = None
    closed_at: datetime | None = None

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def multiplier(self) -> int:
        return self.instrument.multiplier

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status == OrderStatus.ACTIVE

    @property
    def entry_cost(self) -> float:
        return self.price * self.quantity * self.multiplier

    @property
    def has_exit_rules(self) -> bool:
        return self.stop_loss is not None or self.take_profit is not None

    def transition(self, status: OrderStatus, at: datetime) -> None:
        """Move to a new lifecycle state

        Raises:
            ValueError: If the transition is not allowed
        """
        if status not in _TRANSITIONS[self.status]:
            raise ValueError(
                f"Order {self.id}: illegal transition {self.status.value} -> {status.value}"
            )
        self.status = status
        if status.is_terminal:
            self.closed_at = at

    def annotate(self, note: str) -> None:
        """Append an informational note to the reasoning field"""
        self.reasoning = f"{self.reasoning} | {note}" if self.reasoning else note
