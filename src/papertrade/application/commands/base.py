from dataclasses import dataclass
from datetime import date


@dataclass
class Command:
    """Base command class"""

    name: str
    account_id: str = "default"


@dataclass
class PortfolioCommand(Command):
    """Show the reconciled portfolio"""


@dataclass
class TradeCommand(Command):
    """Place a BUY or SELL order"""

    action: str = "BUY"
    symbol: str = ""
    quantity: int = 0
    limit_price: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    option_type: str | None = None
    strike: float | None = None
    expiration: date | None = None
    reasoning: str | None = None


@dataclass
class CloseCommand(Command):
    """Close an active order at market"""

    order_id: str = ""


@dataclass
class CancelCommand(Command):
    """Cancel a pending order"""

    order_id: str = ""


@dataclass
class TradesCommand(Command):
    """List the order history"""


@dataclass
class ChainCommand(Command):
    """Show options chains for an underlying"""

    symbol: str = ""
    expiration: date | None = None


@dataclass
class MetricsCommand(Command):
    """Show performance metrics"""


@dataclass
class ResetCommand(Command):
    """Delete all account data and start over"""
