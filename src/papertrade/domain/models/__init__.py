"""Domain models"""

from .greeks import Greeks
from .instrument import (
    EQUITY_MULTIPLIER,
    OPTION_MULTIPLIER,
    Equity,
    Instrument,
    OptionContractSpec,
    OptionType,
)
from .metrics import PerformanceMetrics
from .options_chain import OptionContract, OptionsChain
from .order import Order, OrderAction, OrderStatus, OrderType, new_order_id
from .portfolio import DEFAULT_INITIAL_BALANCE, Portfolio
from .position import Position

__all__ = [
    "Equity",
    "OptionContractSpec",
    "OptionType",
    "Instrument",
    "EQUITY_MULTIPLIER",
    "OPTION_MULTIPLIER",
    "Greeks",
    "Position",
    "Portfolio",
    "DEFAULT_INITIAL_BALANCE",
    "Order",
    "OrderAction",
    "OrderStatus",
    "OrderType",
    "new_order_id",
    "OptionContract",
    "OptionsChain",
    "PerformanceMetrics",
]
