"""Services module for application layer"""

from papertrade.application.services.account_locks import AccountLocks
from papertrade.application.services.command_dispatcher import CommandDispatcher
from papertrade.application.services.instrument_pricer import InstrumentPricer
from papertrade.application.services.options_chain import OptionsChainBuilder
from papertrade.application.services.order_engine import OrderEngine
from papertrade.application.services.paper_trading_service import (
    PaperTradingService,
)

__all__ = [
    "AccountLocks",
    "CommandDispatcher",
    "InstrumentPricer",
    "OptionsChainBuilder",
    "OrderEngine",
    "PaperTradingService",
]
