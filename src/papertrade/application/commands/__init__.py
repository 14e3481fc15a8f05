from papertrade.application.commands.base import (
    CancelCommand,
    ChainCommand,
    CloseCommand,
    Command,
    MetricsCommand,
    PortfolioCommand,
    ResetCommand,
    TradeCommand,
    TradesCommand,
)

__all__ = [
    "Command",
    "PortfolioCommand",
    "TradeCommand",
    "CloseCommand",
    "CancelCommand",
    "TradesCommand",
    "ChainCommand",
    "MetricsCommand",
    "ResetCommand",
]
