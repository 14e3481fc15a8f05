"""Application layer: order lifecycle services and CLI commands"""

from papertrade.application.services import CommandDispatcher, PaperTradingService

__all__ = ["CommandDispatcher", "PaperTradingService"]
