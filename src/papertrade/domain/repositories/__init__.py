"""Domain repositories"""

from .store import PaperTradingStore

__all__ = ["PaperTradingStore"]
