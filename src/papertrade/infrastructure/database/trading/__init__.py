"""Paper trading persistence"""

from .database import PaperTradingDatabase

__all__ = ["PaperTradingDatabase"]
