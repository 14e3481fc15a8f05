"""Request validation models"""

from .orders import TradeRequest

__all__ = ["TradeRequest"]
