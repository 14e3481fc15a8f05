"""Domain layer for the paper trading engine

Pure Python models, option pricing, and repository protocols.
No infrastructure dependencies - domain layer only.
"""

from . import models, pricing, repositories

__all__ = ["models", "pricing", "repositories"]
