"""Performance metrics domain model"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PerformanceMetrics:
    """Account performance derived from closed orders' realized P&L"""

    total_return: float
    total_return_percent: float
    win_rate: float
    total_trades: int
    profitable_trades: int
    losing_trades: int
    average_win: float
    average_loss: float
