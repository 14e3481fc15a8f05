"""Greeks value object"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Greeks:
    """Option price sensitivities

    Attributes:
        delta: Change in option price per 1.00 move in the underlying
        gamma: Change in delta per 1.00 move in the underlying
        theta: Change in option price per calendar day
        vega: Change in option price per 1% change in volatility
    """

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0

    @classmethod
    def zero(cls) -> "Greeks":
        return cls()
