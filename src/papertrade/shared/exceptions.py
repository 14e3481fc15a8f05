"""Consolidated exceptions for the paper trading engine.

All custom exceptions are defined here to provide a single source of truth
for error handling across the application.
"""


class PaperTradeError(Exception):
    """Base exception for paper trading errors"""

    pass


class TradingError(PaperTradeError):
    """Base trading error"""

    pass


class OrderError(TradingError):
    """Raised when order placement or execution fails"""

    pass


class InsufficientFunds(OrderError):
    """Raised when a BUY costs more than the available cash balance"""

    def __init__(self, required: float, available: float) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient cash balance: need ${required:,.2f}, have ${available:,.2f}"
        )


class InsufficientHoldings(OrderError):
    """Raised when a SELL exceeds the quantity held"""

    def __init__(self, key: str, requested: int, held: int) -> None:
        self.key = key
        self.requested = requested
        self.held = held
        super().__init__(
            f"Insufficient holdings in {key}: requested {requested}, held {held}"
        )


class InvalidInstrument(OrderError):
    """Raised when an options request is incomplete or names an expired contract"""

    pass


class OrderNotFound(OrderError):
    """Raised when an order id does not exist"""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class OrderNotActionable(OrderError):
    """Raised when an order's status does not allow the requested transition"""

    def __init__(self, order_id: str, status: str, action: str) -> None:
        self.order_id = order_id
        self.status = status
        super().__init__(f"Cannot {action} order {order_id} in status '{status}'")


class QuoteError(PaperTradeError):
    """Base quote provider error"""

    pass


class QuoteUnavailable(QuoteError):
    """Raised when a quote cannot be fetched (recovered by the resolver)"""

    pass


class RepositoryError(PaperTradeError):
    """Base repository error"""

    pass


class PersistenceFailure(RepositoryError):
    """Raised when the store fails to write; the mutation was not applied"""

    pass


class ConfigurationError(PaperTradeError):
    """Raised when configuration is invalid or missing"""

    pass
