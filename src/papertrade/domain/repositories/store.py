"""Paper trading store protocol"""

from typing import Protocol, runtime_checkable

from ..models import Order, Portfolio


@runtime_checkable
class PaperTradingStore(Protocol):
    """Persistence boundary for orders and portfolios

    Implementations raise PersistenceFailure when a write does not land.
    """

    def save_order(self, order: Order) -> None:
        """Insert or replace an order"""
        ...

    def load_orders(self, account_id: str) -> list[Order]:
        """Get all orders for an account, oldest first"""
        ...

    def load_order(self, order_id: str) -> Order | None:
        """Get order by ID"""
        ...

    def save_portfolio(self, portfolio: Portfolio) -> None:
        """Insert or replace a portfolio and its positions"""
        ...

    def load_portfolio(self, account_id: str) -> Portfolio | None:
        """Get portfolio by account ID"""
        ...

    def save_snapshot(self, portfolio: Portfolio, orders: list[Order]) -> None:
        """Write a portfolio and orders in one transaction"""
        ...

    def delete_all_account_data(self, account_id: str) -> None:
        """Delete an account's portfolio, positions and orders"""
        ...
