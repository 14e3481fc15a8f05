"""Paper trading store using SQLModel.

Engine and schema setup come from BaseDatabase.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, delete, func, select

from papertrade.domain.models import Order, Portfolio
from papertrade.infrastructure.database.base import BaseDatabase
from papertrade.infrastructure.database.trading.mappers import (
    map_order_to_table,
    map_portfolio_to_table,
    map_position_to_table,
    map_table_to_order,
    map_table_to_portfolio,
)
from papertrade.infrastructure.database.trading.models import (
    OrderTable,
    PortfolioTable,
    PositionTable,
)
from papertrade.shared.exceptions import PersistenceFailure


def _handle_persistence_errors(operation: str) -> Callable:
    """Decorator translating SQLAlchemy errors into PersistenceFailure"""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Failed to {operation}: {e}")
                raise PersistenceFailure(f"Failed to {operation}: {e}") from e

        return wrapper

    return decorator


class PaperTradingDatabase(BaseDatabase):
    """SQLite store for portfolios, positions and orders.

    Every write runs in a single session and commits once, so a failed
    write leaves nothing behind.
    """

    @_handle_persistence_errors("save order")
    def save_order(self, order: Order) -> None:
        """Insert or replace an order

        Args:
            order: Domain order
        """
        with self.get_session() as session:
            self._upsert_order(session, order)
            session.commit()

    @_handle_persistence_errors("load orders")
    def load_orders(self, account_id: str) -> list[Order]:
        """Get all orders for an account in submission order

        Args:
            account_id: Account ID

        Returns:
            List of Order objects
        """
        with self.get_session() as session:
            rows = session.exec(
                select(OrderTable)
                .where(OrderTable.account_id == account_id)
                .order_by(OrderTable.sequence)
            ).all()
            return [map_table_to_order(row) for row in rows]

    @_handle_persistence_errors("load order")
    def load_order(self, order_id: str) -> Order | None:
        """Get order by ID

        Args:
            order_id: Order ID

        Returns:
            Order object or None if not found
        """
        with self.get_session() as session:
            row = session.get(OrderTable, order_id)
            return map_table_to_order(row) if row else None

    @_handle_persistence_errors("save portfolio")
    def save_portfolio(self, portfolio: Portfolio) -> None:
        """Insert or replace a portfolio together with its positions

        Args:
            portfolio: Domain portfolio
        """
        with self.get_session() as session:
            self._upsert_portfolio(session, portfolio)
            session.commit()

    @_handle_persistence_errors("load portfolio")
    def load_portfolio(self, account_id: str) -> Portfolio | None:
        """Get portfolio by account ID

        Args:
            account_id: Account ID

        Returns:
            Portfolio object or None if the account has none
        """
        with self.get_session() as session:
            table = session.get(PortfolioTable, account_id)
            if table is None:
                return None
            positions = session.exec(
                select(PositionTable).where(
                    PositionTable.account_id == account_id
                )
            ).all()
            return map_table_to_portfolio(table, list(positions))

    @_handle_persistence_errors("save snapshot")
    def save_snapshot(self, portfolio: Portfolio, orders: list[Order]) -> None:
        """Write a portfolio and a batch of orders in one transaction

        Args:
            portfolio: Domain portfolio
            orders: Orders created or changed alongside the portfolio
        """
        with self.get_session() as session:
            self._upsert_portfolio(session, portfolio)
            for order in orders:
                self._upsert_order(session, order)
            session.commit()
        logger.debug(
            f"Saved snapshot for {portfolio.account_id}: "
            f"{len(portfolio.positions)} positions, {len(orders)} orders"
        )

    @_handle_persistence_errors("delete account data")
    def delete_all_account_data(self, account_id: str) -> None:
        """Delete an account's orders, positions and portfolio

        Args:
            account_id: Account ID
        """
        with self.get_session() as session:
            session.exec(
                delete(OrderTable).where(OrderTable.account_id == account_id)
            )
            session.exec(
                delete(PositionTable).where(
                    PositionTable.account_id == account_id
                )
            )
            session.exec(
                delete(PortfolioTable).where(
                    PortfolioTable.account_id == account_id
                )
            )
            session.commit()
        logger.info(f"Deleted all paper trading data for {account_id}")

    def _upsert_portfolio(self, session: Session, portfolio: Portfolio) -> None:
        session.merge(map_portfolio_to_table(portfolio))
        session.exec(
            delete(PositionTable).where(
                PositionTable.account_id == portfolio.account_id
            )
        )
        for index, position in enumerate(portfolio.positions):
            session.add(
                map_position_to_table(portfolio.account_id, position, index)
            )

    def _upsert_order(self, session: Session, order: Order) -> None:
        existing = session.get(OrderTable, order.id)
        if existing is not None:
            row = map_order_to_table(order, existing.sequence)
            existing.sqlmodel_update(row.model_dump(exclude={"sequence"}))
            session.add(existing)
            return

        last = session.exec(select(func.max(OrderTable.sequence))).one()
        session.add(map_order_to_table(order, (last or 0) + 1))
