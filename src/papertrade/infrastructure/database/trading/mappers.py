"""Mappers for converting between domain and persistence models"""

from datetime import date, datetime

from papertrade.domain.models import (
    Equity,
    Greeks,
    Instrument,
    OptionContractSpec,
    OptionType,
    Order,
    OrderAction,
    OrderStatus,
    OrderType,
    Portfolio,
    Position,
)
from papertrade.infrastructure.database.trading.models import (
    OrderTable,
    PortfolioTable,
    PositionTable,
)

ASSET_EQUITY = "equity"
ASSET_OPTION = "option"


def _instrument_columns(instrument: Instrument) -> dict:
    """Flatten an instrument into table columns"""
    if isinstance(instrument, OptionContractSpec):
        return {
            "symbol": instrument.symbol,
            "asset_type": ASSET_OPTION,
            "option_type": instrument.option_type.value,
            "strike": instrument.strike,
            "expiration": instrument.expiration.isoformat(),
        }
    return {
        "symbol": instrument.symbol,
        "asset_type": ASSET_EQUITY,
        "option_type": None,
        "strike": None,
        "expiration": None,
    }


def _instrument_from_columns(
    symbol: str,
    asset_type: str,
    option_type: str | None,
    strike: float | None,
    expiration: str | None,
) -> Instrument:
    """Rebuild an instrument from table columns"""
    if asset_type == ASSET_OPTION:
        return OptionContractSpec(
            symbol=symbol,
            option_type=OptionType(option_type),
            strike=strike,
            expiration=date.fromisoformat(expiration),
        )
    return Equity(symbol=symbol)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _from_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def map_table_to_position(table: PositionTable) -> Position:
    """Map database table to domain Position

    Args:
        table: Position database table

    Returns:
        Domain Position object
    """
    greeks = None
    if table.delta is not None:
        greeks = Greeks(
            delta=table.delta,
            gamma=table.gamma or 0.0,
            theta=table.theta or 0.0,
            vega=table.vega or 0.0,
        )

    return Position(
        instrument=_instrument_from_columns(
            table.symbol,
            table.asset_type,
            table.option_type,
            table.strike,
            table.expiration,
        ),
        quantity=table.quantity,
        average_price=table.average_price,
        current_price=table.current_price,
        greeks=greeks,
    )


def map_position_to_table(
    account_id: str, position: Position, sort_order: int = 0
) -> PositionTable:
    """Map domain Position to database table

    Args:
        account_id: Owning account
        position: Domain Position object
        sort_order: Index of the position within its portfolio

    Returns:
        Position database table
    """
    greeks = position.greeks
    return PositionTable(
        account_id=account_id,
        position_key=position.key,
        quantity=position.quantity,
        average_price=position.average_price,
        current_price=position.current_price,
        delta=greeks.delta if greeks else None,
        gamma=greeks.gamma if greeks else None,
        theta=greeks.theta if greeks else None,
        vega=greeks.vega if greeks else None,
        sort_order=sort_order,
        **_instrument_columns(position.instrument),
    )


def map_table_to_portfolio(
    table: PortfolioTable, positions: list[PositionTable]
) -> Portfolio:
    """Map database tables to domain Portfolio"""
    ordered = sorted(positions, key=lambda row: row.sort_order)
    return Portfolio(
        account_id=table.account_id,
        initial_balance=table.initial_balance,
        cash_balance=table.cash_balance,
        created_at=datetime.fromisoformat(table.created_at),
        updated_at=datetime.fromisoformat(table.updated_at),
        positions=[map_table_to_position(row) for row in ordered],
    )


def map_portfolio_to_table(portfolio: Portfolio) -> PortfolioTable:
    """Map domain Portfolio to database table

    The stored total value is a read-side convenience recomputed on
    every write.
    """
    return PortfolioTable(
        account_id=portfolio.account_id,
        initial_balance=portfolio.initial_balance,
        cash_balance=portfolio.cash_balance,
        total_value=portfolio.total_value,
        created_at=portfolio.created_at.isoformat(),
        updated_at=portfolio.updated_at.isoformat(),
    )


def map_table_to_order(table: OrderTable) -> Order:
    """Map database table to domain Order"""
    return Order(
        id=table.id,
        account_id=table.account_id,
        instrument=_instrument_from_columns(
            table.symbol,
            table.asset_type,
            table.option_type,
            table.strike,
            table.expiration,
        ),
        action=OrderAction(table.action),
        quantity=table.quantity,
        order_type=OrderType(table.order_type),
        timestamp=datetime.fromisoformat(table.timestamp),
        status=OrderStatus(table.status),
        price=table.price,
        limit_price=table.limit_price,
        stop_loss=table.stop_loss,
        take_profit=table.take_profit,
        reasoning=table.reasoning,
        realized_pnl=table.realized_pnl,
        filled_at=_from_iso(table.filled_at),
        closed_at=_from_iso(table.closed_at),
    )


def map_order_to_table(order: Order, sequence: int = 0) -> OrderTable:
    """Map domain Order to database table"""
    return OrderTable(
        id=order.id,
        sequence=sequence,
        account_id=order.account_id,
        action=order.action.value,
        quantity=order.quantity,
        order_type=order.order_type.value,
        status=order.status.value,
        price=order.price,
        limit_price=order.limit_price,
        stop_loss=order.stop_loss,
        take_profit=order.take_profit,
        reasoning=order.reasoning,
        realized_pnl=order.realized_pnl,
        timestamp=order.timestamp.isoformat(),
        filled_at=_iso(order.filled_at),
        closed_at=_iso(order.closed_at),
        **_instrument_columns(order.instrument),
    )
