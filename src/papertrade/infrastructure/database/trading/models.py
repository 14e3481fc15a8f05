"""Paper trading persistence models (SQLModel tables)"""

from sqlmodel import Field, SQLModel


class PortfolioTable(SQLModel, table=True):
    """Portfolio database table"""

    __tablename__ = "portfolios"

    account_id: str = Field(primary_key=True)
    initial_balance: float
    cash_balance: float
    total_value: float
    created_at: str
    updated_at: str


class PositionTable(SQLModel, table=True):
    """Position database table"""

    __tablename__ = "positions"

    id: int | None = Field(default=None, primary_key=True)
    account_id: str = Field(index=True, foreign_key="portfolios.account_id")
    position_key: str
    symbol: str
    asset_type: str = "equity"
    option_type: str | None = None
    strike: float | None = None
    expiration: str | None = None
    quantity: int
    average_price: float
    current_price: float
    delta: float | None = None
    gamma: float | None = None
    theta: float | None = None
    vega: float | None = None
    sort_order: int = 0


class OrderTable(SQLModel, table=True):
    """Order database table"""

    __tablename__ = "orders"

    id: str = Field(primary_key=True)
    sequence: int = Field(default=0, index=True)
    account_id: str = Field(index=True)
    symbol: str
    asset_type: str = "equity"
    option_type: str | None = None
    strike: float | None = None
    expiration: str | None = None
    action: str
    quantity: int
    order_type: str
    status: str
    price: float = 0.0
    limit_price: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    reasoning: str | None = None
    realized_pnl: float | None = None
    timestamp: str
    filled_at: str | None = None
    closed_at: str | None = None
