"""Paper trading service - public surface of the simulation engine"""

from collections.abc import Callable
from datetime import date, datetime

from loguru import logger

from papertrade.domain.models import (
    DEFAULT_INITIAL_BALANCE,
    OptionsChain,
    Order,
    OrderStatus,
    PerformanceMetrics,
    Portfolio,
)
from papertrade.domain.repositories import PaperTradingStore
from papertrade.shared.exceptions import OrderNotFound
from papertrade.trading.monitor import Monitor
from papertrade.validation.orders import TradeRequest

from .account_locks import AccountLocks
from .instrument_pricer import InstrumentPricer
from .options_chain import OptionsChainBuilder
from .order_engine import OrderEngine


class PaperTradingService:
    """Paper trading engine for one or more virtual accounts

    Every read runs the reconciliation pass first. All mutations for an
    account are serialized, and each operation reloads its state from the
    store so a failed write never leaks into the next call.
    """

    def __init__(
        self,
        store: PaperTradingStore,
        pricer: InstrumentPricer,
        clock: Callable[[], datetime] = datetime.now,
        initial_balance: float = DEFAULT_INITIAL_BALANCE,
        chain_builder: OptionsChainBuilder | None = None,
    ) -> None:
        """Initialise paper trading service

        Args:
            store: Persistence boundary for orders and portfolios
            pricer: Reference pricing for equities and options
            clock: Source of the current time
            initial_balance: Cash for new and reset accounts
            chain_builder: Options chain generator (defaults from pricer)
        """
        self.store = store
        self.pricer = pricer
        self.clock = clock
        self.initial_balance = initial_balance
        self.engine = OrderEngine(pricer)
        self.monitor = Monitor(self.engine)
        self.chain_builder = chain_builder or OptionsChainBuilder(pricer)
        self._locks = AccountLocks()

        logger.info(
            f"PaperTradingService initialised (initial balance ${initial_balance:,.2f})"
        )

    async def initialize_portfolio(self, account_id: str) -> Portfolio:
        """Create a fresh portfolio seeded with the initial balance

        Args:
            account_id: Account ID

        Returns:
            The new Portfolio
        """
        async with self._locks.hold(account_id):
            return self._initialize(account_id)

    async def get_portfolio(self, account_id: str) -> Portfolio:
        """Reconcile and return the account's portfolio

        Creates the portfolio on first access.

        Raises:
            PersistenceFailure: If the reconciled state cannot be saved
        """
        async with self._locks.hold(account_id):
            return await self._reconcile(account_id)

    async def place_trade(self, request: TradeRequest) -> str:
        """Submit an order

        Args:
            request: Validated trade request

        Returns:
            The new order's ID

        Raises:
            InvalidInstrument: Options request missing contract fields, or
                the contract has already expired
            InsufficientFunds: BUY cost exceeds cash
            InsufficientHoldings: SELL exceeds the matching position
            PersistenceFailure: If the order and portfolio cannot be saved
        """
        async with self._locks.hold(request.account_id):
            portfolio = await self._reconcile(request.account_id)
            order = await self.engine.place_order(portfolio, request, self.clock())
            self.store.save_snapshot(portfolio, [order])
            logger.info(
                f"{request.account_id}: placed {order.id} "
                f"({order.action.value} {order.quantity} {order.instrument}, {order.status.value})"
            )
            return order.id

    async def close_trade(self, order_id: str) -> None:
        """Close an active order at market

        Raises:
            OrderNotFound: Unknown order ID
            OrderNotActionable: The order is not `active`
        """
        account_id = self._require_order(order_id).account_id
        async with self._locks.hold(account_id):
            portfolio = await self._reconcile(account_id)
            order = self._require_order(order_id)
            closing = await self.engine.close_trade(portfolio, order, self.clock())
            self.store.save_snapshot(portfolio, [order, closing])
            logger.info(f"{account_id}: closed {order_id} via {closing.id}")

    async def cancel_order(self, order_id: str) -> None:
        """Cancel a pending order

        Raises:
            OrderNotFound: Unknown order ID
            OrderNotActionable: The order is not `pending`
        """
        account_id = self._require_order(order_id).account_id
        async with self._locks.hold(account_id):
            portfolio = await self._reconcile(account_id)
            order = self._require_order(order_id)
            self.engine.cancel(order, self.clock(), "Cancelled by user")
            self.store.save_snapshot(portfolio, [order])

    async def get_trades(self, account_id: str) -> list[Order]:
        """All orders for an account, oldest first"""
        return self.store.load_orders(account_id)

    async def get_trade(self, order_id: str) -> Order | None:
        return self.store.load_order(order_id)

    async def get_options_chain(
        self, symbol: str, expiration: date | None = None
    ) -> list[OptionsChain]:
        """Generate options chains around the current spot

        Args:
            symbol: Underlying symbol
            expiration: Specific expiration, or None for upcoming weeklies
        """
        return await self.chain_builder.build(
            symbol, self.clock().date(), expiration
        )

    async def reset_portfolio(self, account_id: str) -> Portfolio:
        """Delete all orders and positions and start over"""
        async with self._locks.hold(account_id):
            self.store.delete_all_account_data(account_id)
            logger.info(f"{account_id}: portfolio reset")
            return self._initialize(account_id)

    async def get_performance_metrics(self, account_id: str) -> PerformanceMetrics:
        """Summarize realized performance

        Win rate and averages come from closed orders carrying realized
        P&L; total return compares the reconciled total value with the
        initial balance.
        """
        portfolio = await self.get_portfolio(account_id)
        orders = self.store.load_orders(account_id)

        realized = [
            order.realized_pnl
            for order in orders
            if order.status == OrderStatus.CLOSED and order.realized_pnl is not None
        ]
        wins = [pnl for pnl in realized if pnl > 0]
        losses = [pnl for pnl in realized if pnl < 0]

        total_return = portfolio.total_value - portfolio.initial_balance
        return PerformanceMetrics(
            total_return=total_return,
            total_return_percent=total_return / portfolio.initial_balance * 100,
            win_rate=len(wins) / len(realized) * 100 if realized else 0.0,
            total_trades=len(realized),
            profitable_trades=len(wins),
            losing_trades=len(losses),
            average_win=sum(wins) / len(wins) if wins else 0.0,
            average_loss=abs(sum(losses)) / len(losses) if losses else 0.0,
        )

    def _initialize(self, account_id: str) -> Portfolio:
        portfolio = Portfolio.open(account_id, self.clock(), self.initial_balance)
        self.store.save_portfolio(portfolio)
        logger.info(
            f"{account_id}: portfolio initialised with ${portfolio.cash_balance:,.2f}"
        )
        return portfolio

    async def _reconcile(self, account_id: str) -> Portfolio:
        """Run the monitor and persist its result; caller holds the lock"""
        portfolio = self.store.load_portfolio(account_id)
        if portfolio is None:
            return self._initialize(account_id)

        orders = self.store.load_orders(account_id)
        result = await self.monitor.reconcile(portfolio, orders, self.clock())
        self.store.save_snapshot(portfolio, result.changed)
        return portfolio

    def _require_order(self, order_id: str) -> Order:
        order = self.store.load_order(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order
