from datetime import date

from loguru import logger
from rich.console import Console

from papertrade.application.commands.base import (
    CancelCommand,
    ChainCommand,
    CloseCommand,
    MetricsCommand,
    PortfolioCommand,
    ResetCommand,
    TradeCommand,
    TradesCommand,
)
from papertrade.application.commands.portfolio import handle_portfolio, handle_reset
from papertrade.application.commands.reports import (
    handle_chain,
    handle_metrics,
    handle_trades,
)
from papertrade.application.commands.trade import (
    handle_cancel,
    handle_close,
    handle_trade,
)

USAGE = (
    "Available: portfolio, buy, sell, close, cancel, trades, chain, metrics, reset\n"
    "  buy|sell SYMBOL QTY [--limit P] [--stop P] [--target P]"
    " [--call|--put STRIKE EXPIRY] [--reason TEXT]\n"
    "  close|cancel ORDER_ID\n"
    "  chain SYMBOL [EXPIRY]"
)


class UsageError(ValueError):
    """Raised when command line arguments cannot be parsed"""


def _parse_float(flag: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as e:
        raise UsageError(f"{flag} expects a number, got {raw!r}") from e


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise UsageError(f"Expected an expiration as YYYY-MM-DD, got {raw!r}") from e


def parse_trade_args(action: str, args: list[str], account_id: str) -> TradeCommand:
    """Parse `SYMBOL QTY [flags]` into a TradeCommand

    Raises:
        UsageError: If positional arguments are missing or a flag is malformed
    """
    if len(args) < 2:
        raise UsageError(f"{action.lower()} requires SYMBOL and QTY")
    try:
        quantity = int(args[1])
    except ValueError as e:
        raise UsageError(f"QTY must be an integer, got {args[1]!r}") from e

    command = TradeCommand(
        name=action.lower(),
        account_id=account_id,
        action=action,
        symbol=args[0],
        quantity=quantity,
    )

    rest = args[2:]
    while rest:
        flag = rest.pop(0)
        if flag in ("--call", "--put"):
            if len(rest) < 2:
                raise UsageError(f"{flag} requires STRIKE and EXPIRY")
            command.option_type = "CALL" if flag == "--call" else "PUT"
            command.strike = _parse_float(flag, rest.pop(0))
            command.expiration = _parse_date(rest.pop(0))
            continue

        if not rest:
            raise UsageError(f"{flag} requires a value")
        value = rest.pop(0)
        if flag == "--limit":
            command.limit_price = _parse_float(flag, value)
        elif flag == "--stop":
            command.stop_loss = _parse_float(flag, value)
        elif flag == "--target":
            command.take_profit = _parse_float(flag, value)
        elif flag == "--reason":
            command.reasoning = value
        else:
            raise UsageError(f"Unknown option: {flag}")

    return command


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers"""

    def __init__(
        self,
        service,
        account_id: str = "default",
        console: Console | None = None,
    ) -> None:
        self.service = service
        self.account_id = account_id
        self.console = console or Console()
        self._handlers = {
            "portfolio": self._handle_portfolio,
            "buy": self._handle_buy,
            "sell": self._handle_sell,
            "close": self._handle_close,
            "cancel": self._handle_cancel,
            "trades": self._handle_trades,
            "chain": self._handle_chain,
            "metrics": self._handle_metrics,
            "reset": self._handle_reset,
        }

    async def dispatch(self, argv: list[str]) -> int:
        """Parse and execute command

        Args:
            argv: Command line arguments (sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if len(argv) < 2:
            logger.error("No command specified")
            self._print_usage()
            return 1

        method = argv[1]
        handler = self._handlers.get(method)

        if handler is None:
            logger.error(f"Unknown command: {method}")
            self._print_usage()
            return 1

        try:
            return await handler(argv[2:])
        except UsageError as e:
            logger.error(str(e))
            self._print_usage()
            return 1

    def _print_usage(self) -> None:
        """Print available commands"""
        self.console.print(USAGE, markup=False)

    def _single_arg(self, name: str, args: list[str]) -> str:
        if not args:
            raise UsageError(f"{name} requires ORDER_ID")
        return args[0]

    async def _handle_portfolio(self, args: list[str]) -> int:
        command = PortfolioCommand(name="portfolio", account_id=self.account_id)
        return await handle_portfolio(self.service, command, self.console)

    async def _handle_buy(self, args: list[str]) -> int:
        command = parse_trade_args("BUY", args, self.account_id)
        return await handle_trade(self.service, command, self.console)

    async def _handle_sell(self, args: list[str]) -> int:
        command = parse_trade_args("SELL", args, self.account_id)
        return await handle_trade(self.service, command, self.console)

    async def _handle_close(self, args: list[str]) -> int:
        command = CloseCommand(
            name="close",
            account_id=self.account_id,
            order_id=self._single_arg("close", args),
        )
        return await handle_close(self.service, command, self.console)

    async def _handle_cancel(self, args: list[str]) -> int:
        command = CancelCommand(
            name="cancel",
            account_id=self.account_id,
            order_id=self._single_arg("cancel", args),
        )
        return await handle_cancel(self.service, command, self.console)

    async def _handle_trades(self, args: list[str]) -> int:
        command = TradesCommand(name="trades", account_id=self.account_id)
        return await handle_trades(self.service, command, self.console)

    async def _handle_chain(self, args: list[str]) -> int:
        """Handle chain command"""
        if not args:
            raise UsageError("chain requires SYMBOL")
        command = ChainCommand(
            name="chain",
            account_id=self.account_id,
            symbol=args[0],
            expiration=_parse_date(args[1]) if len(args) > 1 else None,
        )
        return await handle_chain(self.service, command, self.console)

    async def _handle_metrics(self, args: list[str]) -> int:
        command = MetricsCommand(name="metrics", account_id=self.account_id)
        return await handle_metrics(self.service, command, self.console)

    async def _handle_reset(self, args: list[str]) -> int:
        command = ResetCommand(name="reset", account_id=self.account_id)
        return await handle_reset(self.service, command, self.console)
