"""Financial Modeling Prep quote client"""

import logging
import math

import httpx
from loguru import logger

from papertrade.shared.exceptions import QuoteUnavailable


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


class FMPQuoteProvider:
    """Fetches last prices from the FMP `/quote` endpoint

    Every request carries a timeout; any transport error, non-2xx status
    or unusable payload is raised as QuoteUnavailable.
    """

    BASE_URL = "https://financialmodelingprep.com/api/v3"
    _logging_bridge_installed = False

    def __init__(
        self,
        api_key: str,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise FMP client

        Args:
            api_key: FMP API key
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None
        self.install_logging_bridge()

    @classmethod
    def install_logging_bridge(cls) -> None:
        """Bridge stdlib logging used by httpx into loguru once."""
        if cls._logging_bridge_installed:
            return

        handler = _LoguruHandler()
        std_logger = logging.getLogger("httpx")
        std_logger.setLevel(logging.WARNING)
        std_logger.addHandler(handler)
        std_logger.propagate = False

        cls._logging_bridge_installed = True

    def _build_http_client(self) -> httpx.AsyncClient:
        """Create an AsyncClient with request/response logging hooks."""
        return httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=self._timeout,
            transport=self._transport,
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    async def _log_httpx_request(self, request: httpx.Request) -> None:
        url = str(request.url).replace(self._api_key, "***")
        logger.debug(f"HTTPX request: {request.method} {url}")

    async def _log_httpx_response(self, response: httpx.Response) -> None:
        logger.debug(f"HTTPX response: status={response.status_code}")

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        """Set the HTTP client (for testing or external management)"""
        self._http_client = client

    async def get_price(self, symbol: str) -> float:
        """Get the last traded price for a symbol

        Args:
            symbol: Ticker symbol (e.g., "AAPL")

        Returns:
            Positive, finite last price

        Raises:
            QuoteUnavailable: On timeout, HTTP error or a bad payload
        """
        if self._http_client is None:
            self._http_client = self._build_http_client()

        try:
            response = await self._http_client.get(
                f"/quote/{symbol}", params={"apikey": self._api_key}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise QuoteUnavailable(f"Quote request for {symbol} timed out") from e
        except httpx.HTTPStatusError as e:
            raise QuoteUnavailable(
                f"Quote request for {symbol} failed: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise QuoteUnavailable(f"Quote request for {symbol} failed: {e}") from e

        return self._parse_price(symbol, payload)

    @staticmethod
    def _parse_price(symbol: str, payload: object) -> float:
        """Extract the price from a `/quote` response

        FMP returns a list with one object per symbol.
        """
        if not isinstance(payload, list) or not payload:
            raise QuoteUnavailable(f"No quote returned for {symbol}")

        entry = payload[0]
        if not isinstance(entry, dict):
            raise QuoteUnavailable(f"Malformed quote for {symbol}: {entry!r}")

        try:
            price = float(entry.get("price"))
        except (TypeError, ValueError) as e:
            raise QuoteUnavailable(f"Quote for {symbol} has no price") from e

        if not math.isfinite(price) or price <= 0:
            raise QuoteUnavailable(f"Quote for {symbol} is not usable: {price}")
        return price

    async def close(self) -> None:
        """Close the underlying HTTP client"""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
