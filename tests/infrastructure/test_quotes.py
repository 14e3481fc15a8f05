"""Tests for quote providers and the price resolver"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from papertrade.infrastructure.quotes import (
    FMPQuoteProvider,
    PriceResolver,
    SyntheticQuoteProvider,
    synthetic_price,
)
from papertrade.shared.exceptions import QuoteUnavailable


def _fmp(handler) -> FMPQuoteProvider:
    return FMPQuoteProvider(api_key="secret", transport=httpx.MockTransport(handler))


class TestFMPQuoteProvider:
    @pytest.mark.asyncio
    async def test_returns_price(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["apikey"] = request.url.params["apikey"]
            return httpx.Response(200, json=[{"symbol": "AAPL", "price": 190.12}])

        provider = _fmp(handler)
        try:
            price = await provider.get_price("AAPL")
        finally:
            await provider.close()

        assert price == 190.12
        assert seen == {"path": "/api/v3/quote/AAPL", "apikey": "secret"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, text="server error"),
            httpx.Response(200, json=[]),
            httpx.Response(200, json=[{"symbol": "AAPL", "price": 0}]),
            httpx.Response(200, json=[{"symbol": "AAPL"}]),
            httpx.Response(200, json={"Error Message": "Invalid API KEY"}),
            httpx.Response(200, text="not json"),
        ],
    )
    async def test_bad_responses_raise_quote_unavailable(self, response):
        provider = _fmp(lambda request: response)

        with pytest.raises(QuoteUnavailable):
            await provider.get_price("AAPL")

        await provider.close()

    @pytest.mark.asyncio
    async def test_timeout_raises_quote_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        provider = _fmp(handler)

        with pytest.raises(QuoteUnavailable, match="timed out"):
            await provider.get_price("AAPL")

        await provider.close()


class TestSyntheticQuotes:
    def test_reference_table(self):
        assert synthetic_price("aapl") == 175.50

    def test_unknown_symbol_is_deterministic(self):
        # ord("X") + ord("Y") + ord("Z") = 267; 80 + 267 % 120 = 107
        assert synthetic_price("XYZ") == 107.0
        assert synthetic_price("XYZ") == synthetic_price("xyz")

    @pytest.mark.asyncio
    async def test_overrides(self):
        provider = SyntheticQuoteProvider({"aapl": 180.0})

        assert await provider.get_price("AAPL") == 180.0

        provider.clear()

        assert await provider.get_price("AAPL") == 175.50

    def test_rejects_non_positive_override(self):
        with pytest.raises(ValueError):
            SyntheticQuoteProvider().set_price("AAPL", 0)


class TestPriceResolver:
    @pytest.mark.asyncio
    async def test_uses_primary(self):
        primary = AsyncMock()
        primary.get_price.return_value = 190.0

        resolver = PriceResolver(primary=primary)

        assert await resolver.resolve_price("aapl") == 190.0
        primary.get_price.assert_awaited_once_with("AAPL")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "side_effect",
        [
            QuoteUnavailable("HTTP 500"),
            RuntimeError("connection reset"),
        ],
    )
    async def test_falls_back_on_error(self, side_effect):
        primary = AsyncMock()
        primary.get_price.side_effect = side_effect

        resolver = PriceResolver(primary=primary)

        assert await resolver.resolve_price("AAPL") == 175.50

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_price", [0.0, -5.0, float("nan"), float("inf")])
    async def test_falls_back_on_unusable_price(self, bad_price):
        primary = AsyncMock()
        primary.get_price.return_value = bad_price

        resolver = PriceResolver(primary=primary)

        assert await resolver.resolve_price("AAPL") == 175.50

    @pytest.mark.asyncio
    async def test_falls_back_on_timeout(self):
        class SlowProvider:
            async def get_price(self, symbol: str) -> float:
                await asyncio.sleep(5)
                return 999.0

        resolver = PriceResolver(primary=SlowProvider(), timeout=0.01)

        assert await resolver.resolve_price("AAPL") == 175.50

    @pytest.mark.asyncio
    async def test_synthetic_only_when_no_primary(self):
        resolver = PriceResolver(fallback=SyntheticQuoteProvider({"AAPL": 150.0}))

        assert await resolver.resolve_price("AAPL") == 150.0

    @pytest.mark.asyncio
    async def test_resolve_prices_dedups_and_normalises(self):
        primary = AsyncMock()
        primary.get_price.return_value = 10.0

        resolver = PriceResolver(primary=primary)
        prices = await resolver.resolve_prices(["aapl", "AAPL", "msft"])

        assert prices == {"AAPL": 10.0, "MSFT": 10.0}
        assert primary.get_price.await_count == 2
