"""Pytest fixtures for paper trading engine tests"""

from datetime import datetime, timedelta

import pytest

from papertrade.application.services import InstrumentPricer, PaperTradingService
from papertrade.infrastructure.database.trading import PaperTradingDatabase
from papertrade.infrastructure.quotes import PriceResolver, SyntheticQuoteProvider

# Monday; the next weekly expiration is Friday 2024-06-07
FIXED_NOW = datetime(2024, 6, 3, 10, 0)


class FixedClock:
    """Controllable clock injected into the service"""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def quotes() -> SyntheticQuoteProvider:
    """Synthetic quotes; tests move the market with set_price"""
    return SyntheticQuoteProvider()


@pytest.fixture
def pricer(quotes) -> InstrumentPricer:
    return InstrumentPricer(PriceResolver(fallback=quotes))


@pytest.fixture
def store():
    """In-memory SQLite store for testing"""
    db = PaperTradingDatabase(":memory:")
    yield db
    db.close()


@pytest.fixture
def service(store, pricer, clock) -> PaperTradingService:
    return PaperTradingService(store=store, pricer=pricer, clock=clock)
