"""Dependency container for the paper trading engine.

Builds the store, quote providers and service from a Config with lazy
initialization, so a command only opens what it touches.
"""

from loguru import logger

from papertrade.application.services import (
    InstrumentPricer,
    OptionsChainBuilder,
    PaperTradingService,
)
from papertrade.core.config import Config
from papertrade.infrastructure.database.trading import PaperTradingDatabase
from papertrade.infrastructure.quotes import FMPQuoteProvider, PriceResolver


class ServiceContainer:
    """Lazily constructed singletons for one configuration"""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._database: PaperTradingDatabase | None = None
        self._quote_provider: FMPQuoteProvider | None = None
        self._resolver: PriceResolver | None = None
        self._service: PaperTradingService | None = None

    @property
    def database(self) -> PaperTradingDatabase:
        if self._database is None:
            self._database = PaperTradingDatabase(self.config.db_path)
        return self._database

    @property
    def resolver(self) -> PriceResolver:
        """Price resolver with FMP as primary when an API key is configured"""
        if self._resolver is None:
            if self.config.fmp_api_key:
                self._quote_provider = FMPQuoteProvider(
                    api_key=self.config.fmp_api_key,
                    timeout=self.config.quote_timeout_seconds,
                )
            else:
                logger.info("No FMP_API_KEY set, pricing from synthetic quotes")
            self._resolver = PriceResolver(
                primary=self._quote_provider,
                timeout=self.config.quote_timeout_seconds,
            )
        return self._resolver

    @property
    def service(self) -> PaperTradingService:
        if self._service is None:
            pricing = self.config.pricing
            pricer = InstrumentPricer(
                self.resolver,
                volatility=pricing.volatility,
                risk_free_rate=pricing.risk_free_rate,
            )
            self._service = PaperTradingService(
                store=self.database,
                pricer=pricer,
                initial_balance=self.config.initial_balance,
                chain_builder=OptionsChainBuilder(
                    pricer,
                    strikes_per_side=pricing.strikes_per_side,
                    expirations=pricing.chain_expirations,
                ),
            )
        return self._service

    async def aclose(self) -> None:
        """Release the HTTP client and database engine if they were opened"""
        if self._quote_provider is not None:
            await self._quote_provider.close()
        if self._database is not None:
            self._database.close()


def create_container(config: Config) -> ServiceContainer:
    """Create a container for a configuration.

    Args:
        config: Loaded configuration.

    Returns:
        A ServiceContainer with nothing constructed yet.
    """
    return ServiceContainer(config)
