"""Configuration management for the paper trading engine"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from papertrade.shared.exceptions import ConfigurationError


@dataclass
class PricingConfig:
    """Configuration for option pricing and chain generation"""

    # Annualized volatility used when no override is supplied
    volatility: float = 0.25

    # Annualized risk-free rate
    risk_free_rate: float = 0.05

    # Strikes generated on each side of spot in an options chain
    strikes_per_side: int = 10

    # Weekly expirations generated when no expiration is requested
    chain_expirations: int = 4


def get_db_path() -> Path:
    """Get database path that works both locally and in production.

    Priority order:
    1. Production path: /opt/papertrade/data/papertrade.db
    2. Local development path: project_root/data/papertrade.db

    Returns:
        Path object for the database file
    """
    production_path = Path("/opt/papertrade/data/papertrade.db")
    if production_path.parent.exists():
        logger.debug(f"Using production database path: {production_path}")
        return production_path

    project_root = Path(__file__).parent.parent.parent.parent
    local_path = project_root / "data" / "papertrade.db"
    local_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Using local database path: {local_path}")
    return local_path


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class Config:
    """Configuration for the paper trading engine loaded from environment variables"""

    db_path: str
    fmp_api_key: str | None = None
    account_id: str = "default"
    initial_balance: float = 100_000.0
    quote_timeout_seconds: float = 3.0
    pricing: PricingConfig = field(default_factory=PricingConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables

        Returns:
            Config instance with values from environment

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed or
                is out of range
        """
        db_path = os.getenv("PAPERTRADE_DB_PATH") or str(get_db_path())

        config = cls(
            db_path=db_path,
            fmp_api_key=os.getenv("FMP_API_KEY") or None,
            account_id=os.getenv("PAPERTRADE_ACCOUNT_ID", "default"),
            initial_balance=_env_float("PAPERTRADE_INITIAL_BALANCE", 100_000.0),
            quote_timeout_seconds=_env_float("QUOTE_TIMEOUT_SECONDS", 3.0),
            pricing=PricingConfig(
                volatility=_env_float("DEFAULT_VOLATILITY", 0.25),
                risk_free_rate=_env_float("RISK_FREE_RATE", 0.05),
            ),
        )
        config.validate()

        logger.info("Configuration loaded:")
        logger.info(f"  Database: {config.db_path}")
        logger.info(f"  Account: {config.account_id}")
        logger.info(f"  Initial Balance: ${config.initial_balance:,.2f}")
        logger.info(
            f"  Quote Provider: {'FMP' if config.fmp_api_key else 'Synthetic only'}"
        )
        logger.info(f"  Quote Timeout: {config.quote_timeout_seconds}s")
        logger.info(f"  Volatility: {config.pricing.volatility:.0%}")
        logger.info(f"  Risk-Free Rate: {config.pricing.risk_free_rate:.2%}")

        return config

    def validate(self) -> None:
        """Check value ranges

        Raises:
            ConfigurationError: If any value is out of range
        """
        if self.initial_balance <= 0:
            raise ConfigurationError("PAPERTRADE_INITIAL_BALANCE must be positive")
        if self.quote_timeout_seconds <= 0:
            raise ConfigurationError("QUOTE_TIMEOUT_SECONDS must be positive")
        if self.pricing.volatility <= 0:
            raise ConfigurationError("DEFAULT_VOLATILITY must be positive")
