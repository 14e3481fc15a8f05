"""Tests for environment configuration"""

import pytest

from papertrade.core.config import Config, PricingConfig
from papertrade.shared.exceptions import ConfigurationError

ENV_VARS = (
    "PAPERTRADE_DB_PATH",
    "PAPERTRADE_INITIAL_BALANCE",
    "PAPERTRADE_ACCOUNT_ID",
    "FMP_API_KEY",
    "QUOTE_TIMEOUT_SECONDS",
    "DEFAULT_VOLATILITY",
    "RISK_FREE_RATE",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PAPERTRADE_DB_PATH", str(tmp_path / "test.db"))
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    config = Config.from_env()

    assert config.db_path == str(tmp_path / "test.db")
    assert config.fmp_api_key is None
    assert config.account_id == "default"
    assert config.initial_balance == 100_000.0
    assert config.quote_timeout_seconds == 3.0
    assert config.pricing == PricingConfig()


def test_overrides(clean_env):
    clean_env.setenv("FMP_API_KEY", "abc123")
    clean_env.setenv("PAPERTRADE_ACCOUNT_ID", "swing")
    clean_env.setenv("PAPERTRADE_INITIAL_BALANCE", "25000")
    clean_env.setenv("DEFAULT_VOLATILITY", "0.4")
    clean_env.setenv("RISK_FREE_RATE", "0.03")

    config = Config.from_env()

    assert config.fmp_api_key == "abc123"
    assert config.account_id == "swing"
    assert config.initial_balance == 25_000.0
    assert config.pricing.volatility == 0.4
    assert config.pricing.risk_free_rate == 0.03


def test_empty_api_key_means_synthetic(clean_env):
    clean_env.setenv("FMP_API_KEY", "")

    assert Config.from_env().fmp_api_key is None


@pytest.mark.parametrize(
    "name,value",
    [
        ("PAPERTRADE_INITIAL_BALANCE", "lots"),
        ("PAPERTRADE_INITIAL_BALANCE", "-1"),
        ("QUOTE_TIMEOUT_SECONDS", "0"),
        ("DEFAULT_VOLATILITY", "0"),
    ],
)
def test_invalid_values(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ConfigurationError):
        Config.from_env()
