"""
Configuration and environment loading for the indicator scanner.
Loads .env, exposes helper getters and the rule parameters of a scan.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from core.errors import ConfigError


DEFAULT_BASE_URL = 'https://www.alphavantage.co/query'
TRUE_VALUES = ('true', '1', 'yes')


@dataclass
class ScanCriteria:
    """Rule parameters for a scan"""
    rsi_threshold: float = 42.0  # Buy when RSI <= threshold
    rsi_period: int = 14
    ema_period: int = 50
    sma_period: int = 200
    interval: str = 'daily'
    ma_series_type: str = 'open'
    rsi_series_type: str = 'close'
    volume_window: int = 10  # Days in the volume average
    volume_include_latest: bool = True  # Latest day counts towards its own average

    @property
    def volume_samples(self) -> int:
        """Number of daily volumes needed to evaluate the volume check."""
        if self.volume_include_latest:
            return self.volume_window
        return self.volume_window + 1


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in TRUE_VALUES


def get_api_key() -> str:
    """Return the Alpha Vantage API key.

    Read from ALPHAVANTAGE_API_KEY (process env or .env). The key is never
    embedded in source.
    """
    api_key = os.getenv('ALPHAVANTAGE_API_KEY', '').strip()
    if not api_key:
        raise ConfigError(
            "Missing ALPHAVANTAGE_API_KEY. Set it in your shell or in a .env file.")
    return api_key


def get_base_url() -> str:
    return os.getenv('ALPHAVANTAGE_BASE_URL', DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL


def get_timeout() -> Optional[float]:
    """Request timeout in seconds; None keeps the HTTP client's default."""
    raw = os.getenv('ALPHAVANTAGE_TIMEOUT')
    if raw is None or raw.strip() == '':
        return None
    value = _get_float('ALPHAVANTAGE_TIMEOUT', 0.0)
    if value <= 0:
        raise ConfigError(f"ALPHAVANTAGE_TIMEOUT must be positive, got {value}")
    return value


def get_language() -> str:
    return os.getenv('SCANNER_LANGUAGE', 'fi').strip().lower() or 'fi'


def get_log_level() -> str:
    return os.getenv('SCANNER_LOG_LEVEL', 'WARNING').strip().upper() or 'WARNING'


def get_ticker_env() -> Optional[str]:
    """Raw SCANNER_TICKERS value, if set."""
    raw = os.getenv('SCANNER_TICKERS')
    return raw if raw and raw.strip() else None


def get_ticker_file() -> Optional[str]:
    raw = os.getenv('SCANNER_TICKER_FILE')
    return raw.strip() if raw and raw.strip() else None


def validate_criteria(criteria: ScanCriteria) -> ScanCriteria:
    """Reject rule parameters the API or the checks cannot use.

    Applied to criteria built from the environment and to CLI overrides alike.
    """
    for name in ('rsi_period', 'ema_period', 'sma_period', 'volume_window'):
        value = getattr(criteria, name)
        if value <= 0:
            raise ConfigError(f"{name} must be positive, got {value}")
    if not 0 <= criteria.rsi_threshold <= 100:
        raise ConfigError(
            f"rsi_threshold must be between 0 and 100, got {criteria.rsi_threshold}")
    return criteria


def load_criteria() -> ScanCriteria:
    """Build ScanCriteria from SCANNER_* environment variables.

    Unset variables keep the default rule set
    (RSI <= 42, EMA50 vs SMA200, 10-day volume average).
    """
    defaults = ScanCriteria()
    return validate_criteria(ScanCriteria(
        rsi_threshold=_get_float('SCANNER_RSI_THRESHOLD', defaults.rsi_threshold),
        rsi_period=_get_int('SCANNER_RSI_PERIOD', defaults.rsi_period),
        ema_period=_get_int('SCANNER_EMA_PERIOD', defaults.ema_period),
        sma_period=_get_int('SCANNER_SMA_PERIOD', defaults.sma_period),
        interval=os.getenv('SCANNER_INTERVAL', defaults.interval).strip() or defaults.interval,
        volume_window=_get_int('SCANNER_VOLUME_WINDOW', defaults.volume_window),
        volume_include_latest=_get_bool(
            'SCANNER_VOLUME_INCLUDE_LATEST', defaults.volume_include_latest),
    ))


# Side effect on import: load .env
load_dotenv()
