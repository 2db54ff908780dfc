"""
Alpha Vantage indicator fetcher.

One GET per indicator, issued sequentially through a requests.Session.
Every fetch returns an IndicatorReading: HTTP errors, API notices (rate
limit, invalid symbol) and missing or malformed fields become an
unavailable reading instead of an exception, so the scan moves on to the
next ticker.

API Documentation: https://www.alphavantage.co/documentation/
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from core.config import DEFAULT_BASE_URL, ScanCriteria, get_api_key, get_base_url, get_timeout
from core.errors import IndicatorParseError, IndicatorUnavailableError, ScannerError
from core.models import IndicatorReading, IndicatorSnapshot
from integrations.alphavantage.parsing import (
    TECHNICAL_PREFIX,
    TIME_SERIES_PREFIX,
    MissingFieldError,
    api_notice,
    extract_latest,
)

logger = logging.getLogger(__name__)

MOVING_AVERAGES = ('ema', 'sma')
VOLUME_FIELD = '5. volume'


class AlphaVantageClient:
    """Thin synchronous client for the indicator and daily series endpoints"""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> 'AlphaVantageClient':
        """Create a client from ALPHAVANTAGE_* settings."""
        return cls(get_api_key(), base_url=get_base_url(), session=session, timeout=get_timeout())

    def _query(self, symbol: str, indicator: str, params: Dict[str, Any]) -> Dict[str, Any]:
        query = dict(params)
        query['apikey'] = self.api_key
        logger.info(f"Fetching {indicator} for {symbol}: {params}")

        try:
            resp = self.session.get(self.base_url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            raise IndicatorUnavailableError(symbol, indicator, f"request failed: {e}")

        if resp.status_code != 200:
            raise IndicatorUnavailableError(
                symbol, indicator, f"HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError:
            raise IndicatorUnavailableError(symbol, indicator, "response is not JSON")

        if not isinstance(payload, dict):
            raise IndicatorUnavailableError(
                symbol, indicator, "unexpected response shape")

        notice = api_notice(payload)
        if notice:
            raise IndicatorUnavailableError(symbol, indicator, notice)

        return payload

    def _read(self, symbol: str, indicator: str, params: Dict[str, Any],
              prefix: str, field: str, count: int = 1, series: bool = False) -> IndicatorReading:
        try:
            payload = self._query(symbol, indicator, params)
            values = extract_latest(payload, prefix, field, count)
        except MissingFieldError as e:
            error: ScannerError = IndicatorUnavailableError(symbol, indicator, str(e))
        except (IndicatorUnavailableError, IndicatorParseError) as e:
            error = e
        else:
            value = tuple(values) if series else values[0]
            logger.info(f"{symbol} {indicator}: {value}")
            return IndicatorReading.success(value)

        logger.warning(f"⚠️ {error.message}")
        return IndicatorReading.failure(error)

    def fetch_moving_average(self, kind: str, symbol: str, interval: str = 'daily',
                             time_period: int = 50, series_type: str = 'open') -> IndicatorReading:
        """Latest EMA or SMA value.

        Args:
            kind: 'ema' or 'sma'
            symbol: Ticker symbol, e.g. 'TSLA'
            interval: 'daily', 'weekly', '5min', ...
            time_period: Number of data points in the average, e.g. 50 or 200
            series_type: Price used for the average ('open', 'close', ...)
        """
        kind = kind.lower()
        if kind not in MOVING_AVERAGES:
            raise ValueError(f"Unknown moving average {kind!r}, expected one of {MOVING_AVERAGES}")
        function = kind.upper()
        params = {
            'function': function,
            'symbol': symbol,
            'interval': interval,
            'time_period': time_period,
            'series_type': series_type,
        }
        return self._read(symbol, f"{function}({time_period})", params, TECHNICAL_PREFIX, function)

    def fetch_rsi(self, symbol: str, interval: str = 'daily', time_period: int = 14,
                  series_type: str = 'close') -> IndicatorReading:
        """Latest Relative Strength Index value."""
        params = {
            'function': 'RSI',
            'symbol': symbol,
            'interval': interval,
            'time_period': time_period,
            'series_type': series_type,
        }
        return self._read(symbol, f"RSI({time_period})", params, TECHNICAL_PREFIX, 'RSI')

    def fetch_daily_volumes(self, symbol: str, count: int = 10) -> IndicatorReading:
        """Daily volumes of the `count` most recent trading days, newest first."""
        params = {
            'function': 'TIME_SERIES_DAILY',
            'symbol': symbol,
        }
        return self._read(symbol, 'volume', params, TIME_SERIES_PREFIX, VOLUME_FIELD, count, series=True)

    def fetch_snapshot(self, symbol: str, criteria: ScanCriteria) -> IndicatorSnapshot:
        """Fetch EMA, SMA, RSI and volumes for one ticker, in that order."""
        ema = self.fetch_moving_average(
            'ema', symbol, criteria.interval, criteria.ema_period, criteria.ma_series_type)
        sma = self.fetch_moving_average(
            'sma', symbol, criteria.interval, criteria.sma_period, criteria.ma_series_type)
        rsi = self.fetch_rsi(
            symbol, criteria.interval, criteria.rsi_period, criteria.rsi_series_type)
        volumes = self.fetch_daily_volumes(symbol, criteria.volume_samples)
        return IndicatorSnapshot(symbol=symbol, ema=ema, sma=sma, rsi=rsi, volumes=volumes)
