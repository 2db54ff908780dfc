from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import pytest

from core.config import ScanCriteria
from integrations.alphavantage.client import AlphaVantageClient


def _dates(count: int) -> List[str]:
    """ISO dates, newest first."""
    start = date(2024, 3, 28)
    return [(start - timedelta(days=i)).isoformat() for i in range(count)]


def technical_payload(function: str, values: List[float]) -> Dict[str, Any]:
    """Indicator response with `values` newest first."""
    return {
        "Meta Data": {"1: Symbol": "TEST", "2: Indicator": function},
        f"Technical Analysis: {function}": {
            d: {function: f"{v:.4f}"} for d, v in zip(_dates(len(values)), values)
        },
    }


def daily_payload(volumes: List[float]) -> Dict[str, Any]:
    """TIME_SERIES_DAILY response with `volumes` newest first."""
    return {
        "Meta Data": {"1. Information": "Daily Prices", "2. Symbol": "TEST"},
        "Time Series (Daily)": {
            d: {
                "1. open": "100.0000",
                "2. high": "101.0000",
                "3. low": "99.0000",
                "4. close": "100.5000",
                "5. volume": str(int(v)),
            }
            for d, v in zip(_dates(len(volumes)), volumes)
        },
    }


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None):
        self.payload = payload
        self.status_code = status_code
        self.text = text if text is not None else str(payload)

    def json(self) -> Any:
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    """Stands in for requests.Session, serving canned market data per symbol.

    `market` maps symbol -> {'EMA': float, 'SMA': float, 'RSI': float,
    'volumes': [newest, ...]}; a missing key produces a response without
    that block. `overrides` maps (function, symbol) -> FakeResponse or
    exception to raise.
    """

    def __init__(self, market: Optional[Dict[str, Dict[str, Any]]] = None):
        self.market = market or {}
        self.overrides: Dict[tuple, Any] = {}
        self.calls: List[Dict[str, Any]] = []

    @property
    def symbols_requested(self) -> List[str]:
        seen: List[str] = []
        for call in self.calls:
            if call['symbol'] not in seen:
                seen.append(call['symbol'])
        return seen

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, timeout: Any = None) -> FakeResponse:
        params = dict(params or {})
        params['_url'] = url
        params['_timeout'] = timeout
        self.calls.append(params)
        function = params.get('function')
        symbol = params.get('symbol')

        override = self.overrides.get((function, symbol))
        if isinstance(override, Exception):
            raise override
        if override is not None:
            return override

        data = self.market.get(symbol, {})
        if function == 'TIME_SERIES_DAILY':
            if 'volumes' not in data:
                return FakeResponse({"Meta Data": {}})
            return FakeResponse(daily_payload(data['volumes']))
        if function not in data:
            return FakeResponse({"Meta Data": {}})
        return FakeResponse(technical_payload(function, [data[function]] * 3))


# Eleven trading days, newest first; the latest is well above the average
SPIKE_VOLUMES = [300.0, 100.0, 100.0, 100.0, 100.0, 100.0, 100.0, 100.0, 100.0, 100.0, 100.0]
FLAT_VOLUMES = [100.0] * 11

BUY = {'EMA': 110.0, 'SMA': 100.0, 'RSI': 35.0, 'volumes': SPIKE_VOLUMES}


@pytest.fixture
def criteria() -> ScanCriteria:
    return ScanCriteria()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> AlphaVantageClient:
    return AlphaVantageClient('test-key', base_url='https://example.test/query', session=session)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host SCANNER_* / ALPHAVANTAGE_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith('SCANNER_') or name.startswith('ALPHAVANTAGE_'):
            monkeypatch.delenv(name, raising=False)

