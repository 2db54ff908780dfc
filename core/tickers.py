"""
Ticker list sources: built-in default, newline-delimited file, or a
comma/space separated string.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Union

from core.errors import ConfigError


def get_default_tickers() -> List[str]:
    """Built-in ticker list"""
    return ['TSLA']


def parse_ticker_list(raw: str) -> List[str]:
    """Split 'AAPL, MSFT TSLA' into ['AAPL', 'MSFT', 'TSLA']."""
    raw = raw.replace(',', ' ')
    return [t for t in raw.split() if t]


def load_tickers(path: Union[str, Path]) -> List[str]:
    """Read one ticker per line, keeping file order.

    Blank lines and lines starting with '#' are skipped.
    """
    ticker_file = Path(path)
    if not ticker_file.exists():
        raise ConfigError(f"Ticker file not found: {ticker_file}")

    tickers = []
    with open(ticker_file, 'r', encoding='utf-8') as f:
        for line in f:
            symbol = line.strip()
            if not symbol or symbol.startswith('#'):
                continue
            tickers.append(symbol)
    return tickers
