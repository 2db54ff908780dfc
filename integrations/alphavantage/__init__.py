"""Alpha Vantage market data access."""

from integrations.alphavantage.client import AlphaVantageClient
from integrations.alphavantage.parsing import (
    api_notice,
    extract_latest,
    parse_number,
)

__all__ = [
    'AlphaVantageClient',
    'api_notice',
    'extract_latest',
    'parse_number',
]
