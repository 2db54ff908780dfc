"""
Error types raised by the scanner.
"""
from __future__ import annotations

from typing import Optional


class ScannerError(Exception):
    """Base class for all scanner errors."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ConfigError(ScannerError):
    """Missing or invalid configuration (API key, thresholds, ticker file)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIG_ERROR")


class IndicatorParseError(ScannerError):
    """A numeric field could not be converted to a float."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Cannot parse number from {raw!r}",
                         code="INDICATOR_PARSE_ERROR")
        self.raw = raw


class IndicatorUnavailableError(ScannerError):
    """An indicator could not be fetched or was missing from the response."""

    def __init__(self, symbol: str, indicator: str, reason: Optional[str] = None) -> None:
        message = f"{indicator} unavailable for {symbol}"
        if reason:
            message += f": {reason}"
        super().__init__(message, code="INDICATOR_UNAVAILABLE")
        self.symbol = symbol
        self.indicator = indicator
        self.reason = reason
