"""
Alpha Vantage response parsing.

Responses are JSON objects with a "Meta Data" block and one dated block,
e.g. "Technical Analysis: RSI" or "Time Series (Daily)", mapping dates to
field dicts:

    {"Technical Analysis: RSI": {"2024-01-05": {"RSI": "41.2300"}, ...}}

Values are strings. We locate the dated block by prefix, order it newest
first and read the named field.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

import pandas as pd

from core.errors import IndicatorParseError


TECHNICAL_PREFIX = 'Technical Analysis'
TIME_SERIES_PREFIX = 'Time Series'
NOTICE_KEYS = ('Error Message', 'Note', 'Information')

_NON_NUMERIC = re.compile(r'[^\d.\-]')


class MissingFieldError(LookupError):
    """The expected block or field is absent from the response."""


def parse_number(text: Any) -> float:
    """Convert '"41.23"', ' 1,234,567 ' and similar text to a float.

    Thousands separators, quotes and other punctuation are stripped; only
    digits, the decimal point and a leading minus sign are kept. A minus
    sign anywhere else (e.g. a date) is rejected.
    """
    if isinstance(text, bool):
        raise IndicatorParseError(str(text))
    if isinstance(text, (int, float)):
        return float(text)
    raw = '' if text is None else str(text)
    cleaned = _NON_NUMERIC.sub('', raw.strip())
    negative = cleaned.startswith('-')
    digits = cleaned[1:] if negative else cleaned
    if '-' in digits:
        raise IndicatorParseError(raw)
    if not digits or digits == '.' or digits.count('.') > 1:
        raise IndicatorParseError(raw)
    try:
        value = float(digits)
    except ValueError:
        raise IndicatorParseError(raw)
    return -value if negative else value


def api_notice(payload: Dict[str, Any]) -> Optional[str]:
    """Return the API's error/rate-limit message, if the body is one."""
    for key in NOTICE_KEYS:
        if key in payload:
            return f"{key}: {payload[key]}"
    return None


def find_block(payload: Dict[str, Any], prefix: str) -> Optional[Dict[str, Any]]:
    for key, value in payload.items():
        if key.startswith(prefix) and isinstance(value, dict):
            return value
    return None


def dated_frame(block: Dict[str, Any]) -> pd.DataFrame:
    """Dated block as a DataFrame, newest row first."""
    entries = {k: v for k, v in block.items() if isinstance(v, dict)}
    if not entries:
        return pd.DataFrame()
    df = pd.DataFrame.from_dict(entries, orient='index')
    df.index = pd.to_datetime(df.index, errors='coerce')
    df = df[df.index.notna()]
    return df.sort_index(ascending=False)


def extract_latest(payload: Dict[str, Any], prefix: str, field: str, count: int = 1) -> List[float]:
    """Return `field` for the `count` most recent dates, newest first.

    Raises MissingFieldError when the block or field is missing or has fewer
    than `count` entries, IndicatorParseError when a value is not numeric.
    """
    block = find_block(payload, prefix)
    if block is None:
        raise MissingFieldError(f"no '{prefix}' block in response")

    df = dated_frame(block)
    if df.empty or field not in df.columns:
        raise MissingFieldError(f"no '{field}' field in response")

    column = df[field].head(count)
    if len(column) < count or column.isna().any():
        raise MissingFieldError(
            f"expected {count} '{field}' values, got {int(column.notna().sum())}")

    return [parse_number(v) for v in column.tolist()]
