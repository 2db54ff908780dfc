"""
Indicator predicates. Each accepts a possibly missing input (None) and
fails closed.
"""
from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd


def check_rsi(rsi: Optional[float], threshold: float) -> bool:
    """True when RSI <= threshold (oversold enough to buy)."""
    if rsi is None:
        return False
    return rsi <= threshold


def check_golden_cross(ema: Optional[float], sma: Optional[float]) -> bool:
    """True when the EMA is at or above the SMA."""
    if ema is None or sma is None:
        return False
    return ema >= sma


def volume_average(volumes: Optional[Sequence[float]], window: int = 10,
                   include_latest: bool = True) -> Optional[float]:
    """Mean volume over `window` days, newest first in `volumes`.

    With include_latest the window starts at the latest day, otherwise at the
    day before it. Returns None when there are not enough samples.
    """
    if not volumes or window <= 0:
        return None
    start = 0 if include_latest else 1
    trailing = list(volumes[start:start + window])
    if len(trailing) < window:
        return None
    return float(pd.Series(trailing, dtype=float).mean())


def check_volume_spike(volumes: Optional[Sequence[float]], window: int = 10,
                       include_latest: bool = True) -> bool:
    """True when the latest day's volume exceeds the trailing average."""
    average = volume_average(volumes, window, include_latest)
    if average is None or volumes is None:
        return False
    return float(volumes[0]) > average
