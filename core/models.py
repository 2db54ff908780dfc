"""
Data types passed between the fetcher, the predicates and the scanner.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from core.errors import ScannerError


Value = Union[float, Tuple[float, ...]]


@dataclass(frozen=True)
class IndicatorReading:
    """Result of one indicator fetch: either a value or a typed error."""
    value: Optional[Value] = None
    error: Optional[ScannerError] = None

    @classmethod
    def success(cls, value: Value) -> 'IndicatorReading':
        return cls(value=value)

    @classmethod
    def failure(cls, error: ScannerError) -> 'IndicatorReading':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @property
    def reason(self) -> str:
        if self.error is not None:
            return self.error.message
        if self.value is None:
            return 'no value'
        return ''

    def scalar(self) -> Optional[float]:
        """The value as a float, or None when unavailable or not a scalar."""
        if not self.ok or isinstance(self.value, tuple):
            return None
        return float(self.value)  # type: ignore[arg-type]

    def series(self) -> Optional[Tuple[float, ...]]:
        """The value as a tuple, or None when unavailable or not a series."""
        if not self.ok or not isinstance(self.value, tuple):
            return None
        return self.value


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicators for one ticker, fetched fresh for each evaluation."""
    symbol: str
    ema: IndicatorReading
    sma: IndicatorReading
    rsi: IndicatorReading
    volumes: IndicatorReading  # Newest trading day first

    @property
    def latest_volume(self) -> Optional[float]:
        series = self.volumes.series()
        if not series:
            return None
        return series[0]

    def unavailable(self) -> Dict[str, str]:
        """Map of indicator name -> reason for every failed reading."""
        readings = {
            'ema': self.ema,
            'sma': self.sma,
            'rsi': self.rsi,
            'volumes': self.volumes,
        }
        return {name: r.reason for name, r in readings.items() if not r.ok}


@dataclass(frozen=True)
class TickerEvaluation:
    """Per-ticker metrics and per-condition booleans."""
    snapshot: IndicatorSnapshot
    rsi_ok: bool
    golden_cross_ok: bool
    volume_ok: bool
    volume_average: Optional[float] = None

    @property
    def symbol(self) -> str:
        return self.snapshot.symbol

    @property
    def all_ok(self) -> bool:
        return self.rsi_ok and self.golden_cross_ok and self.volume_ok

    @property
    def checks(self) -> Dict[str, bool]:
        return {
            'rsi_below_threshold': self.rsi_ok,
            'ema_above_sma': self.golden_cross_ok,
            'volume_above_average': self.volume_ok,
        }

    @property
    def metrics(self) -> Dict[str, Optional[float]]:
        return {
            'ema': self.snapshot.ema.scalar(),
            'sma': self.snapshot.sma.scalar(),
            'rsi': self.snapshot.rsi.scalar(),
            'latest_volume': self.snapshot.latest_volume,
            'volume_average': self.volume_average,
        }


@dataclass(frozen=True)
class Recommendation:
    """Buy(ticker) when ticker is set, otherwise NoOpportunity."""
    ticker: Optional[str] = None

    @property
    def is_buy(self) -> bool:
        return self.ticker is not None

    @classmethod
    def buy(cls, ticker: str) -> 'Recommendation':
        return cls(ticker=ticker)


NO_OPPORTUNITY = Recommendation()


@dataclass
class ScanResult:
    """Outcome of one pass over the ticker list."""
    recommendation: Recommendation = NO_OPPORTUNITY
    evaluations: List[TickerEvaluation] = field(default_factory=list)

    @property
    def state(self) -> str:
        return 'found' if self.recommendation.is_buy else 'exhausted'
