"""Core business logic for the indicator scanner."""
from core.config import ScanCriteria, load_criteria
from core.indicators import check_golden_cross, check_rsi, check_volume_spike, volume_average
from core.market_signal import evaluate_snapshot, signal_diagnostics
from core.models import (
    NO_OPPORTUNITY,
    IndicatorReading,
    IndicatorSnapshot,
    Recommendation,
    ScanResult,
    TickerEvaluation,
)
from core.scanner import evaluate_ticker, give_purchase_recommendation, scan

__all__ = [
    'ScanCriteria',
    'load_criteria',
    'check_golden_cross',
    'check_rsi',
    'check_volume_spike',
    'volume_average',
    'evaluate_snapshot',
    'signal_diagnostics',
    'NO_OPPORTUNITY',
    'IndicatorReading',
    'IndicatorSnapshot',
    'Recommendation',
    'ScanResult',
    'TickerEvaluation',
    'evaluate_ticker',
    'give_purchase_recommendation',
    'scan',
]
