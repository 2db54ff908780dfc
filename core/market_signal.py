"""
Buy signal evaluation logic.
"""
from __future__ import annotations

import logging

from core.config import ScanCriteria
from core.indicators import check_golden_cross, check_rsi, check_volume_spike, volume_average
from core.models import IndicatorSnapshot, TickerEvaluation

logger = logging.getLogger(__name__)


def evaluate_snapshot(snapshot: IndicatorSnapshot, criteria: ScanCriteria) -> TickerEvaluation:
    """Apply the three buy conditions to a snapshot.

    All three are required:
    - RSI <= criteria.rsi_threshold
    - EMA >= SMA
    - latest volume > average volume over criteria.volume_window days

    An unavailable reading fails its condition.
    """
    volumes = snapshot.volumes.series()
    rsi_ok = check_rsi(snapshot.rsi.scalar(), criteria.rsi_threshold)
    cross_ok = check_golden_cross(snapshot.ema.scalar(), snapshot.sma.scalar())
    volume_ok = check_volume_spike(
        volumes, criteria.volume_window, criteria.volume_include_latest)
    average = volume_average(
        volumes, criteria.volume_window, criteria.volume_include_latest)

    evaluation = TickerEvaluation(
        snapshot=snapshot,
        rsi_ok=rsi_ok,
        golden_cross_ok=cross_ok,
        volume_ok=volume_ok,
        volume_average=average,
    )

    for name, reason in snapshot.unavailable().items():
        logger.warning(f"⚠️ {snapshot.symbol}: {name} unavailable ({reason})")

    if evaluation.all_ok:
        logger.info(f"✅ {snapshot.symbol}: all buy conditions met")
    else:
        failed = [name for name, ok in evaluation.checks.items() if not ok]
        logger.info(f"❌ {snapshot.symbol}: failed {', '.join(failed)}")

    return evaluation


def signal_diagnostics(evaluation: TickerEvaluation) -> dict:
    """Return latest metrics and per-condition booleans for transparency."""
    return {
        'symbol': evaluation.symbol,
        'metrics': evaluation.metrics,
        'checks': evaluation.checks,
        'unavailable': evaluation.snapshot.unavailable(),
        'all_ok': evaluation.all_ok,
    }
