"""
Ticker scan: evaluate tickers in list order and stop at the first one that
meets every buy condition.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from core.config import ScanCriteria
from core.market_signal import evaluate_snapshot
from core.messages import format_recommendation
from core.models import NO_OPPORTUNITY, Recommendation, ScanResult, TickerEvaluation

if TYPE_CHECKING:
    from integrations.alphavantage.client import AlphaVantageClient

logger = logging.getLogger(__name__)


def evaluate_ticker(client: AlphaVantageClient, ticker: str,
                    criteria: Optional[ScanCriteria] = None) -> TickerEvaluation:
    """Fetch one ticker's indicators and apply the buy conditions."""
    criteria = criteria or ScanCriteria()
    snapshot = client.fetch_snapshot(ticker, criteria)
    return evaluate_snapshot(snapshot, criteria)


def scan(tickers: Sequence[str], client: AlphaVantageClient,
         criteria: Optional[ScanCriteria] = None) -> ScanResult:
    """Scan tickers sequentially; the first one passing all checks wins.

    Later tickers are not fetched once a buy is found. An empty list
    returns NoOpportunity without any request.
    """
    criteria = criteria or ScanCriteria()
    result = ScanResult()

    for ticker in tickers:
        if not ticker or not ticker.strip():
            continue
        logger.info(f"⏳ Scanning {ticker}")
        evaluation = evaluate_ticker(client, ticker, criteria)
        result.evaluations.append(evaluation)
        if evaluation.all_ok:
            result.recommendation = Recommendation.buy(ticker)
            logger.info(f"🚀 Buy signal: {ticker}")
            return result

    result.recommendation = NO_OPPORTUNITY
    logger.info(f"No buy signal among {len(result.evaluations)} ticker(s)")
    return result


def give_purchase_recommendation(tickers: Sequence[str], client: AlphaVantageClient,
                                 criteria: Optional[ScanCriteria] = None,
                                 language: str = 'fi') -> str:
    """Run a scan and return the one-line recommendation."""
    result = scan(tickers, client, criteria)
    return format_recommendation(result.recommendation, language)
